import sys
from pathlib import Path
from typing import Union

from recovery.common.types import ReconstructionResult

sys.set_int_max_str_digits(0)


def format_report(result: ReconstructionResult) -> str:
    corrupted = ", ".join(str(i) for i in result.corrupted_ids)
    return f"Reconstructed Secret: {result.secret}\nCorrupted Shares: [{corrupted}]\n"


def write_report(path: Union[str, Path], result: ReconstructionResult):
    Path(path).write_text(format_report(result))
