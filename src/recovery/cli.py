import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from recovery.common.constants import (
    DEFAULT_BASE,
    DEFAULT_WORKERS,
    EXACT_ENV,
    LOG_FORMAT,
    MAX_BASE,
    MIN_BASE,
    TIE_BREAK_ENV,
    WORKERS_ENV,
)
from recovery.common.errors import RecoveryError
from recovery.common.types import ReconstructionSettings, ShareSet, TieBreak
from recovery.crypto.shamir import SharesManager
from recovery.crypto.voter import ConsistencyVoter
from recovery.document.loader import dump_share_set, load_share_set
from recovery.document.report import write_report

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger("recovery-cli")

app = typer.Typer()
split_app = typer.Typer()

USAGE = "Usage: recovery <input.json> <output.txt>"


@app.command()
def reconstruct(
    input_path: Annotated[Optional[Path], typer.Argument()] = None,
    output_path: Annotated[Optional[Path], typer.Argument()] = None,
    workers: Annotated[int, typer.Option(envvar=WORKERS_ENV, min=1)] = DEFAULT_WORKERS,
    tie_break: Annotated[
        TieBreak, typer.Option(envvar=TIE_BREAK_ENV)
    ] = TieBreak.FIRST_SEEN,
    exact: Annotated[bool, typer.Option("--exact/--truncate", envvar=EXACT_ENV)] = True,
):
    if input_path is None or output_path is None:
        typer.echo(USAGE)
        raise typer.Exit()

    settings = ReconstructionSettings(workers=workers, tie_break=tie_break, exact=exact)
    try:
        voter = ConsistencyVoter(load_share_set(input_path), settings)
        if settings.workers > 1:
            result = asyncio.run(voter.reconstruct_async())
        else:
            result = voter.reconstruct()
    except RecoveryError as e:
        logger.error(f"Reconstruction failed: {e}")
        raise typer.Exit(code=1)

    try:
        write_report(output_path, result)
    except OSError as e:
        logger.error(f"Cannot write report: {e}")
        raise typer.Exit(code=1)
    typer.echo(f"Done. Output written to {output_path}")


@split_app.command()
def split(
    secret: Annotated[int, typer.Option(min=0)],
    total_shares: Annotated[int, typer.Option(min=1)],
    threshold: Annotated[int, typer.Option(min=1)],
    output: Annotated[Path, typer.Option()],
    base: Annotated[int, typer.Option(min=MIN_BASE, max=MAX_BASE)] = DEFAULT_BASE,
    corrupt: Annotated[Optional[List[int]], typer.Option()] = None,
):
    try:
        manager = SharesManager(total_shares=total_shares, threshold=threshold)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    shares = manager.split_secret(secret)
    if corrupt:
        shares = manager.corrupt(shares, corrupt)
    share_set = ShareSet(shares=shares, n=total_shares, k=threshold)
    output.write_text(json.dumps(dump_share_set(share_set, base), indent=2))
    typer.echo(f"Wrote {total_shares} shares to {output}")


if __name__ == "__main__":
    app(prog_name="recovery")
