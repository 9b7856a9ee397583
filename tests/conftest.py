import json
from pathlib import Path

import pytest

from recovery.common.types import Share, ShareSet


@pytest.fixture
def genuine_shares() -> list[Share]:
    # f(x) = 3 + 2x + x^2
    return [Share(id=x, value=3 + 2 * x + x**2) for x in range(1, 6)]


@pytest.fixture
def corrupted_share_set(genuine_shares: list[Share]) -> ShareSet:
    shares = genuine_shares[:4] + [Share(id=5, value=999)]
    return ShareSet(shares=shares, n=5, k=3)


@pytest.fixture
def share_document() -> dict:
    return {
        "keys": {"n": 5, "k": 3},
        "1": {"base": "10", "value": "6"},
        "2": {"base": "2", "value": "1011"},
        "3": {"base": "16", "value": "12"},
        "4": {"base": "8", "value": "33"},
        "5": {"base": "10", "value": "999"},
    }


@pytest.fixture
def document_path(tmp_path: Path, share_document: dict) -> Path:
    path = tmp_path / "input.json"
    path.write_text(json.dumps(share_document))
    return path
