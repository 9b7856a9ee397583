import json
import logging
import sys
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from recovery.common.constants import KEYS_FIELD, LOG_FORMAT, MAX_BASE, MIN_BASE
from recovery.common.errors import MalformedInputError
from recovery.common.types import Share, ShareSet

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
# share values and secrets may run to any number of digits
sys.set_int_max_str_digits(0)
logger = logging.getLogger("share-loader")

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class DocumentKeys(BaseModel):
    n: int
    k: int


class EncodedShare(BaseModel):
    base: int = Field(ge=MIN_BASE, le=MAX_BASE)
    value: str

    @field_validator("base", mode="before")
    @classmethod
    def _base_from_string(cls, base: Any) -> Any:
        if isinstance(base, str):
            return base.strip()
        return base

    def decode(self) -> int:
        return int(self.value.strip(), self.base)


def encode_value(value: int, base: int) -> str:
    """
    Encodes an integer in the given radix, the inverse of ``int(text, base)``.

    Args:
        value (int): The integer to encode.
        base (int): The radix, between 2 and 36.

    Returns:
        str: The lowercase digits of the value, with a leading minus sign when negative.
    """
    if not MIN_BASE <= base <= MAX_BASE:
        raise ValueError(f"Unsupported {base=}")
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, digit = divmod(value, base)
        digits.append(DIGITS[digit])
    return sign + "".join(reversed(digits))


def parse_share_set(document: dict[str, Any]) -> ShareSet:
    """
    Builds a ShareSet out of a decoded share document.

    Args:
        document (dict[str, Any]): The ``keys`` entry holding n and k, plus one entry per share id
            holding its ``base`` and ``value``.

    Returns:
        ShareSet: The shares in document order.

    Raises:
        MalformedInputError: If a field is missing or cannot be decoded.
    """
    if not isinstance(document, dict):
        raise MalformedInputError("Share document must be a JSON object")
    if KEYS_FIELD not in document:
        raise MalformedInputError(f"Missing '{KEYS_FIELD}' entry")
    try:
        keys = DocumentKeys.model_validate(document[KEYS_FIELD])
    except ValidationError as e:
        raise MalformedInputError(f"Invalid '{KEYS_FIELD}' entry: {e}") from e

    shares = []
    for share_id, entry in document.items():
        if share_id == KEYS_FIELD:
            continue
        try:
            x = int(share_id)
        except ValueError as e:
            raise MalformedInputError(f"Share id {share_id!r} is not an integer") from e
        try:
            encoded = EncodedShare.model_validate(entry)
            shares.append(Share(id=x, value=encoded.decode()))
        except ValidationError as e:
            raise MalformedInputError(f"Invalid share {share_id}: {e}") from e
        except ValueError as e:
            raise MalformedInputError(
                f"Share {share_id} value {encoded.value!r} is not valid in base {encoded.base}"
            ) from e

    if keys.n < len(shares):
        logger.warning(
            f"Document declares n={keys.n} but holds {len(shares)} shares, "
            f"only the first {keys.n} take part in the vote"
        )
    try:
        return ShareSet(shares=shares, n=keys.n, k=keys.k)
    except ValidationError as e:
        raise MalformedInputError(f"Inconsistent '{KEYS_FIELD}' entry: {e}") from e


def load_share_set(path: Union[str, Path]) -> ShareSet:
    logger.info(f"Loading shares from {path}")
    try:
        document = json.loads(Path(path).read_text())
    except OSError as e:
        raise MalformedInputError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"{path} is not valid JSON: {e}") from e
    return parse_share_set(document)


def dump_share_set(share_set: ShareSet, base: int) -> dict[str, Any]:
    document: dict[str, Any] = {KEYS_FIELD: {"n": share_set.n, "k": share_set.k}}
    for share in share_set.shares:
        document[str(share.id)] = {
            "base": str(base),
            "value": encode_value(share.value, base),
        }
    return document
