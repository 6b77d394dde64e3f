"""Value codec: typed values <-> stored string representation.

Integers are written as exact decimal text (never via float) and strings
as themselves; every other value goes through pydantic JSON. Decoding is
driven by the kind the caller asks for, through a closed table of typed
decoders.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from keycache.domain.exceptions import SerializationError

T = TypeVar("T")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Optional sign then digits only: rejects "1.0", "1e3", " 12", "1_000".
_DECIMAL_RE = re.compile(r"^[+-]?[0-9]+$")


@lru_cache(maxsize=256)
def _adapter(kind: Any) -> TypeAdapter[Any]:
    return TypeAdapter(kind)


def encode(value: Any) -> str | None:
    """Return the stored text for value, or None when there is nothing to write.

    Args:
        value: Value to cache.

    Returns:
        Decimal text for int, the string itself for str, JSON otherwise;
        None for None.

    Raises:
        SerializationError: If a structured value cannot be serialized.
    """
    if value is None:
        return None
    # bool is an int subclass but is stored as JSON true/false.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return value
    try:
        return _adapter(type(value)).dump_json(value).decode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationError(type(value), str(e)) from e


def decode_int(raw: str) -> int:
    """Parse exact decimal text into a signed 64-bit integer."""
    if not _DECIMAL_RE.match(raw):
        raise SerializationError(int, f"not a decimal integer: {raw[:64]!r}")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise SerializationError(int, f"out of 64-bit range: {raw[:64]!r}")
    return value


def decode_str(raw: str) -> str:
    return raw


def decode_struct(raw: str, kind: type[T]) -> T:
    """Validate JSON text against kind (model, dataclass, dict, list, ...)."""
    try:
        return _adapter(kind).validate_json(raw)
    except ValidationError as e:
        raise SerializationError(kind, str(e)) from e


_SCALAR_DECODERS: dict[type, Callable[[str], Any]] = {
    int: decode_int,
    str: decode_str,
}


def decode(raw: str | None, kind: type[T]) -> T | None:
    """Convert stored text back to kind.

    Args:
        raw: Text read from the store; None (or empty) means the key is absent.
        kind: Type the caller expects.

    Returns:
        Decoded value, or None when raw is absent.

    Raises:
        SerializationError: If raw cannot be read as kind.
    """
    if raw is None or raw == "":
        return None
    decoder = _SCALAR_DECODERS.get(kind)
    if decoder is not None:
        return decoder(raw)
    return decode_struct(raw, kind)
