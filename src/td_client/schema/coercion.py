"""Scalar coercion for decoded JSON values.

The API is not consistent about how it encodes numbers, booleans and
timestamps, so each scalar kind accepts a small set of encodings:

  Kind        -> Accepted input
  -----------------------------------------------
  string      -> JSON string
  integer     -> integer, number without fraction, decimal-digit string
  float       -> any number, numeric string with a finite value
  boolean     -> boolean, "true" / "false" (any case)
  timestamp   -> "YYYY-MM-DD HH:MM:SS UTC", ISO-8601 string, epoch seconds
  any         -> anything, unchanged

Timestamps always come back as timezone-aware UTC datetimes.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any

from td_client.errors import SchemaMismatchError
from td_client.schema.descriptor import ScalarKind

# Format used by the API for timestamps in responses and request parameters
API_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


def json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an API timestamp string, returning None if it matches no known pattern."""
    text = value.strip()
    try:
        parsed = datetime.strptime(text, API_DATETIME_FORMAT)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a datetime the way the API expects it in request parameters."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(API_DATETIME_FORMAT)


def _to_integer(value: Any) -> int | None:
    if _is_number(value):
        if isinstance(value, int):
            return value
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str) and INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    return None


def _to_float(value: Any) -> float | None:
    if _is_number(value):
        try:
            parsed = float(value)
        except OverflowError:
            return None
        return parsed if math.isfinite(parsed) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _to_boolean(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def _to_timestamp(value: Any) -> datetime | None:
    if isinstance(value, str):
        return parse_timestamp(value)
    if _is_number(value):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def coerce_scalar(value: Any, kind: ScalarKind, path: str = "") -> Any:
    """Coerce a decoded JSON value into the Python type for `kind`.

    Args:
        value: The decoded JSON value
        kind: Target scalar kind
        path: Field path of the value, used in error messages

    Returns:
        The coerced value

    Raises:
        SchemaMismatchError: If the value cannot represent the target kind
    """
    if kind is ScalarKind.ANY:
        return value

    if kind is ScalarKind.STRING:
        coerced = value if isinstance(value, str) else None
    elif kind is ScalarKind.INTEGER:
        coerced = _to_integer(value)
    elif kind is ScalarKind.FLOAT:
        coerced = _to_float(value)
    elif kind is ScalarKind.BOOLEAN:
        coerced = _to_boolean(value)
    elif kind is ScalarKind.TIMESTAMP:
        coerced = _to_timestamp(value)
    else:  # pragma: no cover
        raise TypeError(f"Unknown scalar kind: {kind!r}")

    if coerced is None:
        raise SchemaMismatchError(path, kind.value, json_kind(value))
    return coerced
