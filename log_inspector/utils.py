"""
Log Inspector Utilities - Consolidated Module

This single module contains the small helpers shared by the search engine,
the extraction pipeline and the command line.

Key Features:
- Time handling (UTC normalization, epoch milliseconds, search windows)
- Option parsing helpers (comma-separated log groups)
- JSON value classification and canonical compact serialization

Architecture Compliance:
- Gateway layer: epoch milliseconds only
- Handler layer: timezone-aware UTC datetimes
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, List, Optional, Tuple

from .exceptions import SerializationError, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Time Utilities
# =============================================================================

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DEFAULT_WINDOW = timedelta(hours=24)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC.

    Naive datetimes are assumed to already be in UTC.

    Args:
        dt: Datetime to convert to UTC

    Returns:
        Datetime in UTC timezone, or None if input is None

    Examples:
        >>> dt = datetime(2024, 1, 1, 10, 0)
        >>> to_utc(dt)  # -> 2024-01-01 10:00:00+00:00
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def from_epoch_millis(ms: int) -> datetime:
    """Convert milliseconds since the Unix epoch to an aware UTC datetime.

    Uses integer timedelta arithmetic so millisecond values round-trip exactly.
    """
    return EPOCH + timedelta(milliseconds=ms)


def to_epoch_millis(dt: datetime) -> int:
    """Convert a datetime to milliseconds since the Unix epoch (floor)."""
    return (to_utc(dt) - EPOCH) // timedelta(milliseconds=1)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 timestamp such as ``2025-08-30T15:04:05Z``.

    Raises:
        ValidationError: If the value is not RFC3339 or has no UTC offset
    """
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00').replace('z', '+00:00'))
    except ValueError as e:
        raise ValidationError(f"invalid RFC3339 time: {value!r}", errors={'time': value}, original_error=e) from e
    if parsed.tzinfo is None:
        raise ValidationError(f"invalid RFC3339 time (missing UTC offset): {value!r}", errors={'time': value})
    return to_utc(parsed)


def resolve_time_window(
    start: Optional[str],
    end: Optional[str],
    now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """Compute the [start, end] search window from optional RFC3339 strings.

    Rules:
    - both empty: the 24 hours ending at ``now``
    - only start: end = now
    - only end: start = end - 24h
    - both set: start must not be after end

    Args:
        start: Optional RFC3339 start time
        end: Optional RFC3339 end time
        now: Reference time (defaults to the current UTC time)

    Returns:
        Tuple of (start, end) as aware UTC datetimes

    Raises:
        ValidationError: On parse failures or an inverted window
    """
    now = to_utc(now) if now is not None else datetime.now(timezone.utc)

    if not start and not end:
        return now - DEFAULT_WINDOW, now

    start_dt = parse_rfc3339(start) if start else None
    end_dt = parse_rfc3339(end) if end else None

    if end_dt is None:
        end_dt = now
    if start_dt is None:
        start_dt = end_dt - DEFAULT_WINDOW

    if start_dt > end_dt:
        raise ValidationError("start is after end", errors={'start': start, 'end': end})
    return start_dt, end_dt


# =============================================================================
# Option Parsing
# =============================================================================

def parse_groups_csv(csv: Optional[str]) -> List[str]:
    """Split a comma-separated log group list, trimming blanks and empties.

    Examples:
        >>> parse_groups_csv(" /aws/a, ,/aws/b ")
        ['/aws/a', '/aws/b']
    """
    if not csv:
        return []
    return [g.strip() for g in csv.split(",") if g.strip()]


# =============================================================================
# JSON Values
# =============================================================================

class JsonKind(Enum):
    """Tag for the six shapes a decoded JSON value can take."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def classify(value: Any) -> JsonKind:
    """Tag a decoded JSON value with its JsonKind.

    Raises:
        TypeError: If the value is not a JSON-compatible type
    """
    if value is None:
        return JsonKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"unsupported JSON value type: {type(value).__name__}")


def is_empty(value: Any) -> bool:
    """True for null, the empty string, and empty arrays or objects."""
    kind = classify(value)
    if kind is JsonKind.NULL:
        return True
    if kind in (JsonKind.STRING, JsonKind.ARRAY, JsonKind.OBJECT):
        return len(value) == 0
    return False


def to_compact_json(value: Any) -> str:
    """Serialize a value as compact JSON text (no whitespace, UTF-8 kept).

    Raises:
        SerializationError: If the value cannot be represented as JSON
    """
    try:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"marshal result failed: {e}", original_error=e) from e
