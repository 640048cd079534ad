"""
Base Model Components and Mixins

DateTimeMixin gives every model that inherits it the same datetime handling:

- ISO/RFC3339 strings are accepted, including the ``Z`` suffix
- Integer values are read as milliseconds since the Unix epoch, which is how
  CloudWatch Logs reports event timestamps
- Naive datetimes are assumed to be UTC; aware ones are converted to UTC
- Datetimes serialize as RFC3339 strings with a ``Z`` suffix

Pydantic registers the ``'*'`` validator from the mixin on every subclass, so
models only declare ``datetime`` fields and get the behavior for free.
"""

import logging
from datetime import datetime
from typing import Any, Optional, get_args, get_origin

from pydantic import BaseModel, field_serializer, field_validator

logger = logging.getLogger(__name__)


def _is_datetime_annotation(annotation: Any) -> bool:
    if annotation is None:
        return False
    origin = get_origin(annotation)
    if origin is not None:
        return any(arg is datetime for arg in get_args(annotation) if arg is not type(None))
    return annotation is datetime


class DateTimeMixin(BaseModel):
    """
    Mixin providing consistent UTC datetime validation and JSON serialization.
    """

    @field_validator('*', mode='before')
    @classmethod
    def validate_datetime_fields(cls, v, info):
        """
        Normalize datetime fields to timezone-aware UTC.

        Non-datetime fields are returned unchanged.

        Raises:
            ValueError: If datetime format is invalid or type is unsupported
        """
        field = cls.model_fields.get(info.field_name) if info.field_name else None
        if field is None or not _is_datetime_annotation(field.annotation):
            return v

        if v is None:
            return v

        # Imported here to avoid circular imports (utils -> exceptions -> models)
        from ..utils import from_epoch_millis, to_utc

        if isinstance(v, bool):
            raise ValueError(f"Invalid datetime type: {type(v)}. Expected datetime, ISO string or epoch milliseconds.")

        if isinstance(v, int):
            return from_epoch_millis(v)

        if isinstance(v, str):
            try:
                return to_utc(datetime.fromisoformat(v.replace('Z', '+00:00')))
            except ValueError as e:
                raise ValueError(f"Invalid datetime format: {v}. Expected ISO format.") from e

        if isinstance(v, datetime):
            return to_utc(v)

        raise ValueError(f"Invalid datetime type: {type(v)}. Expected datetime, ISO string or epoch milliseconds.")

    @field_serializer('*', mode='wrap', when_used='json')
    def serialize_datetime_fields(self, value: Any, handler) -> Any:
        """Render datetimes as RFC3339 UTC strings in JSON output."""
        if isinstance(value, datetime):
            return format_rfc3339(value)
        return handler(value)


def format_rfc3339(dt: Optional[datetime], with_millis: bool = True) -> Optional[str]:
    """Format a datetime as an RFC3339 UTC string (``2024-01-01T10:00:00.123Z``).

    Args:
        dt: Datetime to format; naive values are assumed to be UTC
        with_millis: Include the millisecond fraction

    Returns:
        RFC3339 string, or None if dt is None
    """
    if dt is None:
        return None
    from ..utils import to_utc
    utc = to_utc(dt)
    if with_millis:
        return utc.strftime('%Y-%m-%dT%H:%M:%S.') + f"{utc.microsecond // 1000:03d}Z"
    return utc.strftime('%Y-%m-%dT%H:%M:%SZ')
