"""
Domain Models for the Log Inspector

Organized by concern:
1. Log Records produced by searches
2. Search Requests accepted by the coordinator
3. Extraction and two-phase search results
"""

from datetime import datetime
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .base import DateTimeMixin


# =============================================================================
# Log Records
# =============================================================================

class LogRecord(DateTimeMixin, BaseModel):
    """A single log event matched in one log group.

    JSON output uses the field names ``Timestamp``, ``LogGroup``,
    ``LogStream`` and ``Message``.
    """

    timestamp: datetime = Field(..., serialization_alias="Timestamp", description="Event time (UTC, millisecond precision)")
    log_group: str = Field(..., serialization_alias="LogGroup", description="Log group the event was found in")
    log_stream: str = Field("", serialization_alias="LogStream", description="Log stream name, empty when unknown")
    message: str = Field("", serialization_alias="Message", description="Raw event message")

    model_config = ConfigDict(frozen=True)

    def sort_key(self) -> Tuple[datetime, str, str, str]:
        """Composite key giving records a total order."""
        return (self.timestamp, self.log_group, self.log_stream, self.message)

    @classmethod
    def from_event(cls, log_group: str, event: Dict[str, Any]) -> 'LogRecord':
        """Build a record from a raw FilterLogEvents event.

        Args:
            log_group: Log group that was queried
            event: Event dict with ``timestamp`` (epoch ms), optional
                ``logStreamName`` and ``message``

        Returns:
            LogRecord
        """
        return cls(
            timestamp=int(event.get('timestamp') or 0),
            log_group=log_group,
            log_stream=event.get('logStreamName') or "",
            message=event.get('message') or "",
        )


# =============================================================================
# Search Requests
# =============================================================================

class SearchRequest(DateTimeMixin, BaseModel):
    """Validated, immutable description of one multi-group search."""

    sources: List[str] = Field(..., description="Log groups to search, in caller order")
    filter_pattern: str = Field(..., description="CloudWatch Logs filter pattern")
    start_time: datetime = Field(..., description="Window start (inclusive)")
    end_time: datetime = Field(..., description="Window end (inclusive)")

    model_config = ConfigDict(frozen=True)

    @field_validator('sources')
    @classmethod
    def validate_sources(cls, v):
        """Require a non-empty list of distinct, non-blank log groups."""
        if not v:
            raise ValueError("no log groups configured")
        if any(not s for s in v):
            raise ValueError("log group names must not be empty")
        if len(set(v)) != len(v):
            raise ValueError("log group names must be distinct")
        return v

    @field_validator('filter_pattern')
    @classmethod
    def validate_filter_pattern(cls, v):
        """Require a non-empty filter pattern."""
        if not v:
            raise ValueError("empty filter pattern")
        return v

    @model_validator(mode='after')
    def validate_window(self):
        """Ensure the window is not inverted."""
        if self.start_time > self.end_time:
            raise ValueError("start is after end")
        return self

    @classmethod
    def create(cls, sources, filter_pattern: str, start_time: datetime, end_time: datetime) -> 'SearchRequest':
        """Build a request, converting pydantic failures into ValidationError.

        Raises:
            ValidationError: If any field or the window is invalid
        """
        from ..exceptions import ValidationError

        try:
            return cls(
                sources=list(sources or []),
                filter_pattern=filter_pattern,
                start_time=start_time,
                end_time=end_time,
            )
        except PydanticValidationError as e:
            errors = {
                ".".join(str(part) for part in err['loc']) or 'request': err['msg']
                for err in e.errors()
            }
            raise ValidationError(
                f"Invalid search request: {'; '.join(errors.values())}",
                errors=errors,
                original_error=e,
            ) from e

    @property
    def start_ms(self) -> int:
        from ..utils import to_epoch_millis
        return to_epoch_millis(self.start_time)

    @property
    def end_ms(self) -> int:
        from ..utils import to_epoch_millis
        return to_epoch_millis(self.end_time)


# =============================================================================
# Extraction and Two-Phase Results
# =============================================================================

class ExtractionResult(NamedTuple):
    """Outcome of scanning messages for a value; found=False is not an error."""

    value: str
    found: bool


class ExtractSpec(BaseModel):
    """A ``name=path`` extraction: placeholder name plus JMESPath expression."""

    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, spec: str) -> 'ExtractSpec':
        """Parse ``name=path``.

        Raises:
            ValidationError: If ``=`` is missing, first or last, or either
                side is blank after trimming
        """
        from ..exceptions import ValidationError

        i = spec.find("=")
        if i <= 0 or i == len(spec) - 1:
            raise ValidationError("invalid --extract format; expected name=path", errors={'extract': spec})
        name = spec[:i].strip()
        path = spec[i + 1:].strip()
        if not name or not path:
            raise ValidationError("invalid --extract format; empty name or path", errors={'extract': spec})
        return cls(name=name, path=path)


class TwoPhaseResult(BaseModel):
    """Everything a two-phase search produced.

    ``next_records`` is None when no second search ran.
    """

    records: List[LogRecord] = Field(default_factory=list)
    extracted_value: Optional[str] = None
    found: bool = False
    next_filter: Optional[str] = None
    next_records: Optional[List[LogRecord]] = None
