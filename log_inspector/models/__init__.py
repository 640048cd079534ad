# Base mixins and utilities
from .base import (
    DateTimeMixin,
    format_rfc3339,
)

# Core domain models
from .domain_models import (
    LogRecord,
    SearchRequest,
    ExtractionResult,
    ExtractSpec,
    TwoPhaseResult,
)

__all__ = [
    # Base mixins and utilities
    "DateTimeMixin",
    "format_rfc3339",

    # Domain models
    "LogRecord",
    "SearchRequest",
    "ExtractionResult",
    "ExtractSpec",
    "TwoPhaseResult",
]
