# Base exception class
from .base import LogInspectorError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    QueryError,
    NotFoundError,
    ConnectionError,
    RetryableError,
    EvaluationError,
    SerializationError,
)

__all__ = [
    # Base exception
    "LogInspectorError",

    # Domain exceptions (alphabetically ordered)
    "ConnectionError",
    "EvaluationError",
    "NotFoundError",
    "QueryError",
    "RetryableError",
    "SerializationError",
    "ValidationError",
]
