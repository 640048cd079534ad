"""
Domain-Specific Exceptions for the Log Inspector

This module consolidates the exceptions raised by the search engine and the
extraction pipeline. All of them extend LogInspectorError.

Organized by category:
1. Caller Misuse
2. Backend Query Failures
3. Expression Evaluation and Serialization
"""

from typing import Any, Dict, Optional

from .base import LogInspectorError


# =============================================================================
# Caller Misuse
# =============================================================================

class ValidationError(LogInspectorError):
    """Raised when a search request or option is invalid.

    Used for:
    - Empty source lists or filter patterns
    - Inverted or unparseable time windows
    - Malformed ``name=path`` extract specifications

    Never retried: the caller has to fix the input.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Backend Query Failures
# =============================================================================

class QueryError(LogInspectorError):
    """Raised when a paged query against a log source fails.

    A QueryError from any single source aborts the whole multi-source search.
    """

    def __init__(self, message: str, source: Optional[str] = None, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        """Initialize query error.

        Args:
            message: Human-readable error message
            source: Log group the failing query targeted
            original_error: The original exception that caused this error
            context: Additional context information
        """
        self.source = source
        context = dict(context or {})
        if source:
            context['source'] = source
        super().__init__(message, original_error, context)


class NotFoundError(QueryError):
    """Raised when the log group being searched does not exist."""


class ConnectionError(QueryError):
    """Raised when the CloudWatch Logs client cannot be built or authenticated.

    Used for:
    - Session or client construction failures
    - Authentication/authorization failures
    - Expired credentials and invalid endpoints
    """


class RetryableError(QueryError):
    """Raised for throttling and transient service failures.

    The search engine does not retry these itself; botocore's retry
    configuration has already been exhausted when one surfaces.
    """

    def __init__(self, message: str, source: Optional[str] = None, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, source, original_error, context)


# =============================================================================
# Expression Evaluation and Serialization
# =============================================================================

class EvaluationError(LogInspectorError):
    """Raised when a JMESPath expression cannot be compiled or evaluated."""

    def __init__(self, message: str, expression: Optional[str] = None, original_error: Optional[Exception] = None):
        self.expression = expression
        context = {}
        if expression is not None:
            context['expression'] = expression
        super().__init__(message, original_error, context)


class SerializationError(LogInspectorError):
    """Raised when an evaluation result cannot be canonicalized to JSON text."""
