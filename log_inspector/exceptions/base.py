"""
Root of the log inspector error hierarchy.

Every failure the search engine, the extraction pipeline or the CLI reports is
a LogInspectorError. The CLI prints ``str(error)``, so the context rendered
there (log group, expression, validation errors) is what users see on stderr.
"""

from typing import Any, Dict, Optional


class LogInspectorError(Exception):
    """Base exception for all log inspector errors.

    Attributes:
        message: Human-readable error message
        original_error: Underlying botocore, jmespath or pydantic error, if any
        context: Details such as ``source`` or ``expression``, in insertion order
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})
        super().__init__(message)

    def __str__(self) -> str:
        """``message (Context: k=v, ...)``; just the message when there is no context."""
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        parts = [f"message={self.message!r}"]
        if self.original_error is not None:
            parts.append(f"original_error={self.original_error!r}")
        if self.context:
            parts.append(f"context={self.context!r}")
        return f"{self.__class__.__name__}({', '.join(parts)})"
