"""
JMESPath expression evaluation.

A thin adapter over the ``jmespath`` library. Compiled expressions are cached
per evaluator so that scanning many messages with one expression parses it
once.
"""

import logging
import threading
from typing import Any, Dict, Optional

import jmespath
from jmespath.exceptions import JMESPathError

from ..exceptions import EvaluationError

logger = logging.getLogger(__name__)


class JmesPathEvaluator:
    """Evaluates JMESPath expressions against decoded JSON values.

    Safe to share between search workers. Pass ``serialize=True`` to guard
    evaluation with a lock; network I/O never runs under it.
    """

    def __init__(self, serialize: bool = False):
        self._lock = threading.Lock() if serialize else None
        self._compiled: Dict[str, Any] = {}

    def compile(self, expression: str):
        """Compile (or fetch the cached) parsed expression.

        Raises:
            EvaluationError: If the expression is not valid JMESPath
        """
        parsed = self._compiled.get(expression)
        if parsed is None:
            try:
                parsed = jmespath.compile(expression)
            except JMESPathError as e:
                raise EvaluationError(f"jmespath search failed: {e}", expression, e) from e
            self._compiled[expression] = parsed
        return parsed

    def evaluate(self, expression: str, subject: Any) -> Any:
        """Evaluate ``expression`` against ``subject``.

        Raises:
            EvaluationError: If the expression does not compile or fails at
                runtime (e.g. a function applied to the wrong type)
        """
        parsed = self.compile(expression)
        try:
            if self._lock is None:
                return parsed.search(subject)
            with self._lock:
                return parsed.search(subject)
        except JMESPathError as e:
            raise EvaluationError(f"jmespath search failed: {e}", expression, e) from e


_default_evaluator: Optional[JmesPathEvaluator] = None


def get_default_evaluator() -> JmesPathEvaluator:
    """Shared module-level evaluator used when callers do not inject one."""
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = JmesPathEvaluator()
    return _default_evaluator
