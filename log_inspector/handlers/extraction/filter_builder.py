"""
Second-phase filter construction.

Two independent steps the caller composes:

1. ``substitute_placeholder`` splices an extracted value into an expression as
   a JSON string literal, so quotes, braces or JMESPath metacharacters in the
   value cannot escape their position.
2. ``build_filter`` evaluates the expression against ``{"value": extracted}``.
   Anything that is not valid JMESPath is returned as-is, so a plain
   CloudWatch filter pattern is always usable as the next filter.
"""

import json
import logging
from typing import Optional

from ...core import JmesPathEvaluator, get_default_evaluator
from ...exceptions import EvaluationError
from ...utils import JsonKind, classify, to_compact_json

logger = logging.getLogger(__name__)


def substitute_placeholder(expression: str, name: str, value: str) -> str:
    """Replace every ``{{name}}`` in ``expression`` with the JSON literal of ``value``.

    Examples:
        >>> substitute_placeholder('@m = {{value}}', 'value', 'a"b')
        '@m = "a\\\\"b"'
    """
    if not name:
        return expression
    needle = "{{" + name + "}}"
    if needle not in expression:
        return expression
    return expression.replace(needle, json.dumps(value, ensure_ascii=False))


def build_filter(
    expression: str,
    extracted_value: str,
    evaluator: Optional[JmesPathEvaluator] = None
) -> str:
    """Build the next filter pattern from ``expression`` and the extracted value.

    Args:
        expression: JMESPath expression, or a literal filter pattern
        extracted_value: Value found by the first phase
        evaluator: JMESPath evaluator (defaults to the shared one)

    Returns:
        The string result verbatim, compact JSON for other results, or the
        expression unchanged when it cannot be evaluated

    Raises:
        SerializationError: If a non-string result cannot be serialized
    """
    evaluator = evaluator or get_default_evaluator()
    try:
        result = evaluator.evaluate(expression, {"value": extracted_value})
    except EvaluationError as e:
        logger.info(f"Next filter is not a valid JMESPath expression, using it literally: {e.original_error}")
        return expression

    if result is not None and classify(result) is JsonKind.STRING:
        return result
    return to_compact_json(result)
