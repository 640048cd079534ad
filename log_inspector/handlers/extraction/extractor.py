"""
Value extraction from raw log messages.

Each message is decoded as JSON when possible; otherwise it is wrapped as
``{"message": <raw text>}`` so plain-text logs can still be addressed with a
JMESPath expression. The first message producing a non-empty value wins.
"""

import json
import logging
import math
from typing import Any, Iterable, Optional

from ...core import JmesPathEvaluator, get_default_evaluator
from ...models import ExtractionResult
from ...utils import JsonKind, classify, is_empty, to_compact_json

logger = logging.getLogger(__name__)

_EMPTY_CANONICAL = ("null", "[]", "{}")


def _reject_constant(name: str):
    # NaN/Infinity are not JSON; such messages are treated as plain text
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_float(text: str) -> float:
    # Overflow to inf gets the same plain-text treatment
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def decode_message(raw: str) -> Any:
    """Decode a message as JSON, falling back to ``{"message": raw}``."""
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError:
        return {"message": raw}


def normalize_result(result: Any) -> Optional[str]:
    """Reduce an evaluation result to a non-empty string, or None if empty.

    Lists contribute their first element only. Strings are used verbatim;
    anything else becomes compact JSON.

    Raises:
        SerializationError: If the value cannot be serialized
    """
    if is_empty(result):
        return None

    if classify(result) is JsonKind.ARRAY:
        result = result[0]
        if is_empty(result):
            return None

    if classify(result) is JsonKind.STRING:
        return result

    text = to_compact_json(result)
    if not text or text in _EMPTY_CANONICAL:
        return None
    return text


class ValueExtractor:
    """Scans messages in order for the first non-empty JMESPath result."""

    def __init__(self, evaluator: Optional[JmesPathEvaluator] = None):
        self.evaluator = evaluator or get_default_evaluator()

    def extract_first(self, messages: Iterable[Optional[str]], expression: str) -> ExtractionResult:
        """
        Extract the first non-empty value of ``expression`` from ``messages``.

        Args:
            messages: Raw messages in record order; None entries are skipped
            expression: JMESPath expression

        Returns:
            ExtractionResult(value, True) on success, ("", False) when no
            message yields a value

        Raises:
            EvaluationError: If the expression is malformed (fails the whole
                call, not just one message)
            SerializationError: If a result cannot be canonicalized
        """
        # Compile up front so a bad expression fails even with no messages
        self.evaluator.compile(expression)

        scanned = 0
        for raw in messages:
            if raw is None:
                continue
            scanned += 1
            value = normalize_result(self.evaluator.evaluate(expression, decode_message(raw)))
            if value is not None:
                logger.debug(f"Extracted value with {expression!r} from message #{scanned}")
                return ExtractionResult(value, True)

        logger.debug(f"No value for {expression!r} in {scanned} messages")
        return ExtractionResult("", False)


def extract_first(
    messages: Iterable[Optional[str]],
    expression: str,
    evaluator: Optional[JmesPathEvaluator] = None
) -> ExtractionResult:
    """Module-level shortcut for ValueExtractor(evaluator).extract_first()."""
    return ValueExtractor(evaluator).extract_first(messages, expression)
