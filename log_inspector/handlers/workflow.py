"""
Two-Phase Search Workflow

Runs a first search, extracts a value from its messages, turns the value into
a second filter pattern and searches again over the same log groups and
window. Each step short-circuits when the previous one produced nothing.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..core import JmesPathEvaluator
from ..exceptions import ValidationError
from ..models import ExtractSpec, SearchRequest, TwoPhaseResult
from .extraction import ValueExtractor, build_filter, substitute_placeholder
from .search import SearchCoordinator

logger = logging.getLogger(__name__)


class TwoPhaseSearch:
    """Search, extract, rebuild the filter, search again."""

    def __init__(
        self,
        coordinator: SearchCoordinator,
        sources: List[str],
        start_time: datetime,
        end_time: datetime,
        concurrency: Optional[int] = None,
        evaluator: Optional[JmesPathEvaluator] = None
    ):
        self.coordinator = coordinator
        self.sources = list(sources)
        self.start_time = start_time
        self.end_time = end_time
        self.concurrency = concurrency
        self.extractor = ValueExtractor(evaluator)
        self.evaluator = self.extractor.evaluator

    def _search(self, filter_pattern: str):
        request = SearchRequest.create(self.sources, filter_pattern, self.start_time, self.end_time)
        return self.coordinator.execute(request, self.concurrency)

    def run(
        self,
        filter_pattern: str,
        extract: Optional[ExtractSpec] = None,
        next_filter: Optional[str] = None
    ) -> TwoPhaseResult:
        """
        Execute the workflow.

        Args:
            filter_pattern: First-phase CloudWatch filter pattern
            extract: Placeholder name and JMESPath path to extract
            next_filter: Template for the second filter; requires ``extract``

        Returns:
            TwoPhaseResult; ``next_records`` is None when no second search ran

        Raises:
            ValidationError: Invalid request, or next_filter without extract
            QueryError: Backend failure in either search
            EvaluationError: Malformed extract path
        """
        if next_filter and extract is None:
            raise ValidationError("--next-filter requires --extract", errors={'next_filter': next_filter})

        records = self._search(filter_pattern)
        result = TwoPhaseResult(records=records)
        if extract is None or not records:
            return result

        value, found = self.extractor.extract_first((r.message for r in records), extract.path)
        if not found:
            logger.info(f"No extractable value for {extract.path!r} in {len(records)} records")
            return result
        result.extracted_value = value
        result.found = True

        if not next_filter:
            return result

        expression = substitute_placeholder(next_filter, extract.name, value)
        result.next_filter = build_filter(expression, value, self.evaluator)
        logger.info(f"Second search with filter {result.next_filter!r}")
        result.next_records = self._search(result.next_filter)
        return result
