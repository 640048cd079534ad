"""
Single-source pagination.

SourcePager drives the paged-query capability against one log group until the
backend reports no further pages. It has no knowledge of other sources.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...models import LogRecord

logger = logging.getLogger(__name__)

# (log_group, filter_pattern, start_ms, end_ms, next_token) -> (events, next_token)
PagedQuery = Callable[[str, str, int, int, Optional[str]], Tuple[List[Dict[str, Any]], Optional[str]]]


class SourcePager:
    """Fetches every page of matching events from one log group."""

    def __init__(self, query: PagedQuery):
        """Initialize pager.

        Args:
            query: Paged query capability, e.g. a CloudWatchLogsGateway
        """
        self.query = query

    def fetch_all(
        self,
        source: str,
        filter_pattern: str,
        start_ms: int,
        end_ms: int
    ) -> List[LogRecord]:
        """
        Collect all events for ``source`` in the window.

        Pagination stops when the backend returns no token, or returns the
        same token that was just sent.

        Args:
            source: Log group name
            filter_pattern: CloudWatch Logs filter pattern
            start_ms: Window start in epoch milliseconds
            end_ms: Window end in epoch milliseconds

        Returns:
            Records in the order the backend produced them

        Raises:
            QueryError: Propagated unmodified from the first failing page
        """
        records: List[LogRecord] = []
        token: Optional[str] = None
        pages = 0

        while True:
            events, next_token = self.query(source, filter_pattern, start_ms, end_ms, token)
            pages += 1
            for event in events or []:
                records.append(LogRecord.from_event(source, event))

            if not next_token:
                break
            if next_token == token:
                logger.warning(f"{source}: backend repeated continuation token, stopping after {pages} pages")
                break
            token = next_token

        logger.debug(f"{source}: fetched {len(records)} events in {pages} pages")
        return records
