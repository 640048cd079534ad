"""
Multi-Group Search Coordinator

This module fans a search out across several log groups using a bounded
thread pool, then fans the per-group results back in:

- Each log group is submitted to the pool exactly once
- At most ``min(concurrency, len(groups))`` groups are paged at the same time
- The first failure wins: groups not yet started are cancelled and the error
  is raised immediately. Groups already running finish in the background and
  their records are dropped. No partial results are ever returned.
- Successful batches are merged into one deterministically ordered list

Timeouts are not enforced here; they belong to the query capability (see the
botocore timeouts in InspectorConfig).
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ...config import InspectorConfig
from ...core import create_logs_gateway
from ...models import LogRecord, SearchRequest
from .merger import merge_records
from .pager import PagedQuery, SourcePager

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


def effective_workers(concurrency: Optional[int], source_count: int) -> int:
    """Worker count bounded by the number of sources, never below one."""
    return max(1, min(concurrency or 1, source_count))


class SearchCoordinator:
    """
    Searches CloudWatch Logs across multiple log groups.

    Usage:
        coordinator = SearchCoordinator.from_config(config)
        records = coordinator.search(["/aws/app/one", "/aws/app/two"], "req-123", start, end)
    """

    def __init__(self, query: PagedQuery, concurrency: int = DEFAULT_CONCURRENCY):
        """Initialize coordinator.

        Args:
            query: Paged query capability shared by all workers
            concurrency: Default maximum number of groups searched in parallel
        """
        self.pager = SourcePager(query)
        self.concurrency = concurrency

    @classmethod
    def from_config(cls, config: InspectorConfig) -> 'SearchCoordinator':
        """Build a coordinator backed by a CloudWatch Logs gateway."""
        return cls(create_logs_gateway(config), concurrency=config.concurrency)

    def search(
        self,
        sources: Iterable[str],
        filter_pattern: str,
        start_time: datetime,
        end_time: datetime,
        concurrency: Optional[int] = None
    ) -> List[LogRecord]:
        """
        Find events matching ``filter_pattern`` across ``sources``.

        Args:
            sources: Log group names
            filter_pattern: CloudWatch Logs filter pattern
            start_time: Window start
            end_time: Window end
            concurrency: Override the coordinator's default worker bound

        Returns:
            All matching records sorted by (timestamp, group, stream, message)

        Raises:
            ValidationError: Empty sources or filter pattern, or bad window
            QueryError: The first backend failure observed from any group
        """
        request = SearchRequest.create(sources, filter_pattern, start_time, end_time)
        return self.execute(request, concurrency)

    def execute(self, request: SearchRequest, concurrency: Optional[int] = None) -> List[LogRecord]:
        """Run an already validated SearchRequest."""
        workers = effective_workers(
            concurrency if concurrency is not None else self.concurrency,
            len(request.sources)
        )
        start_ms, end_ms = request.start_ms, request.end_ms
        logger.info(
            f"Searching {len(request.sources)} log groups with {workers} workers "
            f"for {request.filter_pattern!r} in [{start_ms}, {end_ms}]"
        )

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="log-search")
        futures: Dict = {}
        batches: List[List[LogRecord]] = []
        try:
            for source in request.sources:
                future = executor.submit(
                    self.pager.fetch_all, source, request.filter_pattern, start_ms, end_ms
                )
                futures[future] = source

            for future in as_completed(futures):
                source = futures[future]
                try:
                    batches.append(future.result())
                except Exception as e:
                    logger.error(f"Search of {source} failed, abandoning remaining log groups: {e}")
                    raise
        finally:
            # Never blocks: pending groups are cancelled, running ones are left to finish
            executor.shutdown(wait=False, cancel_futures=True)

        records = merge_records(batches)
        logger.info(f"Search matched {len(records)} events")
        return records
