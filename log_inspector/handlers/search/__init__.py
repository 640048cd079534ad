"""
Multi-Group Search

- SourcePager: pages one log group to exhaustion
- SearchCoordinator: bounded, fail-fast fan-out across log groups
- merge_records: deterministic ordering of the combined results

Usage:
    from .coordinator import SearchCoordinator

    records = SearchCoordinator.from_config(config).search(groups, pattern, start, end)
"""

from .coordinator import DEFAULT_CONCURRENCY, SearchCoordinator, effective_workers
from .merger import merge_records
from .pager import PagedQuery, SourcePager

__all__ = [
    "DEFAULT_CONCURRENCY",
    "PagedQuery",
    "SearchCoordinator",
    "SourcePager",
    "effective_workers",
    "merge_records",
]
