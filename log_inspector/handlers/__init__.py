"""
Handler Layer for the Log Inspector

The handler layer coordinates the core infrastructure into the operations
callers use:

- search/: multi-group fan-out, pagination and deterministic merge
- extraction/: value extraction from messages and next-filter templating
- workflow.py: the two-phase search composed from both

Architecture:
handlers/ (this layer) -> core/ (infrastructure) -> CloudWatch Logs
handlers/ (this layer) <- models/ (domain models)
"""

from .extraction import ValueExtractor, build_filter, extract_first, substitute_placeholder
from .search import SearchCoordinator, SourcePager, merge_records
from .workflow import TwoPhaseSearch

__all__ = [
    'SearchCoordinator',
    'SourcePager',
    'TwoPhaseSearch',
    'ValueExtractor',
    'build_filter',
    'extract_first',
    'merge_records',
    'substitute_placeholder',
]
