"""
Multi Log Inspector

Searches several CloudWatch Logs log groups concurrently, merges the matches
into one time-ordered stream and supports two-phase searches: a value
extracted from the first results (via JMESPath) drives a second, narrower
filter.
"""

from .config import InspectorConfig
from .exceptions import (
    ConnectionError,
    EvaluationError,
    LogInspectorError,
    NotFoundError,
    QueryError,
    RetryableError,
    SerializationError,
    ValidationError,
)
from .models import (
    ExtractionResult,
    ExtractSpec,
    LogRecord,
    SearchRequest,
    TwoPhaseResult,
)
from .core import (
    CloudWatchLogsGateway,
    JmesPathEvaluator,
    create_logs_gateway,
)
from .handlers import (
    SearchCoordinator,
    SourcePager,
    TwoPhaseSearch,
    ValueExtractor,
    build_filter,
    extract_first,
    merge_records,
    substitute_placeholder,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "InspectorConfig",

    # Exceptions
    "ConnectionError",
    "EvaluationError",
    "LogInspectorError",
    "NotFoundError",
    "QueryError",
    "RetryableError",
    "SerializationError",
    "ValidationError",

    # Models
    "ExtractionResult",
    "ExtractSpec",
    "LogRecord",
    "SearchRequest",
    "TwoPhaseResult",

    # Gateway architecture
    "CloudWatchLogsGateway",
    "JmesPathEvaluator",
    "create_logs_gateway",

    # Search and extraction
    "SearchCoordinator",
    "SourcePager",
    "TwoPhaseSearch",
    "ValueExtractor",
    "build_filter",
    "extract_first",
    "merge_records",
    "substitute_placeholder",
]
