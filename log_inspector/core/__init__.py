"""
Core infrastructure components.

This module contains the foundational components used by the search and
extraction handlers:
- CloudWatchLogsGateway: Thin wrapper over boto3 FilterLogEvents
- JmesPathEvaluator: JMESPath evaluation adapter
- Factory functions for creating gateways
"""

from .expression import JmesPathEvaluator, get_default_evaluator
from .logs_gateway import CloudWatchLogsGateway, create_logs_gateway, map_cloudwatch_error

__all__ = [
    "CloudWatchLogsGateway",
    "JmesPathEvaluator",
    "create_logs_gateway",
    "get_default_evaluator",
    "map_cloudwatch_error",
]
