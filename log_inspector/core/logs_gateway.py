"""
Thin CloudWatch Logs Gateway

This module provides a lightweight wrapper around the boto3 ``logs`` client.
It implements the paged-query capability the search engine consumes: one call
returns one page of ``FilterLogEvents`` results plus the continuation token.

The gateway focuses on:
- Creating the boto3 client lazily (profile, static keys or default chain)
- Mapping botocore failures to domain exceptions
- Staying stateless per call so one instance can serve every search worker

Pagination policy (when to stop, how to guard against repeated tokens) lives
in the SourcePager, not here.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import InspectorConfig
from ..exceptions import (
    ConnectionError,
    NotFoundError,
    QueryError,
    RetryableError,
)

logger = logging.getLogger(__name__)


def map_cloudwatch_error(
    error: ClientError,
    operation: str,
    log_group: Optional[str] = None
) -> Exception:
    """Map a CloudWatch Logs ClientError to a domain-specific exception.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "FilterLogEvents")
        log_group: Log group the call targeted, for context

    Returns:
        Appropriate QueryError subclass
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    context = operation
    if log_group:
        context += f" on {log_group}"
    full_message = f"{context}: {error_message}"

    if error_code == 'ResourceNotFoundException':
        return NotFoundError(f"Log group not found - {full_message}", log_group, original_error=error)

    elif error_code in ['InvalidParameterException', 'ValidationException', 'MalformedQueryException']:
        return QueryError(f"Invalid query parameters - {full_message}", log_group, original_error=error)

    elif error_code in [
        'ThrottlingException', 'LimitExceededException', 'RequestLimitExceeded',
        'TooManyRequestsException'
    ]:
        return RetryableError(f"Throttling/rate limiting - {full_message}", log_group, original_error=error)

    elif error_code in [
        'ServiceUnavailableException', 'InternalFailure', 'InternalServerError',
        'RequestTimeoutException'
    ]:
        return RetryableError(f"Service unavailable - {full_message}", log_group, original_error=error)

    elif error_code in ['UnrecognizedClientException', 'AccessDeniedException', 'AccessDenied']:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", log_group, original_error=error)

    elif error_code in ['ExpiredTokenException', 'InvalidSignatureException', 'IncompleteSignatureException']:
        return ConnectionError(f"Invalid or expired credentials - {full_message}", log_group, original_error=error)

    logger.warning(f"Unknown CloudWatch Logs error code '{error_code}' mapped to QueryError")
    return QueryError(f"CloudWatch Logs operation failed - {full_message}", log_group, original_error=error)


class CloudWatchLogsGateway:
    """
    Thin gateway for CloudWatch Logs FilterLogEvents.

    Callable as the paged-query capability:
    ``gateway(log_group, filter_pattern, start_ms, end_ms, next_token)``.
    """

    def __init__(self, config: InspectorConfig, client=None):
        """Initialize the gateway.

        Args:
            config: Inspector configuration
            client: Pre-built boto3 logs client (skips lazy creation)
        """
        self.config = config
        self._client = client
        self._client_lock = threading.Lock()

    def _build_session(self):
        if self.config.profile_name:
            return boto3.Session(
                profile_name=self.config.profile_name,
                region_name=self.config.region_name
            )
        if self.config.aws_access_key_id and self.config.aws_secret_access_key:
            return boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                aws_session_token=self.config.aws_session_token,
                region_name=self.config.region_name
            )
        return boto3.Session(region_name=self.config.region_name)

    @property
    def client(self):
        """Lazy initialization of the boto3 logs client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    try:
                        session = self._build_session()

                        client_kwargs: Dict[str, Any] = {
                            'config': Config(
                                retries={'max_attempts': self.config.retries},
                                max_pool_connections=self.config.max_pool_connections,
                                read_timeout=self.config.timeout_seconds,
                                connect_timeout=self.config.timeout_seconds
                            )
                        }
                        if self.config.region_name:
                            client_kwargs['region_name'] = self.config.region_name
                        if self.config.endpoint_url:
                            client_kwargs['endpoint_url'] = self.config.endpoint_url

                        self._client = session.client('logs', **client_kwargs)
                    except Exception as e:
                        logger.error(f"Failed to create CloudWatch Logs client: {e}")
                        raise ConnectionError(f"Failed to create CloudWatch client: {e}", original_error=e) from e
        return self._client

    def filter_log_events(
        self,
        log_group: str,
        filter_pattern: str,
        start_ms: int,
        end_ms: int,
        next_token: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """
        Fetch one page of events matching ``filter_pattern``.

        Args:
            log_group: Log group name
            filter_pattern: CloudWatch Logs filter pattern
            start_ms: Window start in epoch milliseconds
            end_ms: Window end in epoch milliseconds
            next_token: Continuation token from the previous page, None first

        Returns:
            Tuple of (events, next_token); next_token is None on the last page

        Raises:
            QueryError: Any backend failure, mapped from botocore
        """
        request: Dict[str, Any] = {
            'logGroupName': log_group,
            'filterPattern': filter_pattern,
            'startTime': start_ms,
            'endTime': end_ms,
        }
        if next_token:
            request['nextToken'] = next_token

        try:
            response = self.client.filter_log_events(**request)
        except ClientError as e:
            raise map_cloudwatch_error(e, "FilterLogEvents", log_group) from e
        except BotoCoreError as e:
            raise ConnectionError(f"FilterLogEvents on {log_group} failed: {e}", log_group, original_error=e) from e

        return response.get('events', []), response.get('nextToken')

    __call__ = filter_log_events


def create_logs_gateway(config: InspectorConfig) -> CloudWatchLogsGateway:
    """
    Factory function to create a CloudWatchLogsGateway instance.

    Args:
        config: Inspector configuration

    Returns:
        Configured CloudWatchLogsGateway instance
    """
    return CloudWatchLogsGateway(config)
