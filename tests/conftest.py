"""
Test configuration and fixtures for the Multi Log Inspector.

Provides an in-memory paged-query backend for the search engine, a moto-backed
CloudWatch Logs client for gateway tests, and sample data.
"""

import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path so we can import log_inspector
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from log_inspector import InspectorConfig
from tests.helpers import BASE_TIME, FakeLogsBackend, event


@pytest.fixture
def inspector_config():
    """Inspector configuration for testing."""
    return InspectorConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        aws_session_token=None,
        profile_name=None,
        region_name="us-east-1",
        endpoint_url=None,
        log_group_names="/aws/app/one,/aws/app/two",
        concurrency=4
    )


@pytest.fixture
def window():
    """A one hour search window around BASE_TIME."""
    return BASE_TIME - timedelta(hours=1), BASE_TIME + timedelta(hours=1)


@pytest.fixture
def sample_backend():
    """Two log groups with interleaved timestamps, one of them paged."""
    return FakeLogsBackend(pages={
        '/aws/app/one': [
            ([event(120, "msg2", "s1")], "one-p2"),
            ([event(240, "msg4", "s1")], None),
        ],
        '/aws/app/two': [
            ([event(60, "msg1", "s2"), event(180, "msg3", "s3")], None),
        ],
    })


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def mock_logs_client(aws_credentials):
    """Mocked CloudWatch Logs client."""
    with mock_aws():
        yield boto3.client('logs', region_name='us-east-1')
