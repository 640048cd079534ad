import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


class InspectorConfig(BaseModel):
    """Configuration for the CloudWatch Logs client and multi-group searches."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    aws_session_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SESSION_TOKEN"),
        description="AWS session token for temporary credentials"
    )

    profile_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_PROFILE"),
        description="Shared config profile; takes precedence over static keys"
    )

    # Unset means boto3 resolves the region from its own default chain
    region_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_REGION"),
        description="AWS region name"
    )

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("CLOUDWATCH_LOGS_ENDPOINT_URL"),
        description="CloudWatch Logs endpoint URL (for local development)"
    )

    # Search settings
    log_group_names: str = Field(
        default_factory=lambda: os.getenv("LOG_GROUP_NAMES", ""),
        description="Comma-separated log group names searched by default"
    )

    concurrency: int = Field(
        default_factory=lambda: _env_int("LOG_INSPECTOR_CONCURRENCY", 4),
        description="Maximum number of log groups searched in parallel"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("LOG_INSPECTOR_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for search operations"
    )

    @field_validator('region_name', 'profile_name', 'endpoint_url')
    @classmethod
    def blank_as_none(cls, v):
        """Treat blank strings from the environment as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator('concurrency')
    @classmethod
    def validate_concurrency(cls, v):
        """Validate search concurrency."""
        if v < 1:
            raise ValueError("Concurrency must be at least 1")
        return v

    def get_log_groups(self) -> List[str]:
        """Get the configured log groups as a list.

        Returns:
            Trimmed, non-empty log group names in configured order
        """
        from ..utils import parse_groups_csv
        return parse_groups_csv(self.log_group_names)

    @classmethod
    def from_env(cls) -> 'InspectorConfig':
        """Create configuration from environment variables.

        Returns:
            InspectorConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:4566") -> 'InspectorConfig':
        """Create configuration for a local CloudWatch Logs emulator.

        Args:
            endpoint_url: Emulator endpoint

        Returns:
            InspectorConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            aws_session_token=None,
            profile_name=None,
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
