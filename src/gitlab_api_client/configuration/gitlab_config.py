"""
GitLab configuration settings.

Provides the API location, credentials and HTTP transport tuning used by
GitLabClient when talking to a GitLab instance.
"""

from enum import Enum
from functools import lru_cache
from pydantic import Field, field_validator
from dotenv import load_dotenv

from .base_config import BaseConfig

load_dotenv()


class AuthType(str, Enum):
    """How the access token is presented to GitLab."""
    PRIVATE_TOKEN = "private_token"
    OAUTH_TOKEN = "oauth_token"
    JOB_TOKEN = "job_token"


class GitLabSettings(BaseConfig):
    """
    GitLab API configuration settings.

    Connection, retry and pooling settings share the ``GITLAB_`` prefix in the
    environment, e.g. ``GITLAB_READ_TIMEOUT=90``.
    """

    GITLAB_BASE_URL: str = Field(
        default="https://gitlab.com",
        description="Base URL of GitLab instance (e.g., https://gitlab.example.com)"
    )

    GITLAB_API_VERSION: str = Field(
        default="v4",
        description="GitLab REST API version segment"
    )

    GITLAB_TOKEN: str = Field(
        default="",
        description="Access token used to authenticate against the GitLab API"
    )

    GITLAB_AUTH_TYPE: AuthType = Field(
        default=AuthType.PRIVATE_TOKEN,
        description="Token kind: private_token, oauth_token or job_token"
    )

    GITLAB_VERIFY_SSL: bool = Field(
        default=True,
        description="Verify SSL certificates for GitLab API calls"
    )

    GITLAB_CA_CERT_PATH: str = Field(
        default="",
        description="Path to custom CA certificate bundle for self-hosted GitLab with custom SSL certs"
    )

    # Connection settings
    CONNECTION_TIMEOUT: float = Field(
        default=30.0,
        description="Connection timeout in seconds",
        alias="GITLAB_CONNECTION_TIMEOUT"
    )

    READ_TIMEOUT: float = Field(
        default=60.0,
        description="Read timeout in seconds",
        alias="GITLAB_READ_TIMEOUT"
    )

    # Retry settings
    MAX_RETRIES: int = Field(
        default=3,
        description="Maximum number of retries for transient GitLab API failures",
        alias="GITLAB_MAX_RETRIES"
    )

    RETRY_BACKOFF_FACTOR: float = Field(
        default=2.0,
        description="Backoff factor for exponential retry",
        alias="GITLAB_RETRY_BACKOFF_FACTOR"
    )

    RETRY_MAX_WAIT: float = Field(
        default=60.0,
        description="Upper bound in seconds for a single retry wait",
        alias="GITLAB_RETRY_MAX_WAIT"
    )

    # Connection pooling
    MAX_CONNECTIONS: int = Field(
        default=100,
        description="Maximum number of connections in pool",
        alias="GITLAB_MAX_CONNECTIONS"
    )

    MAX_KEEPALIVE_CONNECTIONS: int = Field(
        default=20,
        description="Maximum number of keep-alive connections",
        alias="GITLAB_MAX_KEEPALIVE_CONNECTIONS"
    )

    DEFAULT_PAGE_SIZE: int = Field(
        default=20,
        description="Default page size used when walking paginated listings",
        alias="GITLAB_DEFAULT_PAGE_SIZE"
    )

    USER_AGENT: str = Field(
        default="gitlab-api-client",
        description="User-Agent header sent with every request",
        alias="GITLAB_USER_AGENT"
    )

    @field_validator('GITLAB_BASE_URL')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that the URL is properly formatted."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('CONNECTION_TIMEOUT', 'READ_TIMEOUT')
    @classmethod
    def validate_positive_timeout(cls, v: float) -> float:
        """Validate that timeout values are positive."""
        if v <= 0:
            raise ValueError('Timeout values must be positive')
        return v

    @field_validator('MAX_RETRIES')
    @classmethod
    def validate_non_negative_retries(cls, v: int) -> int:
        """Validate that retry count is non-negative."""
        if v < 0:
            raise ValueError('Max retries must be non-negative')
        return v

    @field_validator('RETRY_BACKOFF_FACTOR')
    @classmethod
    def validate_positive_backoff(cls, v: float) -> float:
        """Validate that backoff factor is positive."""
        if v <= 0:
            raise ValueError('Retry backoff factor must be positive')
        return v

    @field_validator('RETRY_MAX_WAIT')
    @classmethod
    def validate_non_negative_wait(cls, v: float) -> float:
        if v < 0:
            raise ValueError('Retry max wait must be non-negative')
        return v

    @field_validator('MAX_CONNECTIONS', 'MAX_KEEPALIVE_CONNECTIONS')
    @classmethod
    def validate_positive_connections(cls, v: int) -> int:
        """Validate that connection counts are positive."""
        if v <= 0:
            raise ValueError('Connection counts must be positive')
        return v

    @field_validator('DEFAULT_PAGE_SIZE')
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """GitLab caps per_page at 100."""
        if not 1 <= v <= 100:
            raise ValueError('Default page size must be between 1 and 100')
        return v

    @property
    def api_url(self) -> str:
        """Root of the REST API, always ending with a slash."""
        return f"{self.GITLAB_BASE_URL}/api/{self.GITLAB_API_VERSION.strip('/')}/"


@lru_cache()
def get_gitlab_settings() -> GitLabSettings:
    """
    Creates a cached instance of GitLabSettings.

    This ensures that the settings are loaded only once and reused across the application.

    Returns:
        GitLabSettings: Cached GitLab configuration instance
    """
    return GitLabSettings()
