"""
Typed client for GitLab's instance CI/CD variables and Sidekiq metrics APIs.
"""

from .clients import (
    GitLabClient,
    GitLabResponse,
    RequestOption,
    with_header,
    with_headers,
    with_idempotency_key,
    with_page,
    with_sudo,
    with_timeout,
    with_token,
)
from .configuration import AuthType, GitLabSettings, configure_logging, get_gitlab_settings
from .errors import (
    AuthenticationError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    GitLabError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TransportError,
    ValidationError,
)
from .models import (
    CompoundMetrics,
    CreateInstanceVariableOptions,
    InstanceVariable,
    JobCounters,
    JobStats,
    ListInstanceVariablesOptions,
    Pagination,
    ProcessMetric,
    ProcessMetrics,
    QueueMetric,
    QueueMetrics,
    UpdateInstanceVariableOptions,
    VariableType,
)
from .services import (
    InstanceVariablesService,
    InstanceVariablesServiceInterface,
    SidekiqService,
    SidekiqServiceInterface,
)

__all__ = [
    # Transport
    "GitLabClient",
    "GitLabResponse",
    "RequestOption",
    "with_header",
    "with_headers",
    "with_idempotency_key",
    "with_page",
    "with_sudo",
    "with_timeout",
    "with_token",
    # Configuration
    "AuthType",
    "GitLabSettings",
    "configure_logging",
    "get_gitlab_settings",
    # Errors
    "GitLabError",
    "TransportError",
    "ValidationError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ServerError",
    "DecodeError",
    # Models
    "VariableType",
    "InstanceVariable",
    "ListInstanceVariablesOptions",
    "CreateInstanceVariableOptions",
    "UpdateInstanceVariableOptions",
    "QueueMetric",
    "QueueMetrics",
    "ProcessMetric",
    "ProcessMetrics",
    "JobCounters",
    "JobStats",
    "CompoundMetrics",
    "Pagination",
    # Services
    "InstanceVariablesService",
    "InstanceVariablesServiceInterface",
    "SidekiqService",
    "SidekiqServiceInterface",
]
