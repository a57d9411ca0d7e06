"""
HTTP transport for the GitLab API.
"""

from .gitlab_client import GitLabClient, GitLabResponse
from .request_options import (
    RequestOption,
    with_header,
    with_headers,
    with_idempotency_key,
    with_page,
    with_sudo,
    with_timeout,
    with_token,
)

__all__ = [
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
]
