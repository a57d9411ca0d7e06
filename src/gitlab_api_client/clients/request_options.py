"""
Per-call request modifiers.

A request option is any callable taking the outgoing ``httpx.Request`` and
mutating it in place. Options are applied in the order given, after the
client has built the request and before it is sent.
"""

from typing import Callable, Mapping, Optional

import httpx

from ..configuration.gitlab_config import AuthType

RequestOption = Callable[[httpx.Request], None]

_AUTH_HEADERS = ("PRIVATE-TOKEN", "Authorization", "JOB-TOKEN")


def apply_auth(headers: httpx.Headers, auth_type: AuthType, token: str) -> None:
    """Replace any credential header with the one matching ``auth_type``."""
    for name in _AUTH_HEADERS:
        headers.pop(name, None)
    if not token:
        return
    if auth_type == AuthType.OAUTH_TOKEN:
        headers["Authorization"] = f"Bearer {token}"
    elif auth_type == AuthType.JOB_TOKEN:
        headers["JOB-TOKEN"] = token
    else:
        headers["PRIVATE-TOKEN"] = token


def with_header(name: str, value: str) -> RequestOption:
    def _option(request: httpx.Request) -> None:
        request.headers[name] = value
    return _option


def with_headers(headers: Mapping[str, str]) -> RequestOption:
    def _option(request: httpx.Request) -> None:
        request.headers.update(headers)
    return _option


def with_sudo(user: str) -> RequestOption:
    """Perform the call as another user (administrator tokens only)."""
    return with_header("Sudo", str(user))


def with_token(auth_type: AuthType, token: str) -> RequestOption:
    """Override the client's credentials for a single call."""
    auth_type = AuthType(auth_type)

    def _option(request: httpx.Request) -> None:
        apply_auth(request.headers, auth_type, token)
    return _option


def with_page(page: int, per_page: Optional[int] = None) -> RequestOption:
    """Set offset pagination query parameters, replacing existing ones."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if per_page is not None and not 1 <= per_page <= 100:
        raise ValueError("per_page must be between 1 and 100")

    def _option(request: httpx.Request) -> None:
        params = {"page": str(page)}
        if per_page is not None:
            params["per_page"] = str(per_page)
        request.url = request.url.copy_merge_params(params)
    return _option


def with_timeout(seconds: float) -> RequestOption:
    """Apply a single timeout to every phase of this call."""
    if seconds <= 0:
        raise ValueError("timeout must be positive")

    def _option(request: httpx.Request) -> None:
        request.extensions["timeout"] = httpx.Timeout(seconds).as_dict()
    return _option


def with_idempotency_key(key: str) -> RequestOption:
    return with_header("Idempotency-Key", key)
