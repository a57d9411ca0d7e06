"""Exception hierarchy for GitLab API failures and mapping from HTTP responses."""

import json
from typing import Any, Dict, Optional, Type

import httpx


class GitLabError(Exception):
    """Base class for every error raised by this package."""


class TransportError(GitLabError):
    """
    The request could not be completed or GitLab answered with a non-2xx status.

    ``status_code`` is None when no response was received (connection failure,
    timeout); the original exception is then chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.method and self.url and self.status_code is not None:
            return f"{self.method} {self.url}: {self.status_code} {self.message}"
        if self.method and self.url:
            return f"{self.method} {self.url}: {self.message}"
        return self.message


class ValidationError(TransportError):
    """GitLab rejected the request payload (400 or 422)."""


class AuthenticationError(TransportError):
    """Missing or invalid credentials (401)."""


class ForbiddenError(TransportError):
    """The credentials lack permission for the resource (403)."""


class NotFoundError(TransportError):
    """The addressed resource does not exist (404)."""


class ConflictError(TransportError):
    """The resource already exists or is in a conflicting state (409)."""


class RateLimitedError(TransportError):
    """GitLab throttled the request (429)."""

    def __init__(self, *args: Any, retry_after: Optional[float] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.retry_after = retry_after


class ServerError(TransportError):
    """GitLab failed to process the request (5xx)."""


class DecodeError(GitLabError):
    """A response body was received but does not have the expected structure."""

    def __init__(self, message: str, body: Optional[str] = None):
        self.message = message
        self.body = body
        super().__init__(message)


_STATUS_ERRORS: Dict[int, Type[TransportError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitedError,
}


def _flatten_message(value: Any) -> str:
    """
    Render GitLab's ``message`` field, which may be a string, a list or a
    mapping of field name to a list of reasons.
    """
    if isinstance(value, dict):
        parts = []
        for field, reasons in sorted(value.items()):
            if isinstance(reasons, list):
                for reason in reasons:
                    parts.append(f"{field}: {reason}")
            elif isinstance(reasons, dict):
                parts.append(f"{field}: {_flatten_message(reasons)}")
            else:
                parts.append(f"{field}: {reasons}")
        return ", ".join(parts)
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def parse_error_message(body: str) -> str:
    """
    Extract a human-readable message from a GitLab error body.

    Args:
        body: Raw response text

    Returns:
        The ``message``/``error`` content when the body is a JSON object, the raw
        text otherwise
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return body.strip()

    if not isinstance(payload, dict):
        return body.strip()

    if "message" in payload:
        return _flatten_message(payload["message"])
    if "error" in payload:
        error = _flatten_message(payload["error"])
        description = payload.get("error_description")
        if description:
            return f"{error}: {description}"
        return error
    return body.strip()


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def error_for_response(response: httpx.Response) -> TransportError:
    """
    Map a non-2xx response onto the error hierarchy.

    Args:
        response: Response received from GitLab

    Returns:
        The most specific TransportError subclass for the status code
    """
    status = response.status_code
    body = response.text
    message = parse_error_message(body) or response.reason_phrase
    request = response.request
    common = {
        "status_code": status,
        "body": body,
        "method": request.method,
        "url": str(request.url),
    }

    if status == 429:
        return RateLimitedError(
            message,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
            **common,
        )

    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        error_cls = ServerError if status >= 500 else TransportError

    return error_cls(message, **common)
