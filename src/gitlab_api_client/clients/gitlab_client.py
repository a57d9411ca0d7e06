"""Synchronous HTTP transport shared by all GitLab API services."""

import ssl
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterable, Optional, Tuple

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from ..configuration.gitlab_config import GitLabSettings, get_gitlab_settings
from ..errors import DecodeError, TransportError, error_for_response, parse_retry_after
from ..models.pagination import Pagination
from ..services.instance_variables import InstanceVariablesService
from ..services.sidekiq_metrics import SidekiqService
from .request_options import RequestOption, apply_auth

logger = structlog.get_logger(__name__)

# Methods safe to resend after a transient failure
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "PUT", "DELETE"})
# Methods whose options are sent as query parameters instead of a JSON body
QUERY_METHODS = frozenset({"GET", "HEAD", "DELETE"})


@dataclass(frozen=True)
class GitLabResponse:
    """Metadata of a completed API call."""
    status_code: int
    headers: httpx.Headers
    pagination: Pagination = field(default_factory=Pagination)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "GitLabResponse":
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            pagination=_parse_pagination(response.headers),
        )


def _header_int(headers: httpx.Headers, name: str) -> Optional[int]:
    raw = headers.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _parse_pagination(headers: httpx.Headers) -> Pagination:
    return Pagination(
        page=_header_int(headers, "X-Page"),
        per_page=_header_int(headers, "X-Per-Page"),
        next_page=_header_int(headers, "X-Next-Page"),
        prev_page=_header_int(headers, "X-Prev-Page"),
        total=_header_int(headers, "X-Total"),
        total_pages=_header_int(headers, "X-Total-Pages"),
    )


@lru_cache(maxsize=None)
def _type_adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


class GitLabClient:
    """
    HTTP client for the GitLab REST API.

    Builds authenticated requests relative to the configured API root, sends
    them with retries for transient failures, maps error statuses onto the
    exception hierarchy in ``gitlab_api_client.errors`` and decodes JSON
    bodies into pydantic models.

    The client holds no per-call state and can be shared between threads.
    """

    def __init__(
        self,
        settings: Optional[GitLabSettings] = None,
        *,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: GitLab settings, defaults to the cached environment settings
            token: Access token overriding ``GITLAB_TOKEN``
            transport: Custom httpx transport (used by tests to fake GitLab)
        """
        self.settings = settings or get_gitlab_settings()
        self.base_url = self.settings.api_url

        headers = httpx.Headers({
            "Accept": "application/json",
            "User-Agent": self.settings.USER_AGENT,
        })
        apply_auth(
            headers,
            self.settings.GITLAB_AUTH_TYPE,
            token if token is not None else self.settings.GITLAB_TOKEN,
        )

        timeout = httpx.Timeout(
            connect=self.settings.CONNECTION_TIMEOUT,
            read=self.settings.READ_TIMEOUT,
            write=self.settings.CONNECTION_TIMEOUT,
            pool=self.settings.CONNECTION_TIMEOUT,
        )
        limits = httpx.Limits(
            max_connections=self.settings.MAX_CONNECTIONS,
            max_keepalive_connections=self.settings.MAX_KEEPALIVE_CONNECTIONS,
        )
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            limits=limits,
            verify=self._ssl_verify(),
            transport=transport,
        )

        self.instance_variables = InstanceVariablesService(self)
        self.sidekiq = SidekiqService(self)

    def __enter__(self) -> "GitLabClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def _ssl_verify(self) -> Any:
        if self.settings.GITLAB_CA_CERT_PATH:
            return ssl.create_default_context(cafile=self.settings.GITLAB_CA_CERT_PATH)
        return self.settings.GITLAB_VERIFY_SSL

    def new_request(
        self,
        method: str,
        path: str,
        opt: Optional[BaseModel] = None,
        options: Iterable[RequestOption] = (),
    ) -> httpx.Request:
        """
        Build a request for a path relative to the API root.

        Args:
            method: HTTP method
            path: Server relative path; caller-supplied segments must already be
                percent-encoded
            opt: Options model, sent as query parameters for GET/HEAD/DELETE and
                as a JSON body otherwise. Fields set to None are omitted.
            options: Request options applied in order after the request is built

        Returns:
            The prepared request
        """
        method = method.upper()
        params = None
        body = None
        if opt is not None:
            payload = opt.model_dump(mode="json", exclude_none=True)
            if method in QUERY_METHODS:
                params = payload
            else:
                body = payload

        request = self._client.build_request(
            method,
            path.lstrip("/"),
            params=params,
            json=body,
        )
        for option in options:
            option(request)
        return request

    def do(self, request: httpx.Request, result_type: Any = None) -> Tuple[Any, GitLabResponse]:
        """
        Send a request and decode the response.

        Args:
            request: Request built by ``new_request``
            result_type: Type to decode the JSON body into, or None to ignore the body.
                An empty body (e.g. 204) decodes to None.

        Returns:
            (decoded value or None, response metadata)

        Raises:
            TransportError: Connection failure, timeout or non-2xx status
                (status-specific subclasses for 4xx/5xx)
            DecodeError: The body is not JSON or does not match result_type
        """
        response = self._send(request)

        if not response.is_success:
            error = error_for_response(response)
            log = logger.warning if response.status_code < 500 else logger.error
            log(
                "GitLab returned error status",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                error=error.message,
            )
            raise error

        meta = GitLabResponse.from_httpx(response)
        if result_type is None:
            return None, meta
        return self._decode(response, result_type), meta

    def _send(self, request: httpx.Request) -> httpx.Response:
        try:
            if request.method not in IDEMPOTENT_METHODS or self.settings.MAX_RETRIES == 0:
                return self._send_once(request)
            return self._retrying()(self._send_once, request)
        except httpx.TransportError as e:
            raise TransportError(
                f"{type(e).__name__}: {e}",
                method=request.method,
                url=str(request.url),
            ) from e

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.settings.MAX_RETRIES + 1),
            wait=self._wait,
            retry=(
                retry_if_exception_type((httpx.ConnectError, httpx.TimeoutException))
                | retry_if_result(self._should_retry_on_result)
            ),
            before_sleep=self._log_retry,
            # Hand back the last response once attempts run out so it is mapped like any other
            retry_error_callback=lambda state: state.outcome.result(),
            reraise=True,
        )

    def _send_once(self, request: httpx.Request) -> httpx.Response:
        logger.info(
            "Making HTTP request to GitLab",
            method=request.method,
            path=request.url.path,
            base_url=self.base_url,
        )
        try:
            response = self._client.send(request)
        except httpx.TransportError as e:
            logger.warning(
                "HTTP request to GitLab failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        logger.info(
            "HTTP request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    def _should_retry_on_result(self, result: httpx.Response) -> bool:
        """Retry server errors and throttling, never other client errors."""
        return result.status_code >= 500 or result.status_code == 429

    def _wait(self, retry_state: RetryCallState) -> float:
        backoff = wait_exponential(
            multiplier=1,
            max=self.settings.RETRY_MAX_WAIT,
            exp_base=self.settings.RETRY_BACKOFF_FACTOR,
        )(retry_state)
        outcome = retry_state.outcome
        if outcome is not None and not outcome.failed:
            retry_after = parse_retry_after(outcome.result().headers.get("Retry-After"))
            if retry_after is not None:
                return min(retry_after, self.settings.RETRY_MAX_WAIT)
        return backoff

    def _log_retry(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        reason = (
            type(outcome.exception()).__name__
            if outcome.failed
            else f"HTTP {outcome.result().status_code}"
        )
        logger.warning(
            "Retrying GitLab request",
            attempt=retry_state.attempt_number,
            reason=reason,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
        )

    def _decode(self, response: httpx.Response, result_type: Any) -> Any:
        if not response.content:
            return None
        body = response.text
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not valid JSON: {e}", body=body) from e
        try:
            return _type_adapter(result_type).validate_python(payload)
        except PydanticValidationError as e:
            logger.error(
                "Unexpected GitLab response shape",
                path=response.request.url.path,
                errors=e.error_count(),
            )
            raise DecodeError(f"Unexpected response structure: {e}", body=body) from e
