"""
Pytest configuration and fakes for the GitLab API client tests.

``FakeGitLab`` is an in-memory stand-in for the parts of the GitLab API this
package talks to, served through ``httpx.MockTransport``.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest

from gitlab_api_client.clients.gitlab_client import GitLabClient
from gitlab_api_client.configuration.gitlab_config import GitLabSettings, get_gitlab_settings

API_PREFIX = "/api/v4/"

QUEUES_FIXTURE = {
    "queues": {
        "default": {"backlog": 0, "latency": 0},
        "mailers": {"backlog": 12, "latency": 3},
    }
}

PROCESSES_FIXTURE = {
    "processes": [
        {
            "hostname": "gitlab.example.com",
            "pid": 5649,
            "tag": "gitlab",
            "started_at": "2016-06-14T10:45:07.159-05:00",
            "queues": ["post_receive", "mailers"],
            "labels": [],
            "concurrency": 25,
            "busy": 0,
        }
    ]
}

JOBS_FIXTURE = {"jobs": {"processed": 2, "failed": 0, "enqueued": 0}}

VARIABLE_DEFAULTS = {
    "variable_type": "env_var",
    "protected": False,
    "masked": False,
    "raw": False,
    "description": None,
}


def _json(status: int, payload: Any, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
    return httpx.Response(status, json=payload, headers=headers)


class FakeGitLab:
    """Stateful fake of the instance variables and Sidekiq metrics endpoints."""

    def __init__(self):
        self.variables: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add_variable(self, key: str, value: str, **attrs: Any) -> None:
        self.variables[key] = {"key": key, "value": value, **VARIABLE_DEFAULTS, **attrs}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        raw_path = request.url.raw_path.split(b"?")[0].decode("ascii")
        assert raw_path.startswith(API_PREFIX), raw_path
        path = raw_path[len(API_PREFIX):]

        if path.startswith("sidekiq/"):
            return self._sidekiq(request, path)
        if path == "admin/ci/variables":
            if request.method == "GET":
                return self._list(request)
            if request.method == "POST":
                return self._create(request)
        if path.startswith("admin/ci/variables/"):
            key = unquote(path[len("admin/ci/variables/"):])
            return self._variable(request, key)
        return _json(404, {"error": "404 Not Found"})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def _sidekiq(self, request: httpx.Request, path: str) -> httpx.Response:
        fixtures = {
            "sidekiq/queue_metrics": QUEUES_FIXTURE,
            "sidekiq/process_metrics": PROCESSES_FIXTURE,
            "sidekiq/job_stats": JOBS_FIXTURE,
            "sidekiq/compound_metrics": {**QUEUES_FIXTURE, **PROCESSES_FIXTURE, **JOBS_FIXTURE},
        }
        if request.method != "GET" or path not in fixtures:
            return _json(404, {"error": "404 Not Found"})
        return _json(200, fixtures[path])

    def _list(self, request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        per_page = int(request.url.params.get("per_page", "20"))
        items = list(self.variables.values())
        total_pages = max(1, -(-len(items) // per_page))
        start = (page - 1) * per_page
        headers = {
            "X-Page": str(page),
            "X-Per-Page": str(per_page),
            "X-Total": str(len(items)),
            "X-Total-Pages": str(total_pages),
            "X-Next-Page": str(page + 1) if page < total_pages else "",
            "X-Prev-Page": str(page - 1) if page > 1 else "",
        }
        return _json(200, items[start:start + per_page], headers)

    def _create(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        key = body.get("key")
        if not key or "value" not in body:
            return _json(400, {"error": "key is missing, value is missing"})
        if key in self.variables:
            return _json(400, {"message": {"key": [f"({key}) has already been taken"]}})
        self.add_variable(key, body.pop("value"), **{k: v for k, v in body.items() if k != "key"})
        return _json(201, self.variables[key])

    def _variable(self, request: httpx.Request, key: str) -> httpx.Response:
        if key not in self.variables:
            return _json(404, {"message": "404 Variable Not Found"})
        if request.method == "GET":
            return _json(200, self.variables[key])
        if request.method == "PUT":
            self.variables[key].update(json.loads(request.content))
            return _json(200, self.variables[key])
        if request.method == "DELETE":
            del self.variables[key]
            return httpx.Response(204)
        return _json(405, {"error": "405 Method Not Allowed"})


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_gitlab_settings.cache_clear()
    yield
    get_gitlab_settings.cache_clear()


@pytest.fixture
def settings() -> GitLabSettings:
    return GitLabSettings(
        GITLAB_BASE_URL="https://gitlab.example.com",
        GITLAB_TOKEN="test-token",
        GITLAB_MAX_RETRIES=2,
        GITLAB_RETRY_MAX_WAIT=0,
    )


@pytest.fixture
def fake_gitlab() -> FakeGitLab:
    return FakeGitLab()


@pytest.fixture
def client(settings, fake_gitlab):
    with GitLabClient(settings, transport=httpx.MockTransport(fake_gitlab)) as gitlab_client:
        yield gitlab_client
