"""Sidekiq metrics.

GitLab API docs: https://docs.gitlab.com/api/sidekiq_metrics/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..models.sidekiq import CompoundMetrics, JobStats, ProcessMetrics, QueueMetrics

if TYPE_CHECKING:
    from ..clients.gitlab_client import GitLabClient
    from ..clients.request_options import RequestOption

QUEUE_METRICS_PATH = "/sidekiq/queue_metrics"
PROCESS_METRICS_PATH = "/sidekiq/process_metrics"
JOB_STATS_PATH = "/sidekiq/job_stats"
COMPOUND_METRICS_PATH = "/sidekiq/compound_metrics"


@runtime_checkable
class SidekiqServiceInterface(Protocol):
    def get_queue_metrics(self, *options: RequestOption) -> QueueMetrics: ...

    def get_process_metrics(self, *options: RequestOption) -> ProcessMetrics: ...

    def get_job_stats(self, *options: RequestOption) -> JobStats: ...

    def get_compound_metrics(self, *options: RequestOption) -> CompoundMetrics: ...


class SidekiqService:
    """Read-only accessors for Sidekiq monitoring snapshots."""

    def __init__(self, client: GitLabClient):
        self.client = client

    def _get(self, path: str, result_type, options):
        req = self.client.new_request("GET", path, None, options)
        snapshot, _ = self.client.do(req, result_type)
        return snapshot

    def get_queue_metrics(self, *options: RequestOption) -> QueueMetrics:
        """Registered queues with their backlog and latency."""
        return self._get(QUEUE_METRICS_PATH, QueueMetrics, options)

    def get_process_metrics(self, *options: RequestOption) -> ProcessMetrics:
        """Sidekiq worker processes registered to serve the queues."""
        return self._get(PROCESS_METRICS_PATH, ProcessMetrics, options)

    def get_job_stats(self, *options: RequestOption) -> JobStats:
        """Processed, failed and enqueued job totals."""
        return self._get(JOB_STATS_PATH, JobStats, options)

    def get_compound_metrics(self, *options: RequestOption) -> CompoundMetrics:
        """
        Queue, process and job metrics in one request.

        GitLab assembles the three snapshots server-side; fetching them with
        separate calls would not give a consistent view.
        """
        return self._get(COMPOUND_METRICS_PATH, CompoundMetrics, options)
