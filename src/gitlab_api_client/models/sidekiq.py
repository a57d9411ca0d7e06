"""
Pydantic models for Sidekiq metrics snapshots.

Every snapshot is an immutable value rebuilt on each call.

GitLab API docs: https://docs.gitlab.com/api/sidekiq_metrics/
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class QueueMetric(_Snapshot):
    """Backlog and latency of a single queue."""
    backlog: int = 0
    latency: int = 0


class QueueMetrics(_Snapshot):
    """Registered queues keyed by name."""
    queues: Dict[str, QueueMetric]


class ProcessMetric(_Snapshot):
    """A Sidekiq worker process registered to serve queues."""
    hostname: str = ""
    pid: int = 0
    tag: str = ""
    started_at: Optional[datetime] = None
    queues: List[str] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    concurrency: int = 0
    busy: int = 0


class ProcessMetrics(_Snapshot):
    """Worker processes in server-provided order."""
    processes: List[ProcessMetric]


class JobCounters(_Snapshot):
    """Cumulative job totals."""
    processed: int = 0
    failed: int = 0
    enqueued: int = 0


class JobStats(_Snapshot):
    """Statistics about the jobs Sidekiq has performed."""
    jobs: JobCounters


class CompoundMetrics(QueueMetrics, ProcessMetrics, JobStats):
    """
    Queue, process and job metrics taken from a single response.

    The accessors below return the standalone snapshot types so a compound
    result can be compared with, or passed where, an individual one is expected.
    """

    @property
    def queue_metrics(self) -> QueueMetrics:
        return QueueMetrics(queues=self.queues)

    @property
    def process_metrics(self) -> ProcessMetrics:
        return ProcessMetrics(processes=self.processes)

    @property
    def job_stats(self) -> JobStats:
        return JobStats(jobs=self.jobs)
