"""
Models exchanged with the GitLab API.
"""

from .pagination import Pagination
from .variables import (
    VariableType,
    InstanceVariable,
    ListInstanceVariablesOptions,
    CreateInstanceVariableOptions,
    UpdateInstanceVariableOptions,
)
from .sidekiq import (
    QueueMetric,
    QueueMetrics,
    ProcessMetric,
    ProcessMetrics,
    JobCounters,
    JobStats,
    CompoundMetrics,
)

__all__ = [
    "Pagination",
    # Instance variables
    "VariableType",
    "InstanceVariable",
    "ListInstanceVariablesOptions",
    "CreateInstanceVariableOptions",
    "UpdateInstanceVariableOptions",
    # Sidekiq metrics
    "QueueMetric",
    "QueueMetrics",
    "ProcessMetric",
    "ProcessMetrics",
    "JobCounters",
    "JobStats",
    "CompoundMetrics",
]
