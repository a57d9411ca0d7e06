"""
GitLab API services.
"""

from .instance_variables import InstanceVariablesService, InstanceVariablesServiceInterface
from .sidekiq_metrics import SidekiqService, SidekiqServiceInterface

__all__ = [
    "InstanceVariablesService",
    "InstanceVariablesServiceInterface",
    "SidekiqService",
    "SidekiqServiceInterface",
]
