"""
Configuration for the GitLab API client.
"""

from .base_config import BaseConfig
from .gitlab_config import AuthType, GitLabSettings, get_gitlab_settings
from .logging_config import configure_logging, filter_sensitive_data

__all__ = [
    "BaseConfig",
    "AuthType",
    "GitLabSettings",
    "get_gitlab_settings",
    "configure_logging",
    "filter_sensitive_data",
]
