"""Configuration management module."""

from octomate.config.loader import (
    find_config_file,
    get_settings,
    load_config,
    reset_settings,
)
from octomate.config.settings import (
    BatchSettings,
    GitHubSettings,
    LoggingSettings,
    Settings,
)

__all__ = [
    "Settings",
    "GitHubSettings",
    "BatchSettings",
    "LoggingSettings",
    "load_config",
    "find_config_file",
    "get_settings",
    "reset_settings",
]
