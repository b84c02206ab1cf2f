"""Utility modules for octomate."""

from octomate.utils.logger import configure_from_settings, get_logger, level_for, setup_logger

__all__ = [
    "setup_logger",
    "get_logger",
    "level_for",
    "configure_from_settings",
]
