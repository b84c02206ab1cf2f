"""Remote client module."""

from octomate.client.base import RemoteClient
from octomate.client.github import GitHubClient, GitHubClientConfig

__all__ = [
    "RemoteClient",
    "GitHubClient",
    "GitHubClientConfig",
]
