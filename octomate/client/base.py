"""Remote client interface consumed by the execution engine."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from octomate.models import CreateGist, CreateIssue, CreateLabel, CreateTeam, RepositoryRef


class RemoteClient(ABC):
    """Capabilities the engine needs from the hosting platform.

    Every operation raises ``RemoteError`` on failure. Implementations own
    transport, authentication, retries and resolution of the ``me`` owner
    placeholder.
    """

    @abstractmethod
    async def create_issue(self, repository: RepositoryRef, fields: CreateIssue) -> int:
        """Open an issue and return its number."""

    @abstractmethod
    async def create_gist(self, fields: CreateGist) -> str:
        """Create a gist and return its id."""

    @abstractmethod
    async def create_team(
        self,
        owner: str,
        fields: CreateTeam,
        repositories: Sequence[RepositoryRef] = (),
    ) -> int:
        """Create a team in ``owner`` and return its id."""

    @abstractmethod
    async def create_label(self, repository: RepositoryRef, fields: CreateLabel) -> None:
        """Create a label."""

    async def __aenter__(self) -> "RemoteClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        return None
