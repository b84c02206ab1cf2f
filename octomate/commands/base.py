"""Command handler base class and execution context."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from octomate.client.base import RemoteClient
from octomate.models import BaseCommand, Batch, Job, RepositoryRef, Step

C = TypeVar("C", bound=BaseCommand)


@dataclass(frozen=True)
class ExecutionContext:
    """Where in the batch a command is being executed."""

    batch: Batch
    job: Job
    repository: RepositoryRef
    step: Step


class CommandHandler(ABC, Generic[C]):
    """Translates one command variant into a remote client call."""

    command_type: ClassVar[type[BaseCommand]]

    @property
    def command_name(self) -> str:
        return self.command_type.command_name

    @abstractmethod
    async def run(
        self,
        command: C,
        client: RemoteClient,
        context: ExecutionContext,
    ) -> int | str | None:
        """Execute ``command`` and return the created resource id.

        Raises:
            RemoteError: If the remote call fails.
        """
