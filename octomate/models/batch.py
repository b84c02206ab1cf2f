"""Batch document models."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from octomate.models.commands import Command

SUPPORTED_VERSIONS: tuple[str, ...] = ("1.0",)


class RepositoryRef(BaseModel):
    """Target repository of a job.

    ``owner`` may be the placeholder ``me``; the remote client resolves it
    to the authenticated login.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    owner: Annotated[StrictStr, Field(min_length=1)] = Field(description="Owner login")
    name: Annotated[StrictStr, Field(min_length=1)] = Field(description="Repository name")

    @property
    def full_name(self) -> str:
        """Return ``owner/name``."""
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


class Step(BaseModel):
    """Ordered group of commands."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Step name")
    runs: tuple[Command, ...] = Field(min_length=1, description="Commands in order")

    @property
    def display_name(self) -> str:
        return self.name or "UNNAMED"


class Job(BaseModel):
    """Steps replayed against every target repository."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Job name")
    on_repositories: tuple[RepositoryRef, ...] = Field(
        min_length=1,
        description="Target repositories in order",
    )
    steps: tuple[Step, ...] = Field(min_length=1, description="Steps in order")

    @property
    def display_name(self) -> str:
        return self.name or "UNNAMED"

    @property
    def command_count(self) -> int:
        """Commands executed by this job across all repositories."""
        per_repository = sum(len(step.runs) for step in self.steps)
        return per_repository * len(self.on_repositories)


class Batch(BaseModel):
    """A full automation run."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(description="Batch document version")
    name: str | None = Field(default=None, description="Batch name")
    jobs: tuple[Job, ...] = Field(min_length=1, description="Jobs in order")

    @property
    def display_name(self) -> str:
        return self.name or "UNNAMED"

    @property
    def command_count(self) -> int:
        """Total number of command executions the batch will perform."""
        return sum(job.command_count for job in self.jobs)
