"""Execution result models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from octomate.models.batch import RepositoryRef


class ExecutionStatus(str, Enum):
    """Outcome of a single command execution."""

    SUCCESS = "success"
    FAILURE = "failure"


class ExecutionResult(BaseModel):
    """Outcome of one command against one repository."""

    model_config = ConfigDict(frozen=True)

    job_index: int = Field(description="Position of the job in the batch")
    job_name: str | None = Field(default=None, description="Job name")
    repository_index: int = Field(description="Position of the repository in the job")
    repository: RepositoryRef = Field(description="Target repository")
    step_index: int = Field(description="Position of the step in the job")
    step_name: str | None = Field(default=None, description="Step name")
    command_index: int = Field(description="Position of the command in the step")
    command: str = Field(description="Command name, e.g. create-label")
    status: ExecutionStatus = Field(description="Execution status")
    resource_id: int | str | None = Field(
        default=None,
        description="Identifier of the created resource",
    )
    error: str | None = Field(default=None, description="Error message on failure")
    error_details: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured error details on failure",
    )
    duration_seconds: float = Field(default=0.0, description="Command duration")

    @property
    def success(self) -> bool:
        return self.status == ExecutionStatus.SUCCESS

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        """Document order: job, repository, step, command."""
        return (self.job_index, self.repository_index, self.step_index, self.command_index)


@dataclass
class BatchReport:
    """Aggregated results of a batch run."""

    batch_name: str | None = None
    version: str | None = None
    results: list[ExecutionResult] = field(default_factory=list)
    cancelled: list[RepositoryRef] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failures(self) -> list[ExecutionResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        """Whether every command succeeded and nothing was cancelled."""
        return self.failed == 0 and not self.cancelled

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @property
    def duration_seconds(self) -> float | None:
        """Total execution duration in seconds."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Render the report as plain data (for JSON/YAML output)."""
        return {
            "batch": self.batch_name,
            "version": self.version,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "cancelled": [repo.full_name for repo in self.cancelled],
            "duration_seconds": self.duration_seconds,
            "results": [r.model_dump(mode="json") for r in self.results],
        }
