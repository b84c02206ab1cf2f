"""Data models module."""

from octomate.models.batch import SUPPORTED_VERSIONS, Batch, Job, RepositoryRef, Step
from octomate.models.commands import (
    COMMAND_TYPES,
    BaseCommand,
    Command,
    CreateGist,
    CreateIssue,
    CreateLabel,
    CreateTeam,
)
from octomate.models.result import BatchReport, ExecutionResult, ExecutionStatus

__all__ = [
    # Batch models
    "SUPPORTED_VERSIONS",
    "Batch",
    "Job",
    "RepositoryRef",
    "Step",
    # Command models
    "COMMAND_TYPES",
    "BaseCommand",
    "Command",
    "CreateIssue",
    "CreateGist",
    "CreateTeam",
    "CreateLabel",
    # Result models
    "ExecutionStatus",
    "ExecutionResult",
    "BatchReport",
]
