"""Command dispatch module.

Maps each command variant to the handler that turns it into a remote
client call.
"""

from octomate.commands.base import CommandHandler, ExecutionContext
from octomate.commands.handlers import (
    BUILTIN_HANDLERS,
    CreateGistHandler,
    CreateIssueHandler,
    CreateLabelHandler,
    CreateTeamHandler,
)
from octomate.commands.registry import CommandRegistry

__all__ = [
    "CommandHandler",
    "ExecutionContext",
    "CommandRegistry",
    "BUILTIN_HANDLERS",
    "CreateIssueHandler",
    "CreateGistHandler",
    "CreateTeamHandler",
    "CreateLabelHandler",
]
