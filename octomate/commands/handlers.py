"""Handlers for the built-in commands."""

from octomate.client.base import RemoteClient
from octomate.commands.base import CommandHandler, ExecutionContext
from octomate.models import CreateGist, CreateIssue, CreateLabel, CreateTeam


class CreateIssueHandler(CommandHandler[CreateIssue]):
    command_type = CreateIssue

    async def run(
        self,
        command: CreateIssue,
        client: RemoteClient,
        context: ExecutionContext,
    ) -> int:
        return await client.create_issue(context.repository, command)


class CreateGistHandler(CommandHandler[CreateGist]):
    """Gists belong to the authenticated user, not to the repository."""

    command_type = CreateGist

    async def run(
        self,
        command: CreateGist,
        client: RemoteClient,
        context: ExecutionContext,
    ) -> str:
        return await client.create_gist(command)


class CreateTeamHandler(CommandHandler[CreateTeam]):
    """Creates the team with access to the repository being processed."""

    command_type = CreateTeam

    async def run(
        self,
        command: CreateTeam,
        client: RemoteClient,
        context: ExecutionContext,
    ) -> int:
        return await client.create_team(
            command.owner,
            command,
            repositories=(context.repository,),
        )


class CreateLabelHandler(CommandHandler[CreateLabel]):
    command_type = CreateLabel

    async def run(
        self,
        command: CreateLabel,
        client: RemoteClient,
        context: ExecutionContext,
    ) -> None:
        await client.create_label(context.repository, command)
        return None


BUILTIN_HANDLERS: tuple[CommandHandler, ...] = (
    CreateIssueHandler(),
    CreateGistHandler(),
    CreateTeamHandler(),
    CreateLabelHandler(),
)
