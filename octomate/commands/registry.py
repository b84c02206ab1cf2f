"""Command registry mapping payload types to handlers."""

from collections.abc import Iterable
from typing import get_args

from octomate.commands.base import CommandHandler
from octomate.commands.handlers import BUILTIN_HANDLERS
from octomate.exceptions import UnknownCommand
from octomate.models import BaseCommand, Command


class CommandRegistry:
    """Resolves a command to the handler that executes it."""

    def __init__(self, handlers: Iterable[CommandHandler] = ()):
        self._handlers: dict[type[BaseCommand], CommandHandler] = {}
        for handler in handlers:
            self.register(handler)

    @classmethod
    def default(cls) -> "CommandRegistry":
        """Registry with every built-in command."""
        return cls(BUILTIN_HANDLERS)

    def register(self, handler: CommandHandler) -> None:
        """Register ``handler``, replacing any handler for the same command."""
        self._handlers[handler.command_type] = handler

    def resolve(self, command: BaseCommand) -> CommandHandler:
        """Return the handler for ``command``.

        Raises:
            UnknownCommand: If no handler is registered for its type.
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise UnknownCommand(
                f"No handler registered for command {command.command_name!r}",
                details={"registered": self.command_names},
            )
        return handler

    @property
    def command_names(self) -> list[str]:
        return sorted(command_type.command_name for command_type in self._handlers)

    def missing_handlers(self) -> list[str]:
        """Names of ``Command`` variants that have no handler."""
        return [
            command_type.command_name
            for command_type in get_args(Command)
            if command_type not in self._handlers
        ]

    def __contains__(self, command_type: type[BaseCommand]) -> bool:
        return command_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
