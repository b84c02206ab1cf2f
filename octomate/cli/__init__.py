"""Command line interface."""

from octomate.cli.commands import cli, main

__all__ = ["cli", "main"]
