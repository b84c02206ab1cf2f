"""CLI runner module.

Glue between the ``octomate`` command, the batch parser, the GitHub client
and the executor, plus rendering of the final report.
"""

import asyncio
import json
import os
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
import yaml

from octomate.batch import BatchExecutor, BatchParser
from octomate.client import GitHubClient, GitHubClientConfig, RemoteClient
from octomate.config import Settings
from octomate.exceptions import ConfigError
from octomate.models import Batch, BatchReport, ExecutionResult
from octomate.utils.logger import get_logger

logger = get_logger(__name__)

TOKEN_PROMPT = "Enter your personal access token (scope: repo)"


class BatchRunner:
    """Runs a batch file end to end."""

    def __init__(
        self,
        settings: Settings,
        quiet: bool = False,
    ):
        """Initialize batch runner.

        Args:
            settings: Application settings
            quiet: Suppress non-essential output
        """
        self.settings = settings
        self.quiet = quiet
        self.parser = BatchParser()
        self._executor: BatchExecutor | None = None

    def load_batch(self, batch_file: Path) -> Batch:
        """Read and validate a batch file.

        Raises:
            ConfigError: If the file is missing or unreadable.
            SchemaError: If the document is invalid.
        """
        logger.info(f"Read batch file {batch_file}")
        return self.parser.parse(batch_file)

    def resolve_token(self, token: str | None = None) -> str:
        """Pick the token from the option, settings, GITHUB_TOKEN or a prompt."""
        token = token or self.settings.github.token or os.environ.get("GITHUB_TOKEN")
        if not token:
            token = click.prompt(TOKEN_PROMPT, hide_input=True)
        if not token:
            raise ConfigError("A GitHub personal access token is required")
        return token

    async def run(
        self,
        batch: Batch,
        token: str | None = None,
        max_concurrent: int | None = None,
        client: RemoteClient | None = None,
    ) -> BatchReport:
        """Execute ``batch`` and return the report.

        Args:
            batch: Validated batch
            token: GitHub token, required when ``client`` is not given
            max_concurrent: Overrides ``settings.batch.max_concurrent``
            client: Remote client to use instead of a new GitHubClient
        """
        if client is None:
            try:
                config = GitHubClientConfig.from_settings(self.settings.github, token=token)
            except ValueError as e:
                raise ConfigError(f"Invalid GitHub client configuration: {e}") from e
            client = GitHubClient(config)

        async with client:
            self._executor = BatchExecutor(client=client, settings=self.settings)
            with self._interrupt_on_sigint():
                return await self._executor.execute(batch, max_concurrent=max_concurrent)

    def interrupt(self) -> None:
        """Stop starting repositories; those already running finish."""
        if self._executor is None or self._executor.is_cancelled:
            return
        logger.warning("Interrupted: finishing repositories in progress, skipping the rest")
        self._executor.cancel()

    @contextmanager
    def _interrupt_on_sigint(self) -> Iterator[None]:
        """Route the first Ctrl-C to ``interrupt``; a second one aborts."""
        loop = asyncio.get_running_loop()

        def on_sigint() -> None:
            self.interrupt()
            loop.remove_signal_handler(signal.SIGINT)

        try:
            loop.add_signal_handler(signal.SIGINT, on_sigint)
        except (NotImplementedError, RuntimeError):
            # No loop signal handlers on Windows or outside the main thread
            yield
            return

        try:
            yield
        finally:
            loop.remove_signal_handler(signal.SIGINT)

    def show_plan(self, batch: Batch) -> None:
        """Print the commands a batch would execute."""
        click.echo(click.style(f"Batch: {batch.display_name} (version {batch.version})", bold=True))
        for job in batch.jobs:
            click.echo(f"  Job: {job.display_name}")
            for repository in job.on_repositories:
                click.echo(f"    {click.style(repository.full_name, fg='cyan')}")
                for step in job.steps:
                    click.echo(f"      Step: {step.display_name}")
                    for command in step.runs:
                        click.echo(f"        - {command.command_name}")
        click.echo(f"\n{batch.command_count} command executions planned")

    def render(self, report: BatchReport, output_format: str = "table") -> None:
        """Print the report in the requested format."""
        if output_format == "json":
            click.echo(json.dumps(report.to_dict(), indent=2))
            return
        if output_format == "yaml":
            click.echo(yaml.safe_dump(report.to_dict(), default_flow_style=False, sort_keys=False))
            return

        click.echo(f"Results for batch: {report.batch_name or 'UNNAMED'}")
        click.echo("-" * 60)
        for result in report.results:
            if result.success and self.quiet:
                continue
            click.echo(self._format_result(result))

        for repository in report.cancelled:
            click.echo(f"  {click.style('-', fg='yellow')} {repository.full_name}: cancelled")

        summary = f"{report.succeeded} succeeded, {report.failed} failed"
        if report.cancelled:
            summary += f", {len(report.cancelled)} repositories cancelled"
        click.echo("-" * 60)
        click.echo(click.style(summary, fg="green" if report.success else "red"))

    def _format_result(self, result: ExecutionResult) -> str:
        step = result.step_name or f"step {result.step_index + 1}"
        target = f"{result.repository.full_name} [{step}] {result.command}"
        if result.success:
            status = click.style("✓", fg="green")
            suffix = f" -> {result.resource_id}" if result.resource_id is not None else ""
            return f"  {status} {target}{suffix}"

        status = click.style("✗", fg="red")
        line = f"  {status} {target}: {result.error}"
        for error in result.error_details.get("errors", []):
            detail = (error.get("message") or error.get("code")) if isinstance(error, dict) else error
            line += f"\n      {detail}"
        return line
