"""CLI command for octomate."""

import asyncio
from pathlib import Path

import click

from octomate import __version__
from octomate.cli.validators import validate_batch_file, validate_config_file
from octomate.exceptions import ConfigError, SchemaError

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2

# Context settings for better help formatting
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}


def _run_async(coro):
    """Run an async coroutine."""
    return asyncio.run(coro)


def _fail(ctx: click.Context, error: Exception) -> None:
    click.echo(click.style(f"✗ {error}", fg="red"), err=True)
    ctx.exit(EXIT_INVALID)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--batch-file",
    "-b",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="The batch file to run",
    callback=validate_batch_file,
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file (default: $OCTOMATE_CONFIG, ./octomate.yaml, ~/.octomate/config.yaml)",
    callback=validate_config_file,
)
@click.option(
    "--token",
    type=str,
    default=None,
    help="GitHub personal access token (default: settings, then GITHUB_TOKEN, then prompt)",
)
@click.option(
    "--max-concurrent",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Repositories processed concurrently (default: from settings)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Validate the batch file and list planned commands without calling GitHub",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    help="Report format",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-essential output",
)
@click.version_option(version=__version__, prog_name="octomate")
@click.pass_context
def cli(
    ctx: click.Context,
    batch_file: Path,
    config: Path | None,
    token: str | None,
    max_concurrent: int | None,
    dry_run: bool,
    output_format: str,
    verbose: bool,
    quiet: bool,
) -> None:
    """Octomate - run declarative batch jobs against GitHub repositories

    A batch file lists jobs; each job replays its steps (issues, labels,
    teams, gists) on every repository in 'on-repositories'.

    \b
    Examples:
        # Run a batch
        octomate --batch-file batch.yaml

        # Check a batch without touching GitHub
        octomate -b batch.yaml --dry-run

        # Four repositories at a time, JSON report
        octomate -b batch.yaml -j 4 -f json

    Exit status is 0 when every command succeeded, 1 when any command
    failed and 2 when the batch or configuration is invalid. Ctrl-C lets
    the repositories in progress finish, skips the rest and exits with 1.
    """
    from octomate.cli.runner import BatchRunner
    from octomate.config import get_settings, load_config
    from octomate.utils.logger import configure_from_settings

    try:
        settings = load_config(config) if config else get_settings()
    except ConfigError as e:
        _fail(ctx, e)

    configure_from_settings(settings, verbose=verbose, quiet=quiet)

    runner = BatchRunner(settings=settings, quiet=quiet)

    try:
        batch = runner.load_batch(batch_file)
    except (ConfigError, SchemaError) as e:
        _fail(ctx, e)

    if dry_run:
        runner.show_plan(batch)
        ctx.exit(EXIT_OK)

    try:
        token = runner.resolve_token(token)
        report = _run_async(runner.run(batch, token=token, max_concurrent=max_concurrent))
    except ConfigError as e:
        _fail(ctx, e)

    runner.render(report, output_format)
    ctx.exit(EXIT_OK if report.success else EXIT_FAILED)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
