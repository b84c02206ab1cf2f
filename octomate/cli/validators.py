"""Input validators for CLI options."""

from pathlib import Path

import click
import yaml

BATCH_SUFFIXES = {".yaml", ".yml"}


def validate_config_file(
    ctx: click.Context,
    param: click.Parameter,
    value: Path | None,
) -> Path | None:
    """Validate configuration file.

    Args:
        ctx: Click context
        param: Click parameter
        value: Path value to validate

    Returns:
        Validated path or None

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return None

    if not value.exists():
        raise click.BadParameter(f"Config file does not exist: {value}")

    if value.suffix.lower() not in {".yaml", ".yml"}:
        raise click.BadParameter(f"Config file must be YAML format: {value}")

    try:
        with open(value, encoding="utf-8") as f:
            config = yaml.safe_load(f)
            if config is None:
                raise click.BadParameter(f"Config file is empty: {value}")
    except yaml.YAMLError as e:
        raise click.BadParameter(f"Invalid YAML in config file: {e}") from None

    return value


def validate_batch_file(
    ctx: click.Context,
    param: click.Parameter,
    value: Path | None,
) -> Path | None:
    """Warn about batch files without a YAML extension.

    Existence and readability are checked when the file is parsed, so a
    missing file is reported like any other configuration error.
    """
    if value is None:
        return None

    if value.suffix.lower() not in BATCH_SUFFIXES:
        click.echo(
            click.style(
                f"Warning: batch file does not have a YAML extension: {value}",
                fg="yellow",
            ),
            err=True,
        )

    return value
