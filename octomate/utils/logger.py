"""Logging for octomate, built on loguru.

Every record carries a ``component`` extra: ``octomate`` by default, or the
module name for loggers obtained through ``get_logger(__name__)``. The
console shows the short format; the optional log file keeps every DEBUG
record with its component so a batch run can be replayed afterwards.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]}:{function}:{line} | {message}"
)

_configured = False


def level_for(verbose: bool = False, quiet: bool = False, default: str = "INFO") -> str:
    """Console level for the CLI flags; ``quiet`` wins over ``verbose``."""
    if quiet:
        return "ERROR"
    if verbose:
        return "DEBUG"
    return default


def setup_logger(
    log_level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: bool = True,
    console_format: str | None = None,
) -> Any:
    """Replace all sinks with a stderr sink and, optionally, a run log file.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR)
        log_file: Run log path; parent directories are created
        rotation: When the run log rolls over (e.g. "10 MB")
        retention: How long rolled logs are kept (e.g. "7 days")
        compression: Zip rolled logs
        console_format: loguru format for the console sink

    Returns:
        The loguru logger
    """
    global _configured

    logger.remove()
    logger.configure(extra={"component": "octomate"})
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=console_format or CONSOLE_FORMAT,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="zip" if compression else None,
            encoding="utf-8",
        )

    _configured = True
    return logger


def get_logger(name: str | None = None) -> Any:
    """Logger bound to ``name`` as its component."""
    if not _configured:
        setup_logger()
    return logger.bind(component=name) if name else logger


def configure_from_settings(settings: Any, verbose: bool = False, quiet: bool = False) -> Any:
    """Apply ``settings.logging``, letting the CLI flags pick the console level."""
    logging_settings = settings.logging
    return setup_logger(
        log_level=level_for(verbose, quiet, default=logging_settings.level),
        log_file=logging_settings.file,
        rotation=logging_settings.rotation,
        retention=logging_settings.retention,
        compression=logging_settings.compression,
        console_format=logging_settings.console_format,
    )
