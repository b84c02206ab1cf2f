"""Batch file parser.

Turns YAML batch documents into immutable ``Batch`` objects. The whole
document is validated before anything is returned, so a batch either
parses completely or not at all.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from octomate.exceptions import (
    ConfigError,
    MalformedStructure,
    MissingRequiredField,
    SchemaError,
    UnknownCommand,
    UnsupportedVersion,
)
from octomate.models import (
    COMMAND_TYPES,
    SUPPORTED_VERSIONS,
    BaseCommand,
    Batch,
    Job,
    RepositoryRef,
    Step,
)
from octomate.utils.logger import get_logger

logger = get_logger(__name__)

BATCH_KEYS = frozenset({"version", "name", "jobs"})
JOB_KEYS = frozenset({"name", "on-repositories", "steps"})
STEP_KEYS = frozenset({"name", "runs"})
REPOSITORY_KEYS = frozenset({"owner", "name"})


class BatchParser:
    """Parser and validator for batch files."""

    def __init__(
        self,
        supported_versions: tuple[str, ...] = SUPPORTED_VERSIONS,
    ):
        """Initialize parser.

        Args:
            supported_versions: Accepted values of the ``version`` key.
        """
        self.supported_versions = supported_versions
        self.command_types = COMMAND_TYPES
        self._source: str | None = None

    def parse(self, file_path: str | Path) -> Batch:
        """Parse a batch file.

        Raises:
            ConfigError: If the file is missing or unreadable.
            SchemaError: If the document is invalid.
        """
        path = Path(file_path)
        content = self._read_file(path)
        return self.parse_string(content, source=str(path))

    def parse_string(self, content: str, source: str | None = None) -> Batch:
        """Parse batch content from a string.

        Args:
            content: YAML document.
            source: Optional file name used in error messages.

        Raises:
            SchemaError: If the document is invalid.
        """
        self._source = source
        try:
            data = self._load_yaml(content)
            batch = self._build_batch(data)
        finally:
            self._source = None

        logger.debug(
            f"Parsed batch '{batch.display_name}': {len(batch.jobs)} jobs, "
            f"{batch.command_count} command executions"
        )
        return batch

    def _read_file(self, path: Path) -> str:
        if not path.exists():
            raise ConfigError(f"Batch file not found: {path}")
        if not path.is_file():
            raise ConfigError(f"Batch file is not a regular file: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read batch file: {e}", {"path": str(path)}) from None

    def _load_yaml(self, content: str) -> dict[str, Any]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise self._error(MalformedStructure, f"Invalid YAML: {e}") from None

        if not isinstance(data, dict):
            raise self._error(MalformedStructure, "Batch file must contain a mapping")
        return data

    def _build_batch(self, data: dict[str, Any]) -> Batch:
        version = self._check_version(data)
        self._check_keys(data, BATCH_KEYS, None)
        jobs = self._require_list(data, "jobs", None)

        # Structure of every job is checked before any command is looked at
        for i, raw_job in enumerate(jobs):
            location = f"jobs[{i}]"
            job = self._require_mapping(raw_job, location)
            self._check_keys(job, JOB_KEYS, location)
            self._require_list(job, "on-repositories", location)
            self._require_list(job, "steps", location)

        return Batch(
            version=version,
            name=self._optional_str(data, "name", None),
            jobs=tuple(self._build_job(job, f"jobs[{i}]") for i, job in enumerate(jobs)),
        )

    def _check_version(self, data: dict[str, Any]) -> str:
        supported = ", ".join(self.supported_versions)
        if "version" not in data:
            raise self._error(
                UnsupportedVersion,
                f"Missing 'version' (supported: {supported})",
                "version",
            )

        version = data["version"]
        # An unquoted 1.0 loads as a float; compare its text like a string
        if isinstance(version, (int, float)) and not isinstance(version, bool):
            version = str(version)
        if not isinstance(version, str):
            raise self._error(
                UnsupportedVersion,
                f"'version' must be a string or number, got {version!r} (supported: {supported})",
                "version",
            )
        if version not in self.supported_versions:
            raise self._error(
                UnsupportedVersion,
                f"Unsupported version {version!r} (supported: {supported})",
                "version",
            )
        return version

    def _build_job(self, job: dict[str, Any], location: str) -> Job:
        repositories = tuple(
            self._build_repository(raw, f"{location}.on-repositories[{i}]")
            for i, raw in enumerate(job["on-repositories"])
        )
        steps = tuple(
            self._build_step(raw, f"{location}.steps[{i}]") for i, raw in enumerate(job["steps"])
        )
        return Job(
            name=self._optional_str(job, "name", location),
            on_repositories=repositories,
            steps=steps,
        )

    def _build_repository(self, raw: Any, location: str) -> RepositoryRef:
        repo = self._require_mapping(raw, location)
        self._check_keys(repo, REPOSITORY_KEYS, location)
        for key in ("owner", "name"):
            if key not in repo:
                raise self._error(MissingRequiredField, f"Missing '{key}'", location)
            value = repo[key]
            if not isinstance(value, str) or not value:
                raise self._error(
                    MalformedStructure,
                    f"'{key}' must be a non-empty string",
                    f"{location}.{key}",
                )
        return RepositoryRef(owner=repo["owner"], name=repo["name"])

    def _build_step(self, raw: Any, location: str) -> Step:
        step = self._require_mapping(raw, location)
        self._check_keys(step, STEP_KEYS, location)
        runs = self._require_list(step, "runs", location)
        return Step(
            name=self._optional_str(step, "name", location),
            runs=tuple(
                self._build_command(entry, f"{location}.runs[{i}]") for i, entry in enumerate(runs)
            ),
        )

    def _build_command(self, raw: Any, location: str) -> BaseCommand:
        entry = self._require_mapping(raw, location)
        if len(entry) != 1:
            raise self._error(
                MalformedStructure,
                f"Command entry must have exactly one key naming the command, got {sorted(map(str, entry))}",
                location,
            )

        command_name, payload = next(iter(entry.items()))
        command_type = self.command_types.get(command_name)
        if command_type is None:
            known = ", ".join(sorted(self.command_types))
            raise self._error(
                UnknownCommand,
                f"Unknown command {command_name!r} (known: {known})",
                location,
            )

        location = f"{location}.{command_name}"
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise self._error(MalformedStructure, "Command fields must be a mapping", location)

        try:
            return command_type.model_validate(payload)
        except ValidationError as e:
            raise self._validation_error(e, location) from None

    def _validation_error(self, exc: ValidationError, location: str) -> SchemaError:
        """Map a pydantic error to the matching SchemaError subtype."""
        errors = exc.errors()
        missing = [err for err in errors if err["type"] == "missing"]
        selected = missing or errors
        error_cls = MissingRequiredField if missing else MalformedStructure

        first_loc = ".".join(str(part) for part in selected[0]["loc"])
        messages = []
        for err in selected:
            loc = ".".join(str(part) for part in err["loc"])
            messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])

        return self._error(
            error_cls,
            "; ".join(messages),
            f"{location}.{first_loc}" if first_loc else location,
        )

    def _require_list(self, mapping: dict[str, Any], key: str, location: str | None) -> list:
        if key not in mapping or mapping[key] is None:
            raise self._error(MissingRequiredField, f"Missing '{key}'", location)

        value = mapping[key]
        field_location = f"{location}.{key}" if location else key
        if not isinstance(value, list):
            raise self._error(
                MalformedStructure,
                f"'{key}' must be a list, got {type(value).__name__}",
                field_location,
            )
        if not value:
            raise self._error(
                MissingRequiredField,
                f"'{key}' must contain at least one entry",
                field_location,
            )
        return value

    def _require_mapping(self, value: Any, location: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise self._error(
                MalformedStructure,
                f"Expected a mapping, got {type(value).__name__}",
                location,
            )
        return value

    def _optional_str(self, mapping: dict[str, Any], key: str, location: str | None) -> str | None:
        value = mapping.get(key)
        if value is not None and not isinstance(value, str):
            raise self._error(
                MalformedStructure,
                f"'{key}' must be a string",
                f"{location}.{key}" if location else key,
            )
        return value

    def _check_keys(self, mapping: dict[str, Any], allowed: frozenset[str], location: str | None):
        unknown = sorted(str(key) for key in mapping if key not in allowed)
        if unknown:
            raise self._error(
                MalformedStructure,
                f"Unknown keys {unknown} (allowed: {sorted(allowed)})",
                location,
            )

    def _error(
        self,
        error_cls: type[SchemaError],
        message: str,
        location: str | None = None,
    ) -> SchemaError:
        return error_cls(message, location=location, source=self._source)
