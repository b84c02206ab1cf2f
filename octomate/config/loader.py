"""Settings loading.

Settings are assembled from three layers, later ones winning: the model
defaults, one YAML settings file, and ``OCTOMATE_*`` environment variables
where a double underscore separates section and key
(``OCTOMATE_GITHUB__TOKEN`` sets ``github.token``).
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from octomate.config.settings import Settings
from octomate.exceptions import ConfigError

ENV_PREFIX = "OCTOMATE_"
CONFIG_ENV = f"{ENV_PREFIX}CONFIG"


def default_config_locations() -> list[Path]:
    """Settings files looked up when neither ``--config`` nor OCTOMATE_CONFIG is set."""
    return [
        Path("octomate.yaml"),
        Path.home() / ".octomate" / "config.yaml",
    ]


def find_config_file() -> Path | None:
    """Return the settings file to use when none was given explicitly.

    OCTOMATE_CONFIG is returned even when the file does not exist, so a
    wrong path is reported instead of quietly falling back to defaults.
    """
    explicit = os.environ.get(CONFIG_ENV)
    if explicit:
        return Path(explicit)

    for location in default_config_locations():
        if location.is_file():
            return location
    return None


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML file {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {path}")
    return content


def _merge(current: dict[str, Any], overrides: dict[str, Any], source: str, prefix: str = "") -> dict:
    """Overlay ``overrides`` on ``current``, rejecting keys Settings does not define."""
    merged = dict(current)
    for key, value in overrides.items():
        dotted = f"{prefix}{key}"
        if key not in current:
            raise ConfigError(f"Unknown setting '{dotted}' (from {source})")
        if isinstance(current[key], dict):
            if not isinstance(value, dict):
                raise ConfigError(f"Setting '{dotted}' must be a mapping (from {source})")
            merged[key] = _merge(current[key], value, source, f"{dotted}.")
        else:
            merged[key] = value
    return merged


def _coerce(raw: str, current: Any) -> Any:
    """Convert an environment string to the type of the setting it replaces."""
    if isinstance(current, bool):
        return raw.strip().lower() in ("true", "1", "yes", "on")
    for kind in (int, float):
        if isinstance(current, kind):
            try:
                return kind(raw)
            except ValueError:
                # Left as a string so validation reports the bad value
                return raw
    return raw


def _env_overrides(current: dict[str, Any]) -> dict[str, Any]:
    """Nested override mapping built from ``OCTOMATE_SECTION__KEY`` variables."""
    overrides: dict[str, Any] = {}
    for name, raw in sorted(os.environ.items()):
        if not name.startswith(ENV_PREFIX) or name == CONFIG_ENV:
            continue

        *sections, key = name[len(ENV_PREFIX) :].lower().split("__")
        target, defaults = overrides, current
        for section in sections:
            target = target.setdefault(section, {})
            defaults = defaults.get(section) if isinstance(defaults, dict) else None
        existing = defaults.get(key) if isinstance(defaults, dict) else None
        target[key] = _coerce(raw, existing)
    return overrides


def load_config(config_path: str | Path | None = None) -> Settings:
    """Build Settings from defaults, ``config_path`` and the environment.

    Raises:
        ConfigError: If the file is unreadable, names an unknown setting
            or a value fails validation.
    """
    data = Settings().model_dump()

    if config_path:
        path = Path(config_path)
        data = _merge(data, _read_settings_file(path), source=str(path))

    data = _merge(data, _env_overrides(data), source="environment")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings from the discovered file (see ``find_config_file``), cached."""
    return load_config(find_config_file())


def reset_settings() -> None:
    """Forget the cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
