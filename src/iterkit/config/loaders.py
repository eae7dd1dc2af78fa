# src/iterkit/config/loaders.py

"""Configuration loaders for environment and project files.

Each loader returns a plain dictionary that the core resolver merges. No
validation happens here; the `Settings` schema is the single wall that
values pass through.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tomllib
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

ENV_PREFIX = "ITERKIT_"
CONFIG_TOOL_NAME = "iterkit"

# Control variables that steer resolution but aren't config fields
META_ENV_FIELDS = {"pyproject_path"}


def _coerce_bool(v: str) -> bool:
    """Convert string to boolean using common conventions."""
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_env_value(value: str, target_type: type | None) -> Any:
    """Coerce env string to target type when possible.

    Falls back to the original string so the schema can report a precise
    validation error.
    """
    if target_type is bool:
        return _coerce_bool(value)
    if target_type is int:
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _is_known_field(field_name: str) -> bool:
    from .core import Settings

    return field_name in Settings.model_fields


def _field_type(field_name: str) -> type | None:
    from .core import Settings  # local import to keep loaders import-light

    info = Settings.model_fields.get(field_name)
    if info is None:
        return None
    if field_name == "index_base":
        # Literal[0, 1] is an int on the wire
        return int
    return info.annotation if info.annotation in {bool, int} else None


def load_env() -> Mapping[str, Any]:
    """Load configuration from ``ITERKIT_*`` environment variables.

    `.env` loading happens in the resolver; this function only reads
    ``os.environ``.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in META_ENV_FIELDS:
            continue
        if not _is_known_field(field_name):
            log.debug("Ignoring unknown environment variable %s", key)
            continue
        config[field_name] = _coerce_env_value(value, _field_type(field_name))
    return config


def get_pyproject_path() -> Path:
    """Return the project file path, honouring ``ITERKIT_PYPROJECT_PATH``."""
    override = os.environ.get(f"{ENV_PREFIX}PYPROJECT_PATH")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / "pyproject.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file, returning an empty dict when missing or invalid."""
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        log.warning("Ignoring unreadable config file %s: %s", path, exc)
        return {}


def load_pyproject(path: Path | None = None) -> Mapping[str, Any]:
    """Load the ``[tool.iterkit]`` table from a pyproject file."""
    data = _read_toml(path or get_pyproject_path())
    section = data.get("tool", {}).get(CONFIG_TOOL_NAME, {})
    return dict(section) if isinstance(section, dict) else {}
