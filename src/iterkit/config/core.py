# src/iterkit/config/core.py

"""Core configuration schema and resolution.

- Single source of truth for configuration fields (Settings)
- Immutable runtime payload (FrozenConfig)
- Per-field origin tracking (SourceMap)
- Guarded ambient scope so call sites stay free of configuration arguments
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from enum import Enum
from functools import cache
import logging
from typing import TYPE_CHECKING, Any, Literal, overload

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from iterkit.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic settings schema for configuration validation and defaults."""

    #: Base used for positions reported by `detect_index` and `imap`.
    index_base: Literal[0, 1] = Field(default=0)
    #: Recycle length-1 inputs in parallel maps instead of rejecting them.
    recycle_length_one: bool = Field(default=False)
    #: Log errors swallowed by `possibly` at WARNING instead of DEBUG.
    log_swallowed: bool = Field(default=False)

    model_config = ConfigDict(extra="forbid")

    @field_validator("index_base", mode="before")
    @classmethod
    def normalize_index_base(cls, v: Any) -> Any:
        """Accept numeric strings such as ``"1"``."""
        if isinstance(v, str) and v.strip().isdigit():
            return int(v.strip())
        return v


@cache
def _default_settings() -> dict[str, Any]:
    return Settings().model_dump()


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Validated, immutable configuration consulted by the iteration helpers."""

    index_base: int = 0
    recycle_length_one: bool = False
    log_swallowed: bool = False


# --- Audit types ---


class Origin(str, Enum):
    """Source origin for configuration field values."""

    DEFAULT = "default"
    PROJECT = "project"
    ENV = "env"
    OVERRIDES = "overrides"


@dataclass(frozen=True)
class FieldOrigin:
    """Tracks the origin and context of a configuration field value."""

    origin: Origin
    env_key: str | None = None  # e.g., "ITERKIT_INDEX_BASE"
    file: str | None = None  # e.g., "/work/pyproject.toml"


SourceMap = dict[str, FieldOrigin]


# --- Ambient scope (guarded) ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "iterkit_ambient_config", default=None
)

_DOTENV_LOADED: bool = False
_RESOLVED: FrozenConfig | None = None


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv(find_dotenv(usecwd=True))
    _DOTENV_LOADED = True


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Run a block with a specific configuration.

    Thread-safe and async-safe; the previous configuration is restored on exit.

    Example:
        with config_scope(index_base=1):
            detect_index([3, 4], lambda x: x > 3)  # -> 2
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        combined = {**(cfg_or_overrides or {}), **overrides}
        cfg = resolve_config(overrides=combined)

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)


def current_config() -> FrozenConfig:
    """Return the ambient configuration.

    Outside a `config_scope` the configuration is resolved from sources on
    first use and reused afterwards; call `reset_config` to pick up changed
    sources.
    """
    global _RESOLVED
    cfg = _AMBIENT.get()
    if cfg is not None:
        return cfg
    if _RESOLVED is None:
        _RESOLVED = resolve_config()
    return _RESOLVED


def reset_config() -> None:
    """Forget the cached process-wide configuration."""
    global _RESOLVED
    _RESOLVED = None


# --- Public resolution API ---


@overload
def resolve_config(
    overrides: Mapping[str, Any] | None = ...,
    *,
    explain: Literal[True],
) -> tuple[FrozenConfig, SourceMap]: ...


@overload
def resolve_config(
    overrides: Mapping[str, Any] | None = ...,
    *,
    explain: Literal[False] = ...,
) -> FrozenConfig: ...


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    explain: bool = False,
) -> FrozenConfig | tuple[FrozenConfig, SourceMap]:
    """Resolve configuration from all sources into a FrozenConfig.

    Precedence: defaults < pyproject < env < overrides.

    Args:
        overrides: Programmatic configuration overrides.
        explain: If True, return ``(config, source_map)`` for audit.

    Raises:
        ConfigurationError: If validation fails.
    """
    _load_dotenv_once()

    from . import loaders

    merged, sources = _resolve_layers(
        overrides=overrides or {},
        env=loaders.load_env(),
        project=loaders.load_pyproject(),
    )

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg") or "invalid value"
        if msg.startswith("Value error, "):
            msg = msg[13:]
        where = sources.get(loc)
        hint = f"Check {_origin_label(loc, where)}." if where is not None else None
        raise ConfigurationError(
            f"Configuration validation failed for {loc or 'config'}: {msg}",
            hint=hint,
        ) from e

    frozen = FrozenConfig(**settings.model_dump())
    log.debug("Resolved configuration: %s", frozen)
    return (frozen, sources) if explain else frozen


def _resolve_layers(
    *,
    overrides: Mapping[str, Any],
    env: Mapping[str, Any],
    project: Mapping[str, Any],
) -> tuple[dict[str, Any], SourceMap]:
    """Merge layers with last-wins precedence while recording origins."""
    from .loaders import ENV_PREFIX, get_pyproject_path

    layers = [
        (Origin.PROJECT, project),
        (Origin.ENV, env),
        (Origin.OVERRIDES, overrides),
    ]

    out: dict[str, Any] = dict(_default_settings())
    src: SourceMap = {k: FieldOrigin(origin=Origin.DEFAULT) for k in out}

    for origin, payload in layers:
        for k, v in payload.items():
            out[k] = v
            if origin is Origin.ENV:
                src[k] = FieldOrigin(origin=origin, env_key=f"{ENV_PREFIX}{k.upper()}")
            elif origin is Origin.PROJECT:
                src[k] = FieldOrigin(origin=origin, file=str(get_pyproject_path()))
            else:
                src[k] = FieldOrigin(origin=origin)

    return out, src


# --- Audit helpers ---


def _origin_label(field: str, where: FieldOrigin) -> str:
    match where.origin:
        case Origin.ENV:
            return f"env:{where.env_key or field.upper()}"
        case Origin.PROJECT:
            return f"file:{where.file or 'pyproject.toml'}"
        case _:
            return str(where.origin.value)


def audit_lines(sources: SourceMap) -> list[str]:
    """Human-readable ``field: origin`` lines in schema order."""
    return [
        f"{field}: {_origin_label(field, sources[field])}"
        for field in Settings.model_fields
        if field in sources
    ]
