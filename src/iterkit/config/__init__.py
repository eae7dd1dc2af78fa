# src/iterkit/config/__init__.py

"""Configuration management for iterkit.

Resolve-once, freeze-then-flow: configuration is resolved into an immutable
FrozenConfig, optionally pinned for a block with `config_scope`, and read by
the iteration helpers through `current_config`.
"""

# ruff: noqa: I001

from .core import (
    FieldOrigin,
    FrozenConfig,
    Origin,
    Settings,
    SourceMap,
    audit_lines,
    config_scope,
    current_config,
    reset_config,
    resolve_config,
)
from .loaders import load_env, load_pyproject

__all__ = [  # noqa: RUF022
    # Main public API
    "resolve_config",
    "current_config",
    "config_scope",
    "reset_config",
    "FrozenConfig",
    # Schema and audit
    "Settings",
    "Origin",
    "FieldOrigin",
    "SourceMap",
    "audit_lines",
    # Loaders
    "load_env",
    "load_pyproject",
]
