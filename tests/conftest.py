"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and a few small test
doubles. Isolation fixtures are autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from iterkit.config import reset_config

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallRecorder:
    """Callable double that records every call and returns a scripted value.

    ``fail_on`` holds argument values that make the call raise ``ValueError``.
    """

    returns: Any = None
    fail_on: tuple[Any, ...] = ()
    calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = field(default_factory=list)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((args, kwargs))
        if args and args[0] in self.fail_on:
            raise ValueError(f"scripted failure for {args[0]!r}")
        if callable(self.returns):
            return self.returns(*args, **kwargs)
        return self.returns

    @property
    def seen(self) -> list[Any]:
        """First positional argument of each call, in call order."""
        return [args[0] for args, _ in self.calls if args]


@dataclass
class FakeSleep:
    """Records requested sleeps instead of blocking."""

    delays: list[float] = field(default_factory=list)

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recorder() -> CallRecorder:
    """Identity-returning call recorder."""
    return CallRecorder(returns=lambda x, *_a, **_k: x)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "iterkit.config.core.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_iterkit_env(request, monkeypatch, tmp_path):
    """Ensure a clean ITERKIT_* environment and no project file for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("ITERKIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ITERKIT_PYPROJECT_PATH", str(tmp_path / "missing-pyproject.toml"))


@pytest.fixture(autouse=True)
def fresh_config_cache():
    """Drop the cached process-wide configuration around each test."""
    reset_config()
    yield
    reset_config()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_library_debug():
    """Keep iterkit DEBUG chatter out of captured logs unless a test asks."""
    logging.getLogger("iterkit").setLevel(logging.INFO)
