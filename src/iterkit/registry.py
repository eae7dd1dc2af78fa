"""Name-to-callable registry used by `invoke_map`.

Resolution order for a string identifier:

1. names registered on the registry,
2. dotted import paths such as ``"math.log"`` or ``"os.path.join"``,
3. builtins such as ``"len"`` or ``"abs"``.

The registry is process-local and in-memory only.
"""

from __future__ import annotations

import builtins
import importlib
import logging
from typing import TYPE_CHECKING, Any, overload

from iterkit.errors import UnresolvedCallableError

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


class FunctionRegistry:
    """Maps identifier strings to callables."""

    def __init__(self) -> None:
        self._by_name: dict[str, Callable[..., Any]] = {}

    @overload
    def register(self, name: str, fn: Callable[..., Any]) -> Callable[..., Any]: ...

    @overload
    def register(
        self, name: str, fn: None = ...
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]: ...

    def register(self, name: str, fn: Callable[..., Any] | None = None) -> Any:
        """Associate ``name`` with ``fn``; usable as a decorator when ``fn`` is omitted.

        Re-registering a name replaces the previous callable.
        """
        if not name or not isinstance(name, str):
            raise ValueError("registry names must be non-empty strings")

        def _store(func: Callable[..., Any]) -> Callable[..., Any]:
            if not callable(func):
                raise TypeError(f"cannot register non-callable {func!r} as {name!r}")
            self._by_name[name] = func
            return func

        if fn is None:
            return _store
        return _store(fn)

    def unregister(self, name: str) -> None:
        """Remove ``name``; missing names are ignored."""
        self._by_name.pop(name, None)

    def get(self, name: str) -> Callable[..., Any] | None:
        """Return the callable registered under ``name``, if any."""
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def resolve(self, identifier: object, *, index: int | None = None) -> Callable[..., Any]:
        """Resolve a callable or identifier to a callable.

        Raises:
            UnresolvedCallableError: If nothing callable matches.
        """
        if callable(identifier):
            return identifier
        if not isinstance(identifier, str) or not identifier:
            raise UnresolvedCallableError(
                f"expected a callable or function name, got {identifier!r}",
                identifier=identifier,
                index=index,
            )

        fn = self._by_name.get(identifier)
        if fn is None:
            fn = _import_dotted(identifier)
        if fn is None:
            fn = getattr(builtins, identifier, None)

        if not callable(fn):
            at = f" at position {index}" if index is not None else ""
            raise UnresolvedCallableError(
                f"cannot resolve {identifier!r}{at} to a callable",
                hint="Register it with FunctionRegistry.register() or use a dotted import path.",
                identifier=identifier,
                index=index,
            )
        log.debug("Resolved %r to %r", identifier, fn)
        return fn


def _import_dotted(path: str) -> Any:
    """Import ``pkg.module.attr``; returns None when any part is missing."""
    module_name, _, attr = path.rpartition(".")
    if not module_name or not attr or module_name.startswith("."):
        return None
    try:
        module = importlib.import_module(module_name)
    except (ImportError, ValueError):
        # Allow nested attributes such as "os.path.join" via the parent module
        parent = _import_dotted(module_name)
        return getattr(parent, attr, None) if parent is not None else None
    return getattr(module, attr, None)


default_registry = FunctionRegistry()


def resolve_callable(identifier: object, *, index: int | None = None) -> Callable[..., Any]:
    """Resolve against the default registry."""
    return default_registry.resolve(identifier, index=index)
