"""Adverbs: wrappers that change how a function reports or paces its calls.

- `safely` turns exceptions into `Failure` records.
- `possibly` turns exceptions into a fallback value.
- `quietly` captures printed output and warnings next to the result.
- `insistently` retries with bounded backoff.
- `slowly` spaces successive calls apart.

They compose with every map, walker and fold:

    outcomes = map_([1, 10, "a"], safely(math.log))
    split = transpose(outcomes)   # split.errors[2] is the TypeError
"""

from __future__ import annotations

import contextlib
import functools
import io
import logging
import time
from typing import TYPE_CHECKING, Any
import warnings

from iterkit.config import current_config
from iterkit.errors import ConfigurationError
from iterkit.mappers import MapperLike, as_mapper
from iterkit.result import Failure, Outcome, Quiet, Success
from iterkit.retry import RetryPolicy, retry_any, retry_call

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


def safely(f: MapperLike) -> Callable[..., Outcome]:
    """Wrap ``f`` so calls return `Success` or `Failure` instead of raising.

    Only ``Exception`` subclasses are captured; ``KeyboardInterrupt`` and
    ``SystemExit`` still propagate.
    """
    fn = as_mapper(f)

    @functools.wraps(fn)
    def safe(*args: Any, **kwargs: Any) -> Outcome:
        try:
            return Success(fn(*args, **kwargs))
        except Exception as exc:
            log.debug("safely captured %s: %s", type(exc).__name__, exc)
            return Failure(exc)

    return safe


def _log_swallowed() -> bool:
    try:
        return current_config().log_swallowed
    except ConfigurationError as exc:
        log.debug("possibly: configuration unavailable, logging at default level: %s", exc)
        return False


def possibly(f: MapperLike, otherwise: Any = None, *, quiet: bool = True) -> Callable[..., Any]:
    """Wrap ``f`` so calls return ``otherwise`` instead of raising.

    Swallowed errors are logged at DEBUG, or at WARNING when ``quiet`` is
    False or the ``log_swallowed`` setting is on.
    """
    fn = as_mapper(f)

    @functools.wraps(fn)
    def maybe(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            level = logging.WARNING if not quiet or _log_swallowed() else logging.DEBUG
            log.log(level, "possibly replaced %s: %s", type(exc).__name__, exc)
            return otherwise

    return maybe


def quietly(f: MapperLike) -> Callable[..., Quiet[Any]]:
    """Wrap ``f`` so calls return a `Quiet` record.

    Captures stdout as ``output``, stderr lines as ``messages`` and warning
    texts as ``warnings``. Exceptions still propagate; combine with `safely`
    to capture those too.
    """
    fn = as_mapper(f)

    @functools.wraps(fn)
    def quiet(*args: Any, **kwargs: Any) -> Quiet[Any]:
        out = io.StringIO()
        err = io.StringIO()
        with (
            warnings.catch_warnings(record=True) as caught,
            contextlib.redirect_stdout(out),
            contextlib.redirect_stderr(err),
        ):
            warnings.simplefilter("always")
            result = fn(*args, **kwargs)
        return Quiet(
            result=result,
            output=out.getvalue(),
            warnings=tuple(str(w.message) for w in caught),
            messages=tuple(line for line in err.getvalue().splitlines() if line),
        )

    return quiet


def insistently(
    f: MapperLike,
    policy: RetryPolicy | None = None,
    *,
    should_retry: Callable[[BaseException], bool] = retry_any,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[..., Any]:
    """Wrap ``f`` so failing calls are retried under ``policy``.

    The last error propagates once attempts (or elapsed time) run out.
    """
    fn = as_mapper(f)
    policy = policy or RetryPolicy()

    @functools.wraps(fn)
    def insistent(*args: Any, **kwargs: Any) -> Any:
        return retry_call(
            lambda: fn(*args, **kwargs),
            policy=policy,
            should_retry=should_retry,
            sleep=sleep,
        )

    return insistent


def slowly(
    f: MapperLike,
    delay_s: float,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[..., Any]:
    """Wrap ``f`` so successive calls start at least ``delay_s`` apart.

    The first call runs immediately.
    """
    if delay_s < 0:
        raise ValueError(f"delay_s must be >= 0, got {delay_s}")
    fn = as_mapper(f)
    last_start: list[float] = []

    @functools.wraps(fn)
    def slow(*args: Any, **kwargs: Any) -> Any:
        if last_start:
            wait = delay_s - (clock() - last_start[0])
            if wait > 0:
                sleep(wait)
        last_start[:] = [clock()]
        return fn(*args, **kwargs)

    return slow
