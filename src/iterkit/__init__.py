"""iterkit: generic higher-order iteration helpers.

Public API:
    - map_, map2, pmap, imap, map_if (+ typed _lgl/_int/_dbl/_chr variants)
    - invoke_map: call a collection of functions with matching argument bundles
    - walk, walk2, pwalk, iwalk: maps run for side effects
    - keep, discard, some, every, none, detect, detect_index, head_while, tail_while
    - reduce, accumulate
    - safely, possibly, quietly, insistently, slowly (+ transpose)

Example:
    >>> import math
    >>> from iterkit import map_, safely, transpose
    >>> split = transpose(map_([1, 10, "a"], safely(math.log)))
    >>> [i for i, _ in split.failures]
    [2]
"""

from __future__ import annotations

import logging

from iterkit.adverbs import insistently, possibly, quietly, safely, slowly
from iterkit.config import config_scope, current_config, reset_config, resolve_config
from iterkit.errors import (
    ConfigurationError,
    EmptyInputError,
    IterkitError,
    LengthMismatchError,
    TypeMismatchError,
    UnresolvedCallableError,
)
from iterkit.folds import accumulate, reduce
from iterkit.mappers import as_mapper, compose, negate
from iterkit.mapping import (
    imap,
    invoke_map,
    map2,
    map2_chr,
    map2_dbl,
    map2_int,
    map2_lgl,
    map_,
    map_chr,
    map_dbl,
    map_if,
    map_int,
    map_lgl,
    pmap,
    pmap_chr,
    pmap_dbl,
    pmap_int,
    pmap_lgl,
)
from iterkit.predicates import (
    detect,
    detect_index,
    discard,
    every,
    head_while,
    keep,
    none,
    some,
    tail_while,
)
from iterkit.registry import FunctionRegistry, default_registry, resolve_callable
from iterkit.result import Failure, Outcome, Quiet, Success, Transposed, transpose
from iterkit.retry import RetryPolicy
from iterkit.walking import iwalk, pwalk, walk, walk2

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("iterkit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("iterkit").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "EmptyInputError",
    "Failure",
    "FunctionRegistry",
    "IterkitError",
    "LengthMismatchError",
    "Outcome",
    "Quiet",
    "RetryPolicy",
    "Success",
    "Transposed",
    "TypeMismatchError",
    "UnresolvedCallableError",
    "accumulate",
    "as_mapper",
    "compose",
    "config_scope",
    "current_config",
    "default_registry",
    "detect",
    "detect_index",
    "discard",
    "every",
    "head_while",
    "imap",
    "insistently",
    "invoke_map",
    "iwalk",
    "keep",
    "map2",
    "map2_chr",
    "map2_dbl",
    "map2_int",
    "map2_lgl",
    "map_",
    "map_chr",
    "map_dbl",
    "map_if",
    "map_int",
    "map_lgl",
    "negate",
    "none",
    "pmap",
    "pmap_chr",
    "pmap_dbl",
    "pmap_int",
    "pmap_lgl",
    "possibly",
    "pwalk",
    "quietly",
    "reduce",
    "reset_config",
    "resolve_callable",
    "resolve_config",
    "safely",
    "slowly",
    "some",
    "tail_while",
    "transpose",
    "walk",
    "walk2",
]
