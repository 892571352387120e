"""Resultcase - combinators for a two-variant result value.

A result is either Ok (success with a value) or Error (failure with a
reason). The combinators let calling code chain fallible steps without
branching on success/failure at every call site.

Quick Start:
    >>> from resultcase import ok, error, sequence
    >>>
    >>> def parse_int(s: str):
    ...     return ok(int(s)) if s.isdigit() else error(f"invalid int: {s}")
    >>>
    >>> ok("42").and_then(parse_int).keep_if(lambda n: n > 0).map(lambda n: n * 2)
    Ok(84)
    >>> sequence([parse_int("1"), parse_int("x"), parse_int("y")])
    Error('invalid int: x')

Function forms take the result first:
    >>> from resultcase import map, with_default
    >>> with_default(map(error("down"), str.upper), "fallback")
    'fallback'
"""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import Reason, UnwrapError
from .result import (
    Err,
    Ok,
    Result,
    and_then,
    either,
    error,
    from_value,
    is_error,
    is_ok,
    keep_if,
    map,
    map_error,
    ok,
    or_else,
    reject_if,
    sequence,
    tap,
    tap_error,
    traverse,
    with_default,
)

__all__ = [
    # Core type
    "Result",
    # Constructors
    "ok", "error", "Ok", "Err", "from_value",
    # Predicates
    "is_ok", "is_error",
    # Composition
    "and_then", "map", "map_error", "or_else",
    # Extraction
    "either", "with_default",
    # Observation
    "tap", "tap_error",
    # Validation
    "keep_if", "reject_if",
    # Collection ops
    "sequence", "traverse",
    # Errors
    "Reason", "UnwrapError",
]
