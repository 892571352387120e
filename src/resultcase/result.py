"""Result type for composing fallible operations.

A ``Result`` is exactly one of two variants:

- Ok: success carrying a ``value``
- Error: failure carrying a ``reason``

Every combinator is available both as a module function taking the result
first (``map(result, f)``) and as a method (``result.map(f)``). Both forms
share one implementation. Failures pass through untouched; callbacks are only
invoked on the variant they are meant for, and exceptions they raise are never
caught here.

Example:
    >>> from resultcase import ok, error
    >>> ok(21).map(lambda x: x * 2)
    Ok(42)
    >>> error("oops").map(lambda x: x * 2)
    Error('oops')
    >>> ok(10).keep_if(lambda x: x > 10, "must be > 10")
    Error('must be > 10')
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

from .errors import Reason, UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type
R = TypeVar("R")  # Fold output type


class Result(Generic[T, E]):
    """Discriminated union of success (Ok) and failure (Error).

    Instances are immutable. Build them with ``ok``/``error`` (or the ``Ok``/
    ``Err`` aliases), never with the class directly.

    Examples:
        >>> ok(5).and_then(lambda x: ok(x * 2) if x > 0 else error("neg"))
        Ok(10)
        >>> error("down").or_else(lambda _: ok("cached"))
        Ok('cached')
        >>> error("down").either(lambda e: f"failed: {e}", lambda v: v)
        'failed: down'

        Pattern matching binds the variant flag first, then the payload:
        >>> match error("down"):
        ...     case Result(True, value): print("ok", value)
        ...     case Result(False, reason): print("error", reason)
        error down
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_is_ok", "_value")

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use ok() or error() instead."""
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_is_ok", is_ok)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Result[T, E]], tuple[T | E, bool]]:
        """Rebuild through the constructor so copy and pickle bypass __setattr__."""
        return (type(self), (self._value, self._is_ok))

    # ─── Predicates ──────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is the Ok variant."""
        return self._is_ok

    def is_error(self) -> bool:
        """Check if Result is the Error variant."""
        return not self._is_ok

    # ─── Composition ─────────────────────────────────────────────────

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a step that can fail.

        On Ok, returns ``f(value)`` as is; ``f`` must return a Result. On
        Error, returns self without calling ``f``.

        Type signature: Result[T, E] -> (T -> Result[U, E]) -> Result[U, E]
        """
        if self._is_ok:
            return f(cast(T, self._value))
        return cast("Result[U, E]", self)

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply ``f`` to the Ok value and wrap the output back into Ok.

        Type signature: Result[T, E] -> (T -> U) -> Result[U, E]
        """
        if self._is_ok:
            return Ok(f(cast(T, self._value)))
        return cast("Result[U, E]", self)

    def map_error(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply ``f`` to the Error reason and wrap the output back into Error.

        Type signature: Result[T, E] -> (E -> F) -> Result[T, F]
        """
        if not self._is_ok:
            return Err(f(cast(E, self._value)))
        return cast("Result[T, F]", self)

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Chain a recovery step on Error; the dual of ``and_then``.

        Type signature: Result[T, E] -> (E -> Result[T, F]) -> Result[T, F]
        """
        if not self._is_ok:
            return f(cast(E, self._value))
        return cast("Result[T, F]", self)

    # ─── Extraction ──────────────────────────────────────────────────

    def either(self, on_error: Callable[[E], R], on_ok: Callable[[T], R]) -> R:
        """Fold both variants into one value. Exactly one callback runs."""
        if self._is_ok:
            return on_ok(cast(T, self._value))
        return on_error(cast(E, self._value))

    def with_default(self, default: T) -> T:
        """Extract Ok value or return ``default``."""
        return cast(T, self._value) if self._is_ok else default

    def unwrap(self) -> T:
        """Extract Ok value. Raises UnwrapError on Error."""
        if self._is_ok:
            return cast(T, self._value)
        raise UnwrapError(self, "unwrap() on Error")

    def unwrap_error(self) -> E:
        """Extract Error reason. Raises UnwrapError on Ok."""
        if not self._is_ok:
            return cast(E, self._value)
        raise UnwrapError(self, "unwrap_error() on Ok")

    # ─── Observation ─────────────────────────────────────────────────

    def tap(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call ``f`` with the Ok value for side effects, return self."""
        if self._is_ok:
            f(cast(T, self._value))
        return self

    def tap_error(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call ``f`` with the Error reason for side effects, return self."""
        if not self._is_ok:
            f(cast(E, self._value))
        return self

    # ─── Validation ──────────────────────────────────────────────────

    def keep_if(
        self,
        predicate: Callable[[T], bool],
        error_message: E | Reason = Reason.INVALID,
    ) -> Result[T, E | Reason]:
        """Turn Ok into ``Error(error_message)`` unless ``predicate`` holds.

        The rejected value is dropped; the failure carries only the message.
        """
        if not self._is_ok or predicate(cast(T, self._value)):
            return cast("Result[T, E | Reason]", self)
        return Err(error_message)

    def reject_if(
        self,
        predicate: Callable[[T], bool],
        error_message: E | Reason = Reason.INVALID,
    ) -> Result[T, E | Reason]:
        """Turn Ok into ``Error(error_message)`` when ``predicate`` holds."""
        return self.keep_if(lambda value: not predicate(value), error_message)

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __repr__(self) -> str:
        variant = "Ok" if self._is_ok else "Error"
        return f"{variant}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        """Structural equality on variant and payload."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))


# ═════════════════════════════════════════════════════════════════════════════
# Constructors
# ═════════════════════════════════════════════════════════════════════════════


def ok(value: T) -> Result[T, E]:
    """Wrap ``value`` in the Ok variant."""
    return Result(value, is_ok=True)


def error(reason: E) -> Result[T, E]:
    """Wrap ``reason`` in the Error variant."""
    return Result(reason, is_ok=False)


Ok = ok
Err = error


def from_value(value: T | None, reason: E | Reason = Reason.NO_VALUE) -> Result[T, E | Reason]:
    """Promote a possibly-absent value to a Result.

    Only ``None`` counts as absent; ``0``, ``""`` and empty collections are Ok.

    Example:
        >>> from_value(None)
        Error(<Reason.NO_VALUE: 'no_value'>)
        >>> from_value(0)
        Ok(0)
    """
    if value is None:
        return Err(reason)
    return Ok(value)


# ═════════════════════════════════════════════════════════════════════════════
# Function Forms
# ═════════════════════════════════════════════════════════════════════════════


def is_ok(result: Result[T, E]) -> bool:
    return result.is_ok()


def is_error(result: Result[T, E]) -> bool:
    return result.is_error()


def and_then(result: Result[T, E], f: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Function form of ``Result.and_then``."""
    return result.and_then(f)


def map(result: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:  # noqa: A001
    """Function form of ``Result.map``."""
    return result.map(f)


def map_error(result: Result[T, E], f: Callable[[E], F]) -> Result[T, F]:
    """Function form of ``Result.map_error``."""
    return result.map_error(f)


def or_else(result: Result[T, E], f: Callable[[E], Result[T, F]]) -> Result[T, F]:
    """Function form of ``Result.or_else``."""
    return result.or_else(f)


def either(result: Result[T, E], on_error: Callable[[E], R], on_ok: Callable[[T], R]) -> R:
    """Function form of ``Result.either``."""
    return result.either(on_error, on_ok)


def with_default(result: Result[T, E], default: T) -> T:
    """Function form of ``Result.with_default``."""
    return result.with_default(default)


def tap(result: Result[T, E], f: Callable[[T], object]) -> Result[T, E]:
    """Function form of ``Result.tap``."""
    return result.tap(f)


def tap_error(result: Result[T, E], f: Callable[[E], object]) -> Result[T, E]:
    """Function form of ``Result.tap_error``."""
    return result.tap_error(f)


def keep_if(
    result: Result[T, E],
    predicate: Callable[[T], bool],
    error_message: E | Reason = Reason.INVALID,
) -> Result[T, E | Reason]:
    """Function form of ``Result.keep_if``."""
    return result.keep_if(predicate, error_message)


def reject_if(
    result: Result[T, E],
    predicate: Callable[[T], bool],
    error_message: E | Reason = Reason.INVALID,
) -> Result[T, E | Reason]:
    """Function form of ``Result.reject_if``."""
    return result.reject_if(predicate, error_message)


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def _sequence_step(values: list[T], element: Result[T, E]) -> Result[list[T], E] | None:
    """Push an Ok payload onto ``values``; hand back an Error to halt the fold."""
    if element._is_ok:
        values.append(cast(T, element._value))
        return None
    return cast("Result[list[T], E]", element)


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Convert an iterable of Results into a Result of list.

    Consumes ``results`` left to right and stops at the first Error, which is
    returned as is. Elements after it are never pulled.

    Type signature: [Result[T, E]] -> Result[[T], E]

    Example:
        >>> sequence([ok(1), ok(2)])
        Ok([1, 2])
        >>> sequence([ok(1), error("e1"), ok(2), error("e2")])
        Error('e1')
    """
    values: list[T] = []
    for element in results:
        halted = _sequence_step(values, element)
        if halted is not None:
            return halted
    return Ok(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map a fallible ``f`` over ``items`` and sequence the outputs.

    ``f`` is applied lazily, so items after the first failure are not visited.

    Type signature: [T] -> (T -> Result[U, E]) -> Result[[U], E]
    """
    return sequence(f(item) for item in items)
