"""Default failure reasons and the one exception the library raises.

Combinators never raise for domain failures; those travel as data in the
Error variant. ``UnwrapError`` exists only for the explicit ``unwrap()`` /
``unwrap_error()`` escape hatches.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .result import Result


class Reason(StrEnum):
    """Default failure reasons used when the caller supplies none.

    Members are ``str`` instances, so ``Reason.INVALID == "invalid"``.
    """
    INVALID = "invalid"
    NO_VALUE = "no_value"


class UnwrapError(RuntimeError):
    """Raised when extracting the payload of the wrong variant."""

    def __init__(self, result: Result[object, object], message: str) -> None:
        super().__init__(f"{message}: {result!r}")
        self.result = result
