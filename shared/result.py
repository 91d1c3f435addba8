"""
Result values returned by store write operations.

A write either succeeds with ``Ok(value)`` or fails with ``Err(error)``.
Failures carry a FitConnectError so callers can surface user-facing
feedback instead of guessing why nothing changed.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .exceptions import FitConnectError


T = TypeVar("T")
E = TypeVar("E", bound=FitConnectError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome. State was left untouched."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raise the carried error."""
        raise self.error

    def unwrap_or(self, default):
        return default


Result = Union[Ok[T], Err[FitConnectError]]
