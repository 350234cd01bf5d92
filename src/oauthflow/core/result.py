"""
Success/failure values returned by every stage.

`and_then` is the chaining step: a failure passes through untouched, a success
feeds its value into the next stage. That is how status classification and JSON
decoding compose without nested branching at call sites.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from oauthflow.core.errors import OAuth2Error

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value


@dataclass(frozen=True)
class Failure:
    error: OAuth2Error

    def __post_init__(self) -> None:
        if not isinstance(self.error, OAuth2Error):
            raise TypeError(f"Failure expects an OAuth2Error, got {type(self.error).__name__}")

    @property
    def is_success(self) -> bool:
        return False

    @property
    def payload(self) -> bytes:
        return self.error.payload

    def map(self, fn: Callable) -> "Failure":  # noqa: ARG002
        return self

    def and_then(self, fn: Callable) -> "Failure":  # noqa: ARG002
        return self

    def unwrap(self):
        """Raise the carried error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Success[T], Failure]
