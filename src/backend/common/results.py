from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CoreError(str, Enum):
    EMPTY_NAME = "EMPTY_NAME"
    UNKNOWN_PROVIDER = "UNKNOWN_PROVIDER"
    NOT_CONNECTED = "NOT_CONNECTED"
    # Informational: reconnecting an existing provider overwrites it and still succeeds.
    ALREADY_CONNECTED = "ALREADY_CONNECTED"
    INVALID_SETTINGS = "INVALID_SETTINGS"
    RULE_NOT_FOUND = "RULE_NOT_FOUND"


class IntegrationError(ValueError):
    def __init__(self, error: CoreError, message: str = ""):
        super().__init__(message or error.value)
        self.error = error


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a core operation.

    Core operations never raise for expected failures; they return a failed
    Result carrying a `CoreError`. `notice` holds informational codes on
    successful results (e.g. ALREADY_CONNECTED on reconnect).
    """

    value: Optional[T] = None
    error: Optional[CoreError] = None
    message: str = ""
    notice: Optional[CoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T, *, notice: Optional[CoreError] = None, message: str = "") -> "Result[T]":
        return cls(value=value, notice=notice, message=message)

    @classmethod
    def failure(cls, error: CoreError, message: str = "") -> "Result[T]":
        return cls(error=error, message=message or error.value)

    def unwrap(self) -> T:
        if self.error is not None:
            raise IntegrationError(self.error, self.message)
        return self.value  # type: ignore[return-value]
