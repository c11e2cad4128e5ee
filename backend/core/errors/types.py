"""Result types and the wire-level error taxonomy.

Expected failures (a missing row, a broken business rule) travel as values in
a ``Result``; programmer errors travel as exceptions. ``ErrorType`` is the
discriminator carried by every error envelope.
"""
from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound="AppError")


class ErrorType(str, Enum):
    """Kind of failure reported to API clients. Serialized by name."""

    NOT_FOUND = "NotFound"
    VALIDATION_FAILED = "ValidationFailed"
    BUSINESS_LOGIC_FAILED = "BusinessLogicFailed"

    @property
    def http_status(self) -> int:
        if self is ErrorType.NOT_FOUND:
            return 404
        return 400


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing."""
    correlation_id: str = dc_field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = dc_field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""


@dataclass(frozen=True, slots=True)
class AppError:
    """An expected failure with enough detail to render an error envelope.

    ``code`` is the stable machine-readable identifier (a validator name or a
    domain exception name); ``field`` names the request property the failure
    belongs to, when there is one.
    """
    error_type: ErrorType
    message: str
    code: str = ""
    field: str | None = None
    context: ErrorContext = dc_field(default_factory=ErrorContext)
    metadata: dict = dc_field(default_factory=dict)
    cause: Exception | None = None

    @property
    def http_status(self) -> int:
        return self.error_type.http_status

    def __str__(self) -> str:
        return f"[{self.error_type.value}] {self.message} (correlation_id={self.context.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def match(self, ok: Callable[[T], U], err: Callable[[AppError], U]) -> U:
        return ok(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error

    def match(self, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return err(self.error)


Result = Union[Ok[T], Err[E]]
