"""Validation failures and results."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A single broken rule.

    ``code`` identifies the rule (e.g. ``MaximumLengthValidator``) and is what
    clients match on; ``message`` is the rendered human-readable text.
    """
    property_name: str
    code: str
    message: str
    attempted_value: Any = None

    def __repr__(self) -> str:
        return f"ValidationFailure({self.property_name!r}, {self.code!r}, {self.message!r})"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    failures: tuple[ValidationFailure, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.failures

    def merge(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(self.failures + other.failures)

    def raise_if_invalid(self) -> None:
        if self.failures:
            raise ValidationError(self.failures)


class ValidationError(Exception):
    """Raised when a value object or request fails one or more rules."""

    def __init__(self, failures: Iterable[ValidationFailure], message: str = "Validation failed"):
        self.failures: tuple[ValidationFailure, ...] = tuple(failures)
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if len(self.failures) == 1:
            f = self.failures[0]
            return f"{f.property_name}: {f.message}"
        return f"{self.message} ({len(self.failures)} errors)"

    @property
    def field_errors(self) -> dict[str, list[ValidationFailure]]:
        """Failures grouped by property, in first-seen order."""
        grouped: dict[str, list[ValidationFailure]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.property_name, []).append(failure)
        return grouped
