"""Composable validation rules.

Each rule is an immutable dataclass that checks one condition and knows its
code and the placeholders for its message template. Rules are grouped into a
``RuleSet`` that runs every rule against a value and collects the failures.
Rules other than ``NotEmpty`` treat None as "nothing to check".
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, ClassVar

from .errors import ValidationError, ValidationFailure, ValidationResult
from .messages import ENGLISH, MessageCatalog, render


class Rule(ABC):
    """Base class for rules.

    Subclasses implement ``is_satisfied_by`` and may contribute message
    placeholders.
    """

    code: ClassVar[str] = "PredicateValidator"

    @abstractmethod
    def is_satisfied_by(self, value: Any) -> bool:
        """True when ``value`` passes this rule."""

    def placeholders(self, value: Any) -> dict[str, Any]:
        return {}

    def message(self, value: Any, property_name: str, messages: MessageCatalog) -> str:
        return messages.format(self.code, PropertyName=property_name, **self.placeholders(value))

    def check(
        self, value: Any, *, property_name: str, messages: MessageCatalog = ENGLISH
    ) -> ValidationFailure | None:
        if self.is_satisfied_by(value):
            return None
        return ValidationFailure(
            property_name=property_name,
            code=self.code,
            message=self.message(value, property_name, messages),
            attempted_value=value,
        )

    def with_message(self, message: str) -> WithMessage:
        return WithMessage(self, message)


@dataclass(frozen=True, slots=True)
class NotEmpty(Rule):
    """Fails on None, blank strings and empty collections."""

    code: ClassVar[str] = "NotEmptyValidator"

    def is_satisfied_by(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, (list, tuple, set, frozenset, dict)):
            return bool(value)
        return True


@dataclass(frozen=True, slots=True)
class MaximumLength(Rule):
    max_length: int

    code: ClassVar[str] = "MaximumLengthValidator"

    def is_satisfied_by(self, value: Any) -> bool:
        return value is None or len(value) <= self.max_length

    def placeholders(self, value: Any) -> dict[str, Any]:
        return {"MaxLength": self.max_length, "TotalLength": len(value)}


@dataclass(frozen=True, slots=True)
class MinimumLength(Rule):
    min_length: int

    code: ClassVar[str] = "MinimumLengthValidator"

    def is_satisfied_by(self, value: Any) -> bool:
        return value is None or len(value) >= self.min_length

    def placeholders(self, value: Any) -> dict[str, Any]:
        return {"MinLength": self.min_length, "TotalLength": len(value)}


@dataclass(frozen=True, slots=True)
class EmailAddress(Rule):
    """Exactly one '@', neither first nor last."""

    code: ClassVar[str] = "EmailValidator"

    def is_satisfied_by(self, value: Any) -> bool:
        if value is None:
            return True
        at = value.find("@")
        return 0 < at < len(value) - 1 and at == value.rfind("@")


@dataclass(frozen=True, slots=True)
class LessThanOrEqualTo(Rule):
    """Compares against a fixed bound, or a zero-argument callable evaluated per check."""

    bound: Any

    code: ClassVar[str] = "LessThanOrEqualValidator"

    def comparison_value(self) -> Any:
        return self.bound() if callable(self.bound) else self.bound

    def is_satisfied_by(self, value: Any) -> bool:
        return value is None or value <= self.comparison_value()

    def placeholders(self, value: Any) -> dict[str, Any]:
        bound = self.comparison_value()
        return {"ComparisonValue": bound.isoformat() if isinstance(bound, datetime) else bound}


@dataclass(frozen=True, slots=True)
class Must(Rule):
    predicate: Callable[[Any], bool]

    code: ClassVar[str] = "PredicateValidator"

    def is_satisfied_by(self, value: Any) -> bool:
        return bool(self.predicate(value))


@dataclass(frozen=True, slots=True)
class WithMessage(Rule):
    """Wrapper to override a rule's message; the code is kept."""
    rule: Rule
    template: str

    def is_satisfied_by(self, value: Any) -> bool:
        return self.rule.is_satisfied_by(value)

    def placeholders(self, value: Any) -> dict[str, Any]:
        return self.rule.placeholders(value)

    def message(self, value: Any, property_name: str, messages: MessageCatalog) -> str:
        return render(self.template, PropertyName=property_name, **self.placeholders(value))

    def check(
        self, value: Any, *, property_name: str, messages: MessageCatalog = ENGLISH
    ) -> ValidationFailure | None:
        if self.is_satisfied_by(value):
            return None
        return ValidationFailure(
            property_name=property_name,
            code=self.rule.code,
            message=self.message(value, property_name, messages),
            attempted_value=value,
        )


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Ordered rules applied to a single value. Every rule runs."""
    rules: tuple[Rule, ...]

    def __init__(self, *rules: Rule):
        object.__setattr__(self, "rules", tuple(rules))

    def including(self, other: RuleSet) -> RuleSet:
        return RuleSet(*self.rules, *other.rules)

    def validate(
        self, value: Any, *, property_name: str, messages: MessageCatalog = ENGLISH
    ) -> ValidationResult:
        failures = []
        for rule in self.rules:
            failure = rule.check(value, property_name=property_name, messages=messages)
            if failure is not None:
                failures.append(failure)
        return ValidationResult(tuple(failures))

    def validate_and_raise(
        self, value: Any, *, property_name: str, messages: MessageCatalog = ENGLISH
    ) -> None:
        result = self.validate(value, property_name=property_name, messages=messages)
        if not result.is_valid:
            raise ValidationError(result.failures)
