"""Validators for inbound request objects.

A request validator declares one ``FieldRule`` per request property. It is
built with the message catalog chosen at startup and registered against its
request type in a ``ValidatorRegistry``.
"""
from __future__ import annotations

import asyncio
from abc import ABC
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, TypeVar

from core.logging import validation_logger

from .errors import ValidationResult
from .messages import ENGLISH, MessageCatalog
from .validators import RuleSet

T = TypeVar("T")

log = validation_logger()


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Rules for one request property, reported under ``name``."""
    name: str
    getter: Callable[[Any], Any]
    rule_set: RuleSet


class RequestValidator(ABC, Generic[T]):
    """Base class for request validators.

    Subclasses set ``field_rules``. ``validate`` runs every field rule and
    concatenates the failures in declaration order.
    """

    field_rules: ClassVar[tuple[FieldRule, ...]] = ()

    __slots__ = ("_messages",)

    def __init__(self, messages: MessageCatalog = ENGLISH):
        self._messages = messages

    @property
    def messages(self) -> MessageCatalog:
        return self._messages

    def validate(self, request: T) -> ValidationResult:
        result = ValidationResult()
        for rule in self.field_rules:
            result = result.merge(
                rule.rule_set.validate(rule.getter(request), property_name=rule.name, messages=self._messages)
            )
        return result

    async def validate_async(self, request: T) -> ValidationResult:
        # Yield once so a cancelled request stops here instead of reaching the handler.
        await asyncio.sleep(0)
        result = self.validate(request)
        if not result.is_valid:
            log.info(
                "request_invalid",
                request_type=type(request).__name__,
                fields=sorted({f.property_name for f in result.failures}),
                failure_count=len(result.failures),
            )
        return result


class ValidatorRegistry:
    """Request type -> validator class, filled by explicit ``register`` calls."""

    __slots__ = ("_messages", "_validators")

    def __init__(self, messages: MessageCatalog = ENGLISH):
        self._messages = messages
        self._validators: dict[type, type[RequestValidator]] = {}

    @property
    def messages(self) -> MessageCatalog:
        return self._messages

    def register(self, request_type: type, validator_type: type[RequestValidator]) -> ValidatorRegistry:
        if request_type in self._validators:
            raise ValueError(f"A validator is already registered for {request_type.__name__}")
        self._validators[request_type] = validator_type
        return self

    def resolve(self, request_type: type | None) -> RequestValidator | None:
        if request_type is None:
            return None
        validator_type = self._validators.get(request_type)
        if validator_type is None:
            return None
        return validator_type(self._messages)

    def __contains__(self, request_type: type) -> bool:
        return request_type in self._validators
