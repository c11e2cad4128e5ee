"""Self-validating value objects.

Each value object wraps one primitive (or, for ``PasswordHash``, a pair) and
checks its rules in the constructor, so an instance that exists is valid.
They are frozen and compare by value; ``.value`` returns the primitive.

Passing None, or a primitive of the wrong type, is a caller bug and raises
``PreconditionError`` before any rule runs. Rule violations raise
``ValidationError``.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from core.errors.exceptions import PreconditionError
from core.validation import (
    ENGLISH,
    EmailAddress,
    LessThanOrEqualTo,
    MaximumLength,
    MinimumLength,
    Must,
    NotEmpty,
    RuleSet,
)

_DEFAULT: Any = object()


def _require(value: Any, expected: type, owner: str) -> None:
    if value is None:
        raise PreconditionError(f"{owner} requires a value, got None")
    if not isinstance(value, expected):
        raise PreconditionError(f"{owner} requires {expected.__name__}, got {type(value).__name__}")


class ValueObject:
    __slots__ = ()

    validator: ClassVar[RuleSet] = RuleSet()

    def _check(self, value: Any, property_name: str | None) -> None:
        type(self).validator.validate_and_raise(
            value, property_name=property_name or type(self).__name__, messages=ENGLISH
        )


@dataclass(frozen=True, slots=True, init=False)
class Id(ValueObject):
    """Entity identifier. ``Id()`` generates a random UUID4 string."""
    value: str

    MAX_LENGTH: ClassVar[int] = 255
    validator: ClassVar[RuleSet] = RuleSet(NotEmpty(), MaximumLength(MAX_LENGTH))

    def __init__(self, value: str = _DEFAULT, *, property_name: str | None = None):
        if value is _DEFAULT:
            value = str(uuid.uuid4())
        _require(value, str, "Id")
        self._check(value, property_name)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, init=False)
class Email(ValueObject):
    """Email address, stored lowercased."""
    value: str

    MAX_LENGTH: ClassVar[int] = 320
    validator: ClassVar[RuleSet] = RuleSet(NotEmpty(), MaximumLength(MAX_LENGTH), EmailAddress())

    @staticmethod
    def normalize(value: str | None) -> str | None:
        return None if value is None else value.lower()

    def __init__(self, value: str, *, property_name: str | None = None):
        _require(value, str, "Email")
        value = self.normalize(value)
        self._check(value, property_name)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


class DateTimeKind(Enum):
    UTC = "utc"
    LOCAL = "local"
    UNSPECIFIED = "unspecified"


def datetime_kind(value: datetime) -> DateTimeKind:
    if value.tzinfo is None or value.utcoffset() is None:
        return DateTimeKind.UNSPECIFIED
    if value.tzinfo is timezone.utc:
        return DateTimeKind.UTC
    return DateTimeKind.LOCAL


def convert_to_utc(value: datetime) -> datetime:
    """Tag or convert ``value`` so that its tzinfo is ``timezone.utc``.

    Naive values are assumed to already be UTC and only get the tag; aware
    values in any other zone are converted to the same instant in UTC.
    """
    _require(value, datetime, "UtcDateTime")
    kind = datetime_kind(value)
    if kind is DateTimeKind.UTC:
        return value
    if kind is DateTimeKind.LOCAL:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=timezone.utc)


def is_utc(value: datetime) -> bool:
    return datetime_kind(value) is DateTimeKind.UTC


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True, init=False)
class UtcDateTime(ValueObject):
    """Timestamp whose tzinfo is always ``timezone.utc``. ``UtcDateTime()`` is now."""
    value: datetime

    validator: ClassVar[RuleSet] = RuleSet(Must(is_utc).with_message("must be UTC."))

    def __init__(
        self,
        value: datetime = _DEFAULT,
        *,
        should_validate: bool = True,
        property_name: str | None = None,
    ):
        if value is _DEFAULT:
            value = utc_now()
        value = convert_to_utc(value)
        if should_validate:
            UtcDateTime.validator.validate_and_raise(
                value, property_name=property_name or type(self).__name__, messages=ENGLISH
            )
        object.__setattr__(self, "value", value)

    def isoformat(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True, slots=True, init=False)
class CreatedAt(UtcDateTime):
    """Creation timestamp. Must not lie in the future when constructed."""

    validator: ClassVar[RuleSet] = UtcDateTime.validator.including(
        RuleSet(LessThanOrEqualTo(utc_now).with_message("cannot be in the future."))
    )

    def __init__(self, value: datetime = _DEFAULT, *, property_name: str | None = None):
        UtcDateTime.__init__(self, value, should_validate=False)
        self._check(self.value, property_name)


@dataclass(frozen=True, slots=True, init=False, repr=False)
class Password(ValueObject):
    """Plaintext password from a request. Never persisted or logged."""
    value: str

    MIN_LENGTH: ClassVar[int] = 6
    MAX_LENGTH: ClassVar[int] = 1000
    validator: ClassVar[RuleSet] = RuleSet(NotEmpty(), MinimumLength(MIN_LENGTH), MaximumLength(MAX_LENGTH))

    def __init__(self, value: str, *, property_name: str | None = None):
        _require(value, str, "Password")
        self._check(value, property_name)
        object.__setattr__(self, "value", value)

    def __repr__(self) -> str:
        return "Password('********')"

    def hash(self) -> PasswordHash:
        return PasswordHash.derive(self.value)


@dataclass(frozen=True, slots=True, init=False, repr=False)
class PasswordHash(ValueObject):
    """PBKDF2-HMAC-SHA256 digest and its salt, both base64 encoded."""
    hash: str
    salt: str

    SALT_BYTES: ClassVar[int] = 16
    HASH_BYTES: ClassVar[int] = 32
    ITERATIONS: ClassVar[int] = 100_000
    # base64 of 32 bytes is 44 chars, of 16 bytes 24 chars; headroom of 10.
    HASH_MAX_LENGTH: ClassVar[int] = 54
    SALT_MAX_LENGTH: ClassVar[int] = 34

    hash_validator: ClassVar[RuleSet] = RuleSet(NotEmpty(), MaximumLength(HASH_MAX_LENGTH))
    salt_validator: ClassVar[RuleSet] = RuleSet(NotEmpty(), MaximumLength(SALT_MAX_LENGTH))

    def __init__(self, hash: str, salt: str):
        _require(hash, str, "PasswordHash.hash")
        _require(salt, str, "PasswordHash.salt")
        result = self.hash_validator.validate(hash, property_name="Hash").merge(
            self.salt_validator.validate(salt, property_name="Salt")
        )
        result.raise_if_invalid()
        object.__setattr__(self, "hash", hash)
        object.__setattr__(self, "salt", salt)

    @classmethod
    def _digest(cls, plaintext: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", plaintext.encode("utf-8"), salt, cls.ITERATIONS, dklen=cls.HASH_BYTES)

    @classmethod
    def derive(cls, plaintext: str) -> PasswordHash:
        _require(plaintext, str, "PasswordHash.derive")
        salt = secrets.token_bytes(cls.SALT_BYTES)
        digest = cls._digest(plaintext, salt)
        instance = object.__new__(cls)
        object.__setattr__(instance, "hash", base64.b64encode(digest).decode("ascii"))
        object.__setattr__(instance, "salt", base64.b64encode(salt).decode("ascii"))
        return instance

    def verify(self, plaintext: str) -> bool:
        salt = base64.b64decode(self.salt)
        expected = base64.b64decode(self.hash)
        return hmac.compare_digest(self._digest(plaintext, salt), expected)

    @property
    def value(self) -> tuple[str, str]:
        return self.hash, self.salt

    def __composite_values__(self) -> tuple[str, str]:
        return self.hash, self.salt

    def __repr__(self) -> str:
        return "PasswordHash('********')"
