"""Domain building blocks: value objects and the entity base."""
from .values import (
    CreatedAt,
    DateTimeKind,
    Email,
    Id,
    Password,
    PasswordHash,
    UtcDateTime,
    ValueObject,
    convert_to_utc,
    datetime_kind,
    is_utc,
    utc_now,
)

__all__ = [
    "CreatedAt",
    "DateTimeKind",
    "Email",
    "Id",
    "Password",
    "PasswordHash",
    "UtcDateTime",
    "ValueObject",
    "convert_to_utc",
    "datetime_kind",
    "is_utc",
    "utc_now",
]
