"""Validation message catalogs.

A catalog maps a rule code to a message template with ``{Placeholder}``
slots. The application picks one catalog at startup and hands it to its
validators; nothing here is mutated after import.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_LANGUAGE = "en"

FALLBACK_MESSAGE = "The specified condition was not met."

_ENGLISH = {
    "NotEmptyValidator": "Must not be empty.",
    "NotNullValidator": "Must not be empty.",
    "MaximumLengthValidator": (
        "The length must be {MaxLength} characters or fewer. You entered {TotalLength} characters."
    ),
    "MinimumLengthValidator": (
        "The length must be at least {MinLength} characters. You entered {TotalLength} characters."
    ),
    "EmailValidator": "Must be a valid email address.",
    "LessThanOrEqualValidator": "Must be less than or equal to '{ComparisonValue}'.",
    "PredicateValidator": "The specified condition was not met.",
}


class _Placeholders(dict):
    """Leaves unknown placeholders in place instead of raising KeyError."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def render(template: str, **placeholders: Any) -> str:
    return template.format_map(_Placeholders(placeholders))


@dataclass(frozen=True, slots=True)
class MessageCatalog:
    language: str
    templates: Mapping[str, str] = field(default_factory=dict)

    def template(self, code: str) -> str:
        return self.templates.get(code, FALLBACK_MESSAGE)

    def format(self, code: str, **placeholders: Any) -> str:
        return render(self.template(code), **placeholders)


ENGLISH = MessageCatalog(DEFAULT_LANGUAGE, MappingProxyType(_ENGLISH))

CATALOGS: Mapping[str, MessageCatalog] = MappingProxyType({DEFAULT_LANGUAGE: ENGLISH})


def catalog_for(language: str | None) -> MessageCatalog:
    """Catalog for ``language`` ("en", "en-US", ...), falling back to English."""
    if not language:
        return ENGLISH
    primary = language.replace("_", "-").split("-")[0].lower()
    return CATALOGS.get(primary, ENGLISH)
