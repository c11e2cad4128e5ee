"""Validation rules, request validators and the request validation gate.

Usage:
    from core.validation import RuleSet, NotEmpty, MaximumLength

    rules = RuleSet(NotEmpty(), MaximumLength(255))
    result = rules.validate(value, property_name="Id")
    if not result.is_valid:
        ...
"""
from .errors import ValidationError, ValidationFailure, ValidationResult
from .messages import CATALOGS, DEFAULT_LANGUAGE, ENGLISH, MessageCatalog, catalog_for, render
from .validators import (
    EmailAddress,
    LessThanOrEqualTo,
    MaximumLength,
    MinimumLength,
    Must,
    NotEmpty,
    Rule,
    RuleSet,
    WithMessage,
)
from .request import FieldRule, RequestValidator, ValidatorRegistry
from .gate import RequestValidationFilter, with_request_validation

__all__ = [
    # Failures
    "ValidationError",
    "ValidationFailure",
    "ValidationResult",
    # Messages
    "CATALOGS",
    "DEFAULT_LANGUAGE",
    "ENGLISH",
    "MessageCatalog",
    "catalog_for",
    "render",
    # Rules
    "EmailAddress",
    "LessThanOrEqualTo",
    "MaximumLength",
    "MinimumLength",
    "Must",
    "NotEmpty",
    "Rule",
    "RuleSet",
    "WithMessage",
    # Requests
    "FieldRule",
    "RequestValidator",
    "ValidatorRegistry",
    "RequestValidationFilter",
    "with_request_validation",
]
