"""Tests for core/validation rules, rule sets and message catalogs."""

from datetime import datetime, timedelta, timezone

import pytest

from core.validation import (
    ENGLISH,
    EmailAddress,
    LessThanOrEqualTo,
    MaximumLength,
    MessageCatalog,
    MinimumLength,
    Must,
    NotEmpty,
    RuleSet,
    ValidationError,
    catalog_for,
)


class TestRules:
    @pytest.mark.parametrize("value", [None, "", "  \t", [], {}])
    def test_not_empty_fails(self, value):
        assert not NotEmpty().is_satisfied_by(value)

    @pytest.mark.parametrize("value", ["x", [0], 0])
    def test_not_empty_passes(self, value):
        assert NotEmpty().is_satisfied_by(value)

    def test_length_rules_skip_none(self):
        assert MaximumLength(1).is_satisfied_by(None)
        assert MinimumLength(10).is_satisfied_by(None)
        assert EmailAddress().is_satisfied_by(None)

    def test_less_than_or_equal_with_callable_bound(self):
        now = datetime.now(timezone.utc)
        rule = LessThanOrEqualTo(lambda: now)
        assert rule.is_satisfied_by(now)
        assert not rule.is_satisfied_by(now + timedelta(seconds=1))

    def test_less_than_or_equal_message(self):
        failure = LessThanOrEqualTo(10).check(11, property_name="Count")
        assert failure.code == "LessThanOrEqualValidator"
        assert failure.message == "Must be less than or equal to '10'."

    def test_must_uses_predicate_code(self):
        failure = Must(lambda v: v > 0).check(-1, property_name="Amount")
        assert failure.code == "PredicateValidator"
        assert failure.message == "The specified condition was not met."

    def test_with_message_keeps_code(self):
        rule = MaximumLength(2).with_message("{PropertyName} too long ({TotalLength})")
        failure = rule.check("abc", property_name="Name")
        assert failure.code == "MaximumLengthValidator"
        assert failure.message == "Name too long (3)"

    def test_check_returns_none_when_satisfied(self):
        assert NotEmpty().check("ok", property_name="X") is None


class TestRuleSet:
    def test_runs_every_rule(self):
        rules = RuleSet(NotEmpty(), EmailAddress(), MaximumLength(0))
        result = rules.validate("", property_name="Email")
        assert [f.code for f in result.failures] == ["NotEmptyValidator", "EmailValidator"]
        assert not result.is_valid

    def test_valid_result(self):
        assert RuleSet(NotEmpty()).validate("x", property_name="X").is_valid

    def test_validate_and_raise(self):
        with pytest.raises(ValidationError) as exc_info:
            RuleSet(MinimumLength(3)).validate_and_raise("ab", property_name="Code")
        assert exc_info.value.field_errors["Code"][0].code == "MinimumLengthValidator"

    def test_including_appends(self):
        combined = RuleSet(NotEmpty()).including(RuleSet(MaximumLength(3)))
        assert len(combined.rules) == 2

    def test_attempted_value_recorded(self):
        failure = RuleSet(MaximumLength(1)).validate("ab", property_name="X").failures[0]
        assert failure.attempted_value == "ab"
        assert failure.property_name == "X"


class TestMessageCatalog:
    def test_english_templates(self):
        assert ENGLISH.format("NotEmptyValidator") == "Must not be empty."
        assert ENGLISH.format("MaximumLengthValidator", MaxLength=5, TotalLength=7) == (
            "The length must be 5 characters or fewer. You entered 7 characters."
        )

    def test_unknown_code_falls_back(self):
        assert ENGLISH.format("NoSuchValidator") == "The specified condition was not met."

    def test_missing_placeholder_left_in_place(self):
        assert ENGLISH.format("MinimumLengthValidator", MinLength=3) == (
            "The length must be at least 3 characters. You entered {TotalLength} characters."
        )

    @pytest.mark.parametrize("language", ["en", "en-US", "EN_gb", "", None, "xx"])
    def test_catalog_for_falls_back_to_english(self, language):
        assert catalog_for(language) is ENGLISH

    def test_custom_catalog_used_by_rules(self):
        shouty = MessageCatalog("en", {"NotEmptyValidator": "{PropertyName} IS REQUIRED"})
        failure = NotEmpty().check("", property_name="Email", messages=shouty)
        assert failure.message == "Email IS REQUIRED"
