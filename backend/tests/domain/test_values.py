"""Tests for core/domain/values.py."""

import re

import pytest

from core.domain.values import Email, Id, Password, PasswordHash
from core.errors import PreconditionError
from core.validation import ValidationError


UUID4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def codes(exc_info) -> list[str]:
    return [f.code for f in exc_info.value.failures]


class TestId:
    def test_default_is_uuid4(self):
        """Id() should generate a UUID4 string."""
        assert UUID4.match(Id().value)

    def test_defaults_are_unique(self):
        """A thousand generated ids should all differ."""
        assert len({Id().value for _ in range(1000)}) == 1000

    def test_value_semantics(self):
        """Ids built from the same string should be equal and hash alike."""
        assert Id("abc") == Id("abc")
        assert hash(Id("abc")) == hash(Id("abc"))
        assert Id("abc") != Id("abd")

    def test_max_length_accepted(self):
        assert Id("a" * 255).value == "a" * 255

    def test_too_long_rejected(self):
        """256 characters should fail with the maximum length rule."""
        with pytest.raises(ValidationError) as exc_info:
            Id("a" * 256)
        assert codes(exc_info) == ["MaximumLengthValidator"]
        assert exc_info.value.failures[0].message == (
            "The length must be 255 characters or fewer. You entered 256 characters."
        )

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_rejected(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            Id(raw)
        assert codes(exc_info) == ["NotEmptyValidator"]
        assert exc_info.value.failures[0].message == "Must not be empty."

    def test_none_is_precondition_error(self):
        """None is a caller bug, not a validation failure."""
        with pytest.raises(PreconditionError):
            Id(None)

    def test_immutable(self):
        identifier = Id("abc")
        with pytest.raises(AttributeError):
            identifier.value = "other"

    def test_property_name_defaults_to_type(self):
        with pytest.raises(ValidationError) as exc_info:
            Id("")
        assert exc_info.value.failures[0].property_name == "Id"

    def test_property_name_override(self):
        with pytest.raises(ValidationError) as exc_info:
            Id("", property_name="UserId")
        assert exc_info.value.failures[0].property_name == "UserId"


class TestEmail:
    def test_lowercases(self):
        assert Email("User@Example.COM").value == "user@example.com"

    def test_normalization_idempotent(self):
        """Re-wrapping a normalized email should not change it."""
        once = Email("MiXeD@Case.org")
        assert Email(once.value) == once

    @pytest.mark.parametrize("raw", ["user@domain", "user<>@example.com", "a@b"])
    def test_loose_grammar_accepts(self, raw):
        assert Email(raw).value == raw.lower()

    @pytest.mark.parametrize("raw", ["user@@example.com", "@example.com", "user@", "no-at-sign"])
    def test_invalid_rejected(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            Email(raw)
        assert codes(exc_info) == ["EmailValidator"]
        assert exc_info.value.failures[0].message == "Must be a valid email address."

    def test_empty_fails_both_rules(self):
        """An empty string is both empty and not an email."""
        with pytest.raises(ValidationError) as exc_info:
            Email("")
        assert codes(exc_info) == ["NotEmptyValidator", "EmailValidator"]

    def test_length_limit(self):
        local = "a" * 64
        ok = local + "@" + "b" * (320 - 65)
        assert len(Email(ok).value) == 320
        with pytest.raises(ValidationError) as exc_info:
            Email(ok + "c")
        assert codes(exc_info) == ["MaximumLengthValidator"]

    def test_length_counts_code_points(self):
        """Lengths are measured in code points, so an emoji counts once."""
        raw = "a@" + "b" * 317 + "\U0001F31F"
        assert len(raw) == 320
        assert Email(raw).value == raw

    def test_non_string_is_precondition_error(self):
        with pytest.raises(PreconditionError):
            Email(42)


class TestPassword:
    def test_accepts_reasonable_password(self):
        assert Password("secret1").value == "secret1"

    def test_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            Password("12345")
        assert codes(exc_info) == ["MinimumLengthValidator"]
        assert exc_info.value.failures[0].message == (
            "The length must be at least 6 characters. You entered 5 characters."
        )

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            Password("x" * 1001)
        assert codes(exc_info) == ["MaximumLengthValidator"]

    def test_repr_hides_value(self):
        assert "hunter22" not in repr(Password("hunter22"))


class TestPasswordHash:
    def test_derive_produces_base64_pair(self):
        hashed = PasswordHash.derive("correct horse")
        assert len(hashed.hash) == 44
        assert len(hashed.salt) == 24

    def test_derive_salts_each_time(self):
        assert PasswordHash.derive("same") != PasswordHash.derive("same")

    def test_verify(self):
        hashed = PasswordHash.derive("correct horse")
        assert hashed.verify("correct horse")
        assert not hashed.verify("wrong horse")

    def test_rebuild_from_parts(self):
        """Rebuilding from the stored strings should give an equal value."""
        hashed = PasswordHash.derive("pw-123456")
        rebuilt = PasswordHash(hashed.hash, hashed.salt)
        assert rebuilt == hashed
        assert rebuilt.verify("pw-123456")

    def test_parts_validated(self):
        with pytest.raises(ValidationError) as exc_info:
            PasswordHash("", "s" * 35)
        failures = exc_info.value.failures
        assert [(f.property_name, f.code) for f in failures] == [
            ("Hash", "NotEmptyValidator"),
            ("Salt", "MaximumLengthValidator"),
        ]

    def test_none_part_is_precondition_error(self):
        with pytest.raises(PreconditionError):
            PasswordHash(None, "salt")

    def test_password_hash_shortcut(self):
        hashed = Password("abcdef").hash()
        assert hashed.verify("abcdef")
