"""Tests for core/responses envelopes and failure grouping."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.errors import DomainError, ErrorType
from core.responses import (
    ErrorResponse,
    ErrorWithDetailsResponse,
    SuccessResponse,
    SuccessResponseWithData,
    SuccessType,
    WireModel,
    group_failures,
)
from core.validation import ValidationFailure, ValidationResult


class Payload(WireModel):
    id: str


class SeatTaken(DomainError):
    default_message = "Seat already taken."


class TestGroupFailures:
    def test_groups_in_first_seen_order(self):
        failures = [
            ValidationFailure("Name", "A", "a"),
            ValidationFailure("Name", "B", "b"),
            ValidationFailure("Email", "C", "c"),
        ]
        groups = group_failures(failures)
        assert [g.field for g in groups] == ["Name", "Email"]
        assert [e.code for e in groups[0].errors] == ["A", "B"]
        assert [e.code for e in groups[1].errors] == ["C"]

    def test_interleaved_fields_keep_inner_order(self):
        failures = [
            ValidationFailure("B", "1", "m"),
            ValidationFailure("A", "2", "m"),
            ValidationFailure("B", "3", "m"),
        ]
        groups = group_failures(failures)
        assert [(g.field, [e.code for e in g.errors]) for g in groups] == [("B", ["1", "3"]), ("A", ["2"])]

    def test_empty(self):
        assert group_failures([]) == []


class TestSuccessEnvelopes:
    def test_success_with_data_wire_format(self):
        envelope = SuccessResponseWithData[Payload](
            message="Registered user successfully.",
            type=SuccessType.CREATE_SUCCESS,
            data=Payload(id="abc"),
        )
        assert envelope.to_wire() == {
            "IsSuccess": True,
            "Type": "CreateSuccess",
            "Message": "Registered user successfully.",
            "Data": {"Id": "abc"},
        }

    def test_plain_success(self):
        wire = SuccessResponse(message="ok", type=SuccessType.RETRIEVE_DATA_SUCCESS).to_wire()
        assert wire["IsSuccess"] is True
        assert wire["Type"] == "RetrieveDataSuccess"

    def test_envelopes_are_frozen(self):
        envelope = SuccessResponse(message="ok", type=SuccessType.CREATE_SUCCESS)
        with pytest.raises(PydanticValidationError):
            envelope.message = "changed"


class TestErrorEnvelopes:
    def test_error_response_has_no_errors_key(self):
        wire = ErrorResponse(message="User 'x' was not found.", type=ErrorType.NOT_FOUND).to_wire()
        assert wire == {"IsSuccess": False, "Type": "NotFound", "Message": "User 'x' was not found."}

    def test_from_validation_result(self):
        result = ValidationResult((
            ValidationFailure("Email", "EmailValidator", "Must be a valid email address."),
        ))
        wire = ErrorWithDetailsResponse.from_validation_result(result).to_wire()
        assert wire == {
            "IsSuccess": False,
            "Type": "ValidationFailed",
            "Message": "Validation Failed.",
            "Errors": [
                {
                    "Field": "Email",
                    "Errors": [{"Code": "EmailValidator", "Message": "Must be a valid email address."}],
                }
            ],
        }

    def test_from_exception(self):
        wire = ErrorWithDetailsResponse.from_exception(
            "Seat", ErrorType.BUSINESS_LOGIC_FAILED, SeatTaken()
        ).to_wire()
        assert wire["Type"] == "BusinessLogicFailed"
        assert wire["Message"] == "Seat already taken."
        assert wire["Errors"] == [
            {"Field": "Seat", "Errors": [{"Code": "SeatTaken", "Message": "Seat already taken."}]}
        ]

    def test_is_success_cannot_be_set(self):
        """IsSuccess is derived from the envelope kind, not accepted as input."""
        envelope = ErrorResponse(message="m", type=ErrorType.NOT_FOUND, is_success=True)
        assert envelope.is_success is False


class TestDomainError:
    def test_code_defaults_to_class_name(self):
        assert SeatTaken().code == "SeatTaken"

    def test_custom_code_and_message(self):
        error = SeatTaken("Nope.", code="SEAT")
        assert error.code == "SEAT"
        assert str(error) == "Nope."
