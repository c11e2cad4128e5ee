"""Response envelopes.

Every API response is wrapped in one of these models. They serialize with
PascalCase keys and carry a derived ``IsSuccess`` flag plus a ``Type``
discriminator, so clients can branch without looking at the status code.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Iterable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_pascal

from core.errors.types import ErrorType

if TYPE_CHECKING:
    from core.errors.exceptions import DomainError
    from core.validation.errors import ValidationFailure, ValidationResult

DataT = TypeVar("DataT")

VALIDATION_FAILED_MESSAGE = "Validation Failed."


class SuccessType(str, Enum):
    RETRIEVE_DATA_SUCCESS = "RetrieveDataSuccess"
    CREATE_SUCCESS = "CreateSuccess"


class WireModel(BaseModel):
    """Base for anything rendered onto the wire."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class BaseResponse(WireModel):
    SUCCESS: ClassVar[bool] = False

    message: str = ""

    @computed_field(alias="IsSuccess")
    @property
    def is_success(self) -> bool:
        return self.SUCCESS


class SuccessResponse(BaseResponse):
    SUCCESS: ClassVar[bool] = True

    type: SuccessType


class SuccessResponseWithData(SuccessResponse, Generic[DataT]):
    data: DataT


class ErrorResponse(BaseResponse):
    type: ErrorType


class ErrorContent(WireModel):
    code: str
    message: str


class FieldErrors(WireModel):
    field: str
    errors: list[ErrorContent] = Field(default_factory=list)


def group_failures(failures: Iterable[ValidationFailure]) -> list[FieldErrors]:
    """Group failures by property name.

    Groups appear in the order their field was first seen; failures keep their
    original order inside a group.
    """
    grouped: dict[str, list[ErrorContent]] = {}
    for failure in failures:
        grouped.setdefault(failure.property_name, []).append(
            ErrorContent(code=failure.code, message=failure.message)
        )
    return [FieldErrors(field=name, errors=errors) for name, errors in grouped.items()]


class ErrorWithDetailsResponse(ErrorResponse):
    errors: list[FieldErrors] = Field(default_factory=list)

    @classmethod
    def from_failures(cls, failures: Iterable[ValidationFailure]) -> ErrorWithDetailsResponse:
        return cls(
            message=VALIDATION_FAILED_MESSAGE,
            type=ErrorType.VALIDATION_FAILED,
            errors=group_failures(failures),
        )

    @classmethod
    def from_validation_result(cls, result: ValidationResult) -> ErrorWithDetailsResponse:
        return cls.from_failures(result.failures)

    @classmethod
    def from_exception(
        cls, field: str, error_type: ErrorType, exc: DomainError
    ) -> ErrorWithDetailsResponse:
        """Single-group envelope for a domain exception attributed to one field."""
        return cls(
            message=exc.message,
            type=error_type,
            errors=[FieldErrors(field=field, errors=[ErrorContent(code=exc.code, message=exc.message)])],
        )
