"""Uniform success/error response envelopes."""
from .envelopes import (
    VALIDATION_FAILED_MESSAGE,
    BaseResponse,
    ErrorContent,
    ErrorResponse,
    ErrorWithDetailsResponse,
    FieldErrors,
    SuccessResponse,
    SuccessResponseWithData,
    SuccessType,
    WireModel,
    group_failures,
)
from .http import bad_request_response, created_response, not_found_response, ok_response

__all__ = [
    "VALIDATION_FAILED_MESSAGE",
    "BaseResponse",
    "ErrorContent",
    "ErrorResponse",
    "ErrorWithDetailsResponse",
    "FieldErrors",
    "SuccessResponse",
    "SuccessResponseWithData",
    "SuccessType",
    "WireModel",
    "group_failures",
    "bad_request_response",
    "created_response",
    "not_found_response",
    "ok_response",
]
