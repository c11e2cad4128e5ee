"""FastAPI Exception Handlers

Renders failures that escape a route handler as response envelopes:

- AppErrorException      -> envelope for the wrapped AppError
- ValidationError        -> 400 ValidationFailed with field details
- RequestValidationError -> 400 ValidationFailed (body could not be parsed)
- DomainError            -> 400 BusinessLogicFailed
- HTTP 404               -> 404 NotFound
- anything else          -> logged with traceback, plain 500
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler as default_http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging import get_logger

from .builders import business_error
from .exceptions import DomainError
from .types import AppError, ErrorType

log = get_logger("bedrock.errors")

MISSING_FIELD_CODE = "NotNullValidator"


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when an AppError must leave code that doesn't return a Result,
    such as a FastAPI dependency.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def _envelope_for(error: AppError):
    from core.responses import ErrorContent, ErrorResponse, ErrorWithDetailsResponse, FieldErrors

    if error.field is None:
        return ErrorResponse(message=error.message, type=error.error_type)
    return ErrorWithDetailsResponse(
        message=error.message,
        type=error.error_type,
        errors=[FieldErrors(field=error.field, errors=[ErrorContent(code=error.code, message=error.message)])],
    )


def result_to_response(error: AppError) -> JSONResponse:
    """Convert AppError to an envelope response."""
    status_code = error.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_type=error.error_type.value,
        code=error.code,
        field=error.field,
        message=error.message,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )

    return JSONResponse(status_code=status_code, content=_envelope_for(error).to_wire())


def _location(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) if parts else "Body"


def _failures_from_request_errors(errors):
    from core.validation.errors import ValidationFailure
    from core.validation.messages import ENGLISH

    failures = []
    for err in errors:
        if err.get("type") == "missing":
            code = MISSING_FIELD_CODE
            message = ENGLISH.format(code)
        else:
            code = err.get("type", "value_error")
            message = err.get("msg", "Invalid value.")
        failures.append(ValidationFailure(
            property_name=_location(err.get("loc", ())),
            code=code,
            message=message,
        ))
    return failures


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    return result_to_response(exc.error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render 404s as NotFound envelopes; defer everything else to FastAPI."""
    if exc.status_code != 404:
        return await default_http_exception_handler(request, exc)

    from core.responses import ErrorResponse

    log.warning("route_not_found", path=request.url.path, method=request.method)
    envelope = ErrorResponse(message=str(exc.detail or "Not Found"), type=ErrorType.NOT_FOUND)
    return JSONResponse(status_code=404, content=envelope.to_wire(), headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """The body did not parse into the request model."""
    from core.responses import ErrorWithDetailsResponse

    failures = _failures_from_request_errors(exc.errors())
    log.warning(
        "request_parse_failed",
        path=request.url.path,
        fields=[f.property_name for f in failures],
    )
    envelope = ErrorWithDetailsResponse.from_failures(failures)
    return JSONResponse(status_code=400, content=envelope.to_wire())


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Value objects built inside a handler rejected their input."""
    from core.responses import ErrorWithDetailsResponse
    from core.validation.errors import ValidationError

    if not isinstance(exc, ValidationError):
        raise exc

    log.warning(
        "validation_failed",
        path=request.url.path,
        fields=list(exc.field_errors),
    )
    envelope = ErrorWithDetailsResponse.from_failures(exc.failures)
    return JSONResponse(status_code=400, content=envelope.to_wire())


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """A domain exception nobody attributed to a field."""
    if not isinstance(exc, DomainError):
        raise exc

    error = business_error(exc.message, code=exc.code, origin=request.url.path, cause=exc).error
    return result_to_response(error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Catch-all for programmer errors. No envelope is produced."""
    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on a FastAPI app."""
    from core.validation.errors import ValidationError

    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def raise_error(error: AppError) -> None:
    """Raise AppError as exception.

    Usage:
        if not user:
            raise_error(not_found("User", user_id).error)
    """
    raise AppErrorException(error)


def raise_result(result) -> None:
    """Raise if Result is Err, otherwise return."""
    if result.is_err():
        raise AppErrorException(result.unwrap_err())
