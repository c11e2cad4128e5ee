"""Error builders.

Ergonomic constructors that wrap an ``AppError`` in ``Err`` so services can
``return not_found("User", user_id)`` directly.
"""
from .types import AppError, ErrorContext, ErrorType, Err


def not_found(
    entity: str,
    id: object | None = None,
    origin: str = "",
) -> Err[AppError]:
    msg = f"{entity} was not found."
    if id is not None:
        msg = f"{entity} '{id}' was not found."
    return Err(AppError(
        error_type=ErrorType.NOT_FOUND,
        message=msg,
        code="NotFound",
        context=ErrorContext(origin=origin),
        metadata={"entity": entity, "entity_id": None if id is None else str(id)},
    ))


def business_error(
    message: str,
    *,
    code: str,
    field: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create business logic error."""
    return Err(AppError(
        error_type=ErrorType.BUSINESS_LOGIC_FAILED,
        message=message,
        code=code,
        field=field,
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=cause,
    ))
