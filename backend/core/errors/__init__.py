"""Error handling.

Expected failures are returned as ``Result`` values; contract violations and
business-rule violations are raised.

Usage:
    from core.errors import Ok, Result, AppError, not_found

    async def get_user(user_id: Id) -> Result[User, AppError]:
        user = await session.get(User, user_id)
        if user is None:
            return not_found("User", user_id, origin="users")
        return Ok(user)

    match await get_user(user_id):
        case Ok(user):
            ...
        case Err(error):
            return result_to_response(error)
"""
from .types import (
    AppError,
    Err,
    ErrorContext,
    ErrorType,
    Ok,
    Result,
)

from .exceptions import DomainError, PreconditionError

from .builders import (
    business_error,
    not_found,
)

from .handlers import (
    AppErrorException,
    raise_error,
    raise_result,
    register_error_handlers,
    result_to_response,
)

__all__ = [
    # Core types
    "AppError",
    "Err",
    "ErrorContext",
    "ErrorType",
    "Ok",
    "Result",
    # Exceptions
    "DomainError",
    "PreconditionError",
    # Builders
    "business_error",
    "not_found",
    # Handlers
    "AppErrorException",
    "raise_error",
    "raise_result",
    "register_error_handlers",
    "result_to_response",
]
