"""Request validation gate.

Runs the registered validator against a handler's request object before the
handler executes. Invalid requests are answered with a 400 error envelope and
the handler is never called.
"""
import functools
from typing import Any, Awaitable, Callable, Iterable

from core.errors.exceptions import PreconditionError
from core.responses import ErrorWithDetailsResponse, bad_request_response

from .request import RequestValidator

_MISSING = object()


class RequestValidationFilter:
    """Validation stage in front of one endpoint."""

    __slots__ = ("_request_type", "_validator")

    def __init__(self, request_type: type, validator: RequestValidator | None = None):
        self._request_type = request_type
        self._validator = validator

    @property
    def request_type(self) -> type:
        return self._request_type

    @property
    def validator(self) -> RequestValidator | None:
        return self._validator

    def find_request(self, arguments: Iterable[Any]) -> Any:
        """First argument that is an instance of the request type."""
        request = next((arg for arg in arguments if isinstance(arg, self._request_type)), _MISSING)
        if request is _MISSING:
            raise PreconditionError(
                f"No argument of type {self._request_type.__name__} was passed to the handler"
            )
        return request

    async def invoke(self, arguments: Iterable[Any], call_next: Callable[[], Awaitable[Any]]) -> Any:
        if self._validator is None:
            return await call_next()

        request = self.find_request(arguments)
        result = await self._validator.validate_async(request)
        if not result.is_valid:
            return bad_request_response(ErrorWithDetailsResponse.from_validation_result(result))
        return await call_next()


def with_request_validation(
    handler: Callable[..., Awaitable[Any]],
    request_type: type,
    validator: RequestValidator | None,
) -> Callable[..., Awaitable[Any]]:
    """Wrap an async endpoint with a ``RequestValidationFilter``.

    The wrapper keeps the handler's signature, so FastAPI still sees the
    original parameters and dependencies.
    """
    gate = RequestValidationFilter(request_type, validator)

    @functools.wraps(handler)
    async def wrapper(*args, **kwargs):
        return await gate.invoke([*args, *kwargs.values()], lambda: handler(*args, **kwargs))

    wrapper.request_filter = gate
    return wrapper
