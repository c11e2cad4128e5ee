"""Explicit route table.

Routes are declared as data next to their handlers and registered in one
place at startup. Routes that name a request type get the validation gate,
using whatever validator the registry holds for that type.
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from fastapi import APIRouter, FastAPI

from core.logging import api_logger
from core.validation import ValidatorRegistry, with_request_validation

log = api_logger()


@dataclass(frozen=True, slots=True)
class Route:
    method: str
    path: str
    endpoint: Callable[..., Any]
    request_type: type | None = None
    name: str | None = None
    tags: tuple[str, ...] = ()


def register_routes(
    target: FastAPI | APIRouter,
    routes: Iterable[Route],
    validators: ValidatorRegistry,
) -> None:
    for route in routes:
        endpoint = route.endpoint
        validated = False
        if route.request_type is not None:
            validator = validators.resolve(route.request_type)
            endpoint = with_request_validation(endpoint, route.request_type, validator)
            validated = validator is not None
        target.add_api_route(
            route.path,
            endpoint,
            methods=[route.method],
            name=route.name or route.endpoint.__name__,
            tags=list(route.tags),
            response_model=None,
        )
        log.debug("route_registered", method=route.method, path=route.path, validated=validated)
