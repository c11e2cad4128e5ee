"""Users API

Registration and lookup. Request bodies are checked by the validation gate
before the handlers run, so handlers only see well-formed input.
"""
from datetime import datetime
from operator import attrgetter

from fastapi import Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.domain.values import Email, Id, Password
from core.errors import Err, ErrorType, Ok
from core.routing import Route
from core.responses import (
    ErrorResponse,
    ErrorWithDetailsResponse,
    SuccessResponseWithData,
    SuccessType,
    WireModel,
    bad_request_response,
    created_response,
    not_found_response,
    ok_response,
)
from core.validation import FieldRule, RequestValidator
from engines.users import DuplicatedUserEmailError, UserService

USERS_PATH = "/api/v1/users"


class RegisterUserRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    email: str | None = None
    password: str | None = None


class RegisterUserRequestValidator(RequestValidator[RegisterUserRequest]):
    field_rules = (
        FieldRule("Email", lambda request: Email.normalize(request.email), Email.validator),
        FieldRule("Password", attrgetter("password"), Password.validator),
    )


class RegisterUserResponseData(WireModel):
    id: str


class UserResponseData(WireModel):
    id: str
    email: str
    created_at: datetime


async def register_user(request: RegisterUserRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user account."""
    service = UserService(db)
    try:
        user = await service.register(Email(request.email), Password(request.password))
    except DuplicatedUserEmailError as exc:
        return bad_request_response(
            ErrorWithDetailsResponse.from_exception("Email", ErrorType.BUSINESS_LOGIC_FAILED, exc)
        )

    return created_response(
        f"{USERS_PATH}/{user.id.value}",
        SuccessResponseWithData[RegisterUserResponseData](
            message="Registered user successfully.",
            type=SuccessType.CREATE_SUCCESS,
            data=RegisterUserResponseData(id=user.id.value),
        ),
    )


async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    match await UserService(db).get(Id(user_id, property_name="Id")):
        case Ok(user):
            return ok_response(
                SuccessResponseWithData[UserResponseData](
                    message="Retrieved user successfully.",
                    type=SuccessType.RETRIEVE_DATA_SUCCESS,
                    data=UserResponseData(
                        id=user.id.value,
                        email=user.email.value,
                        created_at=user.created_at.value,
                    ),
                )
            )
        case Err(error):
            return not_found_response(ErrorResponse(message=error.message, type=error.error_type))


VALIDATORS = (
    (RegisterUserRequest, RegisterUserRequestValidator),
)

ROUTES = (
    Route("POST", USERS_PATH, register_user, RegisterUserRequest, name="register_user", tags=("users",)),
    Route("GET", f"{USERS_PATH}/{{user_id}}", get_user, name="get_user", tags=("users",)),
)
