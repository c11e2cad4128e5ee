"""JSONResponse builders for envelopes."""
from fastapi.responses import JSONResponse

from .envelopes import BaseResponse


def ok_response(envelope: BaseResponse) -> JSONResponse:
    return JSONResponse(status_code=200, content=envelope.to_wire())


def created_response(location: str, envelope: BaseResponse) -> JSONResponse:
    return JSONResponse(status_code=201, content=envelope.to_wire(), headers={"Location": location})


def bad_request_response(envelope: BaseResponse) -> JSONResponse:
    return JSONResponse(status_code=400, content=envelope.to_wire())


def not_found_response(envelope: BaseResponse) -> JSONResponse:
    return JSONResponse(status_code=404, content=envelope.to_wire())
