# noteful/errors.py
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger("noteful.errors")


class ApiError(Exception):
    """
    An error that is reported to the client as ``{message, **extra}``.
    """

    status_code = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class FieldValidationError(ApiError):
    status_code = 422

    def __init__(self, message: str, location: str):
        super().__init__(message, reason="ValidationError", location=location)
        self.location = location


class UsernameTaken(ApiError):
    status_code = 400

    def __init__(self):
        super().__init__("The username already exists", error="")


class LoginError(ApiError):
    status_code = 401

    def __init__(self, message: str, location: str):
        super().__init__(message, reason="LoginError", location=location)
        self.location = location


def _first_error_location(err: Dict[str, Any]) -> str:
    for part in reversed(err.get("loc") or ()):
        if isinstance(part, str) and part != "body":
            return part
    return "body"


def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "missing":
        message = "Missing field"
    elif first.get("type") in ("string_type", "model_attributes_type", "dict_type"):
        message = "Incorrect field type"
    else:
        message = first.get("msg") or "Invalid request"
    err = FieldValidationError(message, _first_error_location(first))
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error", "error": ""})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
