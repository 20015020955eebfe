import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    """Base for every error a handler raises on purpose.

    Subclasses fix the HTTP status; ``details`` ends up in the ``data`` field
    of the error envelope.
    """

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(status_code=self.status_code, detail=self.message)


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Validation failed"


class Unauthorized(AppError):
    status_code = 401
    default_message = "You're not logged in or token expired"


class Forbidden(AppError):
    status_code = 403
    default_message = "You are not allowed to access"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Conflict"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


def error_body(code: int, message: str, data=None) -> dict:
    return {
        "code": code,
        "status": "error",
        "message": message,
        "data": jsonable_encoder(data),
    }


def validation_details(errors) -> list:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(loc),
            "message": err.get("msg"),
            "type": err.get("type"),
        })
    return details


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc.details),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = validation_details(exc.errors())
    logger.info(f"{request.method} {request.url.path} - validation failed on {len(details)} field(s)")
    return JSONResponse(
        status_code=400,
        content=error_body(400, "Validation failed", {"error": "Validation failed", "details": details}),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} - database error")
    return JSONResponse(status_code=500, content=error_body(500, "Internal server error"))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
