"""
Exception handlers producing the JSON error envelope
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecommerce_api.config import settings
from ecommerce_api.errors import AppError
from ecommerce_api.schemas.common import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

HTTP_ERROR_NAMES = {
    401: "UnauthenticatedError",
    403: "ForbiddenError",
    404: "NotFoundError",
    405: "MethodNotAllowedError",
}


def error_response(status_code: int, name: str, message: str, details: Optional[Any] = None) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error=ErrorBody(name=name, message=message, details=details),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True)),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.name, request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.name, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "ValidationError", "Request validation failed", jsonable_encoder(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    name = HTTP_ERROR_NAMES.get(exc.status_code, "HTTPError")
    return error_response(exc.status_code, name, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = {"type": type(exc).__name__, "error": str(exc)} if settings.DEBUG else None
    return error_response(500, "InternalServerError", "Internal server error", details)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
