# prompt_driver/core/error_handlers.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from prompt_driver.core.exceptions import BusinessException, ErrorCode

logger = logging.getLogger(__name__)

MALFORMED_REQUEST_MESSAGE = "Invalid request format or malformed JSON"


def error_response(request: Request, http_status: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=http_status,
        content={"status": http_status, "error": error, "message": message, "path": request.url.path},
    )


def _field_name(loc) -> str:
    # Drop the "body"/"query" prefix FastAPI puts in front of field paths
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def format_validation_errors(errors) -> str:
    return ", ".join(f"{_field_name(error.get('loc', ()))}: {error.get('msg', 'invalid value')}" for error in errors)


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    error_code = exc.error_code
    logger.warning(f"{error_code.code} on {request.method} {request.url.path}: {exc.message}")
    return error_response(request, error_code.http_status, error_code.code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        message = MALFORMED_REQUEST_MESSAGE
    else:
        message = format_validation_errors(errors)
    logger.info(f"Validation failed on {request.method} {request.url.path}: {message}")
    return error_response(request, ErrorCode.VALIDATION_ERROR.http_status, ErrorCode.VALIDATION_ERROR.code, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(request, exc.status_code, f"HTTP{exc.status_code}", message)


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit hit on {request.url.path}: {exc.detail}")
    error_code = ErrorCode.TOO_MANY_REQUESTS
    return error_response(request, error_code.http_status, error_code.code, f"Too many requests: {exc.detail}")


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return error_response(request, 409, "HTTP409", "The request conflicts with existing data")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error_code = ErrorCode.INTERNAL_SERVER_ERROR
    return error_response(request, error_code.http_status, error_code.code, "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
