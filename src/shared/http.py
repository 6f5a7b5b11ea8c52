"""HTTP plumbing shared by every router.

Domain exceptions propagate out of handlers untouched; the handlers
registered here turn them into ``{"message": ..., "errors": ...}`` bodies.
"""

import uuid

import pydantic
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from shared.exceptions import (
    AuthenticationError,
    ObjectNotFoundError,
    StorefrontError,
    ValidationError,
)
from shared.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)

_STATUS_CODES = (
    (ValidationError, 400),
    (ObjectNotFoundError, 404),
    (AuthenticationError, 401),
)


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "errors": errors or {}})


def _pydantic_errors(errors) -> dict:
    """Group pydantic error entries by dotted field location."""
    grouped = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "_entity"
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return grouped


async def storefront_error_handler(request: Request, exc: StorefrontError):
    status_code = next((code for cls, code in _STATUS_CODES if isinstance(exc, cls)), 400)
    return error_response(status_code, exc.message, exc.messages)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "Validation failed", _pydantic_errors(exc.errors()))


async def model_validation_handler(request: Request, exc: pydantic.ValidationError):
    return error_response(400, "Validation failed", _pydantic_errors(exc.errors()))


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.info("Duplicate key rejected", path=request.url.path)
    return error_response(400, "Resource already exists")


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(pydantic.ValidationError, model_validation_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def request_context_middleware(request: Request, call_next):
    """Bind request details into the structlog context for the duration of a request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response
