# app/core/exceptions.py
"""Error taxonomy shared by the HTTP handlers and the realtime hub.

Every error is an ``HTTPException`` so routers can raise it directly; the
handler registered in ``register_exception_handlers`` renders it as
``{"message": ...}``. The realtime hub catches ``AppError`` and turns it into
a scoped ``error`` event.
"""
import logging
import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        super().__init__(status_code=status_code or self.status_code, detail=self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication error"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    # duplicate unique field, reported as a plain bad request
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class StoreUnavailableError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database unavailable"


def first_error_message(errors: list) -> str:
    """Readable message of the first pydantic error."""
    message = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


def _error_body(message: str, exc: Exception = None) -> dict:
    body = {"message": message}
    if exc is not None and settings.is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error renderers to the app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, StoreUnavailableError):
            logger.error(f"Store error on {request.url.path}: {exc.message}", exc_info=exc.__cause__)
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": first_error_message(errors)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error", exc),
        )
