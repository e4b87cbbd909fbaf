"""
Global exception handlers for the API.

Failures are written as plain text with a trailing newline: 400 for bad
requests, 500 for everything else. Unknown users get a small JSON body
naming the user instead.
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response

from core.exceptions import AppException, UnknownUserError

logger = logging.getLogger(__name__)


def bad_request(message: str) -> PlainTextResponse:
    """Plain-text 400 response."""
    return PlainTextResponse(f"{message}\n", status_code=400)


def errored(message: str) -> PlainTextResponse:
    """Plain-text 500 response."""
    return PlainTextResponse(f"{message}\n", status_code=500)


def handle_non_user(username: str) -> Response:
    """400 response with a {"user": ...} body for an unknown username."""
    body = json.dumps({"user": username}, separators=(",", ":"), ensure_ascii=False)
    return Response(
        content=f"{body}\n",
        status_code=400,
        media_type="application/json",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(UnknownUserError)
    async def unknown_user_handler(request: Request, exc: UnknownUserError) -> Response:
        """Handle requests naming a user that does not exist."""
        logger.warning(f"Unknown user on {request.method} {request.url.path}: {exc.username}")
        return handle_non_user(exc.username)

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> Response:
        """Handle custom application exceptions."""
        logger.warning(
            f"AppException: {exc.error_code} - {exc.message}",
            extra={"path": request.url.path, "details": exc.details},
        )
        if exc.status_code == 400:
            return bad_request(exc.message)
        return errored(exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> Response:
        """Handle request validation errors."""
        messages = []
        for error in exc.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            messages.append(f"{loc}: {error['msg']}")

        logger.warning(f"Validation error on {request.url.path}: {messages}")
        return bad_request("; ".join(messages))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> Response:
        """Handle all unhandled exceptions."""
        logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
        return errored(str(exc))
