"""Uniform JSON errors for every ComplyFlow route.

Whatever a handler raises, the caller receives an ``ErrorResponse`` body with
the matching status and an ``X-Request-ID`` header, so the web client can
always read ``error`` from a failed call.
"""

import logging
import traceback
import uuid
from typing import Any, Dict, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import MutableHeaders
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Receive, Scope, Send

from complyflow.constants import ENV_DEVELOPMENT
from complyflow.controller.schemas.responses import error_body
from complyflow.exception.api_exceptions import ComplyFlowException

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    429: "TOO_MANY_REQUESTS",
}


class ErrorHandlerMiddleware:
    """Pure ASGI middleware that renders uncaught exceptions as JSON."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = False

        async def send_with_request_id(message: dict) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
                MutableHeaders(scope=message).append(REQUEST_ID_HEADER, request_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception as exc:
            # Streaming responses that already sent headers cannot be replaced.
            if started:
                raise
            response = await self.handle_exception(request, exc, request_id)
            await response(scope, receive, send)

    @classmethod
    async def handle_exception(
        cls, request: Request, exc: Exception, request_id: str
    ) -> JSONResponse:
        """Log ``exc`` and build the JSON error response for it."""
        status_code, fields = describe_exception(exc)
        path, method = request.url.path, request.method

        if status_code < 500:
            logger.warning(f"{method} {path} -> {status_code}: {fields['message']}")
        else:
            logger.error(
                f"{method} {path} failed: {exc}",
                extra={"request_id": request_id, "exception_type": type(exc).__name__},
                exc_info=exc,
            )

        if status_code >= 500 and cls._show_stack_trace(request):
            fields["stack_trace"] = "".join(traceback.format_exception(exc))

        headers = {REQUEST_ID_HEADER: request_id}
        if isinstance(exc, StarletteHTTPException) and exc.headers:
            headers.update(exc.headers)
        retry_after = (fields.get("details") or {}).get("retry_after")
        if retry_after:
            headers["Retry-After"] = str(retry_after)

        return JSONResponse(
            status_code=status_code,
            content=error_body(request_id=request_id, path=path, method=method, **fields),
            headers=headers,
        )

    @staticmethod
    def _show_stack_trace(request: Request) -> bool:
        state = request.app.state
        return getattr(state, "debug", False) or (
            getattr(state, "environment", None) == ENV_DEVELOPMENT
        )


def describe_exception(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """Map an exception to its status code and ErrorResponse fields.

    Unknown exceptions surface their own message with a 500, which is how
    provider and database failures reach the web client.
    """
    if isinstance(exc, ComplyFlowException):
        return exc.status_code, {
            "code": exc.code,
            "message": exc.message,
            "field": exc.field,
            "details": exc.details or None,
        }

    if isinstance(exc, (RequestValidationError, PydanticValidationError)):
        problems = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        first = problems[0] if problems else None
        return status.HTTP_400_BAD_REQUEST, {
            "code": "VALIDATION_ERROR",
            "message": (
                f"{first['message']}: {first['field']}"
                if first
                else "Request validation failed"
            ),
            "field": first["field"] if first else None,
            "details": {"errors": problems},
        }

    if isinstance(exc, StarletteHTTPException):
        message = (
            "Method not allowed"
            if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
            else str(exc.detail)
        )
        return exc.status_code, {
            "code": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            "message": message,
        }

    return status.HTTP_500_INTERNAL_SERVER_ERROR, {
        "code": "INTERNAL_ERROR",
        "message": str(exc) or "An internal error occurred",
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Route FastAPI's own validation and HTTP errors through the same renderer.

    FastAPI handles these inside the router, before ErrorHandlerMiddleware
    would see them.
    """

    async def _render(request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
        return await ErrorHandlerMiddleware.handle_exception(request, exc, request_id)

    app.add_exception_handler(RequestValidationError, _render)
    app.add_exception_handler(StarletteHTTPException, _render)
