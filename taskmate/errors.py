"""Error taxonomy for the TaskMate API and the handlers that render it.

Every failure a client can see is a ``TaskMateError`` carrying its HTTP status
and a human readable message. Handlers turn them into ``{"error": ...}`` JSON
bodies; nothing internal (tracebacks, SQL) ever reaches the response.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskMateError(Exception):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class Unauthenticated(TaskMateError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized access"


class Forbidden(TaskMateError):
    http_status = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ValidationError(TaskMateError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class InvalidIdentifier(TaskMateError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid task ID format"


class NotFound(TaskMateError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"


class StoreError(TaskMateError):
    """Unexpected failure talking to the database."""


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskMateError)
    async def taskmate_error_handler(request: Request, exc: TaskMateError):
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(level, "%s %s -> %s: %s", request.method, request.url.path, exc.http_status, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request data",
                "details": [
                    {"field": ".".join(str(loc) for loc in e["loc"]), "message": e["msg"]}
                    for e in exc.errors()
                ],
            },
        )

    # Generic error handler to return JSON errors for unexpected exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
