"""
Error taxonomy for the quiz API.

Handlers raise these; the registered exception handlers turn them into
`{"error": message}` with the matching status code.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class QuizAPIError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(QuizAPIError):
    status_code = 400
    default_message = "Invalid request"


class InvalidCredentials(QuizAPIError):
    # Same response for unknown user and wrong password.
    status_code = 400
    default_message = "Invalid credentials"


class ConflictError(QuizAPIError):
    status_code = 409
    default_message = "User already exists"


class Unauthorized(QuizAPIError):
    status_code = 401
    default_message = "Unauthorized. Please login."


class InternalError(QuizAPIError):
    status_code = 500
    default_message = "Internal server error"


# ---------- Handlers ----------

async def _quiz_api_error_handler(request: Request, exc: QuizAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing errors (404, 405) share the {"error": ...} shape
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": InternalError.default_message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuizAPIError, _quiz_api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
