"""
Exception handlers for the application.

Every error response has the same shape::

    {"error": "<message>", "path": "...", "method": "...", "request_id": "..."}
"""
import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trackp.monitoring import get_request_id
from .errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)

# Path parameter name -> message returned when it is not an integer
INVALID_ID_MESSAGES = {
    "project_id": "Invalid project ID",
    "task_id": "Invalid task ID",
}


def error_response(request: Request, status_code: int, message: str, **extra: Any) -> JSONResponse:
    """Build a JSON error response in the service's standard format."""
    request_id = get_request_id() or '-'
    content: Dict[str, Any] = {
        "error": message,
        "path": request.url.path,
        "method": request.method,
        "request_id": request_id,
    }
    content.update(extra)
    response = JSONResponse(status_code=status_code, content=content)
    if request_id != '-':
        response.headers["X-Request-ID"] = request_id
    return response


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Referenced entity does not exist -> 404."""
    return error_response(request, 404, exc.message)


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    """
    Handler for relational backend failures.
    The driver message is passed through to the client unchanged.
    """
    logger.error(
        f"Storage error in {request.method} {request.url.path}: {exc.message}",
        extra={"method": request.method, "path": request.url.path},
    )
    return error_response(request, 500, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors.

    Non-integer path IDs and malformed or mistyped JSON bodies are client
    errors and are reported as 400.
    """
    errors = []
    message = None
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", [])]
        errors.append(f"{' -> '.join(loc)}: {error.get('msg')}")
        if message is None and len(loc) == 2 and loc[0] == "path":
            message = INVALID_ID_MESSAGES.get(loc[1])
        if message is None and loc and loc[0] == "body":
            message = "Invalid request body"

    logger.warning(
        f"Validation error in {request.method} {request.url.path}: {', '.join(errors)}",
        extra={"method": request.method, "path": request.url.path},
    )
    return error_response(request, 400, message or "Invalid request", errors=errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the standard format."""
    response = error_response(request, exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.
    """
    logger.error(
        f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "method": request.method,
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        }
    )
    return error_response(request, 500, "Internal server error")


def setup_exception_handlers(app):
    """
    Register exception handlers with the FastAPI app.
    """
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
