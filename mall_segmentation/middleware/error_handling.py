"""
Standardized Error Handling

Provides:
- Custom exception classes for different error types
- Flat error response format: {"error": "...", "code": "...", "correlation_id": "..."}
- Appropriate HTTP status codes

Request validation failures (bad query strings or bodies) are answered with
400, not FastAPI's default 422.
"""

from typing import Any, Dict, Optional, Tuple

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# ==================== Custom Exceptions ====================

class APIError(Exception):
    """Base class for API errors."""
    def __init__(
        self,
        message: str,
        error_code: str = None,
        status_code: int = 500,
        details: Dict[str, Any] = None
    ):
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(APIError):
    """Input validation error (400)."""
    def __init__(self, message: str, field: str = None, **kwargs):
        details = {"field": field} if field else {}
        details.update(kwargs)
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class AuthenticationError(APIError):
    """Authentication failed (401)."""
    def __init__(self, message: str = "Authentication required", **kwargs):
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=kwargs
        )


class AuthorizationError(APIError):
    """Authorization failed (403)."""
    def __init__(self, message: str = "Access denied", **kwargs):
        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=status.HTTP_403_FORBIDDEN,
            details=kwargs
        )


class NotFoundError(APIError):
    """Resource not found (404)."""
    def __init__(self, resource: str, identifier: str = None, **kwargs):
        message = f"{resource} not found"
        if identifier:
            message += f": {identifier}"

        details = {"resource": resource}
        if identifier:
            details["identifier"] = identifier
        details.update(kwargs)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details
        )


# ==================== Error Response Format ====================

def _correlation_id(request: Request) -> Optional[str]:
    correlation_id = getattr(request.state, "correlation_id", None)
    if not correlation_id:
        correlation_id = structlog.contextvars.get_contextvars().get("correlation_id")
    return correlation_id


def create_error_response(
    error: Exception,
    correlation_id: str = None,
) -> Tuple[Dict[str, Any], int]:
    """
    Create the error body and status code for an exception.

    Format:
    {
        "error": "Human-readable message",
        "code": "ERROR_CODE",
        "correlation_id": "uuid"
    }

    Messages of unexpected exceptions are never exposed.
    """
    if isinstance(error, APIError):
        error_code = error.error_code
        message = error.message
        status_code = error.status_code
    elif isinstance(error, StarletteHTTPException):
        error_code = "HTTP_ERROR"
        message = str(error.detail)
        status_code = error.status_code
    else:
        error_code = "INTERNAL_ERROR"
        message = GENERIC_ERROR_MESSAGE
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    response = {"error": message, "code": error_code}
    if correlation_id:
        response["correlation_id"] = correlation_id

    return response, status_code


# ==================== Exception Handlers ====================

async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "api_error",
        error_code=exc.error_code,
        error_message=exc.message,
        status_code=exc.status_code,
        details=exc.details
    )

    response_data, status_code = create_error_response(exc, correlation_id=_correlation_id(request))
    return JSONResponse(status_code=status_code, content=response_data)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle standard HTTP exceptions (unknown routes, wrong methods...)."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path
    )

    response_data, status_code = create_error_response(exc, correlation_id=_correlation_id(request))
    return JSONResponse(status_code=status_code, content=response_data, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400."""
    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        }
        for error in exc.errors()
    ]

    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=validation_errors
    )

    response_data, status_code = create_error_response(
        ValidationError("Request validation failed"),
        correlation_id=_correlation_id(request),
    )
    response_data["details"] = validation_errors
    return JSONResponse(status_code=status_code, content=response_data)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions (500)."""
    logger.error(
        "unexpected_error",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
        exc_info=exc
    )

    response_data, status_code = create_error_response(exc, correlation_id=_correlation_id(request))
    return JSONResponse(status_code=status_code, content=response_data)


def register_exception_handlers(app) -> None:
    """Attach all handlers above to a FastAPI app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
