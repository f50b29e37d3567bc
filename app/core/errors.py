"""
Application errors and their FastAPI handlers.

The chat services raise these typed errors; the handlers registered in
app.main turn them into a structured JSON envelope:

    {"error": {"category": ..., "message": ..., "timestamp": ..., "path": ...}}
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    AUTHENTICATION = "authentication_error"
    AUTHORIZATION = "authorization_error"
    NOT_FOUND = "not_found_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class UnauthenticatedError(AppError):
    """No valid caller identity"""
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHENTICATION,
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class ForbiddenError(AppError):
    """Caller is not allowed to touch the resource"""
    def __init__(self, message: str = "Not authorized", details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHORIZATION,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class NotFoundError(AppError):
    """Referenced ad or room does not exist"""
    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found",
            category=ErrorCategory.NOT_FOUND,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id},
        )


class InvalidOperationError(AppError):
    """Request is well-formed but breaks a business rule"""
    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def handle_app_error(error: AppError, request: Request) -> JSONResponse:
    """Handle structured application errors"""

    logger.warning(
        f"Application error: {error.category} on {request.method} {request.url.path}: {error.message}",
        extra={
            "category": error.category,
            "status_code": error.status_code,
            "path": request.url.path,
            "method": request.method,
            "details": error.details,
        },
    )

    headers = {}
    if isinstance(error, UnauthenticatedError):
        headers["WWW-Authenticate"] = "Bearer"

    return JSONResponse(
        status_code=error.status_code,
        content={
            "error": {
                "category": error.category,
                "message": error.message,
                "timestamp": _timestamp(),
                "path": request.url.path,
                **error.details,
            }
        },
        headers=headers,
    )


def handle_validation_error(error: RequestValidationError, request: Request) -> JSONResponse:
    """Handle FastAPI request validation errors"""

    errors = []
    for err in error.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        })

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"errors": errors, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "category": ErrorCategory.VALIDATION,
                "message": "Request validation failed",
                "timestamp": _timestamp(),
                "path": request.url.path,
                "validation_errors": errors,
            }
        },
    )


# Exception handlers for FastAPI
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """FastAPI exception handler for AppError"""
    return handle_app_error(exc, request)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI exception handler for validation errors"""
    return handle_validation_error(exc, request)
