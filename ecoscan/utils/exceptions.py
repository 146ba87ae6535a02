"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class EcoScanError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(EcoScanError):
    """A required field is missing, empty or out of range."""


class NotFoundOrAlreadyCompleted(EcoScanError):
    """The challenge does not exist or somebody already completed it."""

    def __init__(self, challenge_id: int | None = None):
        super().__init__(
            "Challenge not found or already completed.",
            {"challenge_id": challenge_id} if challenge_id is not None else None,
        )


class StorageError(EcoScanError):
    """The backing store is unavailable or rejected a write."""


def require(value: Any, field: str) -> Any:
    """Return ``value`` or raise ``ValidationError`` when it is missing or blank."""

    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required.", {"field": field})
    return value.strip() if isinstance(value, str) else value


USERNAME_MAX_LENGTH = 64


def require_username(value: Any) -> str:
    """Return the stripped username or raise when it is missing or too long for storage."""

    username = require(value, "Username")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be at most {USERNAME_MAX_LENGTH} characters.",
            {"field": "Username"},
        )
    return username


async def handle_validation_error(request: Request, error: ValidationError) -> JSONResponse:
    """Handle validation errors."""
    logger.warning(f"Validation error on {request.url.path}: {error.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": error.message},
    )


async def handle_challenge_error(
    request: Request, error: NotFoundOrAlreadyCompleted
) -> JSONResponse:
    """Handle lost or invalid challenge claims."""
    logger.info(f"Challenge claim rejected: {error.details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": error.message},
    )


async def handle_storage_error(request: Request, error: StorageError) -> JSONResponse:
    """Handle database errors and return a generic server fault."""
    logger.error(f"Storage error on {request.url.path}: {error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error."},
    )
