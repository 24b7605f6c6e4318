"""
Custom exception hierarchy for the goal tracker.

Rule: every error has a machine-readable `code` string so clients can branch
on it without parsing English messages.

Domain failures (empty title, unknown goal id, unreadable storage) never reach
the client: the storage errors below are raised by the storage adapter and
absorbed by the goal store. Only request-shape problems and genuine bugs
produce an error envelope.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class GoalTrackerException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class StorageCorruptError(GoalTrackerException):
    code = "STORAGE_CORRUPT"

    def __init__(self, key: str, reason: str):
        super().__init__(
            message=f"Stored value under '{key}' is unreadable: {reason}",
            details={"key": key, "reason": reason},
        )


class StorageReadError(GoalTrackerException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORAGE_READ_FAILED"

    def __init__(self, key: str):
        super().__init__(
            message=f"Could not read value under '{key}'.",
            details={"key": key},
        )


class StorageWriteError(GoalTrackerException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORAGE_WRITE_FAILED"

    def __init__(self, key: str):
        super().__init__(
            message=f"Could not persist value under '{key}'.",
            details={"key": key},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def goal_tracker_exception_handler(
    request: Request, exc: GoalTrackerException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
