"""
Error Handlers

Converts estimator errors and request validation failures into the uniform
``{"success": false, "message": ...}`` response body.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.services.exceptions import EstimatorError

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def _field_name(loc: tuple) -> str:
    # Drop the leading "body"/"query"/"path" segment
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def estimator_error_handler(request: Request, exc: EstimatorError):
    """Render a core failure; server-side failures are logged."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return _failure(exc.status_code, exc.message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Render body validation errors as a 400 with a readable message."""
    errors = exc.errors()
    missing = [_field_name(err["loc"]) for err in errors if err.get("type") == "missing"]

    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        details = [f"{_field_name(err['loc'])}: {err['msg']}" for err in errors]
        message = f"Invalid request: {'; '.join(details)}"

    return _failure(status.HTTP_400_BAD_REQUEST, message)
