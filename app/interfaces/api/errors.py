"""Translate service errors into the JSON error envelope of the API."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.domain.exceptions import (
    EmailDeliveryError,
    InvalidRequestError,
    NotFoundError,
    NotificationServiceError,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

ENDPOINT_NOT_FOUND = "Endpoint not found"


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    """Return the ``{"success": false, "error": ...}`` envelope."""

    return {"success": False, "error": message, **extra}


def status_for(exc: NotificationServiceError) -> int:
    if isinstance(exc, InvalidRequestError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_service_error(request: Request, exc: NotificationServiceError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    extra: dict[str, Any] = {}
    if isinstance(exc, EmailDeliveryError) and exc.details and not get_settings().is_production:
        extra["details"] = exc.details
    return JSONResponse(status_code=status_code, content=error_body(exc.message, **extra))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    unmatched = (
        exc.status_code == status.HTTP_404_NOT_FOUND and "endpoint" not in request.scope
    )
    if unmatched or exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_body(
                ENDPOINT_NOT_FOUND, path=request.url.path, method=request.method
            ),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            str(exc) or "Internal server error",
            timestamp=now_in_app_timezone().isoformat(),
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers producing the shared error envelope."""

    app.add_exception_handler(NotificationServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = ["ENDPOINT_NOT_FOUND", "error_body", "register_exception_handlers"]
