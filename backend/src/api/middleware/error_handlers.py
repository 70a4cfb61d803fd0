"""Exception handlers that render every failure as ``{error, message, detail}``."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Error codes for statuses raised by the framework itself (bad body, unknown
# route, wrong method). Service errors bring their own code.
FRAMEWORK_ERROR_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def error_body(status_code: int, detail: Any) -> Dict[str, Any]:
    """Shape an HTTPException detail (dict, string or None) into the API error body."""
    fallback_code = FRAMEWORK_ERROR_CODES.get(status_code, "internal_error")
    fallback_message = HTTPStatus(status_code).phrase
    if isinstance(detail, dict):
        return {
            "error": detail.get("error", fallback_code),
            "message": detail.get("message", fallback_message),
            "detail": detail.get("detail"),
        }
    return {
        "error": fallback_code,
        "message": detail if isinstance(detail, str) and detail else fallback_message,
        "detail": None,
    }


def domain_error(exc: Exception) -> HTTPException:
    """Translate a service exception carrying error/message/status_code/detail."""
    return HTTPException(
        status_code=getattr(exc, "status_code", status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={
            "error": getattr(exc, "error", "internal_error"),
            "message": getattr(exc, "message", str(exc)),
            "detail": getattr(exc, "detail", None) or None,
        },
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    body = error_body(
        status.HTTP_400_BAD_REQUEST,
        {"message": "Invalid request payload", "detail": {"errors": exc.errors()}},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    headers: Optional[Dict[str, str]] = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=headers,
    )


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, None),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)


__all__ = [
    "domain_error",
    "error_body",
    "register_error_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "internal_exception_handler",
]
