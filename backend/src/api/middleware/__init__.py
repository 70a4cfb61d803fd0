"""FastAPI middleware for authentication and error handling."""

from .auth_middleware import AuthContext, get_auth_context, get_optional_auth_context
from .error_handlers import (
    error_body,
    domain_error,
    http_exception_handler,
    internal_exception_handler,
    register_error_handlers,
    validation_exception_handler,
)

__all__ = [
    "AuthContext",
    "get_auth_context",
    "get_optional_auth_context",
    "domain_error",
    "error_body",
    "register_error_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "internal_exception_handler",
]
