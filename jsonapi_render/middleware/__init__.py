"""Error-handling middleware for JSON:API applications."""

from .error_handler import ErrorHandlerMiddleware, error_response, register_error_handlers

__all__ = ["ErrorHandlerMiddleware", "error_response", "register_error_handlers"]
