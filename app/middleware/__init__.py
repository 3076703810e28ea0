"""Middleware package."""

from app.middleware.error_handlers import estimator_error_handler, request_validation_error_handler

__all__ = ["estimator_error_handler", "request_validation_error_handler"]
