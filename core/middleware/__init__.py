"""Middleware components for the Track It API."""

from core.middleware.request_id import RequestIDMiddleware
from core.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["RequestIDMiddleware", "RequestLoggingMiddleware"]
