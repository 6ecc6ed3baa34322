"""
HTTP middlewares.
"""

from .auth import AuthenticationMiddleware
from .logging_middleware import RequestLoggingMiddleware

__all__ = ["AuthenticationMiddleware", "RequestLoggingMiddleware"]
