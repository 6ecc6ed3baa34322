"""
Authentication middleware for FastAPI application.

This module follows SRP by handling only authentication concerns.
"""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from turnos.config.settings import get_settings
from turnos.services.token_service import TokenService

logger = logging.getLogger(__name__)

_settings = get_settings()
API_V1_STR = _settings.API_V1_STR


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error": True,
            "message": message,
            "status_code": status.HTTP_401_UNAUTHORIZED,
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    HTTP middleware for request authentication.

    Handles JWT token validation for protected routes.
    Public paths bypass authentication.
    """

    # Routes that don't require authentication
    PUBLIC_PATHS: tuple[str, ...] = (
        f"{API_V1_STR}/mercadopago/webhook",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    )

    def __init__(self, app: ASGIApp, token_service: TokenService | None = None) -> None:
        """
        Initialize authentication middleware.

        Args:
            app: ASGI application
            token_service: Optional token service instance (for testing)
        """
        super().__init__(app)
        self._token_service = token_service or TokenService()

    def _is_public_path(self, path: str) -> bool:
        """Check if the request path is public and doesn't require auth."""
        if path == "/":
            return True
        return any(path.startswith(public_path) for public_path in self.PUBLIC_PATHS)

    def _extract_token(self, request: Request) -> str | None:
        """
        Extract Bearer token from Authorization header.

        Returns:
            Token string if valid Bearer scheme, None otherwise.
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None

        return parts[1]

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        """
        Process the request through authentication.

        Returns:
            Response from next handler or 401 error
        """
        if self._is_public_path(request.url.path):
            return await call_next(request)

        token = self._extract_token(request)
        if not token:
            logger.warning(f"Missing auth token for {request.url.path}")
            return _unauthorized("Se requiere autenticación")

        try:
            payload = self._token_service.decode_token(token)
        except HTTPException:
            logger.warning(f"Invalid token for {request.url.path}")
            return _unauthorized("Token inválido o expirado")

        if payload.get("id") is None:
            logger.warning(f"Token without user id for {request.url.path}")
            return _unauthorized("Token inválido o expirado")

        request.state.user = payload
        return await call_next(request)
