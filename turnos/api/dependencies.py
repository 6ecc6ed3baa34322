"""
Shared API dependencies: authenticated user and role checks.

The AuthenticationMiddleware validates the bearer token and stores its
payload in ``request.state.user``.
"""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from turnos.core.domain import AuthorizationException

ADMIN_ROLE = "admin"


def get_current_user(request: Request) -> dict[str, Any]:
    """Payload of the validated JWT (``id``, ``nombre``, ``email``, ``rol``)."""
    user = getattr(request.state, "user", None)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Se requiere autenticación",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


CurrentUser = Annotated[dict[str, Any], Depends(get_current_user)]


def require_admin(user: CurrentUser) -> dict[str, Any]:
    """Only administrators may manage slots."""
    if user.get("rol") != ADMIN_ROLE:
        raise AuthorizationException("manage_slots", resource="turnos", user_id=str(user.get("id")))
    return user


AdminUser = Annotated[dict[str, Any], Depends(require_admin)]
