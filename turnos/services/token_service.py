from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import HTTPException, status
from jose import JWTError, jwt

from turnos.config.settings import get_settings


class TokenService:
    """
    Servicio para validar tokens JWT

    Los tokens los emite el servicio de identidad y llevan ``id``, ``nombre``,
    ``email`` y ``rol``.
    """

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None):
        settings = get_settings()
        self.SECRET_KEY = secret_key or settings.JWT_SECRET_KEY
        self.ALGORITHM = algorithm or settings.JWT_ALGORITHM

    def create_access_token(self, data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
        """
        Crea un token JWT de acceso

        Args:
            data: Datos a incluir en el token
            expires_delta: Tiempo de expiración (por defecto 1 hora)

        Returns:
            Token JWT codificado
        """
        to_encode = data.copy()
        expire = datetime.now(UTC) + (expires_delta or timedelta(hours=1))
        to_encode["exp"] = expire
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """
        Decodifica un token JWT

        Raises:
            HTTPException: 401 si el token es inválido o expiró
        """
        try:
            return jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Token inválido: {e!s}",
                headers={"WWW-Authenticate": "Bearer"},
            ) from e
