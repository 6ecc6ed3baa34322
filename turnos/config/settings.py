import json
from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Descuentos por obra social para reservas con precio (POST /turnos/{id}/reservar)
DEFAULT_RESERVATION_DISCOUNTS: dict[str, float] = {
    "OSDE": 0.3,
    "Swiss Medical": 0.25,
    "IOSFA": 0.2,
    "Otra": 0.1,
    "Particular": 0,
}

# Descuentos por obra social para preferencias de Mercado Pago
DEFAULT_PAYMENT_DISCOUNTS: dict[str, float] = {
    "OSDE": 1,
    "Swiss Medical": 0.998,
    "IOSFA": 0.2,
    "Otra": 0.1,
    "Particular": 0,
}


class Settings(BaseSettings):
    """
    Configuración de la aplicación utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Turnos API"
    PROJECT_DESCRIPTION: str = "API de reserva de turnos médicos con Mercado Pago y Google Calendar"
    VERSION: str = "0.1.0"

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="Host de PostgreSQL")
    DB_PORT: int = Field(5432, description="Puerto de PostgreSQL")
    DB_NAME: str = Field("turnos", description="Nombre de la base de datos")
    DB_USER: str = Field("postgres", description="Usuario de PostgreSQL")
    DB_PASSWORD: str | None = Field(None, description="Contraseña de PostgreSQL")
    DB_ECHO: bool = Field(False, description="Log SQL queries (solo para debug)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Tamaño del pool de conexiones")
    DB_MAX_OVERFLOW: int = Field(20, description="Máximo overflow del pool")
    DB_POOL_RECYCLE: int = Field(3600, description="Reciclar conexiones cada X segundos")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout para obtener conexión del pool")

    # JWT Settings (los tokens los emite el servicio de identidad)
    JWT_SECRET_KEY: str = Field("change-me", description="Clave secreta para validar JWT")
    JWT_ALGORITHM: str = Field("HS256", description="Algoritmo de firma de los JWT")

    # Frontend
    FRONTEND_URL: str = Field("http://localhost:4200", description="URL del frontend para back_urls de pago")

    # Mercado Pago
    MERCADO_PAGO_ACCESS_TOKEN: str | None = Field(None, description="Access token de Mercado Pago")
    MERCADO_PAGO_NOTIFICATION_URL: str | None = Field(None, description="URL pública del webhook de pagos")
    MERCADO_PAGO_TIMEOUT: int = Field(30, description="Timeout para requests a Mercado Pago en segundos")
    MERCADO_PAGO_SANDBOX: bool = Field(False, description="Usar modo sandbox de Mercado Pago")

    # Google Calendar
    GOOGLE_CLIENT_ID: str | None = Field(None, description="OAuth client ID de Google")
    GOOGLE_CLIENT_SECRET: str | None = Field(None, description="OAuth client secret de Google")
    GOOGLE_REFRESH_TOKEN: str | None = Field(None, description="Refresh token de la cuenta del calendario")
    GOOGLE_CALENDAR_ID: str = Field("primary", description="ID del calendario donde se crean los eventos")
    GOOGLE_CALENDAR_TIMEOUT: int = Field(30, description="Timeout para requests a Google Calendar en segundos")

    # Turnos
    CALENDAR_TIME_ZONE: str = Field(
        "America/Argentina/Buenos_Aires", description="Zona horaria en la que se interpretan fecha y hora del turno"
    )
    APPOINTMENT_DURATION_MINUTES: int = Field(30, description="Duración fija de cada turno en minutos")
    BASE_PRICE: float = Field(5000, description="Precio base de la consulta")
    RESERVATION_DISCOUNTS: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_RESERVATION_DISCOUNTS),
        description="Descuentos por obra social para reservas con precio",
    )
    PAYMENT_DISCOUNTS: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_PAYMENT_DISCOUNTS),
        description="Descuentos por obra social para preferencias de pago",
    )
    DEFAULT_OBRA_SOCIAL: str = Field("Particular", description="Obra social por defecto (pago particular)")

    # Application Settings
    DEBUG: bool = Field(False, description="Modo de depuración")
    ENVIRONMENT: str = Field("production", description="Entorno de ejecución")
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging")
    LOG_FORMAT: str = Field("colored", description="Formato de logs: colored, json o plain")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("RESERVATION_DISCOUNTS", "PAYMENT_DISCOUNTS", mode="before")
    @classmethod
    def parse_discounts(cls, value):
        """Acepta un objeto JSON en la variable de entorno."""
        if isinstance(value, str):
            value = json.loads(value)
        return value

    @field_validator("RESERVATION_DISCOUNTS", "PAYMENT_DISCOUNTS")
    @classmethod
    def validate_discounts(cls, value: dict[str, float]) -> dict[str, float]:
        for name, discount in value.items():
            if not 0 <= discount <= 1:
                raise ValueError(f"Discount for '{name}' must be between 0 and 1")
        return value

    @field_validator("APPOINTMENT_DURATION_MINUTES")
    @classmethod
    def validate_duration(cls, v):
        if v < 1:
            raise ValueError("APPOINTMENT_DURATION_MINUTES must be at least 1")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("colored", "json", "plain"):
            raise ValueError("LOG_FORMAT must be 'colored', 'json' or 'plain'")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """Construye la URL de conexión a PostgreSQL"""
        if self.DB_PASSWORD:
            return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql://{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
