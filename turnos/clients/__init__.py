"""
External API clients.
"""

from .google_calendar_client import GoogleCalendarClient, GoogleCalendarError
from .mercado_pago_client import (
    MercadoPagoAuthError,
    MercadoPagoClient,
    MercadoPagoConnectionError,
    MercadoPagoError,
    MercadoPagoNotFoundError,
    MercadoPagoValidationError,
)

__all__ = [
    "GoogleCalendarClient",
    "GoogleCalendarError",
    "MercadoPagoAuthError",
    "MercadoPagoClient",
    "MercadoPagoConnectionError",
    "MercadoPagoError",
    "MercadoPagoNotFoundError",
    "MercadoPagoValidationError",
]
