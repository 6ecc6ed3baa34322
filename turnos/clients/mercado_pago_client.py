"""
Mercado Pago API Client

Async client for Mercado Pago payment processing using Bearer Token auth.
Uses Checkout Pro (Preferences) for generating payment links.

Connection Details:
    - Base URL: https://api.mercadopago.com
    - Auth: Bearer Token (Access Token)

Endpoints:
    - POST /checkout/preferences - Create payment preference (link)
    - GET /v1/payments/{id} - Get payment details

Documentation:
    - https://www.mercadopago.com.ar/developers/en/docs/checkout-pro/overview
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import httpx

from turnos.core.domain import IntegrationException

logger = logging.getLogger(__name__)


class MercadoPagoError(IntegrationException):
    """
    Base exception for Mercado Pago errors.

    Attributes:
        error_code: Machine-readable error code
        error_message: Human-readable error description
    """

    def __init__(self, error_code: str, error_message: str, original_error: Exception | None = None):
        self.error_code = error_code
        self.error_message = error_message
        super().__init__("mercadopago", f"{error_code}: {error_message}", original_error)


class MercadoPagoAuthError(MercadoPagoError):
    """Authentication error (invalid access token)."""

    def __init__(self, message: str = "Invalid access token"):
        super().__init__("AUTH_ERROR", message)


class MercadoPagoConnectionError(MercadoPagoError):
    """Network connectivity issues."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__("CONNECTION_ERROR", message, original_error)


class MercadoPagoValidationError(MercadoPagoError):
    """Request validation error."""

    def __init__(self, message: str):
        super().__init__("VALIDATION_ERROR", message)


class MercadoPagoNotFoundError(MercadoPagoError):
    """Requested resource does not exist (permanent, retrying will not help)."""

    def __init__(self, message: str):
        super().__init__("NOT_FOUND", message)


class MercadoPagoClient:
    """
    Async HTTP client for Mercado Pago API.

    Implements payment preference creation and payment status queries
    using Bearer Token authentication over httpx. Credentials are passed in
    by the caller; the client never reads settings.

    Example:
        async with MercadoPagoClient(access_token="APP_USR-...") as client:
            preference = await client.create_preference(
                title="Reserva de turno médico",
                description="Obra social: Particular",
                unit_price=Decimal("5000.00"),
                payer_email="paciente@example.com",
                external_reference="slot-id",
                metadata={"slot_id": "slot-id", "obra_social": "Particular"},
                back_urls={"success": "...", "failure": "...", "pending": "..."},
            )
            # preference["init_point"] contains the payment URL
    """

    BASE_URL = "https://api.mercadopago.com"

    def __init__(
        self,
        access_token: str | None,
        sandbox: bool = False,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize Mercado Pago client.

        Args:
            access_token: Bearer token for API auth
            sandbox: Use sandbox mode for testing
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self._access_token = access_token
        self._sandbox = sandbox
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        if not self._access_token:
            logger.error("MERCADO_PAGO_ACCESS_TOKEN not configured")

    async def __aenter__(self) -> MercadoPagoClient:
        """Enter async context and create HTTP client."""
        self._get_client()
        return self

    async def __aexit__(self, *args) -> None:
        """Exit async context and close HTTP client."""
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={
                    "Authorization": f"Bearer {self._access_token}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def create_preference(
        self,
        title: str,
        description: str,
        unit_price: Decimal,
        payer_email: str,
        external_reference: str,
        metadata: dict[str, Any],
        back_urls: dict[str, str],
        notification_url: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a Checkout Pro preference (payment link).

        Args:
            title: Item title shown in checkout
            description: Item description
            unit_price: Amount in local currency (ARS)
            payer_email: Payer email, later used to correlate the payment
            external_reference: Internal reference (slot id)
            metadata: Returned untouched with the payment
            back_urls: success / failure / pending redirect URLs
            notification_url: Webhook URL for payment notifications

        Returns:
            dict with:
                - preference_id: Mercado Pago preference ID
                - init_point: Checkout URL (sandbox URL when in sandbox mode)
                - sandbox_init_point: Sandbox payment URL (for testing)

        Raises:
            MercadoPagoAuthError: Invalid access token
            MercadoPagoValidationError: Invalid request parameters
            MercadoPagoConnectionError: Network error
        """
        if unit_price <= 0:
            raise MercadoPagoValidationError("Amount must be greater than zero")

        payload: dict[str, Any] = {
            "items": [
                {
                    "title": title,
                    "description": description,
                    "quantity": 1,
                    "unit_price": float(unit_price),
                    "currency_id": "ARS",
                }
            ],
            "payer": {"email": payer_email},
            "external_reference": external_reference,
            "metadata": metadata,
            "back_urls": back_urls,
            "auto_return": "approved",
        }
        if notification_url:
            payload["notification_url"] = notification_url

        logger.info(f"Creating MP preference: amount={unit_price}, ref={external_reference}")
        response = await self._request("POST", "/checkout/preferences", json=payload)

        if response.status_code == 400:
            error_data = response.json()
            raise MercadoPagoValidationError(error_data.get("message", "Validation error"))

        self._raise_for_status(response)

        data = response.json()
        preference_id = data.get("id")
        logger.info(f"MP preference created: {preference_id}")

        # En sandbox el checkout de pruebas reemplaza al de producción
        init_point = data.get("sandbox_init_point") if self._sandbox else data.get("init_point")

        return {
            "preference_id": preference_id,
            "init_point": init_point,
            "sandbox_init_point": data.get("sandbox_init_point"),
        }

    async def get_payment(self, payment_id: str) -> dict[str, Any]:
        """
        Get payment details by ID.

        Used to verify payment status after receiving a webhook notification.

        Returns:
            dict with payment details including status, transaction_amount,
            external_reference, metadata and payer.

        Raises:
            MercadoPagoAuthError: Invalid access token
            MercadoPagoNotFoundError: Payment does not exist
            MercadoPagoError: Other API error
        """
        logger.info(f"Fetching MP payment: {payment_id}")
        response = await self._request("GET", f"/v1/payments/{payment_id}")

        if response.status_code == 404:
            raise MercadoPagoNotFoundError(f"Payment {payment_id} not found")

        self._raise_for_status(response)

        data = response.json()
        logger.info(f"MP payment {payment_id} status: {data.get('status')}")
        return data

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._get_client().request(method, url, **kwargs)
        except httpx.ConnectError as e:
            logger.error(f"MP connection error: {e}")
            raise MercadoPagoConnectionError(f"Could not connect to Mercado Pago: {e}", e) from e
        except httpx.TimeoutException as e:
            logger.error(f"MP timeout error: {e}")
            raise MercadoPagoConnectionError(f"Mercado Pago request timed out: {e}", e) from e

        if response.status_code == 401:
            raise MercadoPagoAuthError("Invalid or expired access token")
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"MP HTTP error {response.status_code}: {response.text}")
            raise MercadoPagoError("HTTP_ERROR", f"Mercado Pago returned {response.status_code}", e) from e

    @property
    def is_sandbox(self) -> bool:
        """Check if client is in sandbox mode."""
        return self._sandbox

    @property
    def is_configured(self) -> bool:
        return bool(self._access_token)
