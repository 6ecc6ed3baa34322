"""
Mercado Pago Webhook Handler

Receives payment notifications from Mercado Pago and books the paid slot.

Webhook Flow:
1. MP sends POST notification when payment status changes
2. Parse the notification (IPN v1 body, legacy topic body or query params)
3. Fetch full payment details from MP API
4. For approved payments: create the calendar event and book the slot

Processed and ignored notifications answer 200, as do permanent failures
(unknown payment, slot whose doctor or specialty no longer exists). Transient
gateway failures answer 500 so Mercado Pago retries the delivery.

Endpoint: POST /api/v1/mercadopago/webhook
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError, model_validator

from turnos.clients import MercadoPagoNotFoundError
from turnos.core.domain import DomainException, EntityNotFoundException, IntegrationException
from turnos.domains.scheduling.api.dependencies import get_confirm_paid_reservation_use_case
from turnos.domains.scheduling.application.dto import PaymentNotification
from turnos.domains.scheduling.application.use_cases import ConfirmPaidReservationUseCase

router = APIRouter(prefix="/mercadopago", tags=["mercadopago"])
logger = logging.getLogger(__name__)

ConfirmPaidReservationUseCaseDep = Annotated[
    ConfirmPaidReservationUseCase, Depends(get_confirm_paid_reservation_use_case)
]


class MPWebhookPayload(BaseModel):
    """
    Mercado Pago webhook payload - supports both IPN v1 and topic formats.

    IPN v1 format (new):
        {"id": 123, "type": "payment", "action": "payment.created", "data": {"id": "456"}}

    Topic-based format (legacy):
        {"resource": "/v1/payments/456", "topic": "payment"}
    """

    # IPN v1 format fields
    action: str | None = None
    api_version: str | None = None
    data: dict[str, Any] | None = None
    date_created: str | None = None
    id: str | int | None = None
    live_mode: bool | None = None
    type: str | None = None
    user_id: str | int | None = None

    # Topic-based format fields (legacy)
    resource: str | None = None
    topic: str | None = None

    @model_validator(mode="after")
    def validate_has_required_data(self) -> MPWebhookPayload:
        """Ensure we have enough data to process the webhook."""
        if not self.type and not self.topic:
            raise ValueError("Webhook must have either 'type' (IPN) or 'topic' (legacy)")
        return self

    @classmethod
    def from_query_params(cls, params: dict[str, str]) -> MPWebhookPayload:
        """Build from ``?type=payment&data.id=456`` or ``?topic=payment&id=456``."""
        payment_id = params.get("data.id") or params.get("id")
        return cls(
            type=params.get("type"),
            topic=params.get("topic"),
            data={"id": payment_id} if payment_id else None,
        )

    def get_payment_id(self) -> str | None:
        """Extract payment ID from either format."""
        if self.data and self.data.get("id"):
            return str(self.data["id"])
        if self.resource:
            return self.resource.rstrip("/").split("/")[-1]
        return None

    def get_notification_type(self) -> str | None:
        """Get notification type from either format."""
        return self.type or self.topic


def _parse_payload(raw_body: bytes, query_params: dict[str, str]) -> MPWebhookPayload:
    if raw_body.strip():
        try:
            return MPWebhookPayload.model_validate_json(raw_body)
        except ValidationError:
            if not query_params:
                raise
    return MPWebhookPayload.from_query_params(query_params)


@router.post("/webhook")
async def mercadopago_webhook(request: Request, use_case: ConfirmPaidReservationUseCaseDep):
    """
    Handle Mercado Pago payment notifications.

    Returns 200 for processed or ignored notifications (including malformed
    ones) and 500 when the payment or calendar gateway fails.
    """
    raw_body = await request.body()
    logger.info(f"[MP-WEBHOOK] Raw payload received: {raw_body.decode(errors='replace')[:500]}")

    try:
        payload = _parse_payload(raw_body, dict(request.query_params))
    except ValidationError as e:
        logger.error(f"[MP-WEBHOOK] Payload validation failed: {e}")
        return {"status": "ignored", "reason": "validation_failed"}

    notification = PaymentNotification(
        notification_type=payload.get_notification_type(),
        payment_id=payload.get_payment_id(),
    )
    logger.info(
        f"[MP-WEBHOOK] Parsed: type={notification.notification_type}, action={payload.action}, "
        f"payment_id={notification.payment_id}, live_mode={payload.live_mode}"
    )

    try:
        result = await use_case.execute(notification)
    except MercadoPagoNotFoundError as e:
        logger.warning(f"[MP-WEBHOOK] Payment {notification.payment_id} not found: {e.message}")
        return {"status": "ignored", "reason": "payment_not_found", "payment_id": notification.payment_id}
    except EntityNotFoundException as e:
        logger.error(f"[MP-WEBHOOK] {e.message} (payment {notification.payment_id})")
        return {"status": "ignored", "reason": "entity_not_found", "payment_id": notification.payment_id}
    except IntegrationException as e:
        logger.error(f"[MP-WEBHOOK] Integration error ({e.service}): {e.message}")
        return _error_response("integration_error", e)
    except DomainException as e:
        logger.error(f"[MP-WEBHOOK] {e.code}: {e.message}", exc_info=True)
        return _error_response(e.code.lower(), e)
    except Exception as e:
        logger.error(f"[MP-WEBHOOK] Unexpected error: {e}", exc_info=True)
        return _error_response("unexpected_error", e)

    body: dict[str, Any] = {"status": result.status}
    if result.reason:
        body["reason"] = result.reason
    if result.payment_id:
        body["payment_id"] = result.payment_id
    if result.slot_id:
        body["slot_id"] = result.slot_id
    body.update(result.data)
    return body


def _error_response(reason: str, error: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "reason": reason, "error": str(error)},
    )
