"""Scheduling DTOs."""

from .scheduling_dtos import (
    CreatePaymentPreferenceRequest,
    CreateSlotRequest,
    DeleteSlotResult,
    PatientSummary,
    PaymentNotification,
    PaymentPreferenceResult,
    ReservationResult,
    ReserveSlotDirectRequest,
    ReserveSlotRequest,
    SlotDetailsDTO,
    UpdateSlotRequest,
    WebhookResult,
)

__all__ = [
    # Requests
    "CreatePaymentPreferenceRequest",
    "CreateSlotRequest",
    "PaymentNotification",
    "ReserveSlotDirectRequest",
    "ReserveSlotRequest",
    "UpdateSlotRequest",
    # Projections
    "PatientSummary",
    "SlotDetailsDTO",
    # Results
    "DeleteSlotResult",
    "PaymentPreferenceResult",
    "ReservationResult",
    "WebhookResult",
]
