# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Data Transfer Objects for slot operations.
# ============================================================================
"""Scheduling DTOs.

Request and result objects for booking, payment, rescheduling and listing.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from ...domain.entities import Doctor, Slot, Specialty
from ...domain.value_objects import InsuranceSelection
from ..ports.calendar_gateway import CalendarEvent

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class ReserveSlotDirectRequest:
    """Reserva directa, sin pago."""

    slot_id: str
    patient_id: str
    obra_social: InsuranceSelection | None = None


@dataclass(frozen=True)
class ReserveSlotRequest:
    """Reserva con precio según obra social."""

    slot_id: str
    patient_id: str
    obra_social: InsuranceSelection


@dataclass(frozen=True)
class PaymentNotification:
    """Notificación de Mercado Pago ya normalizada."""

    notification_type: str | None
    payment_id: str | None


@dataclass(frozen=True)
class CreatePaymentPreferenceRequest:
    slot_id: str
    insurance_name: str
    payer_email: str


@dataclass(frozen=True)
class CreateSlotRequest:
    doctor_id: str
    specialty_id: str
    slot_date: str | date
    slot_time: str


@dataclass(frozen=True)
class UpdateSlotRequest:
    """Reprogramación; doctor y especialidad son opcionales."""

    slot_id: str
    slot_date: str | date
    slot_time: str
    doctor_id: str | None = None
    specialty_id: str | None = None


# =============================================================================
# Projection DTOs
# =============================================================================


@dataclass(frozen=True)
class PatientSummary:
    """Proyección del paciente; ``document`` y ``phone`` vienen de la ficha."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: str
    document: str | None = None
    phone: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "role": self.role,
            "document": self.document,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class SlotDetailsDTO:
    """Turno con médico, especialidad y paciente resueltos."""

    slot: Slot
    doctor: Doctor | None = None
    specialty: Specialty | None = None
    patient: PatientSummary | None = None

    @property
    def doctor_name(self) -> str | None:
        return self.doctor.full_name if self.doctor else None

    @property
    def specialty_name(self) -> str | None:
        return self.specialty.name if self.specialty else None


# =============================================================================
# Result DTOs
# =============================================================================


@dataclass(frozen=True)
class ReservationResult:
    """Resultado de una reserva confirmada."""

    slot: Slot
    calendar_event: CalendarEvent
    price_paid: Decimal


@dataclass(frozen=True)
class PaymentPreferenceResult:
    """Preferencia de pago; ``init_point`` es None cuando la cobertura es total."""

    price: Decimal
    init_point: str | None = None
    preference_id: str | None = None
    sandbox_init_point: str | None = None

    @property
    def fully_covered(self) -> bool:
        return self.init_point is None


@dataclass(frozen=True)
class WebhookResult:
    """Resultado del procesamiento de una notificación de pago."""

    status: str  # "success" | "ignored"
    reason: str | None = None
    payment_id: str | None = None
    slot_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def processed(self) -> bool:
        return self.status == "success"


@dataclass(frozen=True)
class DeleteSlotResult:
    slot_id: str
    had_calendar_event: bool = False
    calendar_event_deleted: bool = False
