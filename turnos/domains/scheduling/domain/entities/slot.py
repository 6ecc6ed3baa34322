"""Slot Entity - Aggregate Root.

Represents a bookable medical appointment slot (turno) with the rules for
its single booking transition and rescheduling.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from turnos.core.domain import AggregateRoot, SlotUnavailableException, ValidationException

from ..value_objects.insurance import InsuranceSelection
from ..value_objects.slot_status import SlotStatus

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_slot_time(value: str) -> str:
    """Validate an ``HH:MM`` time-of-day string.

    Raises:
        ValidationException: If the value is not a valid 24h ``HH:MM`` string.
    """
    if not isinstance(value, str) or not _TIME_PATTERN.match(value):
        raise ValidationException(f"Hora inválida: {value!r} (formato HH:MM)", field="time")
    return value


def parse_slot_date(value: str | date) -> date:
    """Normalize a ``YYYY-MM-DD`` string (or date/datetime) to its civil day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationException(f"Fecha inválida: {value!r} (formato YYYY-MM-DD)", field="date") from e


@dataclass
class Slot(AggregateRoot[str]):
    """Turno médico - Aggregate Root.

    ``slot_date`` and ``slot_time`` are civil values with no time zone; they
    only become an instant once anchored to the configured calendar zone.
    """

    doctor_id: str = ""
    specialty_id: str = ""
    slot_date: date | None = None
    slot_time: str = ""
    status: SlotStatus = SlotStatus.AVAILABLE

    # Reserva
    patient_id: str | None = None
    obra_social: InsuranceSelection | None = None
    price_paid: Decimal = Decimal("0")
    calendar_event_id: str | None = None

    def ensure_bookable(self) -> None:
        """Verificar que el turno puede reservarse.

        Raises:
            SlotUnavailableException: Si el turno no está disponible.
        """
        if not self.status.is_bookable():
            raise SlotUnavailableException(str(self.id), self.status.value)

    def occupy(
        self,
        patient_id: str,
        obra_social: InsuranceSelection,
        price_paid: Decimal,
        calendar_event_id: str,
    ) -> None:
        """Marcar el turno como ocupado con todos los datos de la reserva.

        Raises:
            SlotUnavailableException: Si el turno no está disponible.
        """
        self.ensure_bookable()
        self.status = SlotStatus.OCCUPIED
        self.patient_id = patient_id
        self.obra_social = obra_social
        self.price_paid = price_paid
        self.calendar_event_id = calendar_event_id
        self.touch()

    def reschedule(self, new_date: date, new_time: str) -> None:
        """Reprogramar el turno a otra fecha y hora."""
        self.slot_date = new_date
        self.slot_time = parse_slot_time(new_time)
        self.touch()

    def is_available(self) -> bool:
        return self.status == SlotStatus.AVAILABLE

    def has_calendar_event(self) -> bool:
        return bool(self.calendar_event_id)

    @classmethod
    def create(
        cls,
        doctor_id: str,
        specialty_id: str,
        slot_date: str | date,
        slot_time: str,
    ) -> "Slot":
        """Factory method para publicar un turno disponible.

        Args:
            doctor_id: ID del médico.
            specialty_id: ID de la especialidad.
            slot_date: Fecha del turno (YYYY-MM-DD).
            slot_time: Hora del turno (HH:MM).

        Returns:
            Nueva instancia de Slot en estado disponible.
        """
        return cls(
            doctor_id=doctor_id,
            specialty_id=specialty_id,
            slot_date=parse_slot_date(slot_date),
            slot_time=parse_slot_time(slot_time),
            status=SlotStatus.AVAILABLE,
        )

    def to_summary_dict(self) -> dict[str, Any]:
        """Diccionario con resumen del turno."""
        return {
            "id": self.id,
            "doctor_id": self.doctor_id,
            "specialty_id": self.specialty_id,
            "date": self.slot_date.isoformat() if self.slot_date else None,
            "time": self.slot_time,
            "status": self.status.value,
            "patient_id": self.patient_id,
            "obra_social": self.obra_social.to_dict() if self.obra_social else None,
            "price_paid": float(self.price_paid),
            "calendar_event_id": self.calendar_event_id,
        }
