"""
Calendar Event Builder

Builds the calendar payload for a booked slot. The slot's civil date and
``HH:MM`` time are anchored to a fixed named time zone before being turned
into absolute instants.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from ..entities.doctor import Doctor, Specialty
from ..entities.patient import Patient
from ..entities.slot import parse_slot_time

UPDATED_EVENT_SUMMARY = "Turno actualizado"


@dataclass(frozen=True)
class CalendarEventWindow:
    """Start/end instants of an appointment, ISO-8601 with UTC offset."""

    start: str
    end: str
    time_zone: str


@dataclass(frozen=True)
class CalendarEventPayload:
    """Data sent to the calendar gateway for a new event."""

    summary: str
    description: str
    start: str
    end: str
    time_zone: str
    attendees: list[str] = field(default_factory=list)


class CalendarEventBuilder:
    """Construye eventos de calendario para turnos."""

    def __init__(self, time_zone: str = "America/Argentina/Buenos_Aires", duration_minutes: int = 30):
        self._time_zone = time_zone
        self._zone = ZoneInfo(time_zone)
        self._duration = timedelta(minutes=duration_minutes)

    @property
    def time_zone(self) -> str:
        return self._time_zone

    def window(self, slot_date: date, slot_time: str) -> CalendarEventWindow:
        """Anchor a civil date + ``HH:MM`` to the configured zone."""
        hours, minutes = parse_slot_time(slot_time).split(":")
        start = datetime(
            slot_date.year,
            slot_date.month,
            slot_date.day,
            int(hours),
            int(minutes),
            tzinfo=self._zone,
        )
        end = start + self._duration
        return CalendarEventWindow(
            start=start.isoformat(timespec="seconds"),
            end=end.isoformat(timespec="seconds"),
            time_zone=self._time_zone,
        )

    def build(
        self,
        slot_date: date,
        slot_time: str,
        doctor: Doctor,
        specialty: Specialty,
        patient: Patient,
        insurance_name: str,
    ) -> CalendarEventPayload:
        """Build the payload for a newly booked slot."""
        window = self.window(slot_date, slot_time)
        return CalendarEventPayload(
            summary=f"Turno: {specialty.name} con Dr. {doctor.first_name} {doctor.last_name}",
            description=(
                f"Paciente: {patient.full_name}\n"
                f"Email: {patient.email}\n"
                f"Obra Social: {insurance_name}"
            ),
            start=window.start,
            end=window.end,
            time_zone=window.time_zone,
            attendees=[patient.email] if patient.email else [],
        )
