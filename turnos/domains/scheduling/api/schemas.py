"""
Scheduling API Schemas

Pydantic schemas for API request/response validation.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from turnos.domains.scheduling.application.dto import PatientSummary, SlotDetailsDTO
from turnos.domains.scheduling.domain.entities import Slot
from turnos.domains.scheduling.domain.value_objects import InsuranceSelection

# =============================================================================
# Requests
# =============================================================================


class InsuranceSelectionSchema(BaseModel):
    """Obra social elegida por el paciente."""

    name: str
    member_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("member_number", "memberNumber"),
    )

    def to_value_object(self) -> InsuranceSelection:
        """Raises ValidationException when the name is blank."""
        return InsuranceSelection(name=self.name, member_number=self.member_number or "")


class ReserveSlotBody(BaseModel):
    """Body de POST /turnos/{slot_id}/reservar."""

    patient_id: str = Field(..., min_length=1)
    obra_social: InsuranceSelectionSchema


class ReserveSlotDirectBody(BaseModel):
    """Body de POST /turnos/reservar-directo."""

    slot_id: str = Field(..., min_length=1)
    patient_id: str = Field(..., min_length=1)
    obra_social: InsuranceSelectionSchema | None = None


class CreateSlotBody(BaseModel):
    doctor_id: str = Field(..., min_length=1)
    specialty_id: str = Field(..., min_length=1)
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM")


class UpdateSlotBody(BaseModel):
    doctor_id: str | None = None
    specialty_id: str | None = None
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM")


class PaymentPreferenceBody(BaseModel):
    """Body de POST /mercadopago/preference."""

    slot_id: str = Field(..., min_length=1)
    obra_social: str = Field(..., min_length=1)
    payer_email: str = Field(..., min_length=3)


# =============================================================================
# Responses
# =============================================================================


class SlotResponse(BaseModel):
    """Turno."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    doctor_id: str
    specialty_id: str
    date: str | None
    time: str
    status: str
    patient_id: str | None = None
    obra_social: dict[str, Any] | None = None
    price_paid: float = 0
    calendar_event_id: str | None = None

    @classmethod
    def from_entity(cls, slot: Slot) -> "SlotResponse":
        return cls(**slot.to_summary_dict())


class PatientSummaryResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: str
    document: str | None = None
    phone: str | None = None

    @classmethod
    def from_dto(cls, patient: PatientSummary) -> "PatientSummaryResponse":
        return cls(**patient.to_dict())


class SlotDetailsResponse(SlotResponse):
    """Turno con médico, especialidad y paciente."""

    doctor_name: str | None = None
    specialty_name: str | None = None
    patient: PatientSummaryResponse | None = None

    @classmethod
    def from_dto(cls, details: SlotDetailsDTO) -> "SlotDetailsResponse":
        return cls(
            **details.slot.to_summary_dict(),
            doctor_name=details.doctor_name,
            specialty_name=details.specialty_name,
            patient=PatientSummaryResponse.from_dto(details.patient) if details.patient else None,
        )


class ReservationResponse(BaseModel):
    message: str = "Turno reservado con éxito"
    slot: SlotResponse
    price_paid: float
    calendar_event_id: str
    calendar_event_link: str | None = None


class PaymentPreferenceResponse(BaseModel):
    """``init_point`` es null cuando la obra social cubre el total."""

    init_point: str | None = None
    sandbox_init_point: str | None = None
    preference_id: str | None = None
    price: float
    fully_covered: bool


class DeleteSlotResponse(BaseModel):
    message: str = "Turno eliminado"
    slot_id: str
    had_calendar_event: bool
    calendar_event_deleted: bool
