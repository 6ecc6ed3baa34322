# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use cases for booking a slot from the patient UI.
# ============================================================================
"""Reserve Slot Use Cases.

Two UI entry points:
- ReserveSlotDirectUseCase: books without payment, price recorded as 0.
- ReserveSlotUseCase: books with the price given by the reservation
  discount table for the chosen insurance.
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from turnos.core.domain import EntityNotFoundException

from ...domain.entities import Patient
from ...domain.services import PricingPolicy
from ...domain.value_objects import InsuranceSelection
from ..dto import ReservationResult, ReserveSlotDirectRequest, ReserveSlotRequest

if TYPE_CHECKING:
    from ..ports import IPatientRepository
    from ..services import SlotBookingService

logger = logging.getLogger(__name__)


async def _load_patient(patients: "IPatientRepository", patient_id: str) -> Patient:
    patient = await patients.find_by_id(patient_id)
    if patient is None:
        raise EntityNotFoundException("Paciente", patient_id, "Paciente no encontrado")
    return patient


class ReserveSlotDirectUseCase:
    """Reserva directa de un turno disponible, sin precio."""

    def __init__(
        self,
        booking_service: "SlotBookingService",
        patient_repository: "IPatientRepository",
        default_obra_social: str = "Particular",
    ) -> None:
        self._booking = booking_service
        self._patients = patient_repository
        self._default_obra_social = default_obra_social

    async def execute(self, request: ReserveSlotDirectRequest) -> ReservationResult:
        """
        Raises:
            EntityNotFoundException: Slot or patient not found.
            SlotUnavailableException: Slot already occupied.
        """
        logger.info(f"[RESERVA] Direct reservation of slot {request.slot_id} for patient {request.patient_id}")
        details = await self._booking.load_bookable(request.slot_id)
        patient = await _load_patient(self._patients, request.patient_id)
        obra_social = request.obra_social or InsuranceSelection(name=self._default_obra_social)
        return await self._booking.book(details, patient, obra_social, Decimal("0"))


class ReserveSlotUseCase:
    """Reserva de un turno con precio según la obra social."""

    def __init__(
        self,
        booking_service: "SlotBookingService",
        patient_repository: "IPatientRepository",
        pricing_policy: PricingPolicy,
    ) -> None:
        self._booking = booking_service
        self._patients = patient_repository
        self._pricing = pricing_policy

    async def execute(self, request: ReserveSlotRequest) -> ReservationResult:
        """
        Raises:
            EntityNotFoundException: Slot or patient not found.
            SlotUnavailableException: Slot already occupied.
        """
        logger.info(
            f"[RESERVA] Reservation of slot {request.slot_id} for patient {request.patient_id} "
            f"({request.obra_social.name})"
        )
        details = await self._booking.load_bookable(request.slot_id)
        patient = await _load_patient(self._patients, request.patient_id)
        price = self._pricing.price(request.obra_social.name)
        return await self._booking.book(details, patient, request.obra_social, price)
