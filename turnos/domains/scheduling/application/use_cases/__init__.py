# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use cases for the reservation workflow.
# ============================================================================
"""Scheduling Use Cases."""

from .confirm_paid_reservation import ConfirmPaidReservationUseCase
from .create_payment_preference import CreatePaymentPreferenceUseCase
from .create_slot import CreateSlotUseCase
from .delete_slot import DeleteSlotUseCase
from .list_slots import ListAllSlotsUseCase, ListAvailableSlotsUseCase, ListPatientSlotsUseCase
from .reserve_slot import ReserveSlotDirectUseCase, ReserveSlotUseCase
from .update_slot import UpdateSlotUseCase

__all__ = [
    "ConfirmPaidReservationUseCase",
    "CreatePaymentPreferenceUseCase",
    "CreateSlotUseCase",
    "DeleteSlotUseCase",
    "ListAllSlotsUseCase",
    "ListAvailableSlotsUseCase",
    "ListPatientSlotsUseCase",
    "ReserveSlotDirectUseCase",
    "ReserveSlotUseCase",
    "UpdateSlotUseCase",
]
