"""
Scheduling API Dependencies

FastAPI dependencies for the scheduling domain.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.container import get_container
from turnos.database.async_db import get_async_db
from turnos.domains.scheduling.application.use_cases import (
    ConfirmPaidReservationUseCase,
    CreatePaymentPreferenceUseCase,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    ListAllSlotsUseCase,
    ListAvailableSlotsUseCase,
    ListPatientSlotsUseCase,
    ReserveSlotDirectUseCase,
    ReserveSlotUseCase,
    UpdateSlotUseCase,
)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_reserve_slot_use_case(db: DbSession) -> ReserveSlotUseCase:
    return get_container().create_reserve_slot_use_case(db)


def get_reserve_slot_direct_use_case(db: DbSession) -> ReserveSlotDirectUseCase:
    return get_container().create_reserve_slot_direct_use_case(db)


def get_confirm_paid_reservation_use_case(db: DbSession) -> ConfirmPaidReservationUseCase:
    return get_container().create_confirm_paid_reservation_use_case(db)


def get_payment_preference_use_case(db: DbSession) -> CreatePaymentPreferenceUseCase:
    return get_container().create_payment_preference_use_case(db)


def get_create_slot_use_case(db: DbSession) -> CreateSlotUseCase:
    return get_container().create_create_slot_use_case(db)


def get_update_slot_use_case(db: DbSession) -> UpdateSlotUseCase:
    return get_container().create_update_slot_use_case(db)


def get_delete_slot_use_case(db: DbSession) -> DeleteSlotUseCase:
    return get_container().create_delete_slot_use_case(db)


def get_list_patient_slots_use_case(db: DbSession) -> ListPatientSlotsUseCase:
    return get_container().create_list_patient_slots_use_case(db)


def get_list_available_slots_use_case(db: DbSession) -> ListAvailableSlotsUseCase:
    return get_container().create_list_available_slots_use_case(db)


def get_list_all_slots_use_case(db: DbSession) -> ListAllSlotsUseCase:
    return get_container().create_list_all_slots_use_case(db)


__all__ = [
    "get_confirm_paid_reservation_use_case",
    "get_create_slot_use_case",
    "get_delete_slot_use_case",
    "get_list_all_slots_use_case",
    "get_list_available_slots_use_case",
    "get_list_patient_slots_use_case",
    "get_payment_preference_use_case",
    "get_reserve_slot_direct_use_case",
    "get_reserve_slot_use_case",
    "get_update_slot_use_case",
]
