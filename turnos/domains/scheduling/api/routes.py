"""
Scheduling API Routes

FastAPI routers for slot management, reservations and payment preferences.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from turnos.api.dependencies import AdminUser, CurrentUser
from turnos.domains.scheduling.api.dependencies import (
    get_create_slot_use_case,
    get_delete_slot_use_case,
    get_list_all_slots_use_case,
    get_list_available_slots_use_case,
    get_list_patient_slots_use_case,
    get_payment_preference_use_case,
    get_reserve_slot_direct_use_case,
    get_reserve_slot_use_case,
    get_update_slot_use_case,
)
from turnos.domains.scheduling.api.schemas import (
    CreateSlotBody,
    DeleteSlotResponse,
    PaymentPreferenceBody,
    PaymentPreferenceResponse,
    ReservationResponse,
    ReserveSlotBody,
    ReserveSlotDirectBody,
    SlotDetailsResponse,
    SlotResponse,
    UpdateSlotBody,
)
from turnos.domains.scheduling.application.dto import (
    CreatePaymentPreferenceRequest,
    CreateSlotRequest,
    ReservationResult,
    ReserveSlotDirectRequest,
    ReserveSlotRequest,
    UpdateSlotRequest,
)
from turnos.domains.scheduling.application.use_cases import (
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

router = APIRouter(prefix="/turnos", tags=["Turnos"])
payments_router = APIRouter(prefix="/mercadopago", tags=["mercadopago"])

# Type aliases for use case dependencies
ReserveSlotUseCaseDep = Annotated[ReserveSlotUseCase, Depends(get_reserve_slot_use_case)]
ReserveSlotDirectUseCaseDep = Annotated[ReserveSlotDirectUseCase, Depends(get_reserve_slot_direct_use_case)]
PaymentPreferenceUseCaseDep = Annotated[CreatePaymentPreferenceUseCase, Depends(get_payment_preference_use_case)]
CreateSlotUseCaseDep = Annotated[CreateSlotUseCase, Depends(get_create_slot_use_case)]
UpdateSlotUseCaseDep = Annotated[UpdateSlotUseCase, Depends(get_update_slot_use_case)]
DeleteSlotUseCaseDep = Annotated[DeleteSlotUseCase, Depends(get_delete_slot_use_case)]
ListPatientSlotsUseCaseDep = Annotated[ListPatientSlotsUseCase, Depends(get_list_patient_slots_use_case)]
ListAvailableSlotsUseCaseDep = Annotated[ListAvailableSlotsUseCase, Depends(get_list_available_slots_use_case)]
ListAllSlotsUseCaseDep = Annotated[ListAllSlotsUseCase, Depends(get_list_all_slots_use_case)]


def _reservation_response(result: ReservationResult) -> ReservationResponse:
    return ReservationResponse(
        slot=SlotResponse.from_entity(result.slot),
        price_paid=float(result.price_paid),
        calendar_event_id=result.calendar_event.id,
        calendar_event_link=result.calendar_event.html_link,
    )


# ==================== QUERIES ====================


@router.get("", response_model=list[SlotDetailsResponse])
async def list_all_slots(use_case: ListAllSlotsUseCaseDep, _admin: AdminUser):
    """Listado completo de turnos (admin)."""
    slots = await use_case.execute()
    return [SlotDetailsResponse.from_dto(item) for item in slots]


@router.get("/medico/{doctor_id}/disponibles", response_model=list[SlotResponse])
async def list_available_slots(doctor_id: str, use_case: ListAvailableSlotsUseCaseDep, _user: CurrentUser):
    """Turnos disponibles de un médico."""
    slots = await use_case.execute(doctor_id)
    return [SlotResponse.from_entity(slot) for slot in slots]


@router.get("/paciente/{patient_id}", response_model=list[SlotDetailsResponse])
async def list_patient_slots(patient_id: str, use_case: ListPatientSlotsUseCaseDep, _user: CurrentUser):
    """Turnos de un paciente."""
    slots = await use_case.execute(patient_id)
    return [SlotDetailsResponse.from_dto(item) for item in slots]


# ==================== RESERVATIONS ====================


@router.post("/reservar-directo", response_model=ReservationResponse)
async def reserve_slot_direct(body: ReserveSlotDirectBody, use_case: ReserveSlotDirectUseCaseDep, _user: CurrentUser):
    """Reserva directa de un turno, sin pago."""
    result = await use_case.execute(
        ReserveSlotDirectRequest(
            slot_id=body.slot_id,
            patient_id=body.patient_id,
            obra_social=body.obra_social.to_value_object() if body.obra_social else None,
        )
    )
    return _reservation_response(result)


@router.post("/{slot_id}/reservar", response_model=ReservationResponse)
async def reserve_slot(slot_id: str, body: ReserveSlotBody, use_case: ReserveSlotUseCaseDep, _user: CurrentUser):
    """Reserva un turno con precio según la obra social."""
    result = await use_case.execute(
        ReserveSlotRequest(
            slot_id=slot_id,
            patient_id=body.patient_id,
            obra_social=body.obra_social.to_value_object(),
        )
    )
    return _reservation_response(result)


# ==================== ADMIN ====================


@router.post("", response_model=SlotResponse, status_code=status.HTTP_201_CREATED)
async def create_slot(body: CreateSlotBody, use_case: CreateSlotUseCaseDep, _admin: AdminUser):
    """Publica un turno disponible."""
    slot = await use_case.execute(
        CreateSlotRequest(
            doctor_id=body.doctor_id,
            specialty_id=body.specialty_id,
            slot_date=body.date,
            slot_time=body.time,
        )
    )
    return SlotResponse.from_entity(slot)


@router.put("/{slot_id}", response_model=SlotResponse)
async def update_slot(slot_id: str, body: UpdateSlotBody, use_case: UpdateSlotUseCaseDep, _admin: AdminUser):
    """Reprograma un turno."""
    slot = await use_case.execute(
        UpdateSlotRequest(
            slot_id=slot_id,
            slot_date=body.date,
            slot_time=body.time,
            doctor_id=body.doctor_id,
            specialty_id=body.specialty_id,
        )
    )
    return SlotResponse.from_entity(slot)


@router.delete("/{slot_id}", response_model=DeleteSlotResponse)
async def delete_slot(slot_id: str, use_case: DeleteSlotUseCaseDep, _admin: AdminUser):
    """Elimina un turno y su evento de calendario."""
    result = await use_case.execute(slot_id)
    return DeleteSlotResponse(
        slot_id=result.slot_id,
        had_calendar_event=result.had_calendar_event,
        calendar_event_deleted=result.calendar_event_deleted,
    )


# ==================== PAYMENTS ====================


@payments_router.post("/preference", response_model=PaymentPreferenceResponse)
async def create_payment_preference(
    body: PaymentPreferenceBody,
    use_case: PaymentPreferenceUseCaseDep,
    _user: CurrentUser,
):
    """Genera el link de pago del turno; sin link si la cobertura es total."""
    result = await use_case.execute(
        CreatePaymentPreferenceRequest(
            slot_id=body.slot_id,
            insurance_name=body.obra_social,
            payer_email=body.payer_email,
        )
    )
    return PaymentPreferenceResponse(
        init_point=result.init_point,
        sandbox_init_point=result.sandbox_init_point,
        preference_id=result.preference_id,
        price=float(result.price),
        fully_covered=result.fully_covered,
    )
