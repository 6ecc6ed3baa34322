"""
Unit tests for slot administration and listing use cases.
"""

from datetime import date

import pytest

from tests.utils.builders import PatientBuilder, SlotBuilder
from turnos.core.domain import AppointmentConflictException, EntityNotFoundException, ValidationException
from turnos.domains.scheduling.application.dto import CreateSlotRequest, UpdateSlotRequest
from turnos.domains.scheduling.application.use_cases import (
    CreateSlotUseCase,
    DeleteSlotUseCase,
    ListAllSlotsUseCase,
    ListAvailableSlotsUseCase,
    ListPatientSlotsUseCase,
    UpdateSlotUseCase,
)
from turnos.domains.scheduling.domain.entities import PatientProfile
from turnos.domains.scheduling.domain.value_objects import SlotStatus


@pytest.fixture
def update_use_case(slot_repository, calendar_gateway, event_builder):
    return UpdateSlotUseCase(slot_repository, calendar_gateway, event_builder)


@pytest.fixture
def delete_use_case(slot_repository, calendar_gateway):
    return DeleteSlotUseCase(slot_repository, calendar_gateway)


# ============================================================================
# CreateSlotUseCase
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_slot(slot_repository):
    # Arrange
    use_case = CreateSlotUseCase(slot_repository)

    # Act
    slot = await use_case.execute(
        CreateSlotRequest(doctor_id="doc-1", specialty_id="spec-1", slot_date="2025-03-11", slot_time="10:30")
    )

    # Assert
    assert slot.id is not None
    assert slot.status == SlotStatus.AVAILABLE
    assert slot_repository.stored(slot.id).slot_date == date(2025, 3, 11)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_slot_conflict(slot_repository):
    use_case = CreateSlotUseCase(slot_repository)

    with pytest.raises(AppointmentConflictException):
        await use_case.execute(
            CreateSlotRequest(doctor_id="doc-1", specialty_id="spec-1", slot_date="2025-03-10", slot_time="09:00")
        )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_same_time_other_doctor_allowed(slot_repository):
    use_case = CreateSlotUseCase(slot_repository)

    slot = await use_case.execute(
        CreateSlotRequest(doctor_id="doc-2", specialty_id="spec-1", slot_date="2025-03-10", slot_time="09:00")
    )

    assert slot.doctor_id == "doc-2"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_slot_invalid_time(slot_repository):
    use_case = CreateSlotUseCase(slot_repository)

    with pytest.raises(ValidationException):
        await use_case.execute(
            CreateSlotRequest(doctor_id="doc-1", specialty_id="spec-1", slot_date="2025-03-10", slot_time="25:00")
        )


# ============================================================================
# UpdateSlotUseCase
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_to_own_date_and_time_is_not_a_conflict(update_use_case, calendar_gateway):
    slot = await update_use_case.execute(UpdateSlotRequest(slot_id="slot-1", slot_date="2025-03-10", slot_time="09:00"))

    assert slot.slot_time == "09:00"
    assert calendar_gateway.updated == []


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_conflicting_with_other_slot(update_use_case, slot_repository):
    # Arrange
    slot_repository.seed(SlotBuilder().with_id("slot-2").at(date(2025, 3, 10), "10:00").build())

    # Act / Assert
    with pytest.raises(AppointmentConflictException):
        await update_use_case.execute(UpdateSlotRequest(slot_id="slot-2", slot_date="2025-03-10", slot_time="09:00"))

    assert slot_repository.stored("slot-2").slot_time == "10:00"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_moves_calendar_event(update_use_case, slot_repository, calendar_gateway):
    # Arrange
    slot_repository.seed(
        SlotBuilder().with_id("slot-2").at(date(2025, 3, 10), "10:00").occupied_by("pat-1", calendar_event_id="evt-9")
        .build()
    )

    # Act
    slot = await update_use_case.execute(UpdateSlotRequest(slot_id="slot-2", slot_date="2025-03-12", slot_time="11:00"))

    # Assert
    assert slot.slot_date == date(2025, 3, 12)
    assert slot_repository.stored("slot-2").slot_time == "11:00"
    assert calendar_gateway.updated == [
        {
            "event_id": "evt-9",
            "summary": "Turno actualizado",
            "start": "2025-03-12T11:00:00-03:00",
            "end": "2025-03-12T11:30:00-03:00",
            "time_zone": "America/Argentina/Buenos_Aires",
        }
    ]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_missing_slot(update_use_case):
    with pytest.raises(EntityNotFoundException):
        await update_use_case.execute(UpdateSlotRequest(slot_id="missing", slot_date="2025-03-12", slot_time="11:00"))


# ============================================================================
# DeleteSlotUseCase
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_slot_removes_event(delete_use_case, slot_repository, calendar_gateway):
    # Arrange
    slot_repository.seed(
        SlotBuilder().with_id("slot-2").at(date(2025, 3, 10), "10:00").occupied_by("pat-1", calendar_event_id="evt-9")
        .build()
    )

    # Act
    result = await delete_use_case.execute("slot-2")

    # Assert
    assert "slot-2" not in slot_repository.slots
    assert calendar_gateway.deleted == ["evt-9"]
    assert result.had_calendar_event is True
    assert result.calendar_event_deleted is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_slot_without_event(delete_use_case, calendar_gateway):
    result = await delete_use_case.execute("slot-1")

    assert result.had_calendar_event is False
    assert calendar_gateway.deleted == []


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_slot_calendar_failure_still_deletes(delete_use_case, slot_repository, calendar_gateway):
    # Arrange
    slot_repository.seed(
        SlotBuilder().with_id("slot-2").at(date(2025, 3, 10), "10:00").occupied_by("pat-1", calendar_event_id="evt-9")
        .build()
    )
    calendar_gateway.fail_on_delete = True

    # Act
    result = await delete_use_case.execute("slot-2")

    # Assert
    assert "slot-2" not in slot_repository.slots
    assert result.calendar_event_deleted is False


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_missing_slot(delete_use_case):
    with pytest.raises(EntityNotFoundException):
        await delete_use_case.execute("missing")


# ============================================================================
# Listing
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_slots_date_desc_time_asc(slot_repository):
    # Arrange
    for slot_id, day, hour in [("a", 10, "11:00"), ("b", 12, "09:00"), ("c", 10, "08:00"), ("d", 12, "15:00")]:
        slot_repository.seed(
            SlotBuilder().with_id(slot_id).at(date(2025, 3, day), hour).occupied_by("pat-1").build()
        )
    use_case = ListPatientSlotsUseCase(slot_repository)

    # Act
    result = await use_case.execute("pat-1")

    # Assert
    assert [item.slot.id for item in result] == ["b", "d", "c", "a"]
    assert result[0].doctor_name == "Ana García"
    assert result[0].specialty_name == "Cardiología"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_available_slots_only(slot_repository):
    slot_repository.seed(SlotBuilder().with_id("slot-2").at(date(2025, 3, 10), "10:00").occupied_by("pat-1").build())
    use_case = ListAvailableSlotsUseCase(slot_repository)

    result = await use_case.execute("doc-1")

    assert [slot.id for slot in result] == ["slot-1"]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_all_slots_enriched_with_profile(slot_repository, patient_repository):
    # Arrange
    other = PatientBuilder().with_id("pat-2").with_email("maria@example.com").build()
    slot_repository.add_patient(other)
    slot_repository.seed(SlotBuilder().with_id("slot-2").at(date(2025, 3, 10), "10:00").occupied_by("pat-1").build())
    slot_repository.seed(SlotBuilder().with_id("slot-3").at(date(2025, 3, 10), "11:00").occupied_by("pat-2").build())
    patient_repository.profiles["pat-1"] = PatientProfile(id="prof-1", user_id="pat-1", document="30111222", phone="11")
    use_case = ListAllSlotsUseCase(slot_repository, patient_repository)

    # Act
    result = {item.slot.id: item for item in await use_case.execute()}

    # Assert
    assert result["slot-1"].patient is None
    assert result["slot-2"].patient.document == "30111222"
    assert result["slot-2"].patient.phone == "11"
    assert result["slot-3"].patient.document is None
