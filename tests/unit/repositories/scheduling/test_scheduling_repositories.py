"""
Unit tests for Scheduling Domain Repositories.

Tests the data access layer for slots and patients with a mocked session.
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.domain import AppointmentConflictException, EntityNotFoundException
from turnos.domains.scheduling.domain.entities import Slot
from turnos.domains.scheduling.domain.value_objects import InsuranceSelection, SlotStatus
from turnos.domains.scheduling.infrastructure.repositories import (
    SQLAlchemyPatientRepository,
    SQLAlchemySlotRepository,
)

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def sample_slot_model():
    """Sample SQLAlchemy slot model."""
    model = MagicMock()
    model.id = "slot-1"
    model.doctor_id = "doc-1"
    model.specialty_id = "spec-1"
    model.slot_date = date(2025, 3, 10)
    model.slot_time = "09:00"
    model.status = "occupied"
    model.patient_id = "pat-1"
    model.obra_social = {"name": "OSDE", "member_number": "123"}
    model.price_paid = Decimal("3500.00")
    model.calendar_event_id = "evt-1"
    model.created_at = datetime.now(UTC)
    model.updated_at = datetime.now(UTC)
    return model


@pytest.fixture
def sample_user_model():
    """Sample SQLAlchemy user model."""
    model = MagicMock()
    model.id = "pat-1"
    model.first_name = "Juan"
    model.last_name = "Pérez"
    model.email = "juan@example.com"
    model.role = "patient"
    model.created_at = datetime.now(UTC)
    model.updated_at = datetime.now(UTC)
    return model


def _rowcount_result(rowcount: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = rowcount
    return result


def _compiled(statement) -> str:
    return " ".join(str(statement.compile(dialect=postgresql.dialect())).split())


# ============================================================================
# Slot Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_find_by_id_maps_entity(mock_async_session, sample_slot_model):
    """Test mapping a stored slot to the domain entity."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_slot_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    slot = await repository.find_by_id("slot-1")

    # Assert
    assert slot is not None
    assert slot.status == SlotStatus.OCCUPIED
    assert slot.obra_social == InsuranceSelection(name="OSDE", member_number="123")
    assert slot.price_paid == Decimal("3500.00")
    assert slot.calendar_event_id == "evt-1"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_slot_find_by_id_not_found(mock_async_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemySlotRepository(mock_async_session)

    assert await repository.find_by_id("missing") is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_occupy_if_available_success(mock_async_session):
    """Test the conditional update reports success when one row changed."""
    # Arrange
    mock_async_session.execute.return_value = _rowcount_result(1)
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    occupied = await repository.occupy_if_available(
        "slot-1", "pat-1", InsuranceSelection(name="OSDE"), Decimal("3500.00"), "evt-1"
    )

    # Assert
    assert occupied is True
    mock_async_session.commit.assert_awaited_once()
    statement = str(mock_async_session.execute.call_args.args[0])
    assert "UPDATE slots" in statement
    assert "slots.status" in statement


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_occupy_if_available_lost_race(mock_async_session):
    """Test no row changed means someone else booked first."""
    mock_async_session.execute.return_value = _rowcount_result(0)
    repository = SQLAlchemySlotRepository(mock_async_session)

    occupied = await repository.occupy_if_available(
        "slot-1", "pat-1", InsuranceSelection(name="OSDE"), Decimal("3500.00"), "evt-1"
    )

    assert occupied is False


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_add_assigns_id(mock_async_session):
    # Arrange
    repository = SQLAlchemySlotRepository(mock_async_session)
    slot = Slot.create("doc-1", "spec-1", "2025-03-10", "09:00")

    # Act
    saved = await repository.add(slot)

    # Assert
    assert saved.id is not None
    mock_async_session.add.assert_called_once()
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_add_unique_violation_is_conflict(mock_async_session):
    """Test the database unique constraint surfaces as a scheduling conflict."""
    # Arrange
    mock_async_session.commit.side_effect = IntegrityError("INSERT INTO slots", {}, Exception("duplicate key"))
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act / Assert
    with pytest.raises(AppointmentConflictException):
        await repository.add(Slot.create("doc-1", "spec-1", "2025-03-10", "09:00"))

    mock_async_session.rollback.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_schedule_missing_slot(mock_async_session):
    mock_async_session.execute.return_value = _rowcount_result(0)
    repository = SQLAlchemySlotRepository(mock_async_session)
    slot = Slot.create("doc-1", "spec-1", "2025-03-10", "09:00")
    slot.id = "missing"

    with pytest.raises(EntityNotFoundException):
        await repository.update_schedule(slot)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_exists_for_doctor_at(mock_async_session):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = "slot-1"
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    exists = await repository.exists_for_doctor_at("doc-1", date(2025, 3, 10), "09:00", exclude_id="slot-2")

    # Assert
    assert exists is True
    statement = str(mock_async_session.execute.call_args.args[0])
    assert "slots.id !=" in statement


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_patient_orders_date_desc_time_asc(mock_async_session):
    """Test patient slots come newest day first, earliest hour first."""
    # Arrange
    mock_result = MagicMock()
    mock_result.all.return_value = []
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    await repository.find_by_patient("pat-1")

    # Assert
    statement = _compiled(mock_async_session.execute.call_args.args[0])
    assert "ORDER BY slots.slot_date DESC, slots.slot_time ASC" in statement


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_available_by_doctor_orders_date_time_asc(mock_async_session):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = []
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    await repository.find_available_by_doctor("doc-1")

    # Assert
    statement = _compiled(mock_async_session.execute.call_args.args[0])
    assert statement.rstrip().endswith("ORDER BY slots.slot_date, slots.slot_time")
    assert "slots.status =" in statement


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_returns_last_state(mock_async_session, sample_slot_model):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_slot_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemySlotRepository(mock_async_session)

    # Act
    slot = await repository.delete("slot-1")

    # Assert
    assert slot.calendar_event_id == "evt-1"
    mock_async_session.delete.assert_awaited_once_with(sample_slot_model)
    mock_async_session.commit.assert_awaited_once()


# ============================================================================
# Patient Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_patient_find_by_email(mock_async_session, sample_user_model):
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_user_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyPatientRepository(mock_async_session)

    # Act
    patient = await repository.find_by_email(" Juan@Example.com ")

    # Assert
    assert patient.id == "pat-1"
    assert patient.full_name == "Juan Pérez"
    statement = str(mock_async_session.execute.call_args.args[0])
    assert "lower(users.email)" in statement


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_profiles_empty_ids_skips_query(mock_async_session):
    repository = SQLAlchemyPatientRepository(mock_async_session)

    assert await repository.find_profiles([]) == {}
    mock_async_session.execute.assert_not_awaited()
