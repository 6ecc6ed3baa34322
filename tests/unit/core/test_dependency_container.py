"""
Tests for the dependency container and application settings.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from turnos.clients import GoogleCalendarClient, MercadoPagoClient
from turnos.config.settings import Settings
from turnos.core.container import DependencyContainer, get_container, reset_container


@pytest.fixture
def settings():
    return Settings(
        MERCADO_PAGO_ACCESS_TOKEN="APP_USR-test",
        FRONTEND_URL="https://turnos.example.com",
        BASE_PRICE=5000,
        RESERVATION_DISCOUNTS='{"OSDE": 0.3, "Particular": 0}',
        PAYMENT_DISCOUNTS={"OSDE": 1, "Particular": 0},
    )


@pytest.mark.unit
def test_discount_tables_wired_per_entry_point(settings):
    # Arrange
    container = DependencyContainer(settings)
    session = AsyncMock()

    # Act
    reserve = container.create_reserve_slot_use_case(session)
    preference = container.create_payment_preference_use_case(session)

    # Assert
    assert reserve._pricing.price("OSDE") == Decimal("3500.00")
    assert preference._pricing.price("OSDE") == Decimal("0.00")


@pytest.mark.unit
def test_gateways_are_singletons(settings):
    container = DependencyContainer(settings)

    assert container.get_payment_gateway() is container.get_payment_gateway()
    assert isinstance(container.get_payment_gateway(), MercadoPagoClient)
    assert isinstance(container.get_calendar_gateway(), GoogleCalendarClient)
    assert container.get_payment_gateway().is_configured is True


@pytest.mark.unit
def test_invalid_discount_rejected():
    with pytest.raises(ValueError):
        Settings(RESERVATION_DISCOUNTS={"OSDE": 1.5})


@pytest.mark.unit
def test_database_url(settings):
    assert settings.database_url.startswith("postgresql://")


@pytest.mark.unit
def test_global_container_reset():
    first = get_container()

    reset_container()

    assert get_container() is not first
    reset_container()
