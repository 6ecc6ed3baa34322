# ============================================================================
# SCOPE: GLOBAL
# Description: Contenedor de inyección de dependencias (singleton).
#              Los clientes externos se crean una sola vez; repositorios y
#              casos de uso se crean por request con la sesión de base de datos.
# ============================================================================
"""
Dependency Injection Container.

Wires concrete implementations (SQLAlchemy repositories, Google Calendar and
Mercado Pago clients) to the scheduling use cases. Each booking entry point
gets its own discount table explicitly.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from turnos.clients import GoogleCalendarClient, MercadoPagoClient
from turnos.config.settings import Settings, get_settings
from turnos.domains.scheduling.application.ports import ICalendarGateway, IPaymentGateway
from turnos.domains.scheduling.application.services import SlotBookingService
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
from turnos.domains.scheduling.domain.services import CalendarEventBuilder, PricingPolicy
from turnos.domains.scheduling.infrastructure.repositories import (
    SQLAlchemyPatientRepository,
    SQLAlchemySlotRepository,
)

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container.

    Single Responsibility: Create and wire all application dependencies.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

        # Singletons
        self._calendar_gateway: ICalendarGateway | None = None
        self._payment_gateway: IPaymentGateway | None = None
        self._event_builder = CalendarEventBuilder(
            time_zone=self.settings.CALENDAR_TIME_ZONE,
            duration_minutes=self.settings.APPOINTMENT_DURATION_MINUTES,
        )
        self._reservation_pricing = PricingPolicy(
            self.settings.RESERVATION_DISCOUNTS, base_price=self.settings.BASE_PRICE
        )
        self._payment_pricing = PricingPolicy(self.settings.PAYMENT_DISCOUNTS, base_price=self.settings.BASE_PRICE)

        logger.info("DependencyContainer initialized")

    # ==================== EXTERNAL GATEWAYS ====================

    def get_calendar_gateway(self) -> ICalendarGateway:
        """Google Calendar client (singleton)."""
        if self._calendar_gateway is None:
            self._calendar_gateway = GoogleCalendarClient(
                client_id=self.settings.GOOGLE_CLIENT_ID,
                client_secret=self.settings.GOOGLE_CLIENT_SECRET,
                refresh_token=self.settings.GOOGLE_REFRESH_TOKEN,
                calendar_id=self.settings.GOOGLE_CALENDAR_ID,
                timeout=self.settings.GOOGLE_CALENDAR_TIMEOUT,
            )
        return self._calendar_gateway

    def get_payment_gateway(self) -> IPaymentGateway:
        """Mercado Pago client (singleton)."""
        if self._payment_gateway is None:
            self._payment_gateway = MercadoPagoClient(
                access_token=self.settings.MERCADO_PAGO_ACCESS_TOKEN,
                sandbox=self.settings.MERCADO_PAGO_SANDBOX,
                timeout=self.settings.MERCADO_PAGO_TIMEOUT,
            )
        return self._payment_gateway

    async def aclose(self) -> None:
        """Close HTTP clients."""
        for gateway in (self._calendar_gateway, self._payment_gateway):
            if isinstance(gateway, GoogleCalendarClient | MercadoPagoClient):
                await gateway.aclose()
        self._calendar_gateway = None
        self._payment_gateway = None

    # ==================== REPOSITORIES ====================

    def create_slot_repository(self, db: AsyncSession) -> SQLAlchemySlotRepository:
        return SQLAlchemySlotRepository(session=db)

    def create_patient_repository(self, db: AsyncSession) -> SQLAlchemyPatientRepository:
        return SQLAlchemyPatientRepository(session=db)

    def create_booking_service(self, db: AsyncSession) -> SlotBookingService:
        return SlotBookingService(
            slot_repository=self.create_slot_repository(db),
            calendar_gateway=self.get_calendar_gateway(),
            event_builder=self._event_builder,
        )

    # ==================== USE CASES ====================

    def create_reserve_slot_direct_use_case(self, db: AsyncSession) -> ReserveSlotDirectUseCase:
        return ReserveSlotDirectUseCase(
            booking_service=self.create_booking_service(db),
            patient_repository=self.create_patient_repository(db),
            default_obra_social=self.settings.DEFAULT_OBRA_SOCIAL,
        )

    def create_reserve_slot_use_case(self, db: AsyncSession) -> ReserveSlotUseCase:
        return ReserveSlotUseCase(
            booking_service=self.create_booking_service(db),
            patient_repository=self.create_patient_repository(db),
            pricing_policy=self._reservation_pricing,
        )

    def create_confirm_paid_reservation_use_case(self, db: AsyncSession) -> ConfirmPaidReservationUseCase:
        return ConfirmPaidReservationUseCase(
            booking_service=self.create_booking_service(db),
            patient_repository=self.create_patient_repository(db),
            payment_gateway=self.get_payment_gateway(),
            default_obra_social=self.settings.DEFAULT_OBRA_SOCIAL,
        )

    def create_payment_preference_use_case(self, db: AsyncSession) -> CreatePaymentPreferenceUseCase:
        return CreatePaymentPreferenceUseCase(
            slot_repository=self.create_slot_repository(db),
            payment_gateway=self.get_payment_gateway(),
            pricing_policy=self._payment_pricing,
            frontend_url=self.settings.FRONTEND_URL,
            notification_url=self.settings.MERCADO_PAGO_NOTIFICATION_URL,
        )

    def create_create_slot_use_case(self, db: AsyncSession) -> CreateSlotUseCase:
        return CreateSlotUseCase(slot_repository=self.create_slot_repository(db))

    def create_update_slot_use_case(self, db: AsyncSession) -> UpdateSlotUseCase:
        return UpdateSlotUseCase(
            slot_repository=self.create_slot_repository(db),
            calendar_gateway=self.get_calendar_gateway(),
            event_builder=self._event_builder,
        )

    def create_delete_slot_use_case(self, db: AsyncSession) -> DeleteSlotUseCase:
        return DeleteSlotUseCase(
            slot_repository=self.create_slot_repository(db),
            calendar_gateway=self.get_calendar_gateway(),
        )

    def create_list_patient_slots_use_case(self, db: AsyncSession) -> ListPatientSlotsUseCase:
        return ListPatientSlotsUseCase(slot_repository=self.create_slot_repository(db))

    def create_list_available_slots_use_case(self, db: AsyncSession) -> ListAvailableSlotsUseCase:
        return ListAvailableSlotsUseCase(slot_repository=self.create_slot_repository(db))

    def create_list_all_slots_use_case(self, db: AsyncSession) -> ListAllSlotsUseCase:
        return ListAllSlotsUseCase(
            slot_repository=self.create_slot_repository(db),
            patient_repository=self.create_patient_repository(db),
        )


# ============================================================
# GLOBAL CONTAINER INSTANCE
# ============================================================

_container: DependencyContainer | None = None


def get_container() -> DependencyContainer:
    """
    Get global container instance (singleton).

    Returns:
        DependencyContainer instance
    """
    global _container

    if _container is None:
        logger.info("Initializing global DependencyContainer")
        _container = DependencyContainer()

    return _container


def reset_container() -> None:
    """
    Reset global container instance.

    Useful for testing or reconfiguration.
    """
    global _container
    logger.info("Resetting global DependencyContainer")
    _container = None
