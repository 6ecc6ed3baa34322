from .slot_booking_service import SlotBookingService

__all__ = ["SlotBookingService"]
