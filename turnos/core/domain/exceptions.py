"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
They should be caught and translated to appropriate HTTP responses in the API layer.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "SLOT_UNAVAILABLE")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class SlotUnavailableException(DomainException):
    """Raised when a slot is no longer available for booking."""

    def __init__(self, slot_id: str, current_status: str | None = None):
        self.slot_id = slot_id
        self.current_status = current_status
        details: dict[str, Any] = {"slot_id": slot_id}
        if current_status:
            details["current_status"] = current_status
        super().__init__("El turno ya está ocupado", "SLOT_UNAVAILABLE", details)


class AppointmentConflictException(DomainException):
    """Raised when there's a scheduling conflict."""

    def __init__(
        self,
        doctor_id: str | None = None,
        time_slot: str | None = None,
        message: str | None = None,
    ):
        self.doctor_id = doctor_id
        self.time_slot = time_slot
        msg = message or "Appointment conflict: time slot not available"
        details: dict[str, Any] = {}
        if doctor_id:
            details["doctor_id"] = doctor_id
        if time_slot:
            details["time_slot"] = time_slot
        super().__init__(msg, "APPOINTMENT_CONFLICT", details)


class AuthorizationException(DomainException):
    """Raised when a user is not authorized to perform an operation."""

    def __init__(self, operation: str, resource: str | None = None, user_id: str | None = None):
        self.operation = operation
        self.resource = resource
        self.user_id = user_id
        msg = f"Not authorized to perform '{operation}'"
        if resource:
            msg += f" on '{resource}'"
        super().__init__(
            msg,
            "AUTHORIZATION_ERROR",
            {
                "operation": operation,
                "resource": resource,
            },
        )


class IntegrationException(DomainException):
    """Raised when an external integration fails."""

    def __init__(self, service: str, message: str, original_error: Exception | None = None):
        self.service = service
        self.original_error = original_error
        details: dict[str, Any] = {"service": service}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message, "INTEGRATION_ERROR", details)


class OrphanedCalendarEventException(DomainException):
    """
    Raised when a calendar event was created but the slot commit failed.

    The event exists in the calendar without a booked slot pointing at it
    and must be reconciled by an operator.
    """

    def __init__(self, slot_id: str, event_id: str, original_error: Exception | None = None):
        self.slot_id = slot_id
        self.event_id = event_id
        self.original_error = original_error
        details: dict[str, Any] = {"slot_id": slot_id, "event_id": event_id}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(
            f"Calendar event {event_id} created but slot {slot_id} could not be saved",
            "ORPHANED_CALENDAR_EVENT",
            details,
        )
