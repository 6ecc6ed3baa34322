"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Exceptions: Domain-specific error handling
"""

from turnos.core.domain.entities import (
    AggregateRoot,
    Entity,
    generate_uuid_str,
)
from turnos.core.domain.exceptions import (
    AppointmentConflictException,
    AuthorizationException,
    DomainException,
    EntityNotFoundException,
    IntegrationException,
    OrphanedCalendarEventException,
    SlotUnavailableException,
    ValidationException,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "generate_uuid_str",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "SlotUnavailableException",
    "AppointmentConflictException",
    "AuthorizationException",
    "IntegrationException",
    "OrphanedCalendarEventException",
]
