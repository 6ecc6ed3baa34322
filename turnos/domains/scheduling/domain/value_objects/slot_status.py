"""Slot Status Value Object.

Defines the booking states of a slot and its single valid transition.
"""

from enum import Enum


class SlotStatus(str, Enum):
    """Estados del turno."""

    AVAILABLE = "available"  # Publicado y libre
    OCCUPIED = "occupied"  # Reservado por un paciente

    @property
    def display_name(self) -> str:
        """Nombre para mostrar en español."""
        names = {
            "available": "Disponible",
            "occupied": "Ocupado",
        }
        return names.get(self.value, self.value)

    def can_transition_to(self, new_status: "SlotStatus") -> bool:
        """Validar si la transición de estado es válida.

        State machine:
        - available -> occupied
        - occupied -> (final state for the booking cycle)
        """
        transitions: dict[str, list[str]] = {
            "available": ["occupied"],
            "occupied": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_bookable(self) -> bool:
        """¿Se puede reservar desde este estado?"""
        return self.can_transition_to(SlotStatus.OCCUPIED)
