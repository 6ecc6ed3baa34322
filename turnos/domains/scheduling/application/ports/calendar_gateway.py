# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Calendar gateway port.
# ============================================================================
"""Calendar Gateway Port.

Implementations: GoogleCalendarClient
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class CalendarEvent:
    """Event created in the external calendar."""

    id: str
    html_link: str | None = None


@runtime_checkable
class ICalendarGateway(Protocol):
    """Create, move and remove calendar events.

    Failures raise ``GoogleCalendarError`` (an ``IntegrationException``).
    """

    async def create_event(
        self,
        summary: str,
        description: str,
        start: str,
        end: str,
        attendees: list[str],
        time_zone: str,
    ) -> CalendarEvent:
        ...

    async def update_event(
        self,
        event_id: str,
        summary: str,
        start: str,
        end: str,
        time_zone: str,
    ) -> None:
        ...

    async def delete_event(self, event_id: str) -> None:
        ...
