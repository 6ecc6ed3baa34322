# Domain Services
from .calendar_event_builder import (
    UPDATED_EVENT_SUMMARY,
    CalendarEventBuilder,
    CalendarEventPayload,
    CalendarEventWindow,
)
from .pricing_policy import PricingPolicy

__all__ = [
    "UPDATED_EVENT_SUMMARY",
    "CalendarEventBuilder",
    "CalendarEventPayload",
    "CalendarEventWindow",
    "PricingPolicy",
]
