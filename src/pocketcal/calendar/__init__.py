"""Google Calendar events API."""

from pocketcal.calendar.events import (
    EventDeleteRequest,
    EventGetRequest,
    EventInsertRequest,
    EventListRequest,
    EventPatchRequest,
    EventRequestBuilder,
)
from pocketcal.calendar.types import (
    CreateEventRequest,
    Event,
    EventAttendee,
    EventDateTime,
    EventList,
    EventOrderBy,
    EventReminder,
    EventReminders,
    EventRequest,
    EventType,
    ExtendedProperties,
    PatchEventRequest,
    SendUpdates,
)

__all__ = [
    "CreateEventRequest",
    "Event",
    "EventAttendee",
    "EventDateTime",
    "EventDeleteRequest",
    "EventGetRequest",
    "EventInsertRequest",
    "EventList",
    "EventListRequest",
    "EventOrderBy",
    "EventPatchRequest",
    "EventReminder",
    "EventReminders",
    "EventRequest",
    "EventRequestBuilder",
    "EventType",
    "ExtendedProperties",
    "PatchEventRequest",
    "SendUpdates",
]
