# Calendar Events - fluent request builders for the events collection.
# Created: 2026-10-18

"""Request builders for Google Calendar events.

Each operation has its own builder class, so only the configuration methods
that make sense for that operation exist on it::

    events = await (
        EventRequestBuilder(client)
        .get_events("primary")
        .single_events(True)
        .event_type(EventType.BIRTHDAY)
        .order_by(EventOrderBy.START_TIME)
        .max_results(10)
        .time_min(datetime.now(UTC))
        .request()
    )

``EventRequestBuilder`` is the entry point. Its methods return an
``EventListRequest``, ``EventGetRequest``, ``EventInsertRequest``,
``EventPatchRequest`` or ``EventDeleteRequest``. Configuration methods return
the builder itself and overwrite any earlier value. ``request()`` sends the
call; awaiting it twice sends two HTTP requests.
"""

from __future__ import annotations

import logging
import urllib.parse
from collections.abc import Callable, Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pocketcal.calendar.types import (
    BirthdayProperties,
    ConferenceData,
    CreateEventRequest,
    Event,
    EventAttendee,
    EventDateTime,
    EventList,
    EventOrderBy,
    EventReminders,
    EventRequest,
    EventSource,
    EventType,
    ExtendedProperties,
    FocusTimeProperties,
    OutOfOfficeProperties,
    PatchEventRequest,
    SendUpdates,
    WorkingLocationProperties,
)
from pocketcal.request import (
    PaginationMixin,
    RequestContext,
    TimeRangeMixin,
    execute,
    execute_delete,
)

if TYPE_CHECKING:
    from pocketcal.auth.client import GoogleClient

logger = logging.getLogger(__name__)


def _enum_value(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


def _quote(segment: str) -> str:
    return urllib.parse.quote(segment, safe="@")


class _EventsRequest:
    """Shared state of every events builder: the request context and payload.

    ``payload_type`` is the payload class a builder must carry (None for
    builders that send no body). It is checked once at construction.
    """

    payload_type: ClassVar[type[EventRequest] | None] = None

    def __init__(self, request: RequestContext, event: EventRequest | None = None):
        if self.payload_type is None:
            if event is not None:
                raise TypeError(f"{type(self).__name__} does not take an event payload")
        elif not isinstance(event, self.payload_type):
            raise TypeError(
                f"{type(self).__name__} requires a {self.payload_type.__name__}, "
                f"got {type(event).__name__}"
            )
        self._request = request
        self._event = event
        self._request.body = event

    @property
    def context(self) -> RequestContext:
        return self._request

    @property
    def event(self) -> EventRequest | None:
        return self._event

    def _modify_event(self, modifier: Callable[[Any], None]) -> Self:
        if self.payload_type is not None and isinstance(self._event, self.payload_type):
            modifier(self._event)
        else:
            logger.warning(
                "%s: payload %s does not match, setter ignored",
                type(self).__name__,
                type(self._event).__name__,
            )
        return self

    def _set_field(self, name: str, value: Any) -> Self:
        return self._modify_event(lambda event: setattr(event, name, value))


class EventRequestBuilder:
    """Uninitialized builder. Pick an operation to get a configured builder."""

    def __init__(self, client: GoogleClient):
        self._client = client

    def _events_url(self, calendar_id: str, event_id: str | None = None) -> str:
        url = f"{self._client.settings.calendar_api_base}/calendars/{_quote(calendar_id)}/events"
        if event_id is not None:
            url = f"{url}/{_quote(event_id)}"
        return url

    def _context(self, method: str, url: str) -> RequestContext:
        return RequestContext(client=self._client, method=method, url=url)

    def get_events(self, calendar_id: str) -> EventListRequest:
        """List events in a calendar (``"primary"`` for the user's main calendar)."""
        return EventListRequest(self._context("GET", self._events_url(calendar_id)))

    def get_event(self, calendar_id: str, event_id: str) -> EventGetRequest:
        """Fetch a single event."""
        return EventGetRequest(self._context("GET", self._events_url(calendar_id, event_id)))

    def insert_event(
        self, calendar_id: str, start: EventDateTime, end: EventDateTime
    ) -> EventInsertRequest:
        """Create an event. ``start`` and ``end`` are required; everything else is optional.

        Example::

            await (
                EventRequestBuilder(client)
                .insert_event("primary", EventDateTime(date="2025-07-28"),
                              EventDateTime(date="2025-07-29"))
                .set_summary("Offsite")
                .request()
            )
        """
        return EventInsertRequest(
            self._context("POST", self._events_url(calendar_id)),
            CreateEventRequest(start=start, end=end),
        )

    def patch_event(self, calendar_id: str, event_id: str) -> EventPatchRequest:
        """Update only the fields set on the returned builder."""
        return EventPatchRequest(
            self._context("PATCH", self._events_url(calendar_id, event_id)),
            PatchEventRequest(),
        )

    def delete_event(self, calendar_id: str, event_id: str) -> EventDeleteRequest:
        return EventDeleteRequest(self._context("DELETE", self._events_url(calendar_id, event_id)))


# ============================================================================
# Read builders
# ============================================================================


class EventListRequest(PaginationMixin, TimeRangeMixin, _EventsRequest):
    """``events.list`` builder."""

    def event_type(self, event_type: EventType | str) -> Self:
        """Only return events of this type."""
        self._request.set_param("eventTypes", _enum_value(event_type))
        return self

    def order_by(self, order: EventOrderBy | str) -> Self:
        """``START_TIME`` requires ``single_events(True)``."""
        self._request.set_param("orderBy", _enum_value(order))
        return self

    def max_attendees(self, max_attendees: int) -> Self:
        """Cap the number of attendees included per event."""
        self._request.set_param("maxAttendees", max_attendees)
        return self

    def single_events(self, single: bool) -> Self:
        """Expand recurring events into their instances."""
        self._request.set_param("singleEvents", single)
        return self

    def show_hidden_invitations(self, show: bool) -> Self:
        self._request.set_param("showHiddenInvitations", show)
        return self

    def query(self, text: str) -> Self:
        """Free-text search over summary, description, location and attendees."""
        self._request.set_param("q", text)
        return self

    async def request(self) -> EventList | None:
        return await execute(self._request, EventList)


class EventGetRequest(_EventsRequest):
    """``events.get`` builder."""

    def max_attendees(self, max_attendees: int) -> Self:
        self._request.set_param("maxAttendees", max_attendees)
        return self

    async def request(self) -> Event | None:
        return await execute(self._request, Event)


# ============================================================================
# Write builders
# ============================================================================


class _EventFieldsMixin:
    """Payload setters shared by insert and patch."""

    _set_field: Callable[[str, Any], Any]

    def set_summary(self, summary: str) -> Self:
        """Title of the event."""
        return self._set_field("summary", summary)

    def set_description(self, description: str) -> Self:
        return self._set_field("description", description)

    def set_location(self, location: str) -> Self:
        return self._set_field("location", location)

    def set_attendees(self, attendees: Iterable[EventAttendee]) -> Self:
        """Replace the attendee list."""
        return self._set_field("attendees", list(attendees))

    def set_color_id(self, color_id: str) -> Self:
        return self._set_field("color_id", color_id)

    def set_event_type(self, event_type: EventType | str) -> Self:
        return self._set_field("event_type", _enum_value(event_type))

    def set_guests_can_invite_others(self, allowed: bool) -> Self:
        return self._set_field("guests_can_invite_others", allowed)

    def set_guests_can_modify(self, allowed: bool) -> Self:
        return self._set_field("guests_can_modify", allowed)

    def set_guests_can_see_other_guests(self, allowed: bool) -> Self:
        return self._set_field("guests_can_see_other_guests", allowed)

    def set_id(self, event_id: str) -> Self:
        """Client-chosen event id (base32hex, 5-1024 chars)."""
        return self._set_field("id", event_id)

    def set_out_of_office_properties(self, properties: OutOfOfficeProperties) -> Self:
        return self._set_field("out_of_office_properties", properties)

    def set_working_location_properties(self, properties: WorkingLocationProperties) -> Self:
        return self._set_field("working_location_properties", properties)

    def set_recurrence(self, recurrence: Iterable[str]) -> Self:
        """Replace the RRULE/EXRULE/RDATE/EXDATE lines."""
        return self._set_field("recurrence", list(recurrence))

    def set_reminders(self, reminders: EventReminders) -> Self:
        return self._set_field("reminders", reminders)

    def set_transparency(self, transparency: str) -> Self:
        """``opaque`` blocks time on the calendar, ``transparent`` does not."""
        return self._set_field("transparency", transparency)

    def set_visibility(self, visibility: str) -> Self:
        return self._set_field("visibility", visibility)

    def set_source(self, source: EventSource) -> Self:
        return self._set_field("source", source)

    def set_extended_properties(self, properties: ExtendedProperties) -> Self:
        return self._set_field("extended_properties", properties)


class EventInsertRequest(_EventFieldsMixin, _EventsRequest):
    """``events.insert`` builder. Carries a :class:`CreateEventRequest`."""

    payload_type = CreateEventRequest

    def set_birthday_properties(self, properties: BirthdayProperties) -> Self:
        return self._set_field("birthday_properties", properties)

    def set_focus_time_properties(self, properties: FocusTimeProperties) -> Self:
        return self._set_field("focus_time_properties", properties)

    def set_ical_uid(self, ical_uid: str) -> Self:
        return self._set_field("ical_uid", ical_uid)

    def set_anyone_can_add_self(self, allowed: bool) -> Self:
        return self._set_field("anyone_can_add_self", allowed)

    def set_conference_data(self, conference_data: ConferenceData) -> Self:
        return self._set_field("conference_data", conference_data)

    async def request(self) -> Event | None:
        return await execute(self._request, Event)


class EventPatchRequest(_EventFieldsMixin, _EventsRequest):
    """``events.patch`` builder. Carries a :class:`PatchEventRequest`.

    Only fields set here are sent; everything else on the event is left as is.
    """

    payload_type = PatchEventRequest

    def set_start(self, start: EventDateTime) -> Self:
        return self._set_field("start", start)

    def set_end(self, end: EventDateTime) -> Self:
        return self._set_field("end", end)

    def set_sequence(self, sequence: int) -> Self:
        return self._set_field("sequence", sequence)

    def set_status(self, status: str) -> Self:
        """``confirmed``, ``tentative`` or ``cancelled``."""
        return self._set_field("status", status)

    # -- query options --

    def send_updates(self, policy: SendUpdates | str) -> Self:
        self._request.set_param("sendUpdates", _enum_value(policy))
        return self

    def conference_data_version(self, version: int) -> Self:
        """0 ignores conference data in the body, 1 applies it."""
        self._request.set_param("conferenceDataVersion", version)
        return self

    def support_attachments(self, supported: bool) -> Self:
        self._request.set_param("supportAttachments", supported)
        return self

    def max_attendees(self, max_attendees: int) -> Self:
        self._request.set_param("maxAttendees", max_attendees)
        return self

    async def request(self) -> Event | None:
        return await execute(self._request, Event)


class EventDeleteRequest(_EventsRequest):
    """``events.delete`` builder."""

    def send_updates(self, policy: SendUpdates | str) -> Self:
        self._request.set_param("sendUpdates", _enum_value(policy))
        return self

    async def request(self) -> None:
        """Delete the event. Returns None on success, raises on failure."""
        await execute_delete(self._request)
