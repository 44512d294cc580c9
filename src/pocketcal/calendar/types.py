# Calendar Types - event resources, request payloads and enumerations.
# Created: 2026-10-18

"""Google Calendar v3 event models.

Field names are snake_case in Python and camelCase on the wire. Unknown
provider fields are kept (``extra="allow"``) and ``null`` values decode to the
field default. Request payloads are serialized with ``exclude_none`` so fields
that were never set are absent from the JSON body.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

# ============================================================================
# Enums
# ============================================================================


class EventOrderBy(str, Enum):
    """Ordering for event lists.

    START_TIME only works on recurring events when ``singleEvents`` is true.
    """

    START_TIME = "startTime"
    UPDATED = "updated"


class EventType(str, Enum):
    BIRTHDAY = "birthday"
    DEFAULT = "default"
    FOCUS_TIME = "focusTime"
    FROM_GMAIL = "fromGmail"
    OUT_OF_OFFICE = "outOfOffice"
    WORKING_LOCATION = "workingLocation"


class SendUpdates(str, Enum):
    """Who gets notified about a change."""

    ALL = "all"
    EXTERNAL_ONLY = "externalOnly"
    NONE = "none"


# ============================================================================
# Base
# ============================================================================


class CalendarModel(BaseModel):
    """Base for all calendar models: camelCase aliases, null-tolerant."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "allow",
    }

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with only the fields that are set."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Nested objects
# ============================================================================


class EventDateTime(CalendarModel):
    """Start or end of an event: ``date`` for all-day, ``date_time`` otherwise."""

    date: str | None = None  # yyyy-mm-dd
    date_time: datetime | None = None
    time_zone: str | None = None


class EventPerson(CalendarModel):
    id: str | None = None
    email: str | None = None
    display_name: str | None = None
    self_: bool | None = Field(default=None, alias="self")


class EventAttendee(CalendarModel):
    id: str | None = None
    email: str | None = None
    display_name: str | None = None
    organizer: bool | None = None
    self_: bool | None = Field(default=None, alias="self")
    resource: bool | None = None
    optional: bool | None = None
    response_status: str | None = None  # needsAction, declined, tentative, accepted
    comment: str | None = None
    additional_guests: int | None = None


class EventReminder(CalendarModel):
    method: str | None = None  # email, popup
    minutes: int | None = None


class EventReminders(CalendarModel):
    use_default: bool | None = None
    overrides: list[EventReminder] | None = None


class ExtendedProperties(CalendarModel):
    private: dict[str, str] | None = None
    shared: dict[str, str] | None = None


class EventSource(CalendarModel):
    url: str | None = None
    title: str | None = None


class BirthdayProperties(CalendarModel):
    contact: str | None = None
    type: str | None = None  # anniversary, birthday, custom, other, self
    custom_type_name: str | None = None


class OutOfOfficeProperties(CalendarModel):
    auto_decline_mode: str | None = None
    decline_message: str | None = None


class FocusTimeProperties(CalendarModel):
    auto_decline_mode: str | None = None
    decline_message: str | None = None
    chat_status: str | None = None


class CustomLocation(CalendarModel):
    label: str | None = None


class OfficeLocation(CalendarModel):
    building_id: str | None = None
    floor_id: str | None = None
    floor_section_id: str | None = None
    desk_id: str | None = None
    label: str | None = None


class WorkingLocationProperties(CalendarModel):
    type: str | None = None  # homeOffice, officeLocation, customLocation
    home_office: dict[str, Any] | None = None
    custom_location: CustomLocation | None = None
    office_location: OfficeLocation | None = None


class EventAttachment(CalendarModel):
    file_url: str | None = None
    file_id: str | None = None
    title: str | None = None
    mime_type: str | None = None
    icon_link: str | None = None


class ConferenceData(CalendarModel):
    """Conference details. Sub-objects are kept as plain dicts."""

    conference_id: str | None = None
    create_request: dict[str, Any] | None = None
    entry_points: list[dict[str, Any]] | None = None
    conference_solution: dict[str, Any] | None = None
    signature: str | None = None
    notes: str | None = None


# ============================================================================
# Resources
# ============================================================================


class Event(CalendarModel):
    """An event resource as returned by the API."""

    kind: str = ""
    etag: str = ""
    id: str = ""
    status: str = ""
    html_link: str = ""
    created: datetime | None = None
    updated: datetime | None = None
    summary: str = ""
    description: str = ""
    location: str = ""
    color_id: str = ""
    creator: EventPerson | None = None
    organizer: EventPerson | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None
    end_time_unspecified: bool | None = None
    recurrence: list[str] = Field(default_factory=list)
    recurring_event_id: str = ""
    original_start_time: EventDateTime | None = None
    transparency: str = ""
    visibility: str = ""
    ical_uid: str = Field(default="", alias="iCalUID")
    sequence: int = 0
    attendees: list[EventAttendee] = Field(default_factory=list)
    attendees_omitted: bool | None = None
    extended_properties: ExtendedProperties | None = None
    hangout_link: str = ""
    conference_data: ConferenceData | None = None
    anyone_can_add_self: bool | None = None
    guests_can_invite_others: bool | None = None
    guests_can_modify: bool | None = None
    guests_can_see_other_guests: bool | None = None
    private_copy: bool | None = None
    locked: bool | None = None
    reminders: EventReminders | None = None
    source: EventSource | None = None
    working_location_properties: WorkingLocationProperties | None = None
    out_of_office_properties: OutOfOfficeProperties | None = None
    focus_time_properties: FocusTimeProperties | None = None
    birthday_properties: BirthdayProperties | None = None
    attachments: list[EventAttachment] = Field(default_factory=list)
    event_type: str = ""


class EventList(CalendarModel):
    """One page of events from ``events.list``."""

    kind: str = ""
    etag: str = ""
    summary: str = ""
    description: str = ""
    updated: datetime | None = None
    time_zone: str = ""
    access_role: str = ""
    default_reminders: list[EventReminder] = Field(default_factory=list)
    next_page_token: str | None = None
    next_sync_token: str | None = None
    items: list[Event] = Field(default_factory=list)


# ============================================================================
# Request payloads
# ============================================================================


class _WritableEventFields(CalendarModel):
    """Fields a client may send on insert and patch. All absent by default."""

    anyone_can_add_self: bool | None = None
    attendees: list[EventAttendee] | None = None
    birthday_properties: BirthdayProperties | None = None
    color_id: str | None = None
    conference_data: ConferenceData | None = None
    description: str | None = None
    event_type: str | None = None
    extended_properties: ExtendedProperties | None = None
    focus_time_properties: FocusTimeProperties | None = None
    guests_can_invite_others: bool | None = None
    guests_can_modify: bool | None = None
    guests_can_see_other_guests: bool | None = None
    id: str | None = None
    ical_uid: str | None = Field(default=None, alias="iCalUID")
    location: str | None = None
    out_of_office_properties: OutOfOfficeProperties | None = None
    recurrence: list[str] | None = None
    reminders: EventReminders | None = None
    sequence: int | None = None
    source: EventSource | None = None
    status: str | None = None
    summary: str | None = None
    transparency: str | None = None  # opaque, transparent
    visibility: str | None = None  # default, public, private, confidential
    working_location_properties: WorkingLocationProperties | None = None


class CreateEventRequest(_WritableEventFields):
    """Body for ``events.insert``: start and end are required."""

    model_config = {"extra": "forbid"}

    start: EventDateTime
    end: EventDateTime


class PatchEventRequest(_WritableEventFields):
    """Body for ``events.patch``: only fields that were set are sent."""

    model_config = {"extra": "forbid"}

    start: EventDateTime | None = None
    end: EventDateTime | None = None


EventRequest = Union[CreateEventRequest, PatchEventRequest]
