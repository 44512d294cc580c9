# OAuth scopes for the Google APIs pocketcal talks to.
# Created: 2026-10-18

from enum import Enum


class Scope(str, Enum):
    """Google OAuth scopes."""

    CALENDAR = "https://www.googleapis.com/auth/calendar"
    CALENDAR_READONLY = "https://www.googleapis.com/auth/calendar.readonly"
    CALENDAR_EVENTS = "https://www.googleapis.com/auth/calendar.events"
    CALENDAR_EVENTS_READONLY = "https://www.googleapis.com/auth/calendar.events.readonly"
    TASKS = "https://www.googleapis.com/auth/tasks"
    TASKS_READONLY = "https://www.googleapis.com/auth/tasks.readonly"
