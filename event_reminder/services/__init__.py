"""Services for the event reminder bot."""

from .datetime_parser import parse_reminder_text, get_timezone, DATE_FORMAT_HINT
from .storage import PersistenceCollaborator, SettingStorage
from .notifications import ReminderCollaborator, JobQueueNotifier
from .events import EventReminderStore

__all__ = [
    "parse_reminder_text",
    "get_timezone",
    "DATE_FORMAT_HINT",
    "PersistenceCollaborator",
    "SettingStorage",
    "ReminderCollaborator",
    "JobQueueNotifier",
    "EventReminderStore",
]
