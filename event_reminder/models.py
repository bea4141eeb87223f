"""Event records and the serialized events collection."""

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from dateutil import parser as date_parser

from event_reminder.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """A named event with a single reminder time.

    Records are never edited in place. A freshly created event has no
    notification handle; ``with_handle`` returns the finalized copy once the
    reminder has been scheduled.
    """
    id: str
    name: str
    reminder_at: datetime  # Timezone-aware
    notification_handle: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Event ID cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("Event name cannot be empty")
        if not isinstance(self.reminder_at, datetime):
            raise TypeError("reminder_at must be datetime")
        if self.reminder_at.tzinfo is None:
            raise ValueError("reminder_at must be timezone-aware")

    @property
    def is_scheduled(self) -> bool:
        return self.notification_handle is not None

    def with_handle(self, handle: str) -> "Event":
        """Attach the notification handle returned by the scheduler."""
        return replace(self, notification_handle=handle)

    def notification_content(self) -> Tuple[str, str]:
        """Title and body of the reminder notification."""
        return (
            f"Event Reminder: {self.name}",
            f"Don't forget to attend the event: {self.name}.",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "reminder_at": self.reminder_at.isoformat(),
            "notification_handle": self.notification_handle,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            reminder_at=date_parser.isoparse(data["reminder_at"]),
            notification_handle=data.get("notification_handle"),
        )


@dataclass
class EventDraft:
    """The two input fields of the add form."""
    name: str = ""
    reminder_text: str = ""

    def clear(self):
        self.name = ""
        self.reminder_text = ""


def dump_events(events: Iterable[Event]) -> str:
    """Serialize the whole collection to a JSON array."""
    return json.dumps([event.to_dict() for event in events])


def load_events(raw: str) -> List[Event]:
    """
    Parse a serialized collection.

    Records that cannot be decoded are skipped so the rest of the
    collection still loads.

    Raises:
        StorageError: If the payload is not a JSON array
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Corrupted events collection: {e}")
        raise StorageError(f"Cannot decode events: {e}") from e

    if not isinstance(data, list):
        raise StorageError(f"Expected a list of events, got {type(data).__name__}")

    events = []
    for item in data:
        try:
            events.append(Event.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid event: {e}")

    return events
