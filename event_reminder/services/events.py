"""Event reminder store: the event list, its persisted copy and its reminders."""

import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from event_reminder.config import get
from event_reminder.errors import MissingFieldError, PastDateTimeError
from event_reminder.models import Event, EventDraft, dump_events, load_events
from event_reminder.services.datetime_parser import get_timezone, parse_reminder_text
from event_reminder.services.notifications import ReminderCollaborator
from event_reminder.services.storage import PersistenceCollaborator

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "events"
DEFAULT_TIMEZONE = "America/Montreal"


class EventReminderStore:
    """
    Owns the in-memory list of events.

    Every change is written back to storage as a whole collection. Adding an
    event schedules its reminder, removing one cancels it. Callers are
    expected to await one operation before starting the next.
    """

    def __init__(
        self,
        storage: PersistenceCollaborator,
        notifier: ReminderCollaborator,
        timezone=None,
        storage_key: str = None,
        clock: Callable[[], datetime] = None,
    ):
        self.storage = storage
        self.notifier = notifier
        self.timezone = timezone or get_timezone(get("timezone", DEFAULT_TIMEZONE))
        self.storage_key = storage_key or get("events.storage_key", DEFAULT_STORAGE_KEY)
        self._clock = clock or (lambda: datetime.now(self.timezone))

        self.draft = EventDraft()
        self.loaded = False
        self._events: List[Event] = []
        self._last_id = 0

    @property
    def events(self) -> List[Event]:
        """Snapshot of the events in insertion order."""
        return list(self._events)

    def now(self) -> datetime:
        return self._clock()

    async def initialize(self):
        """Load the persisted collection. Missing data means no events."""
        raw = await self.storage.load(self.storage_key)
        self._events = load_events(raw) if raw else []
        self.loaded = True
        logger.info(f"Loaded {len(self._events)} events")

    def get(self, event_id: str) -> Optional[Event]:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def pending(self, now: datetime = None) -> List[Event]:
        """Scheduled events whose reminder time has not passed yet."""
        now = now or self.now()
        return [e for e in self._events if e.is_scheduled and e.reminder_at > now]

    async def add_event(self, name: str = None, reminder_text: str = None) -> Event:
        """
        Create an event and schedule its reminder.

        Args:
            name: Event name (defaults to the draft's name)
            reminder_text: Reminder date and time (defaults to the draft's text)

        Returns:
            The stored event, with its notification handle attached

        Raises:
            MissingFieldError: If name or reminder text is empty
            UnparseableDateTimeError: If the reminder text is not a date
            PastDateTimeError: If the reminder time is not in the future
        """
        self._require_loaded()

        name = self.draft.name if name is None else name
        reminder_text = self.draft.reminder_text if reminder_text is None else reminder_text

        if not name or not name.strip() or not reminder_text or not reminder_text.strip():
            raise MissingFieldError()

        reminder_at = parse_reminder_text(reminder_text, self.timezone)
        if reminder_at <= self.now():
            raise PastDateTimeError()

        event = Event(id=self._next_id(), name=name, reminder_at=reminder_at)
        self._events = self._events + [event]
        await self._persist()
        self.draft.clear()

        title, body = event.notification_content()
        handle = await self.notifier.schedule(event.reminder_at, title, body)

        event = event.with_handle(handle)
        self._events = [event if e.id == event.id else e for e in self._events]
        await self._persist()

        logger.info(f"Added event {event.id} - {event.name} at {event.reminder_at.isoformat()}")
        return event

    async def remove_event(self, event_id: str, notification_handle: Optional[str] = None):
        """
        Delete an event and cancel its reminder.

        Unknown ids are not an error. Storage is updated before the
        cancellation is requested, so a failed cancel leaves the event removed.
        """
        self._require_loaded()

        remaining = [e for e in self._events if e.id != event_id]
        if len(remaining) == len(self._events):
            logger.warning(f"Event {event_id} not found for removal")

        self._events = remaining
        await self._persist()

        if notification_handle:
            await self.notifier.cancel(notification_handle)

        logger.info(f"Removed event {event_id}")

    async def _persist(self):
        await self.storage.save(self.storage_key, dump_events(self._events))

    def _next_id(self) -> str:
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        taken = {e.id for e in self._events}
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def _require_loaded(self):
        if not self.loaded:
            raise RuntimeError("Event store not initialized. Call initialize() first.")
