"""Shared test fixtures for the event reminder test suite."""

import pytest
import tempfile
import os
from datetime import datetime
import pytz

# Add parent directory to path so we can import event_reminder modules
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from event_reminder.db import init_db, close_db
from event_reminder.services import (
    EventReminderStore,
    PersistenceCollaborator,
    ReminderCollaborator,
)

TIMEZONE = pytz.timezone('America/Montreal')
NOW = TIMEZONE.localize(datetime(2026, 10, 17, 12, 0))


class MemoryStorage(PersistenceCollaborator):
    """Dict-backed storage that records every save."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.saves = []

    async def load(self, key):
        return self.data.get(key)

    async def save(self, key, value):
        self.data[key] = value
        self.saves.append((key, value))


class FakeNotifier(ReminderCollaborator):
    """Hands out sequential handles and records cancellations."""

    def __init__(self):
        self.scheduled = []
        self.cancelled = []
        self.restored = []

    async def schedule(self, trigger_at, title, body):
        handle = f"handle-{len(self.scheduled) + 1}"
        self.scheduled.append((handle, trigger_at, title, body))
        return handle

    async def cancel(self, handle):
        self.cancelled.append(handle)

    def restore(self, handle, trigger_at, title, body):
        self.restored.append((handle, trigger_at, title, body))
        return True


@pytest.fixture
def test_db():
    """Create a temporary test database."""
    db_fd, db_path = tempfile.mkstemp(suffix='.db')

    init_db(db_path)

    yield db_path

    close_db()
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def store(storage, notifier):
    """Store with in-memory collaborators and a clock fixed at NOW."""
    return EventReminderStore(
        storage=storage,
        notifier=notifier,
        timezone=TIMEZONE,
        storage_key='events',
        clock=lambda: NOW,
    )
