"""Tests for the event store: adding, removing and loading events."""

import json
import pytest
from datetime import datetime

from event_reminder.errors import (
    MissingFieldError,
    PastDateTimeError,
    UnparseableDateTimeError,
)
from event_reminder.models import Event, dump_events
from event_reminder.services import EventReminderStore
from tests.conftest import MemoryStorage, TIMEZONE


class TestInitialize:
    """Loading the persisted collection."""

    @pytest.mark.asyncio
    async def test_empty_storage_starts_empty(self, store):
        await store.initialize()

        assert store.loaded
        assert store.events == []

    @pytest.mark.asyncio
    async def test_loads_persisted_events(self, notifier):
        event = Event(
            id='1',
            name='Dentist',
            reminder_at=TIMEZONE.localize(datetime(2099, 3, 1, 9, 30)),
            notification_handle='handle-9',
        )
        storage = MemoryStorage({'events': dump_events([event])})

        store = EventReminderStore(storage, notifier, timezone=TIMEZONE, storage_key='events')
        await store.initialize()

        assert store.events == [event]

    @pytest.mark.asyncio
    async def test_operations_require_initialize(self, store):
        with pytest.raises(RuntimeError):
            await store.add_event('Birthday', '2099-01-01 10:00')


class TestAddEvent:
    """Validation and the two-write add sequence."""

    @pytest.mark.asyncio
    async def test_add_valid_event(self, store, notifier):
        await store.initialize()

        event = await store.add_event('Birthday', '2099-01-01 10:00')

        assert len(store.events) == 1
        assert event.name == 'Birthday'
        assert event.reminder_at == TIMEZONE.localize(datetime(2099, 1, 1, 10, 0))
        assert event.notification_handle == 'handle-1'
        assert store.events[0] == event

    @pytest.mark.asyncio
    async def test_schedules_reminder_with_content(self, store, notifier):
        await store.initialize()

        event = await store.add_event('Birthday', '2099-01-01 10:00')

        assert len(notifier.scheduled) == 1
        handle, trigger_at, title, body = notifier.scheduled[0]
        assert trigger_at == event.reminder_at
        assert title == 'Event Reminder: Birthday'
        assert body == "Don't forget to attend the event: Birthday."

    @pytest.mark.asyncio
    async def test_two_writes_provisional_then_final(self, store, storage):
        await store.initialize()

        event = await store.add_event('Birthday', '2099-01-01 10:00')

        assert len(storage.saves) == 2
        first = json.loads(storage.saves[0][1])
        second = json.loads(storage.saves[1][1])

        assert first[0]['id'] == event.id
        assert first[0]['notification_handle'] is None
        assert second[0]['notification_handle'] == 'handle-1'

    @pytest.mark.asyncio
    async def test_clears_draft_on_success(self, store):
        await store.initialize()
        store.draft.name = 'Birthday'
        store.draft.reminder_text = '2099-01-01 10:00'

        event = await store.add_event()

        assert event.name == 'Birthday'
        assert store.draft.name == ''
        assert store.draft.reminder_text == ''

    @pytest.mark.parametrize('name,text', [
        ('', '2099-01-01 10:00'),
        ('Birthday', ''),
        ('   ', '2099-01-01 10:00'),
        ('', ''),
    ])
    @pytest.mark.asyncio
    async def test_missing_field_rejected(self, store, storage, notifier, name, text):
        await store.initialize()

        with pytest.raises(MissingFieldError):
            await store.add_event(name, text)

        assert store.events == []
        assert storage.saves == []
        assert notifier.scheduled == []

    @pytest.mark.asyncio
    async def test_unparseable_date_rejected(self, store, storage):
        await store.initialize()

        with pytest.raises(UnparseableDateTimeError):
            await store.add_event('Birthday', 'not-a-date')

        assert store.events == []
        assert storage.saves == []

    @pytest.mark.asyncio
    async def test_past_date_rejected(self, store, storage):
        await store.initialize()

        # Clock is fixed at 2026-10-17 12:00
        with pytest.raises(PastDateTimeError):
            await store.add_event('Birthday', '2026-10-16 12:00')

        assert store.events == []
        assert storage.saves == []

    @pytest.mark.asyncio
    async def test_current_time_rejected(self, store):
        await store.initialize()

        with pytest.raises(PastDateTimeError):
            await store.add_event('Birthday', '2026-10-17 12:00')

    @pytest.mark.asyncio
    async def test_rejection_keeps_draft(self, store):
        await store.initialize()
        store.draft.name = 'Birthday'
        store.draft.reminder_text = 'not-a-date'

        with pytest.raises(UnparseableDateTimeError):
            await store.add_event()

        assert store.draft.name == 'Birthday'
        assert store.draft.reminder_text == 'not-a-date'

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, store):
        await store.initialize()

        first = await store.add_event('One', '2099-01-01 10:00')
        second = await store.add_event('Two', '2099-01-01 10:00')
        third = await store.add_event('Three', '2099-01-01 10:00')

        ids = [first.id, second.id, third.id]
        assert len(set(ids)) == 3
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)

    @pytest.mark.asyncio
    async def test_scheduling_failure_keeps_provisional_record(self, store, notifier, storage):
        await store.initialize()

        async def fail(*args):
            raise RuntimeError('scheduler down')
        notifier.schedule = fail

        with pytest.raises(RuntimeError):
            await store.add_event('Birthday', '2099-01-01 10:00')

        assert len(store.events) == 1
        assert store.events[0].notification_handle is None
        assert len(storage.saves) == 1


class TestRemoveEvent:
    """Removal and reminder cancellation."""

    @pytest.mark.asyncio
    async def test_add_then_remove(self, store, storage, notifier):
        await store.initialize()
        event = await store.add_event('Birthday', '2099-01-01 10:00')

        await store.remove_event(event.id, event.notification_handle)

        assert store.events == []
        assert json.loads(storage.data['events']) == []
        assert notifier.cancelled == ['handle-1']

    @pytest.mark.asyncio
    async def test_unknown_id_is_noop(self, store):
        await store.initialize()
        event = await store.add_event('Birthday', '2099-01-01 10:00')

        await store.remove_event('does-not-exist')

        assert store.events == [event]

    @pytest.mark.asyncio
    async def test_without_handle_does_not_cancel(self, store, notifier):
        await store.initialize()
        event = await store.add_event('Birthday', '2099-01-01 10:00')

        await store.remove_event(event.id, None)

        assert store.events == []
        assert notifier.cancelled == []

    @pytest.mark.asyncio
    async def test_cancel_failure_keeps_removal(self, store, notifier, storage):
        await store.initialize()
        event = await store.add_event('Birthday', '2099-01-01 10:00')

        async def fail(handle):
            raise RuntimeError('cancel failed')
        notifier.cancel = fail

        with pytest.raises(RuntimeError):
            await store.remove_event(event.id, event.notification_handle)

        assert store.events == []
        assert json.loads(storage.data['events']) == []


class TestPending:
    """Events whose reminders are still ahead."""

    @pytest.mark.asyncio
    async def test_pending_excludes_past_and_unscheduled(self, store):
        await store.initialize()
        event = await store.add_event('Birthday', '2099-01-01 10:00')

        later = TIMEZONE.localize(datetime(2100, 1, 1, 0, 0))

        assert store.pending() == [event]
        assert store.pending(now=later) == []

    def test_get_returns_none_for_unknown(self, store):
        assert store.get('missing') is None
