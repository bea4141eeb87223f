"""Event command and button handlers."""

import logging
from telegram import Update, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.ext import ContextTypes, CallbackQueryHandler

from event_reminder.errors import ValidationError
from event_reminder.models import Event
from event_reminder.services import EventReminderStore

logger = logging.getLogger(__name__)

STORE_KEY = "store"
AUTHORIZED_USER_KEY = "authorized_user_id"
REMOVE_PREFIX = "remove:"


def get_store(context: ContextTypes.DEFAULT_TYPE) -> EventReminderStore:
    """The application's event store."""
    return context.bot_data[STORE_KEY]


def format_event(event: Event, store: EventReminderStore) -> str:
    local = event.reminder_at.astimezone(store.timezone)
    return f"{event.name} - {local.strftime('%a %b %d %Y, %H:%M')}"


def remove_button(event: Event) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton("Remove", callback_data=f"{REMOVE_PREFIX}{event.id}")]]
    )


async def set_name(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /name command."""
    store = get_store(context)
    store.draft.name = " ".join(context.args or [])

    if store.draft.name:
        await update.message.reply_text(f"Event name: {store.draft.name}")
    else:
        await update.message.reply_text("Usage: /name <event name>")


async def set_when(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /when command."""
    store = get_store(context)
    store.draft.reminder_text = " ".join(context.args or [])

    if store.draft.reminder_text:
        await update.message.reply_text(f"Reminder time: {store.draft.reminder_text}")
    else:
        await update.message.reply_text("Usage: /when <YYYY-MM-DD HH:mm>")


async def add_event(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /add command.

    ``/add <name> | <time>`` fills the fields it names first, a bare ``/add``
    submits whatever was entered with /name and /when.
    """
    store = get_store(context)

    if context.args:
        full_text = " ".join(context.args)
        name, _, when = full_text.partition("|")
        if name.strip():
            store.draft.name = name.strip()
        if when.strip():
            store.draft.reminder_text = when.strip()

    try:
        event = await store.add_event()
    except ValidationError as e:
        await update.message.reply_text(f"{e.title}: {e}")
        return

    await update.message.reply_text(
        f"Event added: {format_event(event, store)}\n"
        f"ID: {event.id}",
        reply_markup=remove_button(event),
    )


async def list_events(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /events command."""
    store = get_store(context)
    events = store.events

    if not events:
        await update.message.reply_text("No events yet")
        return

    for event in events:
        await update.message.reply_text(
            format_event(event, store),
            reply_markup=remove_button(event),
        )


async def delete_event(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /delevent command."""
    if not context.args:
        await update.message.reply_text("Usage: /delevent <id>")
        return

    store = get_store(context)
    event_id = context.args[0]
    event = store.get(event_id)

    await store.remove_event(event_id, event.notification_handle if event else None)

    if event:
        await update.message.reply_text(f"Removed: {event.name}")
    else:
        await update.message.reply_text(f"Event {event_id} not found")


async def handle_remove_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle the Remove button under an event."""
    query = update.callback_query
    await query.answer()

    authorized_user = context.bot_data.get(AUTHORIZED_USER_KEY)
    if authorized_user and query.from_user.id != authorized_user:
        logger.warning(f"Unauthorized remove attempt by user {query.from_user.id}")
        await query.edit_message_text("You are not authorized to perform this action.")
        return

    event_id = query.data[len(REMOVE_PREFIX):]
    store = get_store(context)
    event = store.get(event_id)

    await store.remove_event(event_id, event.notification_handle if event else None)

    if event:
        await query.edit_message_text(f"Removed: {event.name}")
    else:
        await query.edit_message_text("This event was already removed.")


def get_event_handlers():
    """Get list of callback handlers to register."""
    return [
        CallbackQueryHandler(handle_remove_callback, pattern=f"^{REMOVE_PREFIX}"),
    ]
