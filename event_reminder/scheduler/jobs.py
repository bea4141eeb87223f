"""Job callbacks for event reminders."""

import logging
from telegram.error import TelegramError
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

logger = logging.getLogger(__name__)


async def deliver_reminder(context: ContextTypes.DEFAULT_TYPE):
    """Send a reminder that has come due."""
    job = context.job
    title = escape_markdown(job.data.get("title", "Event Reminder"), version=1)
    body = escape_markdown(job.data.get("body", ""), version=1)

    try:
        await context.bot.send_message(
            chat_id=job.chat_id,
            text=f"🔔 *{title}*\n\n{body}",
            parse_mode="Markdown",
        )
        logger.info(f"Sent reminder {job.name} to chat {job.chat_id}")

    except TelegramError as e:
        logger.error(f"Failed to send reminder {job.name}: {e}")


def rearm_pending(store, notifier) -> int:
    """
    Queue the reminders of persisted events again after a restart.

    Jobs only live in memory, so events loaded from storage would otherwise
    never fire. Each job keeps the handle stored on its event.

    Returns:
        Number of reminders queued
    """
    count = 0
    for event in store.pending():
        title, body = event.notification_content()
        if notifier.restore(event.notification_handle, event.reminder_at, title, body):
            count += 1

    logger.info(f"Re-armed {count} pending reminders")
    return count
