"""Main Telegram bot setup and runner."""

import logging
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
)

from event_reminder.config import get
from event_reminder.db import init_db
from event_reminder.scheduler import rearm_pending
from event_reminder.services import (
    EventReminderStore,
    JobQueueNotifier,
    SettingStorage,
    get_timezone,
)

from .handlers import events, general

logger = logging.getLogger(__name__)


async def on_startup(app: Application):
    """Load persisted events and queue their reminders again."""
    store = app.bot_data[events.STORE_KEY]
    await store.initialize()
    rearm_pending(store, store.notifier)


def create_bot() -> Application:
    """Create and configure the Telegram bot application."""
    token = get("telegram.bot_token")
    if not token or token == "YOUR_BOT_TOKEN_FROM_BOTFATHER":
        raise ValueError(
            "Telegram bot token not configured. "
            "Get one from @BotFather and add it to config.yaml"
        )

    authorized_user = get("telegram.authorized_user_id")
    if not authorized_user:
        raise ValueError(
            "telegram.authorized_user_id not configured. "
            "Reminders are sent to this chat."
        )

    db_path = get("database.path")
    init_db(db_path)

    app = Application.builder().token(token).post_init(on_startup).build()

    tz_name = get("timezone", "America/Montreal")
    store = EventReminderStore(
        storage=SettingStorage(),
        notifier=JobQueueNotifier(app.job_queue, chat_id=authorized_user),
        timezone=get_timezone(tz_name),
        storage_key=get("events.storage_key", "events"),
    )
    app.bot_data[events.STORE_KEY] = store
    app.bot_data[events.AUTHORIZED_USER_KEY] = authorized_user

    user_filter = filters.User(user_id=authorized_user)

    # General commands
    app.add_handler(CommandHandler("start", general.start, filters=user_filter))
    app.add_handler(CommandHandler("help", general.help_command, filters=user_filter))

    # Event commands
    app.add_handler(CommandHandler("name", events.set_name, filters=user_filter))
    app.add_handler(CommandHandler("when", events.set_when, filters=user_filter))
    app.add_handler(CommandHandler("add", events.add_event, filters=user_filter))
    app.add_handler(CommandHandler("events", events.list_events, filters=user_filter))
    app.add_handler(CommandHandler("delevent", events.delete_event, filters=user_filter))

    for handler in events.get_event_handlers():
        app.add_handler(handler)

    # Handle unknown commands
    app.add_handler(MessageHandler(
        filters.COMMAND & user_filter,
        general.unknown_command
    ))

    app.add_error_handler(error_handler)

    logger.info(f"Event reminders for chat {authorized_user} in {tz_name}")
    return app


async def error_handler(update, context):
    """Handle errors in the bot."""
    logger.error(f"Update {update} caused error: {context.error}")

    if update and getattr(update, "effective_message", None):
        await update.effective_message.reply_text(
            f"An error occurred: {str(context.error)}"
        )


def run_bot():
    """Run the bot."""
    import logging.handlers
    from pathlib import Path

    log_file = get("logging.file")
    log_level = get("logging.level", "INFO")

    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        # Rotate at midnight, keep one backup
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when='midnight',
            interval=1,
            backupCount=1
        )
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        handlers.insert(0, file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    logger.info("Starting Event Reminder bot...")

    app = create_bot()

    app.run_polling(allowed_updates=["message", "callback_query"])


if __name__ == "__main__":
    run_bot()
