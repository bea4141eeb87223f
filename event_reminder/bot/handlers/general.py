"""General bot commands."""

from telegram import Update
from telegram.ext import ContextTypes

from event_reminder.services import DATE_FORMAT_HINT


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text(
        "Hello! I remind you of your events.\n\n"
        f"Add one with /add <name> | <{DATE_FORMAT_HINT}>\n"
        "and I'll send you a notification at that time.\n\n"
        "Type /help for all commands or /events to see your list."
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    help_text = f"""
*Event Reminder Commands*

*General:*
/start - Start the bot
/help - Show this help

*Events:*
/name <text> - Set the event name
/when <{DATE_FORMAT_HINT}> - Set the reminder time
/add - Add the event you entered
/add <name> | <{DATE_FORMAT_HINT}> - Enter and add in one step
/events - List events (tap Remove to delete one)
/delevent <id> - Remove an event

Note: times are in your configured timezone.
"""
    await update.message.reply_text(help_text, parse_mode="Markdown")


async def unknown_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle unknown commands."""
    await update.message.reply_text(
        f"Unknown command: {update.message.text}\n"
        "Type /help to see available commands."
    )
