"""Event reminder bot: named events with a one-shot scheduled notification."""

__version__ = "0.1.0"
