"""Scheduled jobs."""

from .jobs import deliver_reminder, rearm_pending

__all__ = ["deliver_reminder", "rearm_pending"]
