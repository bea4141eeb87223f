"""One-shot reminder notifications backed by the bot's job queue."""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime

from event_reminder.errors import SchedulingError
from event_reminder.scheduler.jobs import deliver_reminder

logger = logging.getLogger(__name__)

HANDLE_PREFIX = "event-reminder-"


class ReminderCollaborator(ABC):
    """Schedules and cancels reminder notifications."""

    @abstractmethod
    async def schedule(self, trigger_at: datetime, title: str, body: str) -> str:
        """Schedule a notification and return its handle."""

    @abstractmethod
    async def cancel(self, handle: str) -> None:
        """Cancel a scheduled notification. Unknown handles are ignored."""


class JobQueueNotifier(ReminderCollaborator):
    """
    Deliver reminders as Telegram messages through ``JobQueue.run_once``.

    The handle is the job name, so cancelling looks the job up by name.
    """

    def __init__(self, job_queue, chat_id):
        self.job_queue = job_queue
        self.chat_id = chat_id

    async def schedule(self, trigger_at: datetime, title: str, body: str) -> str:
        handle = f"{HANDLE_PREFIX}{uuid.uuid4().hex}"
        self._run_once(handle, trigger_at, title, body)
        logger.info(f"Scheduled reminder {handle} for {trigger_at.isoformat()}")
        return handle

    async def cancel(self, handle: str) -> None:
        if self.job_queue is None:
            raise SchedulingError("Job queue not available")

        jobs = self.job_queue.get_jobs_by_name(handle)
        if not jobs:
            logger.info(f"No pending reminder {handle} to cancel")
            return

        for job in jobs:
            job.schedule_removal()
        logger.info(f"Cancelled reminder {handle}")

    def restore(self, handle: str, trigger_at: datetime, title: str, body: str) -> bool:
        """Re-register a reminder under its existing handle.

        Returns False if a job with that handle is already queued.
        """
        if self.job_queue is not None and self.job_queue.get_jobs_by_name(handle):
            return False

        self._run_once(handle, trigger_at, title, body)
        return True

    def _run_once(self, handle: str, trigger_at: datetime, title: str, body: str):
        if self.job_queue is None:
            raise SchedulingError(
                "Job queue not available. Install python-telegram-bot[job-queue]."
            )

        try:
            self.job_queue.run_once(
                deliver_reminder,
                when=trigger_at,
                name=handle,
                chat_id=self.chat_id,
                data={"title": title, "body": body},
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Failed to schedule reminder {handle}: {e}")
            raise SchedulingError(f"Cannot schedule reminder: {e}") from e
