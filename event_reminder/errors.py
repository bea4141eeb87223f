"""Exception types raised by the event reminder components."""


class EventReminderError(Exception):
    """Base exception for event reminder errors"""
    pass


class ValidationError(EventReminderError):
    """User input rejected before any state change.

    ``title`` is the heading of the alert shown to the user, the exception
    message is its body.
    """

    title = "Error"
    default_message = "Invalid input"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class MissingFieldError(ValidationError):
    """Event name or reminder time left empty."""
    title = "Error"
    default_message = "Please enter all fields"


class UnparseableDateTimeError(ValidationError):
    """Reminder text is not a date and time."""
    title = "Invalid Date"
    default_message = "Please enter a valid date and time in the format YYYY-MM-DD HH:mm"


class PastDateTimeError(ValidationError):
    """Reminder time is not in the future."""
    title = "Invalid Date"
    default_message = "Please select a future date and time"


class StorageError(EventReminderError):
    """Persisted events could not be read or written."""
    pass


class SchedulingError(EventReminderError):
    """A reminder notification could not be scheduled."""
    pass
