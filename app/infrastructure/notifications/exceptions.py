"""Notification system exceptions.

Ordinary delivery failures are never raised: channels return a failed
SendResult and the dispatcher records it on the log row. The exceptions
below are structural and propagate to the caller.
"""


class NotificationError(Exception):
    """Base class for notification system errors."""


class InvalidTransitionError(NotificationError):
    """Raised when a notification log is moved to a status it cannot reach."""

    def __init__(self, log_id: str, current: str, target: str):
        self.log_id = log_id
        self.current = current
        self.target = target
        super().__init__(
            f"Notification {log_id} cannot transition from {current} to {target}"
        )


class NotificationStoreError(NotificationError):
    """Raised when the notification log store cannot be read or written."""


class UnknownEventTypeError(NotificationError):
    """Raised when an event type has no configuration entry."""
