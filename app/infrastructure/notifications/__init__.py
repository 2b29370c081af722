"""Event-driven, multi-channel notification dispatch.

Producers describe what happened; the dispatcher decides who is told,
on which channels and with what content, and records every attempt.

Usage:
    from infrastructure.notifications import EventType, NotificationPayload
    from infrastructure.services import get_notification_service

    service = get_notification_service()
    result = service.dispatch(
        NotificationPayload(
            event_type=EventType.SHIFT_CANCELLED,
            recipient_ids=["carer-1"],
            data={"clientName": "Jane Doe", "shiftDate": "3 March"},
        )
    )
"""

# Models
from infrastructure.notifications.models import (
    AttemptResult,
    Channel,
    DispatchResult,
    EventConfig,
    EventType,
    InAppMessage,
    NotificationLog,
    NotificationPayload,
    NotificationPreference,
    NotificationPriority,
    NotificationStatus,
    NotificationTemplate,
    Recipient,
    RecipientRole,
    RenderedTemplate,
    SendResult,
)

# Errors
from infrastructure.notifications.exceptions import (
    InvalidTransitionError,
    NotificationError,
    NotificationStoreError,
    UnknownEventTypeError,
)

# Components
from infrastructure.notifications.channels import ChannelProvider, ChannelRegistry
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.preferences import PreferenceResolver
from infrastructure.notifications.scheduler import NotificationScheduler
from infrastructure.notifications.service import NotificationService
from infrastructure.notifications.templates import TemplateRenderer

__all__ = [
    # Models
    "AttemptResult",
    "Channel",
    "DispatchResult",
    "EventConfig",
    "EventType",
    "InAppMessage",
    "NotificationLog",
    "NotificationPayload",
    "NotificationPreference",
    "NotificationPriority",
    "NotificationStatus",
    "NotificationTemplate",
    "Recipient",
    "RecipientRole",
    "RenderedTemplate",
    "SendResult",
    # Errors
    "InvalidTransitionError",
    "NotificationError",
    "NotificationStoreError",
    "UnknownEventTypeError",
    # Components
    "ChannelProvider",
    "ChannelRegistry",
    "NotificationDispatcher",
    "NotificationScheduler",
    "NotificationService",
    "PreferenceResolver",
    "TemplateRenderer",
]
