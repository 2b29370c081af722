"""Notification service for dependency injection.

Wires the channel registry, renderer, preference resolver, dispatcher
and scheduler together behind one class-based interface.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.channels.registry import (
    ChannelRegistry,
    build_channel_registry,
)
from infrastructure.notifications.delivery import NotificationDelivery
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import (
    DispatchResult,
    NotificationLog,
    NotificationPayload,
)
from infrastructure.notifications.preferences import PreferenceResolver
from infrastructure.notifications.scheduler import NotificationScheduler
from infrastructure.notifications.stores import (
    CompanyDirectory,
    InboxStore,
    InMemoryCompanyDirectory,
    InMemoryInboxStore,
    InMemoryNotificationLogStore,
    InMemoryPreferenceStore,
    InMemoryRecipientDirectory,
    InMemoryTemplateStore,
    NotificationLogStore,
    PreferenceStore,
    RecipientDirectory,
    TemplateStore,
)
from infrastructure.notifications.templates.renderer import TemplateRenderer

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()


class NotificationService:
    """Class-based notification service.

    Thin facade: producers call ``dispatch``; the scheduled jobs call the
    two sweeps. Stores default to the in-memory implementations, and
    production wiring passes database-backed stores instead.

    Usage:
        from infrastructure.services import get_notification_service

        service = get_notification_service()
        result = service.dispatch(
            event_type=EventType.ASSESSMENT_DUE,
            recipient_ids=["user-1"],
            data={"clientName": "Jane Doe", "dueDate": "2026-11-01"},
        )

        # Direct instantiation (tests)
        service = NotificationService(settings, recipients=directory)
    """

    def __init__(
        self,
        settings: "Settings",
        recipients: Optional[RecipientDirectory] = None,
        companies: Optional[CompanyDirectory] = None,
        preferences: Optional[PreferenceStore] = None,
        templates: Optional[TemplateStore] = None,
        log_store: Optional[NotificationLogStore] = None,
        inbox: Optional[InboxStore] = None,
        registry: Optional[ChannelRegistry] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            recipients: Recipient directory (in-memory if omitted).
            companies: Company name directory (in-memory if omitted).
            preferences: Preference store (in-memory if omitted).
            templates: Template store (in-memory if omitted).
            log_store: Notification log store (in-memory if omitted).
            inbox: Inbox written by the in-app channel (in-memory if omitted).
            registry: Optional pre-built ChannelRegistry. If not provided,
                builds the default registry from settings.
        """
        config = settings.notifications
        self._settings = settings
        self.recipients = recipients or InMemoryRecipientDirectory()
        self.companies = companies or InMemoryCompanyDirectory()
        self.preferences = preferences or InMemoryPreferenceStore()
        self.templates = templates or InMemoryTemplateStore()
        self.log_store = log_store or InMemoryNotificationLogStore(
            queued_lease_seconds=2 * config.send_timeout_seconds
        )
        self.inbox = inbox or InMemoryInboxStore()
        self.registry = registry or build_channel_registry(settings, self.inbox)

        self.renderer = TemplateRenderer(self.templates)
        self.resolver = PreferenceResolver(self.preferences, self.registry)
        self.delivery = NotificationDelivery(
            self.registry,
            self.log_store,
            send_timeout_seconds=config.send_timeout_seconds,
            max_workers=config.send_workers,
        )
        self.dispatcher = NotificationDispatcher(
            recipients=self.recipients,
            companies=self.companies,
            log_store=self.log_store,
            resolver=self.resolver,
            renderer=self.renderer,
            delivery=self.delivery,
            app_url=config.app_url,
            default_company_name=config.default_company_name,
            max_retries=config.max_retries,
        )
        self.scheduler = NotificationScheduler(
            log_store=self.log_store,
            recipients=self.recipients,
            delivery=self.delivery,
            scheduled_batch_size=config.scheduled_batch_size,
            retry_batch_size=config.retry_batch_size,
        )

    def dispatch(
        self, payload: Optional[NotificationPayload] = None, **fields: Any
    ) -> DispatchResult:
        """Dispatch an event to its recipients.

        Accepts either a NotificationPayload or its fields as keyword
        arguments.

        Raises:
            pydantic.ValidationError: If the keyword fields are invalid.
            NotificationStoreError: If the log store cannot be written.
        """
        if payload is None:
            payload = NotificationPayload(**fields)
        elif fields:
            raise TypeError("Pass either a NotificationPayload or keyword fields")
        return self.dispatcher.dispatch(payload)

    def process_scheduled_notifications(self, now: Optional[datetime] = None) -> dict:
        return self.scheduler.process_scheduled_notifications(now)

    def retry_failed_notifications(self, now: Optional[datetime] = None) -> dict:
        return self.scheduler.retry_failed_notifications(now)

    def list_exhausted_notifications(self, limit: int = 100) -> List[NotificationLog]:
        """Permanently failed notifications, oldest failure first."""
        return self.scheduler.list_exhausted_notifications(limit)

    def health_check(self) -> Dict[str, bool]:
        """Check health of all channels.

        Returns:
            Dict mapping channel value to health status (True = healthy)
        """
        results = self.registry.health_check()
        health = {channel: result.is_success for channel, result in results.items()}
        logger.info("notification_health_check", **health)
        return health

    def shutdown(self) -> None:
        """Release the send thread pool."""
        self.delivery.shutdown(wait=False)
