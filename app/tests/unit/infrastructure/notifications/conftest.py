"""Test fixtures for notification infrastructure tests."""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.channels.in_app import InAppChannel
from infrastructure.notifications.channels.registry import ChannelRegistry
from infrastructure.notifications.delivery import NotificationDelivery
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import (
    Channel,
    EventType,
    NotificationLog,
    NotificationPayload,
    NotificationStatus,
    Recipient,
    SendResult,
)
from infrastructure.notifications.preferences import PreferenceResolver
from infrastructure.notifications.scheduler import NotificationScheduler
from infrastructure.notifications.stores import (
    InMemoryCompanyDirectory,
    InMemoryInboxStore,
    InMemoryNotificationLogStore,
    InMemoryPreferenceStore,
    InMemoryRecipientDirectory,
    InMemoryTemplateStore,
)
from infrastructure.notifications.templates.renderer import TemplateRenderer


class FakeChannel(ChannelProvider):
    """Channel provider double that records every send.

    Set ``result`` to change what send() returns, or ``error`` to make
    send() raise.
    """

    def __init__(self, channel: Channel, configured: bool = True):
        self._channel = channel
        self.configured = configured
        self.result: SendResult = SendResult.ok(message_id=f"{channel.value.lower()}-1")
        self.error: Optional[Exception] = None
        self.sent: List[Dict[str, Any]] = []

    @property
    def channel(self) -> Channel:
        return self._channel

    def is_configured(self) -> bool:
        return self.configured

    def send(self, to, subject, body, metadata=None) -> SendResult:
        self.sent.append(
            {"to": to, "subject": subject, "body": body, "metadata": metadata or {}}
        )
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def recipient_factory():
    """Factory for creating Recipient instances.

    Example:
        recipient = recipient_factory(user_id="carer-2", phone="+447700900123")
        inactive = recipient_factory(is_active=False)
    """

    def _factory(
        user_id: str = "carer-1",
        email: str = "ana.lopez@example.com",
        phone: Optional[str] = None,
        first_name: str = "Ana",
        last_name: str = "Lopez",
        company_id: str = "company-1",
        is_active: bool = True,
    ) -> Recipient:
        return Recipient(
            user_id=user_id,
            email=email,
            phone=phone,
            first_name=first_name,
            last_name=last_name,
            company_id=company_id,
            is_active=is_active,
        )

    return _factory


@pytest.fixture
def notification_log_factory():
    """Factory for NotificationLog rows in a given status."""

    def _factory(
        status: NotificationStatus = NotificationStatus.QUEUED,
        channel: Channel = Channel.EMAIL,
        event_type: EventType = EventType.SHIFT_ASSIGNED,
        user_id: str = "carer-1",
        company_id: str = "company-1",
        **kwargs,
    ) -> NotificationLog:
        return NotificationLog(
            event_type=event_type,
            channel=channel,
            status=status,
            subject=kwargs.pop("subject", "New shift"),
            body=kwargs.pop("body", "<p>You have a new shift</p>"),
            user_id=user_id,
            company_id=company_id,
            **kwargs,
        )

    return _factory


@pytest.fixture
def payload_factory():
    """Factory for NotificationPayload instances."""

    def _factory(
        event_type: EventType = EventType.SHIFT_ASSIGNED,
        recipient_ids: Optional[List[str]] = None,
        data: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> NotificationPayload:
        return NotificationPayload(
            event_type=event_type,
            recipient_ids=recipient_ids if recipient_ids is not None else ["carer-1"],
            data=data if data is not None else {"clientName": "Jane Doe"},
            **kwargs,
        )

    return _factory


@pytest.fixture
def email_channel():
    return FakeChannel(Channel.EMAIL)


@pytest.fixture
def sms_channel():
    return FakeChannel(Channel.SMS)


@pytest.fixture
def inbox():
    return InMemoryInboxStore()


@pytest.fixture
def log_store():
    return InMemoryNotificationLogStore()


@pytest.fixture
def recipients(recipient_factory):
    return InMemoryRecipientDirectory([recipient_factory()])


@pytest.fixture
def companies():
    return InMemoryCompanyDirectory({"company-1": "Sunrise Care"})


@pytest.fixture
def preference_store():
    return InMemoryPreferenceStore()


@pytest.fixture
def template_store():
    return InMemoryTemplateStore()


@pytest.fixture
def registry(email_channel, sms_channel, inbox):
    """Registry with a fake email, the real in-app channel and a fake SMS."""
    return ChannelRegistry([email_channel, InAppChannel(inbox), sms_channel])


@pytest.fixture
def delivery(registry, log_store):
    delivery = NotificationDelivery(registry, log_store, send_timeout_seconds=5)
    yield delivery
    delivery.shutdown(wait=True)


@pytest.fixture
def dispatcher(
    recipients, companies, log_store, preference_store, template_store, registry, delivery
):
    return NotificationDispatcher(
        recipients=recipients,
        companies=companies,
        log_store=log_store,
        resolver=PreferenceResolver(preference_store, registry),
        renderer=TemplateRenderer(template_store),
        delivery=delivery,
        app_url="https://app.example.test",
        max_retries=3,
    )


@pytest.fixture
def scheduler(log_store, recipients, delivery):
    return NotificationScheduler(
        log_store=log_store,
        recipients=recipients,
        delivery=delivery,
        scheduled_batch_size=100,
        retry_batch_size=50,
    )


@pytest.fixture
def mock_registry():
    """MagicMock registry where every channel is available."""
    registry = MagicMock(spec=ChannelRegistry)
    registry.is_available.return_value = True
    return registry
