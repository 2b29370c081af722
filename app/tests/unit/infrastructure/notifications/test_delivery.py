"""Unit tests for NotificationDelivery (the send step)."""

import threading

import pytest

from infrastructure.notifications.delivery import (
    NO_PHONE_ERROR,
    NotificationDelivery,
    resolve_address,
)
from infrastructure.notifications.models import (
    Channel,
    NotificationStatus,
    SendResult,
)


@pytest.mark.unit
class TestResolveAddress:
    def test_addresses_per_channel(self, recipient_factory):
        recipient = recipient_factory(phone="+447700900123")

        assert resolve_address(recipient, Channel.EMAIL) == "ana.lopez@example.com"
        assert resolve_address(recipient, Channel.SMS) == "+447700900123"
        assert resolve_address(recipient, Channel.WHATSAPP) == "+447700900123"
        assert resolve_address(recipient, Channel.IN_APP) == "carer-1"

    def test_missing_phone(self, recipient_factory):
        assert resolve_address(recipient_factory(), Channel.SMS) is None


@pytest.mark.unit
class TestDeliver:
    def test_successful_send_marks_sent(
        self, delivery, log_store, email_channel, notification_log_factory, recipient_factory
    ):
        log = log_store.create(notification_log_factory())

        attempt = delivery.deliver(log, recipient_factory())

        assert attempt.success
        assert attempt.status == NotificationStatus.SENT
        stored = log_store.get(log.id)
        assert stored.status == NotificationStatus.SENT
        assert stored.message_id == "email-1"
        assert email_channel.sent[0]["to"] == "ana.lopez@example.com"
        assert email_channel.sent[0]["metadata"]["notificationLogId"] == log.id

    def test_provider_failure_marks_failed(
        self, delivery, log_store, email_channel, notification_log_factory, recipient_factory
    ):
        email_channel.result = SendResult.failed("mailbox full")
        log = log_store.create(notification_log_factory())

        attempt = delivery.deliver(log, recipient_factory())

        assert not attempt.success
        assert attempt.error == "mailbox full"
        stored = log_store.get(log.id)
        assert stored.status == NotificationStatus.FAILED
        assert stored.last_error == "mailbox full"

    def test_provider_exception_is_contained(
        self, delivery, log_store, email_channel, notification_log_factory, recipient_factory
    ):
        email_channel.error = RuntimeError("connection reset")
        log = log_store.create(notification_log_factory())

        attempt = delivery.deliver(log, recipient_factory())

        assert not attempt.success
        assert log_store.get(log.id).last_error == "connection reset"

    def test_missing_phone_fails_without_calling_provider(
        self, delivery, log_store, sms_channel, notification_log_factory, recipient_factory
    ):
        log = log_store.create(notification_log_factory(channel=Channel.SMS))

        attempt = delivery.deliver(log, recipient_factory(phone=None))

        assert attempt.error == NO_PHONE_ERROR
        assert sms_channel.sent == []
        assert log_store.get(log.id).status == NotificationStatus.FAILED

    def test_unconfigured_channel_fails(
        self, delivery, log_store, email_channel, notification_log_factory, recipient_factory
    ):
        email_channel.configured = False
        log = log_store.create(notification_log_factory())

        attempt = delivery.deliver(log, recipient_factory())

        assert attempt.error == "Channel provider not configured for EMAIL"
        assert email_channel.sent == []

    def test_unregistered_channel_fails(
        self, delivery, log_store, notification_log_factory, recipient_factory
    ):
        log = log_store.create(notification_log_factory(channel=Channel.WHATSAPP))

        attempt = delivery.deliver(log, recipient_factory())

        assert attempt.error == "Channel provider not configured for WHATSAPP"

    def test_send_timeout_marks_failed(
        self, registry, log_store, email_channel, notification_log_factory, recipient_factory
    ):
        release = threading.Event()

        def _hang(*args, **kwargs):
            release.wait(5)
            return SendResult.ok("late")

        email_channel.send = _hang
        delivery = NotificationDelivery(registry, log_store, send_timeout_seconds=0.05)
        log = log_store.create(notification_log_factory())

        try:
            attempt = delivery.deliver(log, recipient_factory())
        finally:
            release.set()
            delivery.shutdown(wait=True)

        assert not attempt.success
        assert attempt.error == "Send timed out after 0.05s"
        assert log_store.get(log.id).status == NotificationStatus.FAILED

    def test_hung_channel_does_not_block_other_channels(
        self, registry, log_store, email_channel, inbox, notification_log_factory, recipient_factory
    ):
        release = threading.Event()

        def _hang(*args, **kwargs):
            release.wait(5)
            return SendResult.ok("late")

        email_channel.send = _hang
        delivery = NotificationDelivery(
            registry, log_store, send_timeout_seconds=0.2, max_workers=1
        )
        email_log = log_store.create(notification_log_factory(channel=Channel.EMAIL))
        in_app_log = log_store.create(notification_log_factory(channel=Channel.IN_APP))

        try:
            email_attempt = delivery.deliver(email_log, recipient_factory())
            in_app_attempt = delivery.deliver(in_app_log, recipient_factory())
        finally:
            release.set()
            delivery.shutdown(wait=True)

        assert email_attempt.error == "Send timed out after 0.2s"
        assert in_app_attempt.success
        assert log_store.get(in_app_log.id).status == NotificationStatus.SENT
        assert len(inbox.list_for_user("carer-1")) == 1

    def test_provider_timeout_error_keeps_its_message(
        self, delivery, log_store, email_channel, notification_log_factory, recipient_factory
    ):
        email_channel.error = TimeoutError("read timed out")
        log = log_store.create(notification_log_factory())

        attempt = delivery.deliver(log, recipient_factory())

        assert not attempt.success
        assert attempt.error == "read timed out"
        assert log_store.get(log.id).last_error == "read timed out"
