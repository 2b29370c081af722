"""Shared fixtures for the notification test suite."""

from datetime import datetime, timezone

import pytest

from infrastructure.configuration import EmailSettings, NotificationSettings, Settings


@pytest.fixture
def fixed_now():
    """A fixed, timezone-aware 'now' used to drive scheduling decisions."""
    return datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def email_settings_factory():
    """Factory for EmailSettings built from explicit values, not the environment.

    Example:
        settings = email_settings_factory(api_key=None)  # email not configured
    """

    def _factory(
        api_key="re_test_key",
        api_url="https://email.example.test/emails",
        from_address="notifications@example.test",
        from_name="CareBase",
        timeout=5,
    ) -> EmailSettings:
        return EmailSettings(
            EMAIL_API_KEY=api_key,
            EMAIL_API_URL=api_url,
            EMAIL_FROM=from_address,
            EMAIL_FROM_NAME=from_name,
            EMAIL_TIMEOUT_SECONDS=timeout,
        )

    return _factory


@pytest.fixture
def notification_settings_factory():
    """Factory for NotificationSettings with small, test-friendly values."""

    def _factory(**overrides) -> NotificationSettings:
        values = {
            "NOTIFICATIONS_APP_URL": "https://app.example.test",
            "NOTIFICATIONS_DEFAULT_COMPANY_NAME": "CareBase",
            "NOTIFICATIONS_MAX_RETRIES": 3,
            "NOTIFICATIONS_SCHEDULED_BATCH_SIZE": 100,
            "NOTIFICATIONS_RETRY_BATCH_SIZE": 50,
            "NOTIFICATIONS_SEND_TIMEOUT_SECONDS": 5,
            "NOTIFICATIONS_SEND_WORKERS": 2,
        }
        values.update(overrides)
        return NotificationSettings(**values)

    return _factory


@pytest.fixture
def settings_factory(email_settings_factory, notification_settings_factory):
    """Factory for a full Settings object.

    Example:
        settings = settings_factory(email_api_key=None)
    """

    def _factory(email_api_key="re_test_key", **notification_overrides) -> Settings:
        return Settings(
            PREFIX="test-",
            email=email_settings_factory(api_key=email_api_key),
            notifications=notification_settings_factory(**notification_overrides),
        )

    return _factory
