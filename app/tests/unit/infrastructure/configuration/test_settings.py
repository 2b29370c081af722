"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from infrastructure.configuration import (
    EmailSettings,
    NotificationSettings,
    Settings,
)


@pytest.mark.unit
class TestEmailSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("EMAIL_API_KEY", "re_env_key")
        monkeypatch.setenv("EMAIL_FROM", "alerts@example.com")
        monkeypatch.setenv("EMAIL_FROM_NAME", "Sunrise Care")

        settings = EmailSettings()

        assert settings.is_configured
        assert settings.sender == "Sunrise Care <alerts@example.com>"

    def test_sender_without_display_name(self, email_settings_factory):
        settings = email_settings_factory(from_name="")

        assert settings.sender == "notifications@example.test"

    def test_not_configured_without_key(self, email_settings_factory):
        assert not email_settings_factory(api_key=None).is_configured


@pytest.mark.unit
class TestNotificationSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "NOTIFICATIONS_MAX_RETRIES",
            "NOTIFICATIONS_SCHEDULED_BATCH_SIZE",
            "NOTIFICATIONS_RETRY_BATCH_SIZE",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = NotificationSettings(_env_file=None)

        assert settings.max_retries == 3
        assert settings.scheduled_batch_size == 100
        assert settings.retry_batch_size == 50

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("NOTIFICATIONS_MAX_RETRIES", "5")
        monkeypatch.setenv("NOTIFICATIONS_SEND_TIMEOUT_SECONDS", "2.5")

        settings = NotificationSettings()

        assert settings.max_retries == 5
        assert settings.send_timeout_seconds == 2.5

    def test_rejects_invalid_batch_size(self, notification_settings_factory):
        with pytest.raises(ValidationError):
            notification_settings_factory(NOTIFICATIONS_SCHEDULED_BATCH_SIZE=0)


@pytest.mark.unit
class TestSettings:
    def test_subsettings_instantiated(self):
        settings = Settings()

        assert isinstance(settings.email, EmailSettings)
        assert isinstance(settings.notifications, NotificationSettings)

    def test_overrides_passed_through(self, settings_factory):
        settings = settings_factory(NOTIFICATIONS_MAX_RETRIES=1)

        assert settings.notifications.max_retries == 1
        assert settings.email.EMAIL_API_KEY == "re_test_key"

    def test_is_production(self):
        assert Settings(PREFIX="").is_production
        assert not Settings(PREFIX="dev-").is_production
