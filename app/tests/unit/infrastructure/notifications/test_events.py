"""Unit tests for the event catalogue."""

import pytest

from infrastructure.notifications.events import (
    EVENT_CONFIGS,
    FALLBACK_CHANNELS,
    get_default_channels,
    get_event_config,
    get_event_variables,
    get_events_by_priority,
    get_events_for_role,
)
from infrastructure.notifications.exceptions import UnknownEventTypeError
from infrastructure.notifications.models import (
    Channel,
    EventType,
    NotificationPriority,
    RecipientRole,
)


@pytest.mark.unit
class TestEventCatalogue:
    def test_every_event_type_has_a_configuration(self):
        assert set(EVENT_CONFIGS) == set(EventType)

    def test_every_event_has_default_channels(self):
        for config in EVENT_CONFIGS.values():
            assert config.default_channels, config.event_type

    def test_get_event_config(self):
        config = get_event_config(EventType.THRESHOLD_BREACH)

        assert config.priority == NotificationPriority.HIGH
        assert config.default_recipient_roles == [
            RecipientRole.SUPERVISOR,
            RecipientRole.ADMIN,
        ]
        assert config.default_channels == [Channel.EMAIL, Channel.IN_APP]

    def test_get_event_config_unknown(self):
        with pytest.raises(UnknownEventTypeError):
            get_event_config("NOT_AN_EVENT")

    def test_default_channels_are_a_copy(self):
        channels = get_default_channels(EventType.SHIFT_ASSIGNED)
        channels.append(Channel.WHATSAPP)

        assert Channel.WHATSAPP not in get_default_channels(EventType.SHIFT_ASSIGNED)

    def test_default_channels_fallback_for_unknown_event(self):
        assert get_default_channels("NOT_AN_EVENT") == FALLBACK_CHANNELS

    def test_shift_reminder_1h_includes_sms(self):
        assert Channel.SMS in get_default_channels(EventType.SHIFT_REMINDER_1H)

    def test_administrative_events_are_email_only(self):
        for event in (EventType.PASSWORD_RESET, EventType.USER_ACCOUNT_CREATED):
            assert get_default_channels(event) == [Channel.EMAIL]

    def test_events_by_priority(self):
        critical = get_events_by_priority(NotificationPriority.CRITICAL)

        assert critical
        assert all(c.priority == NotificationPriority.CRITICAL for c in critical)

    def test_events_for_role(self):
        events = {c.event_type for c in get_events_for_role(RecipientRole.CARER)}

        assert EventType.SHIFT_ASSIGNED in events
        assert EventType.THRESHOLD_BREACH not in events

    def test_event_variables(self):
        variables = get_event_variables(EventType.THRESHOLD_BREACH)

        assert "fieldLabel" in variables
        assert "thresholdValue" in variables
        assert get_event_variables("NOT_AN_EVENT") == []
