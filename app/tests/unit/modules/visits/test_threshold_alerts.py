"""Unit tests for visit note threshold alerts."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.models import Channel, EventType, Recipient
from infrastructure.notifications.service import NotificationService
from infrastructure.notifications.stores import InMemoryRecipientDirectory
from modules.visits.threshold_alerts import (
    FieldThreshold,
    check_threshold,
    notify_threshold_breach,
)


@pytest.fixture
def threshold():
    return FieldThreshold(
        field_label="Temperature",
        minimum=35.0,
        maximum=38.0,
        custom_message="Call the GP if above 38",
    )


@pytest.mark.unit
class TestCheckThreshold:
    def test_within_limits(self, threshold):
        assert check_threshold(36.6, threshold) is None

    def test_boundaries_are_within_limits(self, threshold):
        assert check_threshold(35.0, threshold) is None
        assert check_threshold(38.0, threshold) is None

    def test_below_minimum(self, threshold):
        assert check_threshold(34.2, threshold) == "minimum"

    def test_above_maximum(self, threshold):
        assert check_threshold(39.1, threshold) == "maximum"

    def test_open_ended_threshold(self):
        steps = FieldThreshold(field_label="Steps", minimum=10)

        assert check_threshold(1000, steps) is None


@pytest.mark.unit
class TestNotifyThresholdBreach:
    def test_no_dispatch_within_limits(self, threshold):
        service = MagicMock()

        result = notify_threshold_breach(
            service,
            ["sup-1"],
            "note-1",
            "Jane Doe",
            "Ana Lopez",
            date(2026, 3, 2),
            37.0,
            threshold,
        )

        assert result is None
        service.dispatch.assert_not_called()

    def test_no_dispatch_without_supervisors(self, threshold):
        service = MagicMock()

        result = notify_threshold_breach(
            service,
            [],
            "note-1",
            "Jane Doe",
            "Ana Lopez",
            date(2026, 3, 2),
            39.5,
            threshold,
        )

        assert result is None
        service.dispatch.assert_not_called()

    def test_dispatches_threshold_breach(self, threshold):
        service = MagicMock()

        notify_threshold_breach(
            service,
            ["sup-1", "sup-2"],
            "note-1",
            "Jane Doe",
            "Ana Lopez",
            date(2026, 3, 2),
            39.5,
            threshold,
            app_url="https://app.example.test",
        )

        payload = service.dispatch.call_args[0][0]
        assert payload.event_type == EventType.THRESHOLD_BREACH
        assert payload.recipient_ids == ["sup-1", "sup-2"]
        assert payload.related_entity_id == "note-1"
        assert payload.data["thresholdType"] == "maximum"
        assert payload.data["thresholdValue"] == 38.0
        assert payload.data["visitNoteUrl"] == "https://app.example.test/visit-notes/note-1"

    def test_visit_note_url_defaults_to_configured_app_url(self, threshold):
        service = MagicMock()
        service.dispatcher.app_url = "https://care.example.com"

        notify_threshold_breach(
            service,
            ["sup-1"],
            "note-7",
            "Jane Doe",
            "Ana Lopez",
            date(2026, 3, 2),
            39.5,
            threshold,
        )

        payload = service.dispatch.call_args[0][0]
        assert payload.data["visitNoteUrl"] == "https://care.example.com/visit-notes/note-7"

    def test_end_to_end_in_app_alert(self, threshold, settings_factory):
        supervisor = Recipient(
            user_id="sup-1",
            email="sam.supervisor@example.com",
            first_name="Sam",
            company_id="company-1",
        )
        service = NotificationService(
            settings_factory(email_api_key=None),
            recipients=InMemoryRecipientDirectory([supervisor]),
        )

        try:
            result = notify_threshold_breach(
                service,
                ["sup-1"],
                "note-1",
                "Jane Doe",
                "Ana Lopez",
                date(2026, 3, 2),
                34.0,
                threshold,
            )
        finally:
            service.shutdown()

        assert result.total_sent == 1
        assert result.results[0].channel == Channel.IN_APP
        message = service.inbox.list_for_user("sup-1")[0]
        assert message.body == (
            "Threshold alert for Jane Doe: Temperature value (34) exceeds "
            "minimum threshold (35)."
        )
