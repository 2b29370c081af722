"""Unit tests for InAppChannel."""

import pytest

from infrastructure.notifications.channels.in_app import InAppChannel, strip_html
from infrastructure.notifications.models import Channel, EventType
from infrastructure.notifications.stores import InMemoryInboxStore


@pytest.mark.unit
class TestStripHtml:
    def test_strips_tags_and_collapses_whitespace(self):
        assert strip_html("<p>Hi Ana,</p>\n\n<p>See <b>details</b>.</p>") == (
            "Hi Ana, See details."
        )

    def test_unescapes_entities(self):
        assert strip_html("Fish &amp; chips") == "Fish & chips"

    def test_plain_text_unchanged(self):
        assert strip_html("Reminder: shift at 09:00") == "Reminder: shift at 09:00"


@pytest.mark.unit
class TestInAppChannel:
    def test_always_configured(self):
        channel = InAppChannel(InMemoryInboxStore())

        assert channel.channel == Channel.IN_APP
        assert channel.is_configured()

    def test_send_writes_inbox_message(self):
        inbox = InMemoryInboxStore()
        channel = InAppChannel(inbox)

        result = channel.send(
            "carer-1",
            None,
            "<p>New shift</p>",
            {
                "title": "Shift assigned",
                "companyId": "company-1",
                "eventType": "SHIFT_ASSIGNED",
            },
        )

        messages = inbox.list_for_user("carer-1")
        assert result.success
        assert result.message_id == messages[0].id
        assert messages[0].title == "Shift assigned"
        assert messages[0].body == "New shift"
        assert messages[0].event_type == EventType.SHIFT_ASSIGNED
        assert messages[0].company_id == "company-1"

    def test_unknown_event_type_in_metadata(self):
        inbox = InMemoryInboxStore()

        InAppChannel(inbox).send("carer-1", "Subject", "Body", {"eventType": "NOPE"})

        message = inbox.list_for_user("carer-1")[0]
        assert message.event_type is None
        assert message.title == "Subject"
