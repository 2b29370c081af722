"""Unit tests for template rendering and resolution.

Tests cover:
- Placeholder substitution and value formatting
- Conditional blocks (truthiness, malformed markers)
- Common variables
- Resolution order: tenant, system, built-in, generic
- Tenant isolation
"""

from datetime import date, datetime, timezone

import pytest

from infrastructure.notifications.models import (
    Channel,
    EventType,
    NotificationTemplate,
)
from infrastructure.notifications.templates.defaults import GENERIC_BODY
from infrastructure.notifications.templates.renderer import (
    TemplateRenderer,
    build_common_variables,
    is_truthy,
    render_string,
    stringify,
)


@pytest.mark.unit
class TestRenderString:
    """Tests for render_string()."""

    def test_conditional_block_kept_when_truthy(self):
        template = "Hi {{name}}{{#urgent}}, URGENT{{/urgent}}!"

        assert render_string(template, {"name": "Ana", "urgent": True}) == "Hi Ana, URGENT!"

    def test_conditional_block_removed_when_missing(self):
        template = "Hi {{name}}{{#urgent}}, URGENT{{/urgent}}!"

        assert render_string(template, {"name": "Ana"}) == "Hi Ana!"

    @pytest.mark.parametrize("value", [None, "", False])
    def test_conditional_block_removed_when_falsy(self, value):
        assert render_string("a{{#x}}b{{/x}}c", {"x": value}) == "ac"

    def test_zero_is_truthy(self):
        assert render_string("{{#count}}count={{count}}{{/count}}", {"count": 0}) == "count=0"

    def test_conditional_block_spans_lines_and_contains_placeholders(self):
        template = "{{#reason}}\n<p>Reason: {{reason}}</p>\n{{/reason}}"

        assert render_string(template, {"reason": "Client unwell"}) == (
            "\n<p>Reason: Client unwell</p>\n"
        )

    def test_unclosed_block_left_literal(self):
        template = "Hi {{#urgent}}now"

        assert render_string(template, {"urgent": True}) == "Hi {{#urgent}}now"

    def test_unknown_placeholder_renders_empty(self):
        assert render_string("Hello {{missing}}!", {}) == "Hello !"

    def test_placeholder_repeated(self):
        assert render_string("{{a}}-{{a}}", {"a": "x"}) == "x-x"

    def test_values_are_not_html_escaped(self):
        assert render_string("{{v}}", {"v": "<b>bold</b>"}) == "<b>bold</b>"


@pytest.mark.unit
class TestValueHelpers:
    def test_stringify(self):
        assert stringify(None) == ""
        assert stringify(True) == "true"
        assert stringify(False) == "false"
        assert stringify(3) == "3"
        assert stringify(7.0) == "7"
        assert stringify(7.5) == "7.5"
        assert stringify(date(2026, 3, 2)) == "2026-03-02"
        assert stringify(datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)) == (
            "2026-03-02T09:00:00+00:00"
        )

    def test_is_truthy(self):
        assert is_truthy("x")
        assert is_truthy(0)
        assert not is_truthy(None)
        assert not is_truthy("")
        assert not is_truthy(False)

    def test_build_common_variables(self):
        variables = build_common_variables(
            recipient_name="Ana Lopez",
            company_name="Sunrise Care",
            app_url="https://app.example.test",
            today=date(2026, 3, 2),
        )

        assert variables == {
            "recipientName": "Ana Lopez",
            "companyName": "Sunrise Care",
            "currentDate": "March 2, 2026",
            "appUrl": "https://app.example.test",
        }


@pytest.mark.unit
class TestTemplateRenderer:
    """Tests for template resolution and rendering."""

    def test_tenant_template_wins(self, template_store):
        template_store.save(
            NotificationTemplate(
                company_id="company-1",
                event_type=EventType.SHIFT_ASSIGNED,
                channel=Channel.EMAIL,
                subject="Tenant: {{clientName}}",
                body="tenant body",
            )
        )
        template_store.save(
            NotificationTemplate(
                event_type=EventType.SHIFT_ASSIGNED,
                channel=Channel.EMAIL,
                subject="System",
                body="system body",
                is_default=True,
            )
        )
        renderer = TemplateRenderer(template_store)

        rendered = renderer.render(
            EventType.SHIFT_ASSIGNED,
            Channel.EMAIL,
            {"clientName": "Jane Doe"},
            company_id="company-1",
        )

        assert rendered.subject == "Tenant: Jane Doe"
        assert rendered.body == "tenant body"

    def test_other_tenant_template_never_used(self, template_store):
        template_store.save(
            NotificationTemplate(
                company_id="company-2",
                event_type=EventType.SHIFT_ASSIGNED,
                channel=Channel.IN_APP,
                body="company two only",
            )
        )
        renderer = TemplateRenderer(template_store)

        rendered = renderer.render(
            EventType.SHIFT_ASSIGNED,
            Channel.IN_APP,
            {"clientName": "Jane Doe", "shiftDate": "3 March", "shiftTime": "09:00"},
            company_id="company-1",
        )

        assert rendered.body == (
            "You have been assigned a shift with Jane Doe on 3 March at 09:00."
        )

    def test_inactive_tenant_template_skipped(self, template_store):
        template_store.save(
            NotificationTemplate(
                company_id="company-1",
                event_type=EventType.SHIFT_ASSIGNED,
                channel=Channel.IN_APP,
                body="disabled",
                is_active=False,
            )
        )
        template_store.save(
            NotificationTemplate(
                event_type=EventType.SHIFT_ASSIGNED,
                channel=Channel.IN_APP,
                body="system default for {{recipientName}}",
                is_default=True,
            )
        )
        renderer = TemplateRenderer(template_store)

        rendered = renderer.render(
            EventType.SHIFT_ASSIGNED,
            Channel.IN_APP,
            {"recipientName": "Ana"},
            company_id="company-1",
        )

        assert rendered.body == "system default for Ana"
        assert rendered.subject is None

    def test_builtin_template_used_when_store_empty(self, template_store):
        renderer = TemplateRenderer(template_store)

        rendered = renderer.render(
            EventType.SHIFT_ASSIGNED,
            Channel.EMAIL,
            {"clientName": "Jane Doe", "shiftDate": "3 March"},
            company_id="company-1",
        )

        assert rendered.subject == "New Shift Assigned - Jane Doe on 3 March"
        assert "{{" not in rendered.body

    def test_generic_fallback(self, template_store):
        renderer = TemplateRenderer(template_store)

        rendered = renderer.render(
            EventType.WEEKLY_SUMMARY,
            Channel.IN_APP,
            {"recipientName": "Ana", "companyName": "Sunrise Care"},
        )

        assert rendered.subject == "Notification: weekly summary"
        assert rendered.body == render_string(
            GENERIC_BODY, {"recipientName": "Ana", "companyName": "Sunrise Care"}
        )
        assert "Hi Ana," in rendered.body

    def test_no_company_skips_tenant_lookup(self, template_store):
        template_store.save(
            NotificationTemplate(
                company_id="",
                event_type=EventType.WEEKLY_SUMMARY,
                channel=Channel.IN_APP,
                body="should not match",
            )
        )
        renderer = TemplateRenderer(template_store)

        rendered = renderer.render(EventType.WEEKLY_SUMMARY, Channel.IN_APP, {})

        assert rendered.body != "should not match"
