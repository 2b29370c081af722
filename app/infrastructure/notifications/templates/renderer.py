"""Template resolution and placeholder rendering.

Templates use two constructs:

- ``{{key}}`` is replaced by the string form of the variable (missing or
  None becomes an empty string).
- ``{{#key}}...{{/key}}`` keeps its inner text when the variable is
  present and truthy, otherwise the whole block is removed. Blocks do not
  nest; an opening marker without a matching close is left as literal
  text.

Conditional blocks are evaluated before simple substitution. Values are
not HTML-escaped: producers own the content they pass in.
"""

import re
from datetime import date, datetime
from typing import Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.models import (
    Channel,
    EventType,
    RenderedTemplate,
    TemplateValue,
    TemplateVariables,
)
from infrastructure.notifications.templates.defaults import (
    get_builtin_template,
    get_generic_template,
)

if TYPE_CHECKING:
    from infrastructure.notifications.stores import TemplateStore

logger = structlog.get_logger()

_CONDITIONAL_RE = re.compile(r"\{\{#(\w+)\}\}(.*?)\{\{/\1\}\}", re.DOTALL)
_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def stringify(value: TemplateValue) -> str:
    """Return the text a variable renders as."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_truthy(value: TemplateValue) -> bool:
    """Decide whether a conditional block is kept.

    Missing, None, empty string and False hide the block; every other
    value (including 0) shows it.
    """
    return value is not None and value != "" and value is not False


def render_string(template: str, variables: TemplateVariables) -> str:
    """Render one template string.

    Example:
        render_string("Hi {{name}}{{#urgent}}, URGENT{{/urgent}}!",
                      {"name": "Ana", "urgent": True})
        # "Hi Ana, URGENT!"
    """

    def _conditional(match: re.Match) -> str:
        return match.group(2) if is_truthy(variables.get(match.group(1))) else ""

    def _placeholder(match: re.Match) -> str:
        return stringify(variables.get(match.group(1)))

    rendered = _CONDITIONAL_RE.sub(_conditional, template)
    return _PLACEHOLDER_RE.sub(_placeholder, rendered)


def build_common_variables(
    recipient_name: str,
    company_name: str,
    app_url: str,
    today: Optional[date] = None,
) -> TemplateVariables:
    """Variables available to every template.

    Args:
        recipient_name: "First Last" of the recipient
        company_name: Tenant display name
        app_url: Base URL of the web application
        today: Date used for currentDate (defaults to today)

    Returns:
        Dict with recipientName, companyName, currentDate and appUrl.
    """
    today = today or date.today()
    return {
        "recipientName": recipient_name,
        "companyName": company_name,
        "currentDate": f"{today:%B} {today.day}, {today.year}",
        "appUrl": app_url,
    }


class TemplateRenderer:
    """Resolves the template for an (event, channel) pair and renders it.

    Resolution order:
    1. Active template owned by the recipient's company
    2. Active system-wide default template
    3. Built-in template for the pair
    4. Built-in generic fallback

    Lookups are always scoped to the given company; another tenant's
    template is never selected.
    """

    def __init__(self, template_store: "TemplateStore"):
        self._store = template_store

    def resolve(
        self,
        event_type: EventType,
        channel: Channel,
        company_id: Optional[str] = None,
    ) -> RenderedTemplate:
        """Return the unrendered template that applies to the pair."""
        if company_id:
            tenant = self._store.find_tenant_template(company_id, event_type, channel)
            if tenant is not None:
                logger.debug(
                    "template_resolved",
                    source="tenant",
                    template_id=tenant.id,
                    event_type=event_type.value,
                    channel=channel.value,
                )
                return RenderedTemplate(subject=tenant.subject, body=tenant.body)

        system = self._store.find_system_template(event_type, channel)
        if system is not None:
            logger.debug(
                "template_resolved",
                source="system",
                template_id=system.id,
                event_type=event_type.value,
                channel=channel.value,
            )
            return RenderedTemplate(subject=system.subject, body=system.body)

        builtin = get_builtin_template(event_type, channel)
        if builtin is not None:
            return builtin

        logger.debug(
            "template_fallback_used",
            event_type=event_type.value,
            channel=channel.value,
        )
        return get_generic_template(event_type)

    def render(
        self,
        event_type: EventType,
        channel: Channel,
        variables: TemplateVariables,
        company_id: Optional[str] = None,
    ) -> RenderedTemplate:
        """Resolve and render the template for one attempt.

        Args:
            event_type: Event being notified
            channel: Delivery channel
            variables: Template variables (common variables merged with data)
            company_id: Recipient's tenant, for tenant template lookup

        Returns:
            RenderedTemplate; subject stays None when the template has none.
        """
        template = self.resolve(event_type, channel, company_id)
        subject = (
            render_string(template.subject, variables)
            if template.subject is not None
            else None
        )
        return RenderedTemplate(
            subject=subject, body=render_string(template.body, variables)
        )
