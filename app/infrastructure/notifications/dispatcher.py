"""Notification dispatcher: event payload in, per-channel attempts out.

For each recipient of a payload the dispatcher:
1. Resolves the channels (override, preferences, event defaults)
2. Builds template variables (common variables overridden by payload data)
3. Renders the template for each channel
4. Creates one NotificationLog row per (recipient, channel)
5. Sends immediately unless the payload is scheduled for later

Usage Example:
    from infrastructure.notifications import NotificationPayload, EventType

    result = dispatcher.dispatch(
        NotificationPayload(
            event_type=EventType.SHIFT_ASSIGNED,
            recipient_ids=["user-1", "user-2"],
            data={"clientName": "Jane Doe", "shiftDate": "3 March"},
        )
    )
    logger.info("dispatched", sent=result.total_sent, failed=result.total_failed)
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

import structlog

from infrastructure.logging.context import bind_log_context
from infrastructure.notifications.models import (
    AttemptResult,
    Channel,
    DispatchResult,
    NotificationLog,
    NotificationPayload,
    NotificationStatus,
    Recipient,
    TemplateVariables,
    utc_now,
)
from infrastructure.notifications.templates.renderer import build_common_variables

if TYPE_CHECKING:
    from infrastructure.notifications.delivery import NotificationDelivery
    from infrastructure.notifications.preferences import PreferenceResolver
    from infrastructure.notifications.stores import (
        CompanyDirectory,
        NotificationLogStore,
        RecipientDirectory,
    )
    from infrastructure.notifications.templates.renderer import TemplateRenderer

logger = structlog.get_logger()


class NotificationDispatcher:
    """Event-driven, multi-channel notification dispatcher.

    Every (recipient, channel) attempt is isolated: a provider exception,
    a rendering error or a failed lookup for one recipient is recorded
    and the remaining attempts continue. Errors from the log store and
    invalid payloads are structural and propagate to the caller.

    Attributes:
        recipients: Directory used to load recipients by id
        companies: Directory used for tenant display names
        log_store: Notification log store
        resolver: PreferenceResolver choosing channels
        renderer: TemplateRenderer producing subject and body
        delivery: NotificationDelivery performing the send step
        app_url: Value of the appUrl template variable
        default_company_name: companyName when the tenant has none
        max_retries: Retry budget stored on new rows
    """

    def __init__(
        self,
        recipients: "RecipientDirectory",
        companies: "CompanyDirectory",
        log_store: "NotificationLogStore",
        resolver: "PreferenceResolver",
        renderer: "TemplateRenderer",
        delivery: "NotificationDelivery",
        app_url: str = "",
        default_company_name: str = "CareBase",
        max_retries: int = 3,
    ):
        self.recipients = recipients
        self.companies = companies
        self.log_store = log_store
        self.resolver = resolver
        self.renderer = renderer
        self.delivery = delivery
        self.app_url = app_url
        self.default_company_name = default_company_name
        self.max_retries = max_retries

        logger.info(
            "initialized_notification_dispatcher",
            max_retries=max_retries,
            default_company_name=default_company_name,
        )

    def dispatch(
        self, payload: NotificationPayload, now: Optional[datetime] = None
    ) -> DispatchResult:
        """Dispatch one event to all of its recipients.

        Args:
            payload: Event, recipients, template data and options
            now: Current time (defaults to UTC now); decides whether the
                payload is deferred

        Returns:
            DispatchResult; deferred attempts are counted in
            total_deferred only.
        """
        now = now or utc_now()
        deferred = payload.scheduled_for is not None and payload.scheduled_for > now
        result = DispatchResult()

        with bind_log_context(
            operation="dispatch",
            event_type=payload.event_type.value,
            related_entity_id=payload.related_entity_id,
        ):
            for recipient in self._fetch_recipients(payload.recipient_ids):
                for attempt in self._dispatch_to_recipient(payload, recipient, deferred):
                    result.add(attempt)

            logger.info(
                "notification_dispatched",
                recipient_count=len(payload.recipient_ids),
                total_sent=result.total_sent,
                total_failed=result.total_failed,
                total_deferred=result.total_deferred,
            )
        return result

    def _fetch_recipients(self, recipient_ids: List[str]) -> List[Recipient]:
        """Load active recipients; unknown, inactive and failing ids are skipped."""
        recipients = []
        for user_id in recipient_ids:
            try:
                recipient = self.recipients.get_recipient(user_id)
            except Exception as e:
                logger.error(
                    "recipient_lookup_failed",
                    user_id=user_id,
                    error=str(e),
                    exc_info=True,
                )
                continue

            if recipient is None:
                logger.warning("recipient_not_found", user_id=user_id)
                continue
            if not recipient.is_active:
                logger.info("recipient_inactive_skipped", user_id=user_id)
                continue
            recipients.append(recipient)
        return recipients

    def _dispatch_to_recipient(
        self, payload: NotificationPayload, recipient: Recipient, deferred: bool
    ) -> List[AttemptResult]:
        try:
            channels = self.resolver.resolve_channels(
                recipient.user_id, payload.event_type, payload.channels
            )
        except Exception as e:
            logger.error(
                "channel_resolution_failed",
                user_id=recipient.user_id,
                error=str(e),
                exc_info=True,
            )
            return [
                AttemptResult(
                    success=False,
                    recipient_id=recipient.user_id,
                    error=f"Channel resolution failed: {e}",
                )
            ]

        if not channels:
            logger.info("no_channels_available", user_id=recipient.user_id)
            return []

        variables: TemplateVariables = {
            **self.build_variables(recipient),
            **payload.data,
        }
        return [
            self._attempt(payload, recipient, channel, variables, deferred)
            for channel in channels
        ]

    def build_variables(self, recipient: Recipient) -> TemplateVariables:
        """Common template variables for one recipient."""
        return build_common_variables(
            recipient_name=recipient.full_name,
            company_name=self._company_name(recipient.company_id),
            app_url=self.app_url,
        )

    def _company_name(self, company_id: str) -> str:
        try:
            name = self.companies.get_company_name(company_id)
        except Exception as e:
            logger.warning(
                "company_lookup_failed",
                company_id=company_id,
                error=str(e),
            )
            name = None
        return name or self.default_company_name

    def _attempt(
        self,
        payload: NotificationPayload,
        recipient: Recipient,
        channel: Channel,
        variables: TemplateVariables,
        deferred: bool,
    ) -> AttemptResult:
        try:
            rendered = self.renderer.render(
                payload.event_type, channel, variables, recipient.company_id
            )
        except Exception as e:
            logger.error(
                "template_render_failed",
                user_id=recipient.user_id,
                channel=channel.value,
                error=str(e),
                exc_info=True,
            )
            return AttemptResult(
                success=False,
                recipient_id=recipient.user_id,
                channel=channel,
                error=f"Template rendering failed: {e}",
            )

        log = self.log_store.create(
            NotificationLog(
                event_type=payload.event_type,
                channel=channel,
                status=(
                    NotificationStatus.PENDING if deferred else NotificationStatus.QUEUED
                ),
                subject=rendered.subject,
                body=rendered.body,
                user_id=recipient.user_id,
                company_id=recipient.company_id,
                scheduled_for=payload.scheduled_for,
                related_entity_type=payload.related_entity_type,
                related_entity_id=payload.related_entity_id,
                max_retries=self.max_retries,
            )
        )

        if deferred:
            logger.info(
                "notification_deferred",
                notification_log_id=log.id,
                user_id=recipient.user_id,
                channel=channel.value,
                scheduled_for=payload.scheduled_for.isoformat(),
            )
            return AttemptResult(
                success=True,
                recipient_id=recipient.user_id,
                channel=channel,
                status=log.status,
                notification_log_id=log.id,
                deferred=True,
            )

        return self.delivery.deliver(log, recipient)
