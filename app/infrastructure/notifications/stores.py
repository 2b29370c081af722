"""Notification storage interfaces and in-memory implementations.

The dispatcher and scheduler only talk to the protocols below, so the
backing store (relational database, DynamoDB, ...) is injected. The
in-memory implementations are thread-safe and are used for development
and tests.

NotificationLogStore implementations must provide atomic claim
semantics: a row returned by ``claim_due_scheduled`` or
``claim_retryable`` has already left the PENDING/FAILED state, so an
overlapping sweep can never select it again.

A claimed row that stays QUEUED longer than the claim lease (the worker
crashed, or its store write failed) is expired to FAILED by the next
claim, so the retry sweep picks it up instead of losing it.
"""

import threading
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Protocol

import structlog

from infrastructure.notifications.exceptions import (
    InvalidTransitionError,
    NotificationStoreError,
)
from infrastructure.notifications.models import (
    Channel,
    EventType,
    InAppMessage,
    NotificationLog,
    NotificationPreference,
    NotificationStatus,
    NotificationTemplate,
    Recipient,
    utc_now,
)

logger = structlog.get_logger()

STALE_CLAIM_ERROR = "Claim expired before the send completed"


class RecipientDirectory(Protocol):
    """Read access to users that can receive notifications."""

    def get_recipient(self, user_id: str) -> Optional[Recipient]:
        """Return the user, or None if unknown."""
        ...


class CompanyDirectory(Protocol):
    """Read access to tenant display names."""

    def get_company_name(self, company_id: str) -> Optional[str]:
        ...


class PreferenceStore(Protocol):
    """Read access to per-user channel preferences."""

    def list_preferences(
        self, user_id: str, event_type: EventType
    ) -> List[NotificationPreference]:
        """Return every preference row for the (user, event) pair."""
        ...


class TemplateStore(Protocol):
    """Read access to stored templates."""

    def find_tenant_template(
        self, company_id: str, event_type: EventType, channel: Channel
    ) -> Optional[NotificationTemplate]:
        """Return the active template owned by company_id, if any."""
        ...

    def find_system_template(
        self, event_type: EventType, channel: Channel
    ) -> Optional[NotificationTemplate]:
        """Return the active system-wide default template, if any."""
        ...


class NotificationLogStore(Protocol):
    """Append-only storage for notification attempts.

    Methods:
        create: Persist a new row
        get: Fetch one row by id
        update: Persist status changes of an existing row
        claim_due_scheduled: Atomically move due PENDING rows to QUEUED
        claim_retryable: Atomically move retryable FAILED rows to QUEUED
        list_exhausted: FAILED rows with no retry budget left
    """

    def create(self, log: NotificationLog) -> NotificationLog:
        ...

    def get(self, log_id: str) -> Optional[NotificationLog]:
        ...

    def update(self, log: NotificationLog) -> NotificationLog:
        ...

    def claim_due_scheduled(
        self, now: datetime, limit: int
    ) -> List[NotificationLog]:
        """Claim up to ``limit`` PENDING rows with scheduled_for <= now.

        QUEUED rows whose claim lease has passed are expired to FAILED
        first.
        """
        ...

    def claim_retryable(
        self, limit: int, now: Optional[datetime] = None
    ) -> List[NotificationLog]:
        """Claim up to ``limit`` FAILED rows with retry_count < max_retries.

        Each claimed row has its retry_count incremented and is QUEUED.
        Expired QUEUED claims are moved to FAILED before selecting.
        """
        ...

    def list_exhausted(self, limit: int = 100) -> List[NotificationLog]:
        ...


class InboxStore(Protocol):
    """Storage for in-app notifications."""

    def add(self, message: InAppMessage) -> InAppMessage:
        ...

    def list_for_user(
        self, user_id: str, unread_only: bool = False
    ) -> List[InAppMessage]:
        ...


class InMemoryRecipientDirectory:
    """Thread-safe in-memory recipient directory."""

    def __init__(self, recipients: Iterable[Recipient] = ()) -> None:
        self._lock = threading.Lock()
        self._recipients: Dict[str, Recipient] = {r.user_id: r for r in recipients}

    def add(self, recipient: Recipient) -> None:
        with self._lock:
            self._recipients[recipient.user_id] = recipient

    def get_recipient(self, user_id: str) -> Optional[Recipient]:
        with self._lock:
            recipient = self._recipients.get(user_id)
            return recipient.model_copy() if recipient else None


class InMemoryCompanyDirectory:
    """Thread-safe in-memory company name lookup."""

    def __init__(self, companies: Optional[Dict[str, str]] = None) -> None:
        self._lock = threading.Lock()
        self._names: Dict[str, str] = dict(companies or {})

    def add(self, company_id: str, name: str) -> None:
        with self._lock:
            self._names[company_id] = name

    def get_company_name(self, company_id: str) -> Optional[str]:
        with self._lock:
            return self._names.get(company_id)


class InMemoryPreferenceStore:
    """Thread-safe in-memory preference store.

    Setting a preference for an existing (user, event, channel) triple
    replaces the previous row.
    """

    def __init__(self, preferences: Iterable[NotificationPreference] = ()) -> None:
        self._lock = threading.Lock()
        self._preferences: Dict[tuple, NotificationPreference] = {}
        for preference in preferences:
            self.set_preference(preference)

    def set_preference(self, preference: NotificationPreference) -> None:
        key = (preference.user_id, preference.event_type, preference.channel)
        with self._lock:
            self._preferences[key] = preference

    def list_preferences(
        self, user_id: str, event_type: EventType
    ) -> List[NotificationPreference]:
        with self._lock:
            return [
                p.model_copy()
                for (uid, event, _), p in self._preferences.items()
                if uid == user_id and event == event_type
            ]


class InMemoryTemplateStore:
    """Thread-safe in-memory template store."""

    def __init__(self, templates: Iterable[NotificationTemplate] = ()) -> None:
        self._lock = threading.Lock()
        self._templates: Dict[str, NotificationTemplate] = {
            t.id: t for t in templates
        }

    def save(self, template: NotificationTemplate) -> NotificationTemplate:
        with self._lock:
            self._templates[template.id] = template
        return template

    def find_tenant_template(
        self, company_id: str, event_type: EventType, channel: Channel
    ) -> Optional[NotificationTemplate]:
        with self._lock:
            for template in self._templates.values():
                if (
                    template.company_id == company_id
                    and template.event_type == event_type
                    and template.channel == channel
                    and template.is_active
                ):
                    return template.model_copy()
        return None

    def find_system_template(
        self, event_type: EventType, channel: Channel
    ) -> Optional[NotificationTemplate]:
        with self._lock:
            for template in self._templates.values():
                if (
                    template.company_id is None
                    and template.is_default
                    and template.event_type == event_type
                    and template.channel == channel
                    and template.is_active
                ):
                    return template.model_copy()
        return None


class InMemoryNotificationLogStore:
    """Thread-safe in-memory notification log.

    Claims run under the store lock, which gives the same guarantee a
    database store gets from a conditional ``UPDATE ... WHERE status = ...``.

    Args:
        queued_lease_seconds: How long a row may stay QUEUED before a
            claim expires it to FAILED. Keep it above the send timeout.
    """

    def __init__(self, queued_lease_seconds: float = 60.0) -> None:
        self._lock = threading.Lock()
        self._logs: Dict[str, NotificationLog] = {}
        self.queued_lease = timedelta(seconds=queued_lease_seconds)

    def _expire_stale_claims(self, now: datetime) -> int:
        # Caller holds self._lock.
        expired = 0
        for log in self._logs.values():
            if log.is_claim_expired(now, self.queued_lease):
                log.mark_failed(STALE_CLAIM_ERROR, now)
                expired += 1
        if expired:
            logger.warning("stale_notification_claims_expired", count=expired)
        return expired

    def create(self, log: NotificationLog) -> NotificationLog:
        with self._lock:
            if log.id in self._logs:
                raise NotificationStoreError(f"Notification log {log.id} already exists")
            self._logs[log.id] = log.model_copy(deep=True)
        logger.debug(
            "notification_log_created",
            notification_log_id=log.id,
            status=log.status.value,
            channel=log.channel.value,
        )
        return log

    def get(self, log_id: str) -> Optional[NotificationLog]:
        with self._lock:
            log = self._logs.get(log_id)
            return log.model_copy(deep=True) if log else None

    def update(self, log: NotificationLog) -> NotificationLog:
        with self._lock:
            stored = self._logs.get(log.id)
            if stored is None:
                raise NotificationStoreError(f"Notification log {log.id} not found")
            if (
                stored.status == NotificationStatus.SENT
                and log.status != NotificationStatus.SENT
            ):
                raise InvalidTransitionError(
                    log.id, stored.status.value, log.status.value
                )
            self._logs[log.id] = log.model_copy(deep=True)
        return log

    def claim_due_scheduled(
        self, now: datetime, limit: int
    ) -> List[NotificationLog]:
        with self._lock:
            self._expire_stale_claims(now)
            due = sorted(
                (log for log in self._logs.values() if log.is_due(now)),
                key=lambda log: (log.scheduled_for, log.created_at),
            )[:limit]
            claimed = []
            for log in due:
                log.mark_queued(now)
                claimed.append(log.model_copy(deep=True))
        if claimed:
            logger.debug("scheduled_notifications_claimed", count=len(claimed))
        return claimed

    def claim_retryable(
        self, limit: int, now: Optional[datetime] = None
    ) -> List[NotificationLog]:
        now = now or utc_now()
        with self._lock:
            self._expire_stale_claims(now)
            retryable = sorted(
                (log for log in self._logs.values() if log.is_retryable()),
                key=lambda log: (log.failed_at or log.updated_at, log.created_at),
            )[:limit]
            claimed = []
            for log in retryable:
                log.mark_retry(now)
                claimed.append(log.model_copy(deep=True))
        if claimed:
            logger.debug("failed_notifications_claimed", count=len(claimed))
        return claimed

    def list_exhausted(self, limit: int = 100) -> List[NotificationLog]:
        with self._lock:
            exhausted = [
                log.model_copy(deep=True)
                for log in self._logs.values()
                if log.status == NotificationStatus.FAILED and log.retries_exhausted
            ]
        exhausted.sort(key=lambda log: log.failed_at or log.updated_at)
        return exhausted[:limit]

    def list_logs(
        self,
        status: Optional[NotificationStatus] = None,
        user_id: Optional[str] = None,
    ) -> List[NotificationLog]:
        """Return rows filtered by status and/or user, oldest first."""
        with self._lock:
            logs = [
                log.model_copy(deep=True)
                for log in self._logs.values()
                if (status is None or log.status == status)
                and (user_id is None or log.user_id == user_id)
            ]
        logs.sort(key=lambda log: log.created_at)
        return logs


class InMemoryInboxStore:
    """Thread-safe in-memory inbox for in-app notifications."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: Dict[str, InAppMessage] = {}

    def add(self, message: InAppMessage) -> InAppMessage:
        with self._lock:
            self._messages[message.id] = message
        return message

    def list_for_user(
        self, user_id: str, unread_only: bool = False
    ) -> List[InAppMessage]:
        with self._lock:
            messages = [
                m.model_copy()
                for m in self._messages.values()
                if m.user_id == user_id and not (unread_only and m.is_read)
            ]
        messages.sort(key=lambda m: m.created_at, reverse=True)
        return messages

    def mark_read(self, message_id: str) -> bool:
        """Mark a message as read. Returns False if the id is unknown."""
        with self._lock:
            message = self._messages.get(message_id)
            if message is None:
                return False
            message.is_read = True
            return True
