"""Notification system core models.

Domain models for event-driven, multi-channel notification dispatch.
Producers describe *what happened* (an EventType plus template data);
the dispatcher decides who is told, through which channels and with
what content, and records one NotificationLog row per attempt.

Uses Pydantic BaseModel for:
- RFC 5322 compliant email validation (EmailStr)
- Runtime validation of producer payloads
- Type safety for template variables
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, EmailStr, Field, field_validator

from infrastructure.notifications.exceptions import InvalidTransitionError

# Values a template placeholder can be filled with.
TemplateValue = Union[str, bool, int, float, datetime, date, None]
TemplateVariables = Dict[str, TemplateValue]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventType(Enum):
    """Domain events that can trigger notifications."""

    # Shifts and visits
    SHIFT_ASSIGNED = "SHIFT_ASSIGNED"
    SHIFT_REMINDER_24H = "SHIFT_REMINDER_24H"
    SHIFT_REMINDER_1H = "SHIFT_REMINDER_1H"
    SHIFT_CANCELLED = "SHIFT_CANCELLED"
    SHIFT_RESCHEDULED = "SHIFT_RESCHEDULED"
    CHECK_IN_CONFIRMATION = "CHECK_IN_CONFIRMATION"
    CHECK_OUT_CONFIRMATION = "CHECK_OUT_CONFIRMATION"
    MISSED_CHECK_IN = "MISSED_CHECK_IN"
    LATE_CHECK_IN = "LATE_CHECK_IN"
    EARLY_CHECK_OUT = "EARLY_CHECK_OUT"
    OVERTIME_ALERT = "OVERTIME_ALERT"
    NO_SHOW_ALERT = "NO_SHOW_ALERT"
    SHIFT_COMPLETED = "SHIFT_COMPLETED"
    COVERAGE_NEEDED = "COVERAGE_NEEDED"
    WEEKLY_SCHEDULE_PUBLISHED = "WEEKLY_SCHEDULE_PUBLISHED"

    # Authorizations
    AUTH_UNITS_80_PERCENT = "AUTH_UNITS_80_PERCENT"
    AUTH_UNITS_90_PERCENT = "AUTH_UNITS_90_PERCENT"
    AUTH_UNITS_EXHAUSTED = "AUTH_UNITS_EXHAUSTED"
    AUTH_EXPIRING_30_DAYS = "AUTH_EXPIRING_30_DAYS"
    AUTH_EXPIRING_7_DAYS = "AUTH_EXPIRING_7_DAYS"
    AUTH_EXPIRED = "AUTH_EXPIRED"

    # Care records
    INCIDENT_REPORTED = "INCIDENT_REPORTED"
    INCIDENT_RESOLVED = "INCIDENT_RESOLVED"
    CARE_PLAN_UPDATED = "CARE_PLAN_UPDATED"
    CARE_PLAN_APPROVED = "CARE_PLAN_APPROVED"
    ASSESSMENT_DUE = "ASSESSMENT_DUE"
    ASSESSMENT_COMPLETED = "ASSESSMENT_COMPLETED"
    VISIT_NOTE_SUBMITTED = "VISIT_NOTE_SUBMITTED"
    THRESHOLD_BREACH = "THRESHOLD_BREACH"

    # Administrative
    USER_ACCOUNT_CREATED = "USER_ACCOUNT_CREATED"
    PASSWORD_RESET = "PASSWORD_RESET"
    WEEKLY_SUMMARY = "WEEKLY_SUMMARY"


class Channel(Enum):
    """Delivery channels."""

    EMAIL = "EMAIL"
    IN_APP = "IN_APP"
    SMS = "SMS"
    WHATSAPP = "WHATSAPP"


class NotificationStatus(Enum):
    """Lifecycle status of a single delivery attempt.

    PENDING: created with a future scheduled_for, waiting for the sweep
    QUEUED: ready to send (or claimed by a sweep)
    SENT: provider accepted the message (terminal)
    FAILED: last attempt failed; retried while budget remains
    """

    PENDING = "PENDING"
    QUEUED = "QUEUED"
    SENT = "SENT"
    FAILED = "FAILED"


class NotificationPriority(Enum):
    """Urgency of an event, used for reporting and routing decisions."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class RecipientRole(Enum):
    """Roles an event is addressed to by default."""

    CARER = "CARER"
    SPONSOR = "SPONSOR"
    SUPERVISOR = "SUPERVISOR"
    ADMIN = "ADMIN"
    OPS_MANAGER = "OPS_MANAGER"


_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {NotificationStatus.QUEUED},
    NotificationStatus.QUEUED: {NotificationStatus.SENT, NotificationStatus.FAILED},
    NotificationStatus.FAILED: {NotificationStatus.QUEUED},
    NotificationStatus.SENT: set(),
}


class EventConfig(BaseModel):
    """Static configuration for one event type.

    Attributes:
        event_type: Event this entry describes
        description: Human-readable summary
        priority: Event urgency
        default_recipient_roles: Roles the event is addressed to by default
        default_channels: Channels used when the recipient has no preferences
        variables: Template variables producers are expected to supply
    """

    event_type: EventType
    description: str
    priority: NotificationPriority
    default_recipient_roles: List[RecipientRole] = Field(default_factory=list)
    default_channels: List[Channel]
    variables: List[str] = Field(default_factory=list)


class Recipient(BaseModel):
    """A user that can receive notifications.

    Attributes:
        user_id: Stable user identifier (also the in-app address)
        email: Email address (validated with EmailStr)
        phone: Phone number in E.164 format, used by SMS and WhatsApp
        first_name: Given name
        last_name: Family name
        company_id: Tenant the user belongs to
        is_active: Inactive users never receive notifications
    """

    user_id: str
    email: EmailStr
    phone: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    company_id: str
    is_active: bool = True

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        """Validate E.164 phone format if provided."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith("+") or not v[1:].isdigit():
            raise ValueError(f"Phone number must be in E.164 format: {v}")
        if len(v) < 8 or len(v) > 16:
            raise ValueError(f"Phone number length invalid: {v}")
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Company(BaseModel):
    """Tenant record used for the company display name."""

    id: str
    name: str


class NotificationPreference(BaseModel):
    """Per-user opt-in for an (event, channel) pair."""

    user_id: str
    event_type: EventType
    channel: Channel
    enabled: bool = True


class NotificationTemplate(BaseModel):
    """Stored template, either tenant-specific or system-wide.

    Attributes:
        id: Template identifier
        company_id: Owning tenant; None for system-wide templates
        event_type: Event the template renders
        channel: Channel the template renders for
        subject: Subject line (email only)
        body: Body with ``{{key}}`` placeholders
        is_default: Marks the system-wide default for the pair
        is_active: Inactive templates are never selected
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    company_id: Optional[str] = None
    event_type: EventType
    channel: Channel
    subject: Optional[str] = None
    body: str
    is_default: bool = False
    is_active: bool = True


class RenderedTemplate(BaseModel):
    """Subject and body after placeholder substitution."""

    subject: Optional[str] = None
    body: str


class NotificationLog(BaseModel):
    """One delivery attempt for a (recipient, channel) pair.

    Rows are append-only: subject and body are fixed at creation and rows
    are never deleted. Status changes go through the ``mark_*`` methods,
    which enforce the lifecycle and keep timestamps consistent.

    Attributes:
        id: Opaque row identifier
        event_type: Event that produced the row
        channel: Channel used for delivery
        status: Current lifecycle status
        subject: Rendered subject (email only)
        body: Rendered body
        user_id: Recipient user id
        company_id: Recipient tenant
        scheduled_for: Earliest send time for deferred rows
        related_entity_type: Optional domain entity kind (e.g. "shift")
        related_entity_id: Optional domain entity id
        retry_count: Retries already consumed
        max_retries: Retry budget
        last_error: Error recorded by the latest failed attempt
        message_id: Provider id of a successful send
        sent_at: Set when the row becomes SENT
        failed_at: Set while the row is FAILED
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: EventType
    channel: Channel
    status: NotificationStatus
    subject: Optional[str] = None
    body: str
    user_id: str
    company_id: str
    scheduled_for: Optional[datetime] = None
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None
    retry_count: int = 0
    max_retries: int = 3
    last_error: Optional[str] = None
    message_id: Optional[str] = None
    sent_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("scheduled_for")
    @classmethod
    def normalize_scheduled_for(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    @property
    def retries_exhausted(self) -> bool:
        return self.retry_count >= self.max_retries

    def is_due(self, now: datetime) -> bool:
        """Return True if a PENDING row has reached its scheduled time."""
        return (
            self.status == NotificationStatus.PENDING
            and self.scheduled_for is not None
            and self.scheduled_for <= _as_utc(now)
        )

    def is_retryable(self) -> bool:
        return self.status == NotificationStatus.FAILED and not self.retries_exhausted

    def is_claim_expired(self, now: datetime, lease: timedelta) -> bool:
        """Return True if a QUEUED row has been waiting longer than lease."""
        return (
            self.status == NotificationStatus.QUEUED
            and self.updated_at + lease <= _as_utc(now)
        )

    def _transition(self, target: NotificationStatus, now: Optional[datetime]) -> None:
        if target not in _VALID_TRANSITIONS[self.status]:
            raise InvalidTransitionError(self.id, self.status.value, target.value)
        self.status = target
        self.updated_at = _as_utc(now) or utc_now()

    def mark_queued(self, now: Optional[datetime] = None) -> None:
        """Claim a due PENDING row for sending."""
        self._transition(NotificationStatus.QUEUED, now)

    def mark_retry(self, now: Optional[datetime] = None) -> None:
        """Consume one retry and put a FAILED row back in the queue."""
        if not self.is_retryable():
            raise InvalidTransitionError(
                self.id, self.status.value, NotificationStatus.QUEUED.value
            )
        self._transition(NotificationStatus.QUEUED, now)
        self.retry_count += 1
        self.failed_at = None

    def mark_sent(
        self, message_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> None:
        self._transition(NotificationStatus.SENT, now)
        self.sent_at = self.updated_at
        self.failed_at = None
        self.message_id = message_id
        self.last_error = None

    def mark_failed(self, error: str, now: Optional[datetime] = None) -> None:
        self._transition(NotificationStatus.FAILED, now)
        self.failed_at = self.updated_at
        self.sent_at = None
        self.last_error = error


class InAppMessage(BaseModel):
    """Inbox entry written by the in-app channel."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    company_id: Optional[str] = None
    event_type: Optional[EventType] = None
    title: Optional[str] = None
    body: str
    is_read: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)


class NotificationPayload(BaseModel):
    """Producer request to notify a set of users about one event.

    Attributes:
        event_type: Event that occurred
        recipient_ids: User ids to notify
        data: Template variables; these override the common variables
        channels: Optional channel override (skips user preferences)
        scheduled_for: Optional future send time
        related_entity_type: Optional domain entity kind
        related_entity_id: Optional domain entity id

    Example:
        payload = NotificationPayload(
            event_type=EventType.SHIFT_ASSIGNED,
            recipient_ids=["user-1"],
            data={"clientName": "Jane Doe", "shiftDate": "Mon 3 Mar"},
            related_entity_type="shift",
            related_entity_id="shift-42",
        )
    """

    event_type: EventType
    recipient_ids: List[str] = Field(default_factory=list)
    data: TemplateVariables = Field(default_factory=dict)
    channels: Optional[List[Channel]] = None
    scheduled_for: Optional[datetime] = None
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None

    @field_validator("scheduled_for")
    @classmethod
    def normalize_scheduled_for(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    @field_validator("recipient_ids")
    @classmethod
    def dedupe_recipients(cls, v: List[str]) -> List[str]:
        """Drop duplicate ids while keeping the caller's order."""
        return list(dict.fromkeys(v))


class SendResult(BaseModel):
    """Outcome returned by a channel provider's send()."""

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message_id: Optional[str] = None) -> "SendResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error: str) -> "SendResult":
        return cls(success=False, error=error)


class AttemptResult(BaseModel):
    """Outcome of one (recipient, channel) attempt within a dispatch."""

    success: bool
    recipient_id: str
    channel: Optional[Channel] = None
    status: Optional[NotificationStatus] = None
    notification_log_id: Optional[str] = None
    deferred: bool = False
    error: Optional[str] = None


class DispatchResult(BaseModel):
    """Aggregate outcome of a dispatch call.

    Deferred attempts are counted in total_deferred only; they are
    neither sent nor failed until the scheduled sweep picks them up.
    """

    total_sent: int = 0
    total_failed: int = 0
    total_deferred: int = 0
    results: List[AttemptResult] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.total_failed == 0

    def add(self, attempt: AttemptResult) -> None:
        self.results.append(attempt)
        if attempt.deferred:
            self.total_deferred += 1
        elif attempt.success:
            self.total_sent += 1
        else:
            self.total_failed += 1
