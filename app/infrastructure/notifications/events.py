"""Notification event catalogue.

Static, compiled-in configuration for every EventType: who the event is
addressed to, how urgent it is, which channels are used when a recipient
has no preferences, and which template variables producers supply.

The table is checked for completeness at import time, so adding an
EventType without a configuration entry fails fast.
"""

from typing import Dict, List

from infrastructure.notifications.exceptions import UnknownEventTypeError
from infrastructure.notifications.models import (
    Channel,
    EventConfig,
    EventType,
    NotificationPriority,
    RecipientRole,
)

FALLBACK_CHANNELS: List[Channel] = [Channel.EMAIL, Channel.IN_APP]

_EMAIL_IN_APP = [Channel.EMAIL, Channel.IN_APP]
_EMAIL_SMS_IN_APP = [Channel.EMAIL, Channel.SMS, Channel.IN_APP]
_EMAIL_ONLY = [Channel.EMAIL]

_CARER = RecipientRole.CARER
_SPONSOR = RecipientRole.SPONSOR
_SUPERVISOR = RecipientRole.SUPERVISOR
_ADMIN = RecipientRole.ADMIN
_OPS = RecipientRole.OPS_MANAGER

_LOW = NotificationPriority.LOW
_MEDIUM = NotificationPriority.MEDIUM
_HIGH = NotificationPriority.HIGH
_CRITICAL = NotificationPriority.CRITICAL


def _config(
    event_type: EventType,
    description: str,
    roles: List[RecipientRole],
    priority: NotificationPriority,
    channels: List[Channel],
    variables: List[str],
) -> EventConfig:
    return EventConfig(
        event_type=event_type,
        description=description,
        default_recipient_roles=roles,
        priority=priority,
        default_channels=list(channels),
        variables=variables,
    )


_CONFIGS = [
    # Shifts and visits
    _config(
        EventType.SHIFT_ASSIGNED,
        "Notification when a shift is assigned to a carer",
        [_CARER],
        _HIGH,
        _EMAIL_IN_APP,
        ["clientName", "shiftDate", "shiftTime", "shiftEndTime", "address", "shiftUrl"],
    ),
    _config(
        EventType.SHIFT_REMINDER_24H,
        "Reminder 24 hours before shift starts",
        [_CARER],
        _MEDIUM,
        _EMAIL_IN_APP,
        ["clientName", "shiftDate", "shiftTime", "address", "shiftUrl"],
    ),
    _config(
        EventType.SHIFT_REMINDER_1H,
        "Reminder 1 hour before shift starts",
        [_CARER],
        _HIGH,
        _EMAIL_SMS_IN_APP,
        ["clientName", "shiftTime", "address"],
    ),
    _config(
        EventType.SHIFT_CANCELLED,
        "Notification when a shift is cancelled",
        [_CARER],
        _HIGH,
        _EMAIL_SMS_IN_APP,
        ["clientName", "shiftDate", "shiftTime", "cancellationReason"],
    ),
    _config(
        EventType.SHIFT_RESCHEDULED,
        "Notification when a shift is rescheduled",
        [_CARER],
        _HIGH,
        _EMAIL_IN_APP,
        ["clientName", "originalDate", "originalTime", "newDate", "newTime", "shiftUrl"],
    ),
    _config(
        EventType.CHECK_IN_CONFIRMATION,
        "Confirmation when carer checks in for a shift",
        [_SPONSOR, _SUPERVISOR],
        _LOW,
        _EMAIL_IN_APP,
        ["carerName", "clientName", "checkInTime", "shiftDate"],
    ),
    _config(
        EventType.CHECK_OUT_CONFIRMATION,
        "Confirmation when carer checks out from a shift",
        [_SPONSOR, _SUPERVISOR],
        _LOW,
        _EMAIL_IN_APP,
        ["carerName", "clientName", "checkOutTime", "shiftDate", "totalHours"],
    ),
    _config(
        EventType.MISSED_CHECK_IN,
        "Alert when a carer misses their scheduled check-in",
        [_SUPERVISOR, _ADMIN],
        _CRITICAL,
        _EMAIL_SMS_IN_APP,
        ["carerName", "clientName", "expectedCheckInTime", "shiftDate", "shiftUrl"],
    ),
    _config(
        EventType.LATE_CHECK_IN,
        "Alert when a carer checks in late (15+ minutes)",
        [_SUPERVISOR, _ADMIN],
        _MEDIUM,
        _EMAIL_IN_APP,
        [
            "carerName",
            "clientName",
            "scheduledTime",
            "actualCheckInTime",
            "minutesLate",
            "shiftDate",
            "shiftUrl",
        ],
    ),
    _config(
        EventType.EARLY_CHECK_OUT,
        "Alert when a carer checks out before scheduled end time",
        [_SUPERVISOR, _ADMIN],
        _MEDIUM,
        _EMAIL_IN_APP,
        [
            "carerName",
            "clientName",
            "scheduledEndTime",
            "actualCheckOutTime",
            "minutesEarly",
            "shiftDate",
            "shiftUrl",
        ],
    ),
    _config(
        EventType.OVERTIME_ALERT,
        "Alert when a shift exceeds scheduled hours",
        [_SUPERVISOR, _ADMIN],
        _MEDIUM,
        _EMAIL_IN_APP,
        [
            "carerName",
            "clientName",
            "scheduledHours",
            "actualHours",
            "overtimeMinutes",
            "shiftDate",
            "shiftUrl",
        ],
    ),
    _config(
        EventType.NO_SHOW_ALERT,
        "Alert when a shift is missed entirely (no check-in)",
        [_SUPERVISOR, _ADMIN, _SPONSOR],
        _CRITICAL,
        _EMAIL_SMS_IN_APP,
        ["carerName", "clientName", "shiftDate", "shiftTime", "shiftUrl"],
    ),
    _config(
        EventType.SHIFT_COMPLETED,
        "Confirmation when a shift is completed",
        [_SPONSOR],
        _LOW,
        _EMAIL_IN_APP,
        ["carerName", "clientName", "shiftDate", "totalHours", "checkInTime", "checkOutTime"],
    ),
    _config(
        EventType.COVERAGE_NEEDED,
        "Alert when an open shift needs coverage",
        [_CARER],
        _HIGH,
        _EMAIL_SMS_IN_APP,
        ["clientName", "shiftDate", "shiftTime", "shiftEndTime", "address", "shiftUrl"],
    ),
    _config(
        EventType.WEEKLY_SCHEDULE_PUBLISHED,
        "Notification when weekly schedule is published",
        [_CARER],
        _MEDIUM,
        _EMAIL_IN_APP,
        ["weekStartDate", "weekEndDate", "totalShifts", "totalHours", "scheduleUrl"],
    ),
    # Authorizations
    _config(
        EventType.AUTH_UNITS_80_PERCENT,
        "Alert when authorization units reach 80% usage",
        [_ADMIN, _OPS],
        _MEDIUM,
        _EMAIL_IN_APP,
        [
            "clientName",
            "authNumber",
            "usedUnits",
            "totalUnits",
            "remainingUnits",
            "percentUsed",
            "authUrl",
        ],
    ),
    _config(
        EventType.AUTH_UNITS_90_PERCENT,
        "Alert when authorization units reach 90% usage",
        [_ADMIN, _OPS],
        _HIGH,
        _EMAIL_SMS_IN_APP,
        [
            "clientName",
            "authNumber",
            "usedUnits",
            "totalUnits",
            "remainingUnits",
            "percentUsed",
            "authUrl",
        ],
    ),
    _config(
        EventType.AUTH_UNITS_EXHAUSTED,
        "Alert when authorization units are exhausted",
        [_ADMIN, _OPS, _SUPERVISOR],
        _CRITICAL,
        _EMAIL_SMS_IN_APP,
        ["clientName", "authNumber", "usedUnits", "totalUnits", "authUrl"],
    ),
    _config(
        EventType.AUTH_EXPIRING_30_DAYS,
        "Alert when authorization expires in 30 days",
        [_ADMIN, _OPS],
        _LOW,
        _EMAIL_IN_APP,
        ["clientName", "authNumber", "expirationDate", "daysRemaining", "authUrl"],
    ),
    _config(
        EventType.AUTH_EXPIRING_7_DAYS,
        "Alert when authorization expires in 7 days",
        [_ADMIN, _OPS],
        _HIGH,
        _EMAIL_SMS_IN_APP,
        ["clientName", "authNumber", "expirationDate", "daysRemaining", "authUrl"],
    ),
    _config(
        EventType.AUTH_EXPIRED,
        "Alert when authorization has expired",
        [_ADMIN, _OPS],
        _CRITICAL,
        _EMAIL_SMS_IN_APP,
        ["clientName", "authNumber", "expirationDate", "authUrl"],
    ),
    # Care records
    _config(
        EventType.INCIDENT_REPORTED,
        "Alert when an incident is reported",
        [_SUPERVISOR, _ADMIN, _SPONSOR],
        _CRITICAL,
        _EMAIL_SMS_IN_APP,
        ["clientName", "incidentType", "severity", "reportedBy", "incidentDate", "incidentUrl"],
    ),
    _config(
        EventType.INCIDENT_RESOLVED,
        "Notification when an incident is resolved",
        [_SPONSOR],
        _MEDIUM,
        _EMAIL_IN_APP,
        ["clientName", "incidentType", "resolution", "resolvedBy", "resolvedDate"],
    ),
    _config(
        EventType.CARE_PLAN_UPDATED,
        "Notification when a care plan is updated",
        [_SPONSOR, _CARER],
        _MEDIUM,
        _EMAIL_IN_APP,
        ["clientName", "planNumber", "updatedBy", "updateSummary", "carePlanUrl"],
    ),
    _config(
        EventType.CARE_PLAN_APPROVED,
        "Notification when a care plan is approved",
        [_CARER],
        _MEDIUM,
        _EMAIL_IN_APP,
        ["clientName", "planNumber", "approvedBy", "effectiveDate", "carePlanUrl"],
    ),
    _config(
        EventType.ASSESSMENT_DUE,
        "Reminder when an assessment is due",
        [_CARER, _SUPERVISOR],
        _MEDIUM,
        _EMAIL_IN_APP,
        ["clientName", "assessmentType", "dueDate", "assessmentUrl"],
    ),
    _config(
        EventType.ASSESSMENT_COMPLETED,
        "Notification when an assessment is completed",
        [_SUPERVISOR],
        _LOW,
        _EMAIL_IN_APP,
        [
            "clientName",
            "assessmentType",
            "completedBy",
            "completedDate",
            "score",
            "assessmentUrl",
        ],
    ),
    _config(
        EventType.VISIT_NOTE_SUBMITTED,
        "Notification when a visit note is submitted",
        [_SPONSOR],
        _LOW,
        _EMAIL_IN_APP,
        ["clientName", "carerName", "visitDate", "visitNoteUrl"],
    ),
    _config(
        EventType.THRESHOLD_BREACH,
        "Alert when a visit note value exceeds a configured threshold",
        [_SUPERVISOR, _ADMIN],
        _HIGH,
        _EMAIL_IN_APP,
        [
            "clientName",
            "carerName",
            "visitDate",
            "fieldLabel",
            "enteredValue",
            "thresholdType",
            "thresholdValue",
            "customMessage",
            "visitNoteUrl",
        ],
    ),
    # Administrative (sent to the affected user directly)
    _config(
        EventType.USER_ACCOUNT_CREATED,
        "Welcome notification for new user accounts",
        [],
        _HIGH,
        _EMAIL_ONLY,
        ["firstName", "email", "tempPassword", "loginUrl"],
    ),
    _config(
        EventType.PASSWORD_RESET,
        "Password reset notification",
        [],
        _HIGH,
        _EMAIL_ONLY,
        ["firstName", "resetUrl", "expiresIn"],
    ),
    _config(
        EventType.WEEKLY_SUMMARY,
        "Weekly summary report",
        [_ADMIN, _OPS],
        _LOW,
        _EMAIL_ONLY,
        [
            "weekStartDate",
            "weekEndDate",
            "totalShifts",
            "completedShifts",
            "totalHours",
            "incidentCount",
            "summaryUrl",
        ],
    ),
]

EVENT_CONFIGS: Dict[EventType, EventConfig] = {c.event_type: c for c in _CONFIGS}

_missing = set(EventType) - set(EVENT_CONFIGS)
if _missing:
    raise RuntimeError(
        "Event configuration missing for: "
        + ", ".join(sorted(e.value for e in _missing))
    )


def get_event_config(event_type: EventType) -> EventConfig:
    """Return the configuration entry for an event.

    Raises:
        UnknownEventTypeError: If the event has no entry.
    """
    try:
        return EVENT_CONFIGS[event_type]
    except KeyError:
        raise UnknownEventTypeError(f"No configuration for event {event_type}")


def get_default_channels(event_type: EventType) -> List[Channel]:
    """Return a copy of the event's default channels (EMAIL + IN_APP if unknown)."""
    config = EVENT_CONFIGS.get(event_type)
    if config is None:
        return list(FALLBACK_CHANNELS)
    return list(config.default_channels)


def get_events_by_priority(priority: NotificationPriority) -> List[EventConfig]:
    return [c for c in EVENT_CONFIGS.values() if c.priority == priority]


def get_events_for_role(role: RecipientRole) -> List[EventConfig]:
    return [c for c in EVENT_CONFIGS.values() if role in c.default_recipient_roles]


def get_event_variables(event_type: EventType) -> List[str]:
    config = EVENT_CONFIGS.get(event_type)
    return list(config.variables) if config else []
