"""Visit note threshold alerts.

When a carer records a visit note value (blood pressure, temperature,
blood glucose, ...) outside the limits configured for the client, the
client's supervisors are alerted through the THRESHOLD_BREACH event.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import (
    DispatchResult,
    EventType,
    NotificationPayload,
)
from infrastructure.notifications.service import NotificationService

logger = get_module_logger()

Number = Union[int, float]


@dataclass
class FieldThreshold:
    """Limits configured for one visit note field."""

    field_label: str
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    custom_message: Optional[str] = None


def check_threshold(value: Number, threshold: FieldThreshold) -> Optional[str]:
    """Return "minimum" or "maximum" when value is outside the limits."""
    if threshold.minimum is not None and value < threshold.minimum:
        return "minimum"
    if threshold.maximum is not None and value > threshold.maximum:
        return "maximum"
    return None


def notify_threshold_breach(
    service: NotificationService,
    supervisor_ids: List[str],
    visit_note_id: str,
    client_name: str,
    carer_name: str,
    visit_date: date,
    value: Number,
    threshold: FieldThreshold,
    app_url: Optional[str] = None,
) -> Optional[DispatchResult]:
    """Alert supervisors if a recorded value breaches its threshold.

    Args:
        service: NotificationService used to dispatch
        supervisor_ids: Users to alert
        visit_note_id: Visit note the value belongs to
        client_name: Client display name
        carer_name: Carer who recorded the value
        visit_date: Date of the visit
        value: Recorded value
        threshold: Limits for the field
        app_url: Base URL used to link to the visit note (defaults to the
            dispatcher's configured app URL)

    Returns:
        DispatchResult, or None when the value is within limits or there
        is nobody to alert.
    """
    breached = check_threshold(value, threshold)
    if breached is None:
        return None

    if not supervisor_ids:
        logger.warning(
            "threshold_breach_no_supervisors",
            visit_note_id=visit_note_id,
            field_label=threshold.field_label,
        )
        return None

    limit = threshold.minimum if breached == "minimum" else threshold.maximum
    if app_url is None:
        app_url = service.dispatcher.app_url
    logger.info(
        "threshold_breach_detected",
        visit_note_id=visit_note_id,
        field_label=threshold.field_label,
        threshold_type=breached,
    )

    return service.dispatch(
        NotificationPayload(
            event_type=EventType.THRESHOLD_BREACH,
            recipient_ids=supervisor_ids,
            data={
                "clientName": client_name,
                "carerName": carer_name,
                "visitDate": visit_date,
                "fieldLabel": threshold.field_label,
                "enteredValue": value,
                "thresholdType": breached,
                "thresholdValue": limit,
                "customMessage": threshold.custom_message,
                "visitNoteUrl": f"{app_url}/visit-notes/{visit_note_id}",
            },
            related_entity_type="visit_note",
            related_entity_id=visit_note_id,
        )
    )
