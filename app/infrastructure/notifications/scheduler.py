"""Scheduled-send and retry sweeps.

Two batch jobs run periodically:

- ``process_scheduled_notifications`` sends PENDING rows whose
  scheduled_for has passed.
- ``retry_failed_notifications`` re-attempts FAILED rows that still have
  retry budget.

Both claim their rows through the log store before sending, so
overlapping sweeps never process the same row twice. Both are
idempotent and safe to call repeatedly.
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

import structlog

from infrastructure.logging.context import bind_log_context
from infrastructure.notifications.models import (
    AttemptResult,
    NotificationLog,
    Recipient,
    utc_now,
)

if TYPE_CHECKING:
    from infrastructure.notifications.delivery import NotificationDelivery
    from infrastructure.notifications.stores import (
        NotificationLogStore,
        RecipientDirectory,
    )

logger = structlog.get_logger()


class NotificationScheduler:
    """Runs the scheduled-send and retry sweeps.

    Attributes:
        log_store: NotificationLogStore providing atomic claims
        recipients: Directory used to reload each row's recipient
        delivery: NotificationDelivery performing the send step
        scheduled_batch_size: Rows claimed per scheduled sweep
        retry_batch_size: Rows claimed per retry sweep
        worker_id: Identifier included in sweep logs
    """

    def __init__(
        self,
        log_store: "NotificationLogStore",
        recipients: "RecipientDirectory",
        delivery: "NotificationDelivery",
        scheduled_batch_size: int = 100,
        retry_batch_size: int = 50,
        worker_id: str = "notification-scheduler-1",
    ) -> None:
        self.log_store = log_store
        self.recipients = recipients
        self.delivery = delivery
        self.scheduled_batch_size = scheduled_batch_size
        self.retry_batch_size = retry_batch_size
        self.worker_id = worker_id
        self.log = logger.bind(component="notification_scheduler", worker_id=worker_id)

    def process_scheduled_notifications(
        self, now: Optional[datetime] = None
    ) -> dict:
        """Send due PENDING notifications.

        Args:
            now: Current time (defaults to UTC now)

        Returns:
            Dictionary with processing statistics:
                - claimed: Rows moved from PENDING to QUEUED
                - sent: Rows that ended SENT
                - failed: Rows that ended FAILED

        Example:
            stats = scheduler.process_scheduled_notifications()
            logger.info("sweep_complete", **stats)
        """
        now = now or utc_now()
        with bind_log_context(operation="scheduled_sweep"):
            claimed = self.log_store.claim_due_scheduled(
                now=now, limit=self.scheduled_batch_size
            )
            stats = self._deliver_batch(claimed)
            if claimed:
                self.log.info("scheduled_sweep_complete", **stats)
            else:
                self.log.debug("scheduled_sweep_no_records")
        return stats

    def retry_failed_notifications(self, now: Optional[datetime] = None) -> dict:
        """Re-attempt FAILED notifications that still have retry budget.

        Each claimed row has already had its retry_count incremented by
        the store, so a row is attempted at most ``max_retries`` more
        times after its first failure.

        Returns:
            Dictionary with claimed, sent and failed counts.
        """
        now = now or utc_now()
        with bind_log_context(operation="retry_sweep"):
            claimed = self.log_store.claim_retryable(
                limit=self.retry_batch_size, now=now
            )
            stats = self._deliver_batch(claimed)
            if claimed:
                self.log.info("retry_sweep_complete", **stats)
            else:
                self.log.debug("retry_sweep_no_records")
        return stats

    def list_exhausted_notifications(self, limit: int = 100) -> List[NotificationLog]:
        """FAILED rows whose retry budget is used up (operator view)."""
        return self.log_store.list_exhausted(limit=limit)

    def _deliver_batch(self, claimed: List[NotificationLog]) -> dict:
        """Deliver every claimed row.

        A store error on one row does not stop the rest of the batch. The
        first such error is raised once the batch is done; the row it hit
        stays QUEUED until its claim goes stale and a later sweep
        reclaims it.
        """
        stats = {"claimed": len(claimed), "sent": 0, "failed": 0}
        errors = 0
        first_error: Optional[Exception] = None

        for log in claimed:
            try:
                attempt = self._deliver_claimed(log)
            except Exception as e:
                self.log.error(
                    "sweep_row_failed",
                    notification_log_id=log.id,
                    error=str(e),
                    exc_info=True,
                )
                errors += 1
                if first_error is None:
                    first_error = e
                continue

            if attempt.success:
                stats["sent"] += 1
            else:
                stats["failed"] += 1

        if first_error is not None:
            self.log.error("sweep_batch_incomplete", errors=errors, **stats)
            raise first_error
        return stats

    def _deliver_claimed(self, log: NotificationLog) -> AttemptResult:
        try:
            recipient = self.recipients.get_recipient(log.user_id)
        except Exception as e:
            self.log.error(
                "sweep_recipient_lookup_failed",
                notification_log_id=log.id,
                user_id=log.user_id,
                error=str(e),
                exc_info=True,
            )
            return self.delivery.fail(log, f"Recipient lookup failed: {e}")
        return self._deliver_to(log, recipient)

    def _deliver_to(
        self, log: NotificationLog, recipient: Optional[Recipient]
    ) -> AttemptResult:
        if recipient is None or not recipient.is_active:
            return self.delivery.fail(log, "Recipient not found or inactive")
        return self.delivery.deliver(log, recipient)
