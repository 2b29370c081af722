"""Send step shared by the dispatcher and the sweeps.

Takes a QUEUED notification log row, resolves the channel address for
the recipient, calls the provider under a timeout and records the
outcome on the row (SENT or FAILED).
"""

import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Dict, Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.models import (
    AttemptResult,
    Channel,
    NotificationLog,
    Recipient,
    SendResult,
)

if TYPE_CHECKING:
    from infrastructure.notifications.channels.registry import ChannelRegistry
    from infrastructure.notifications.stores import NotificationLogStore

logger = structlog.get_logger()

NO_PHONE_ERROR = "No phone number available"


def resolve_address(recipient: Recipient, channel: Channel) -> Optional[str]:
    """Return the recipient's address on a channel, or None if missing."""
    if channel == Channel.EMAIL:
        return recipient.email
    if channel in (Channel.SMS, Channel.WHATSAPP):
        return recipient.phone
    if channel == Channel.IN_APP:
        return recipient.user_id
    return None


class NotificationDelivery:
    """Runs provider sends and records their outcome.

    Provider calls run on a bounded thread pool so a hung transport can
    be abandoned after ``send_timeout_seconds``. An abandoned call keeps
    running in its worker thread; its eventual result is ignored and the
    row stays FAILED (and is picked up by the retry sweep).

    Each channel gets its own pool, so abandoned calls on a stuck
    transport only hold that channel's workers.

    Attributes:
        registry: ChannelRegistry used to find providers
        log_store: Store the outcome is written to
        send_timeout_seconds: Upper bound for one provider call
        max_workers: Pool size per channel
    """

    def __init__(
        self,
        registry: "ChannelRegistry",
        log_store: "NotificationLogStore",
        send_timeout_seconds: float = 30.0,
        max_workers: int = 4,
    ):
        self.registry = registry
        self.log_store = log_store
        self.send_timeout_seconds = send_timeout_seconds
        self.max_workers = max_workers
        self._executors: Dict[Channel, ThreadPoolExecutor] = {}
        self._executors_lock = threading.Lock()

    def _executor_for(self, channel: Channel) -> ThreadPoolExecutor:
        with self._executors_lock:
            executor = self._executors.get(channel)
            if executor is None:
                executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix=f"notification-send-{channel.value.lower()}",
                )
                self._executors[channel] = executor
            return executor

    def fail(self, log: NotificationLog, error: str) -> AttemptResult:
        """Record a failure that happened before any provider call."""
        log.mark_failed(error)
        self.log_store.update(log)
        logger.warning(
            "notification_send_failed",
            notification_log_id=log.id,
            user_id=log.user_id,
            channel=log.channel.value,
            retry_count=log.retry_count,
            error=error,
        )
        return self._attempt(log, success=False, error=error)

    def deliver(self, log: NotificationLog, recipient: Recipient) -> AttemptResult:
        """Send one QUEUED row and persist the outcome.

        Ordinary failures (unconfigured channel, missing address, provider
        error, timeout, provider exception) are recorded on the row and
        returned. Errors writing the row propagate.

        Args:
            log: QUEUED notification log row
            recipient: Recipient the row is addressed to

        Returns:
            AttemptResult for the row
        """
        provider = self.registry.get_provider(log.channel)
        if provider is None or not provider.is_configured():
            return self.fail(
                log, f"Channel provider not configured for {log.channel.value}"
            )

        address = resolve_address(recipient, log.channel)
        if not address:
            if log.channel in (Channel.SMS, Channel.WHATSAPP):
                return self.fail(log, NO_PHONE_ERROR)
            return self.fail(log, f"No address available for {log.channel.value}")

        metadata = {
            "userId": log.user_id,
            "companyId": log.company_id,
            "eventType": log.event_type.value,
            "title": log.subject,
            "notificationLogId": log.id,
        }

        try:
            future = self._executor_for(log.channel).submit(
                provider.send, address, log.subject, log.body, metadata
            )
            try:
                result: SendResult = future.result(timeout=self.send_timeout_seconds)
            except FutureTimeoutError:
                # The provider's own TimeoutError arrives on a finished future.
                if future.done():
                    raise
                future.cancel()
                result = SendResult.failed(
                    f"Send timed out after {self.send_timeout_seconds:g}s"
                )
        except Exception as e:
            logger.error(
                "channel_exception",
                channel=log.channel.value,
                notification_log_id=log.id,
                error=str(e),
                exc_info=True,
            )
            result = SendResult.failed(str(e) or type(e).__name__)

        if not result.success:
            return self.fail(log, result.error or "Unknown provider error")

        log.mark_sent(message_id=result.message_id)
        self.log_store.update(log)
        logger.info(
            "notification_sent",
            notification_log_id=log.id,
            user_id=log.user_id,
            channel=log.channel.value,
            event_type=log.event_type.value,
            message_id=result.message_id,
        )
        return self._attempt(log, success=True)

    def shutdown(self, wait: bool = False) -> None:
        with self._executors_lock:
            executors = list(self._executors.values())
            self._executors.clear()
        for executor in executors:
            executor.shutdown(wait=wait)

    @staticmethod
    def _attempt(
        log: NotificationLog, success: bool, error: Optional[str] = None
    ) -> AttemptResult:
        return AttemptResult(
            success=success,
            recipient_id=log.user_id,
            channel=log.channel,
            status=log.status,
            notification_log_id=log.id,
            error=error,
        )
