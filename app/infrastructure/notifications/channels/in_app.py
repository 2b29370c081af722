"""In-app channel: writes notifications into the user's inbox."""

import html
import re
from typing import Any, Dict, Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.models import (
    Channel,
    EventType,
    InAppMessage,
    SendResult,
)

if TYPE_CHECKING:
    from infrastructure.notifications.stores import InboxStore

logger = structlog.get_logger()

_BLOCK_TAG_RE = re.compile(r"</?(p|div|br|tr|table|li|ul|ol|h[1-6])\b[^>]*>", re.I)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_html(value: str) -> str:
    """Convert an HTML fragment into a single line of plain text.

    Block-level tags become spaces so adjacent paragraphs do not run
    together; entities are unescaped and whitespace collapsed.
    """
    text = _BLOCK_TAG_RE.sub(" ", value)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


class InAppChannel(ChannelProvider):
    """In-app notification channel.

    The address is the user id. Always configured: the inbox lives in
    the application's own store.
    """

    def __init__(self, inbox_store: "InboxStore"):
        self._inbox = inbox_store

    @property
    def channel(self) -> Channel:
        return Channel.IN_APP

    def is_configured(self) -> bool:
        return True

    def send(
        self,
        to: str,
        subject: Optional[str],
        body: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SendResult:
        metadata = dict(metadata or {})
        event_type = metadata.get("eventType")
        try:
            event = EventType(event_type) if event_type else None
        except ValueError:
            event = None

        message = InAppMessage(
            user_id=to,
            company_id=metadata.get("companyId"),
            event_type=event,
            title=metadata.get("title") or subject,
            body=strip_html(body),
            metadata=metadata,
        )
        stored = self._inbox.add(message)
        logger.info(
            "in_app_notification_created",
            user_id=to,
            message_id=stored.id,
            notification_log_id=metadata.get("notificationLogId"),
        )
        return SendResult.ok(message_id=stored.id)
