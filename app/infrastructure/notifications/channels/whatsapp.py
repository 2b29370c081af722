"""WhatsApp channel placeholder (never configured)."""

from typing import Any, Dict, Optional

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.models import Channel, SendResult


class WhatsAppChannel(ChannelProvider):
    @property
    def channel(self) -> Channel:
        return Channel.WHATSAPP

    def is_configured(self) -> bool:
        return False

    def send(
        self,
        to: str,
        subject: Optional[str],
        body: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SendResult:
        return SendResult.failed("WhatsApp channel is not configured")
