"""SMS channel placeholder.

No SMS gateway is wired in yet. The channel is registered so the
preference resolver can see it, but it always reports itself as
unconfigured and is therefore never selected.
"""

from typing import Any, Dict, Optional

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.models import Channel, SendResult


class SMSChannel(ChannelProvider):
    """SMS channel stub (not configured)."""

    @property
    def channel(self) -> Channel:
        return Channel.SMS

    def is_configured(self) -> bool:
        return False

    def send(
        self,
        to: str,
        subject: Optional[str],
        body: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SendResult:
        return SendResult.failed("SMS channel is not configured")
