"""Channel provider abstract base class.

Every delivery channel (email, in-app, SMS, WhatsApp) implements this
interface. The dispatcher only sees a Channel tag and this contract, so
swapping the transport behind a channel never touches dispatch logic.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from infrastructure.notifications.models import Channel, SendResult
from infrastructure.operations import OperationResult


class ChannelProvider(ABC):
    """Abstract base class for channel providers.

    Implementations must report ordinary delivery failures by returning
    ``SendResult(success=False, error=...)`` rather than raising. The
    dispatcher still guards every call, so an unexpected exception only
    fails that one attempt.

    Example Implementation:
        class PagerChannel(ChannelProvider):

            @property
            def channel(self) -> Channel:
                return Channel.SMS

            def is_configured(self) -> bool:
                return bool(self._api_key)

            def send(self, to, subject, body, metadata=None) -> SendResult:
                response = self._client.page(to, body)
                return SendResult.ok(message_id=response["id"])
    """

    @property
    @abstractmethod
    def channel(self) -> Channel:
        """Channel tag this provider delivers for."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True if the provider has everything it needs to send.

        Unconfigured providers are never selected by the preference
        resolver.
        """
        pass

    @abstractmethod
    def send(
        self,
        to: str,
        subject: Optional[str],
        body: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SendResult:
        """Deliver one rendered message.

        Args:
            to: Channel address (email, phone number or user id)
            subject: Rendered subject, if the channel uses one
            body: Rendered body
            metadata: Context for the provider (userId, companyId,
                eventType, title, notificationLogId)

        Returns:
            SendResult with the provider message id on success
        """
        pass

    def health_check(self) -> OperationResult:
        """Check channel health (credentials, connectivity).

        Returns:
            OperationResult indicating channel health
        """
        if self.is_configured():
            return OperationResult.success(
                message=f"{self.channel.value} channel configured"
            )
        return OperationResult.not_configured(
            f"{self.channel.value} channel is not configured"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(channel={self.channel.value})"
