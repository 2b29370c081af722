"""Static channel provider registry.

Providers are built once at startup from settings; there is no runtime
plugin discovery. The registry answers the two questions the rest of
the system asks: "which provider handles this channel?" and "is this
channel usable right now?".
"""

from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.in_app import InAppChannel
from infrastructure.notifications.channels.sms import SMSChannel
from infrastructure.notifications.channels.whatsapp import WhatsAppChannel
from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from infrastructure.notifications.stores import InboxStore

logger = structlog.get_logger()


class ChannelRegistry:
    """Lookup of channel providers by Channel tag.

    Example:
        registry = ChannelRegistry([EmailChannel(settings.email), InAppChannel(inbox)])

        if registry.is_available(Channel.EMAIL):
            provider = registry.get_provider(Channel.EMAIL)
    """

    def __init__(self, providers: Iterable[ChannelProvider]):
        self._providers: Dict[Channel, ChannelProvider] = {}
        for provider in providers:
            if provider.channel in self._providers:
                raise ValueError(
                    f"Duplicate provider for channel {provider.channel.value}"
                )
            self._providers[provider.channel] = provider

        logger.info(
            "initialized_channel_registry",
            channels=[c.value for c in self._providers],
            configured=[c.value for c in self.configured_channels()],
        )

    def get_provider(self, channel: Channel) -> Optional[ChannelProvider]:
        return self._providers.get(channel)

    def is_available(self, channel: Channel) -> bool:
        """Return True if a provider exists for the channel and is configured."""
        provider = self._providers.get(channel)
        return provider is not None and provider.is_configured()

    def configured_channels(self) -> List[Channel]:
        return [c for c, p in self._providers.items() if p.is_configured()]

    def channels(self) -> List[Channel]:
        return list(self._providers)

    def health_check(self) -> Dict[str, OperationResult]:
        """Run every provider's health check, keyed by channel value."""
        results = {}
        for channel, provider in self._providers.items():
            try:
                results[channel.value] = provider.health_check()
            except Exception as e:
                logger.error(
                    "channel_health_check_exception",
                    channel=channel.value,
                    error=str(e),
                    exc_info=True,
                )
                results[channel.value] = OperationResult.transient_error(
                    message=f"Health check failed: {e}",
                    error_code="HEALTH_CHECK_ERROR",
                )
        return results


def build_channel_registry(
    settings: "Settings", inbox_store: "InboxStore"
) -> ChannelRegistry:
    """Build the registry with every known channel.

    Args:
        settings: Application settings (email API credentials).
        inbox_store: Store written by the in-app channel.

    Returns:
        ChannelRegistry with email, in-app, SMS and WhatsApp providers.
    """
    return ChannelRegistry(
        [
            EmailChannel(settings.email),
            InAppChannel(inbox_store),
            SMSChannel(),
            WhatsAppChannel(),
        ]
    )
