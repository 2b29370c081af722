"""Channel selection for a (recipient, event) pair."""

from typing import Iterable, List, Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.events import get_default_channels
from infrastructure.notifications.models import Channel, EventType

if TYPE_CHECKING:
    from infrastructure.notifications.channels.registry import ChannelRegistry
    from infrastructure.notifications.stores import PreferenceStore

logger = structlog.get_logger()


class PreferenceResolver:
    """Decides which channels a recipient is notified on.

    Precedence:
    1. A non-empty caller override (user preferences are not consulted)
    2. The user's enabled preferences for the event
    3. The event's default channels

    Whatever tier wins, channels without a configured provider are
    dropped, so the result only ever contains deliverable channels. The
    result may be empty.
    """

    def __init__(self, preference_store: "PreferenceStore", registry: "ChannelRegistry"):
        self._preferences = preference_store
        self._registry = registry

    def _available(self, channels: Iterable[Channel]) -> List[Channel]:
        """Drop unconfigured channels and duplicates, keeping order."""
        return [
            channel
            for channel in dict.fromkeys(channels)
            if self._registry.is_available(channel)
        ]

    def resolve_channels(
        self,
        user_id: str,
        event_type: EventType,
        override_channels: Optional[List[Channel]] = None,
    ) -> List[Channel]:
        """Return the channels to use for one recipient.

        Args:
            user_id: Recipient user id
            event_type: Event being notified
            override_channels: Optional caller-supplied channel list

        Returns:
            Ordered list of configured channels (possibly empty)
        """
        if override_channels:
            channels = self._available(override_channels)
            source = "override"
        else:
            enabled = [
                p.channel
                for p in self._preferences.list_preferences(user_id, event_type)
                if p.enabled
            ]
            if enabled:
                channels = self._available(enabled)
                source = "preferences"
            else:
                channels = self._available(get_default_channels(event_type))
                source = "defaults"

        logger.debug(
            "channels_resolved",
            user_id=user_id,
            event_type=event_type.value,
            source=source,
            channels=[c.value for c in channels],
        )
        return channels
