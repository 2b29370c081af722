"""Notification channel providers."""

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.channels.email import EmailChannel, wrap_email_html
from infrastructure.notifications.channels.in_app import InAppChannel, strip_html
from infrastructure.notifications.channels.registry import (
    ChannelRegistry,
    build_channel_registry,
)
from infrastructure.notifications.channels.sms import SMSChannel
from infrastructure.notifications.channels.whatsapp import WhatsAppChannel

__all__ = [
    "ChannelProvider",
    "ChannelRegistry",
    "EmailChannel",
    "InAppChannel",
    "SMSChannel",
    "WhatsAppChannel",
    "build_channel_registry",
    "strip_html",
    "wrap_email_html",
]
