"""Email channel implementation using an HTTP email API (Resend-compatible)."""

from typing import Any, Dict, Optional, TYPE_CHECKING

import requests
import structlog

from infrastructure.notifications.channels.base import ChannelProvider
from infrastructure.notifications.models import Channel, SendResult
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_request_exception,
)

if TYPE_CHECKING:
    from infrastructure.configuration import EmailSettings

logger = structlog.get_logger()

DEFAULT_SUBJECT = "Notification"

EMAIL_STYLES = """
body { margin: 0; padding: 0; background: #f4f5f7; font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; color: #1f2933; }
.wrapper { max-width: 600px; margin: 0 auto; padding: 24px 16px; }
.content { background: #ffffff; border-radius: 8px; padding: 32px; line-height: 1.5; font-size: 15px; }
.info-table { width: 100%; border-collapse: collapse; margin: 16px 0; }
.info-table td { padding: 8px 12px; border-bottom: 1px solid #e4e7eb; vertical-align: top; }
.info-table td:first-child { width: 35%; color: #616e7c; }
.button { display: inline-block; padding: 12px 24px; background: #2563eb; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600; }
.alert-box { padding: 12px 16px; border-radius: 6px; margin: 16px 0; }
.alert-info { background: #e0f2fe; border-left: 4px solid #0284c7; }
.alert-warning { background: #fef3c7; border-left: 4px solid #d97706; }
.alert-danger { background: #fee2e2; border-left: 4px solid #dc2626; }
.footer { text-align: center; color: #9aa5b1; font-size: 12px; margin-top: 16px; }
""".strip()


def wrap_email_html(body: str, title: Optional[str] = None) -> str:
    """Wrap a rendered HTML fragment in the branded email document."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{title or DEFAULT_SUBJECT}</title>\n"
        f"<style>\n{EMAIL_STYLES}\n</style>\n"
        "</head>\n"
        "<body>\n"
        '<div class="wrapper">\n'
        f'<div class="content">\n{body}\n</div>\n'
        '<div class="footer">You are receiving this email because of your '
        "notification settings.</div>\n"
        "</div>\n"
        "</body>\n"
        "</html>"
    )


class EmailChannel(ChannelProvider):
    """Email channel backed by a JSON HTTP email API.

    Sends ``{"from", "to", "subject", "html"}`` with a bearer API key and
    reads the provider message id from the ``id`` field of the response.
    Configured only when an API key is set.
    """

    def __init__(
        self,
        settings: "EmailSettings",
        session: Optional[requests.Session] = None,
    ):
        """Initialize the email channel.

        Args:
            settings: EmailSettings with API key, URL and sender.
            session: Optional requests session (connection pooling, tests).
        """
        self._api_key = settings.EMAIL_API_KEY
        self._api_url = settings.EMAIL_API_URL
        self._sender = settings.sender
        self._timeout = settings.EMAIL_TIMEOUT_SECONDS
        self._session = session or requests.Session()
        logger.info(
            "initialized_email_channel",
            backend="http_api",
            api_url=self._api_url,
            configured=self.is_configured(),
        )

    @property
    def channel(self) -> Channel:
        return Channel.EMAIL

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def send(
        self,
        to: str,
        subject: Optional[str],
        body: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SendResult:
        if not self.is_configured():
            return SendResult.failed("Email channel is not configured")

        result = self._post_email(to=to, subject=subject or DEFAULT_SUBJECT, html=body)
        metadata = metadata or {}

        if result.is_success:
            message_id = (result.data or {}).get("id")
            logger.info(
                "email_sent",
                notification_log_id=metadata.get("notificationLogId"),
                user_id=metadata.get("userId"),
                message_id=message_id,
            )
            return SendResult.ok(message_id=message_id)

        logger.warning(
            "email_failed",
            notification_log_id=metadata.get("notificationLogId"),
            user_id=metadata.get("userId"),
            error=result.message,
            error_code=result.error_code,
        )
        return SendResult.failed(result.message)

    def health_check(self) -> OperationResult:
        if not self.is_configured():
            return OperationResult.not_configured("EMAIL_API_KEY is not set")
        return OperationResult.success(
            message="Email API credentials present",
            data={"api_url": self._api_url},
        )

    def _post_email(self, to: str, subject: str, html: str) -> OperationResult:
        """POST one message to the email API.

        Returns:
            OperationResult with the decoded response body in data.
        """
        payload = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": wrap_email_html(html, title=subject),
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = self._session.post(
                self._api_url, json=payload, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as e:
            logger.error("email_api_request_error", error=str(e), exc_info=True)
            return classify_request_exception(e)

        return classify_http_response(response, service="Email API")
