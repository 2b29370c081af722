"""Transactional email API integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class EmailSettings(IntegrationSettings):
    """HTTP email API configuration (Resend-compatible).

    The email channel is only registered as configured when an API key is
    present, so leaving EMAIL_API_KEY unset disables email delivery
    without touching preferences or event defaults.

    Environment Variables:
        EMAIL_API_KEY: Bearer token for the email API
        EMAIL_API_URL: Endpoint that accepts a JSON send request
        EMAIL_FROM: Sender address
        EMAIL_FROM_NAME: Sender display name
        EMAIL_TIMEOUT_SECONDS: HTTP timeout for a single API call

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.email.is_configured:
            sender = settings.email.sender
        ```
    """

    EMAIL_API_KEY: str | None = Field(default=None, alias="EMAIL_API_KEY")
    EMAIL_API_URL: str = Field(
        default="https://api.resend.com/emails", alias="EMAIL_API_URL"
    )
    EMAIL_FROM: str = Field(
        default="notifications@carebasehealth.com", alias="EMAIL_FROM"
    )
    EMAIL_FROM_NAME: str = Field(default="CareBase", alias="EMAIL_FROM_NAME")
    EMAIL_TIMEOUT_SECONDS: int = Field(default=15, alias="EMAIL_TIMEOUT_SECONDS")

    @property
    def is_configured(self) -> bool:
        return bool(self.EMAIL_API_KEY)

    @property
    def sender(self) -> str:
        """Formatted From header, e.g. ``CareBase <notifications@...>``."""
        if self.EMAIL_FROM_NAME:
            return f"{self.EMAIL_FROM_NAME} <{self.EMAIL_FROM}>"
        return self.EMAIL_FROM
