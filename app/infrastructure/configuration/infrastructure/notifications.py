"""Notification dispatch infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class NotificationSettings(InfrastructureSettings):
    """Notification dispatch, scheduling and retry configuration.

    Environment Variables:
        NOTIFICATIONS_APP_URL: Base URL used for the ``appUrl`` template variable
        NOTIFICATIONS_DEFAULT_COMPANY_NAME: Display name when a tenant has none
        NOTIFICATIONS_MAX_RETRIES: Retry budget for each log row (default: 3)
        NOTIFICATIONS_SCHEDULED_BATCH_SIZE: Rows claimed per scheduled sweep (default: 100)
        NOTIFICATIONS_RETRY_BATCH_SIZE: Rows claimed per retry sweep (default: 50)
        NOTIFICATIONS_SEND_TIMEOUT_SECONDS: Upper bound for one provider call (default: 30)
        NOTIFICATIONS_SEND_WORKERS: Threads per channel for provider calls (default: 4)
        NOTIFICATIONS_SWEEP_INTERVAL_MINUTES: How often the sweeps run (default: 5)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        batch = settings.notifications.scheduled_batch_size
        ```
    """

    app_url: str = Field(
        default="https://app.carebasehealth.com",
        alias="NOTIFICATIONS_APP_URL",
        description="Base URL of the web application, exposed as appUrl",
    )
    default_company_name: str = Field(
        default="CareBase",
        alias="NOTIFICATIONS_DEFAULT_COMPANY_NAME",
        description="Company display name used when the tenant lookup fails",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        alias="NOTIFICATIONS_MAX_RETRIES",
        description="Retry budget stored on each new notification log row",
    )
    scheduled_batch_size: int = Field(
        default=100,
        gt=0,
        alias="NOTIFICATIONS_SCHEDULED_BATCH_SIZE",
        description="Maximum PENDING rows processed per scheduled sweep",
    )
    retry_batch_size: int = Field(
        default=50,
        gt=0,
        alias="NOTIFICATIONS_RETRY_BATCH_SIZE",
        description="Maximum FAILED rows re-attempted per retry sweep",
    )
    send_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        alias="NOTIFICATIONS_SEND_TIMEOUT_SECONDS",
        description="Maximum time to wait for a single provider send",
    )
    send_workers: int = Field(
        default=4,
        gt=0,
        alias="NOTIFICATIONS_SEND_WORKERS",
        description="Size of each channel's thread pool running provider sends",
    )
    sweep_interval_minutes: int = Field(
        default=5,
        gt=0,
        alias="NOTIFICATIONS_SWEEP_INTERVAL_MINUTES",
        description="Interval between scheduled and retry sweeps (minutes)",
    )
