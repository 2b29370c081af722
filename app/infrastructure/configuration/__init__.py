"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class
    EmailSettings: Email API settings class (for testing/overrides)
    NotificationSettings: Notification dispatch settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    sweep_minutes = settings.notifications.sweep_interval_minutes
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.integrations.email import EmailSettings
from infrastructure.configuration.infrastructure.notifications import (
    NotificationSettings,
)

__all__ = ["Settings", "EmailSettings", "NotificationSettings"]
