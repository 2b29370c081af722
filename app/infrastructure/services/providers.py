"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.notifications.service import NotificationService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Usage:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Built with the default in-memory stores; deployments with a database
    construct NotificationService with their own stores instead.

    Returns:
        NotificationService: Cached service wired from application settings.
    """
    return NotificationService(settings=get_settings())
