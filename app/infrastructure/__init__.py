"""Infrastructure modules for the notification dispatch application.

Centralized infrastructure components:
- configuration: Settings management (Settings, EmailSettings, NotificationSettings)
- logging: Structured logging setup and context binding
- notifications: Event-driven multi-channel notification dispatch
- operations: Operation results and HTTP error classification
- services: Application-scoped providers (get_settings, get_notification_service)
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
