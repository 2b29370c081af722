"""Operation status enumeration.

Classifies the outcome of calls to external systems (email API, SMS
gateway, health checks) so callers can tell a retryable failure from one
that will keep failing.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (validation, rejected request)
        UNAUTHORIZED: Credentials missing, invalid or revoked
        NOT_CONFIGURED: Integration is disabled or has no credentials
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_CONFIGURED = "not_configured"
