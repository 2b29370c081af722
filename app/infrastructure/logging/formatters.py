"""Log processors that keep credentials and contact details out of logs.

Notification logs routinely carry recipient addresses and rendered
message content. These structlog processors are installed by
``configure_logging`` so every log line is scrubbed before rendering.

Usage:
    from infrastructure.logging.formatters import mask_sensitive_data
"""

import re
from typing import Any

# Keys whose values are always replaced
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "bearer",
    }
)

# Keys whose values are partially masked (recipient contact details)
CONTACT_KEYS = frozenset({"email", "phone", "to", "address_value"})

_EMAIL_RE = re.compile(r"^([^@]{1,2})[^@]*(@.+)$")


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks credentials in log entries.

    Matches keys case-insensitively against SENSITIVE_PATTERNS.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked_dict = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            is_sensitive = any(pattern in key_lower for pattern in patterns)
            if is_sensitive and value is not None:
                masked_dict[key] = mask_value
            else:
                masked_dict[key] = value
        return masked_dict

    return processor


def mask_contact_value(value: str) -> str:
    """Partially mask an email address or phone number.

    Example:
        mask_contact_value("jane.doe@example.com")  # "ja***@example.com"
        mask_contact_value("+447700900123")         # "***0123"
    """
    match = _EMAIL_RE.match(value)
    if match:
        return f"{match.group(1)}***{match.group(2)}"
    if len(value) > 4:
        return f"***{value[-4:]}"
    return "***"


def mask_contact_details(keys: frozenset[str] = CONTACT_KEYS):
    """Create a processor that partially masks recipient contact details."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key in keys:
            value = event_dict.get(key)
            if isinstance(value, str) and value:
                event_dict[key] = mask_contact_value(value)
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Rendered email bodies can be several kilobytes; this keeps an
    accidental ``body=...`` from flooding the log stream.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
