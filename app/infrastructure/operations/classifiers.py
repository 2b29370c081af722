"""Error classifiers for HTTP integrations.

Converts ``requests`` responses and exceptions into OperationResult so
channel code never has to branch on status codes or exception types.

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_response,
        classify_request_exception,
    )

    try:
        response = requests.post(url, json=payload, timeout=15)
    except requests.RequestException as exc:
        return classify_request_exception(exc)
    result = classify_http_response(response, service="Email API")
"""

from typing import Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER_SECONDS = 60


def _response_detail(response: requests.Response) -> str:
    """Best-effort error message extracted from a JSON or text body."""
    try:
        body = response.json()
    except ValueError:
        return (response.text or "").strip()[:200]
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return ""


def classify_http_response(
    response: requests.Response, service: str = "HTTP API"
) -> OperationResult:
    """Classify an HTTP response into OperationResult.

    Status Code Mapping:
    - 2xx: SUCCESS with the decoded JSON body (or None) as data
    - 429: TRANSIENT_ERROR with retry_after from the Retry-After header
    - 401/403: UNAUTHORIZED
    - 5xx: TRANSIENT_ERROR
    - Other 4xx: PERMANENT_ERROR

    Args:
        response: Response returned by requests
        service: Name used in the error message

    Returns:
        OperationResult describing the response
    """
    status_code = response.status_code

    if 200 <= status_code < 300:
        try:
            data = response.json()
        except ValueError:
            data = None
        return OperationResult.success(data=data, message=f"{service} accepted request")

    detail = _response_detail(response)
    suffix = f": {detail}" if detail else ""

    if status_code == 429:
        retry_after: Optional[int] = DEFAULT_RETRY_AFTER_SECONDS
        header_value = response.headers.get("Retry-After")
        if header_value:
            try:
                retry_after = int(header_value)
            except (ValueError, TypeError):
                pass  # Use default if header is malformed
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{service} rate limited (HTTP 429){suffix}",
            error_code="RATE_LIMITED",
            retry_after=retry_after,
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"{service} rejected credentials (HTTP {status_code}){suffix}",
            error_code="UNAUTHORIZED",
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"{service} server error (HTTP {status_code}){suffix}",
            error_code="SERVER_ERROR",
        )

    return OperationResult.permanent_error(
        f"{service} error (HTTP {status_code}){suffix}",
        error_code=f"HTTP_{status_code}",
    )


def classify_request_exception(exc: Exception) -> OperationResult:
    """Classify an exception raised while performing an HTTP request.

    Timeouts and connection problems are transient; anything else raised
    by requests (invalid URL, bad headers) is permanent.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Request timed out: {exc}", error_code="TIMEOUT"
        )
    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Connection error: {exc}", error_code="CONNECTION_ERROR"
        )
    return OperationResult.permanent_error(
        f"Request failed: {type(exc).__name__}: {exc}", error_code="REQUEST_ERROR"
    )
