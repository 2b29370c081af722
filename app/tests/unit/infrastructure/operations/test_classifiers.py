"""Unit tests for HTTP error classifiers and OperationResult."""

from unittest.mock import MagicMock

import pytest
import requests

from infrastructure.operations import (
    OperationResult,
    OperationStatus,
    classify_http_response,
    classify_request_exception,
)


def _response(status_code, json_body=None, headers=None, text=""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


@pytest.mark.unit
class TestClassifyHttpResponse:
    def test_success_returns_json_body(self):
        result = classify_http_response(_response(200, {"id": "msg_1"}))

        assert result.is_success
        assert result.data == {"id": "msg_1"}

    def test_success_without_json(self):
        result = classify_http_response(_response(204))

        assert result.is_success
        assert result.data is None

    def test_rate_limited_uses_retry_after(self):
        result = classify_http_response(
            _response(429, headers={"Retry-After": "30"}), service="Email API"
        )

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.retry_after == 30
        assert result.is_retryable

    def test_rate_limited_malformed_header_uses_default(self):
        result = classify_http_response(_response(429, headers={"Retry-After": "soon"}))

        assert result.retry_after == 60

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_unauthorized(self, status_code):
        result = classify_http_response(_response(status_code, {"message": "bad key"}))

        assert result.status == OperationStatus.UNAUTHORIZED
        assert "bad key" in result.message

    def test_server_error_is_transient(self):
        result = classify_http_response(_response(503, text="upstream down"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "SERVER_ERROR"
        assert "upstream down" in result.message

    def test_client_error_is_permanent(self):
        result = classify_http_response(
            _response(422, {"error": {"message": "invalid recipient"}})
        )

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "HTTP_422"
        assert "invalid recipient" in result.message
        assert not result.is_retryable


@pytest.mark.unit
class TestClassifyRequestException:
    def test_timeout_is_transient(self):
        result = classify_request_exception(requests.Timeout("read timed out"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "TIMEOUT"

    def test_connection_error_is_transient(self):
        result = classify_request_exception(requests.ConnectionError("refused"))

        assert result.error_code == "CONNECTION_ERROR"

    def test_other_errors_are_permanent(self):
        result = classify_request_exception(requests.exceptions.InvalidURL("bad"))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "REQUEST_ERROR"


@pytest.mark.unit
class TestOperationResult:
    def test_not_configured(self):
        result = OperationResult.not_configured("missing key")

        assert result.status == OperationStatus.NOT_CONFIGURED
        assert result.error_code == "NOT_CONFIGURED"
        assert not result.is_success
        assert not result.is_retryable
