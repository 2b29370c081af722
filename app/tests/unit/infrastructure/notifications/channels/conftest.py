"""Fixtures for channel provider tests."""

from unittest.mock import MagicMock

import pytest
import requests


@pytest.fixture
def mock_response_factory():
    """Factory for MagicMock ``requests.Response`` objects.

    Example:
        response = mock_response_factory(200, {"id": "msg_1"})
        rate_limited = mock_response_factory(429, headers={"Retry-After": "30"})
    """

    def _factory(status_code=200, json_body=None, headers=None, text=""):
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.headers = headers or {}
        response.text = text
        if json_body is None:
            response.json.side_effect = ValueError("no json")
        else:
            response.json.return_value = json_body
        return response

    return _factory


@pytest.fixture
def mock_session(mock_response_factory):
    session = MagicMock(spec=requests.Session)
    session.post.return_value = mock_response_factory(200, {"id": "msg_123"})
    return session
