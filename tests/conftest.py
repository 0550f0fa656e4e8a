"""
Shared test configuration and fixtures.
"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest


def build_response(json_data, status_code=200, text=None):
    """Mock httpx.Response carrying ``json_data``; an Exception makes .json() raise."""
    response = Mock()
    response.status_code = status_code
    response.text = text or str(json_data)
    response.raise_for_status = Mock()
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


def build_status_error(status_code, text='error'):
    error_response = Mock()
    error_response.status_code = status_code
    error_response.text = text
    return httpx.HTTPStatusError('HTTP error', request=Mock(), response=error_response)


@pytest.fixture
def mock_client():
    """Mock httpx.AsyncClient for testing"""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
def json_response():
    return build_response


@pytest.fixture
def status_error():
    return build_status_error
