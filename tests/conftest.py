"""
Pytest configuration and fixtures shared by the client tests
"""

import pytest

from eventbrite.config import Config
from tests.test_helpers import create_mock_transport


@pytest.fixture
def test_config():
    """Config with the bundled defaults, independent of files on disk"""
    return Config(
        {
            "api": {
                "eventbrite": {
                    "base_url": "https://www.eventbriteapi.com/v3/",
                    "current_user_endpoint": "users/me/",
                },
                "timeouts": {"api_request": 30},
                "transport": {"max_workers": 2},
            }
        }
    )


@pytest.fixture
def json_transport():
    """Transport answering 200 with a small JSON document"""
    return create_mock_transport(
        status_code=200,
        body='{"test":"json"}',
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def html_transport():
    """Transport answering 201 with an HTML payload"""
    return create_mock_transport(
        status_code=201,
        body="<html></html>",
        headers={"Content-Type": "text/html"},
    )
