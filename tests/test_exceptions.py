"""
Tests for exception handling
"""

import pytest

from eventbrite.exceptions import (
    ConfigurationError,
    EventbriteError,
    InvalidVerbError,
    TransportError,
)
from eventbrite.models import ApiRequest


class TestHierarchy:
    """All client errors can be caught with one except clause"""

    @pytest.mark.parametrize(
        "error",
        [ConfigurationError("bad"), InvalidVerbError("PUNT"), TransportError("down")],
    )
    def test_subclasses_eventbrite_error(self, error):
        assert isinstance(error, EventbriteError)

    def test_transport_error_is_not_os_error(self):
        """Callers catching OSError should not accidentally catch wrapped errors"""
        assert not issubclass(TransportError, OSError)


class TestConfigurationError:
    """Test ConfigurationError exception"""

    def test_with_config_key(self):
        error = ConfigurationError("must be a positive number", config_key="timeout")

        assert error.config_key == "timeout"
        assert str(error) == "Configuration error for 'timeout': must be a positive number"

    def test_without_config_key(self):
        error = ConfigurationError("Unknown option(s): foo")

        assert error.config_key is None
        assert str(error) == "Configuration error: Unknown option(s): foo"


class TestInvalidVerbError:
    """Test InvalidVerbError exception"""

    def test_stores_verb(self):
        error = InvalidVerbError("PUNT")

        assert error.verb == "PUNT"
        assert "PUNT" in str(error)


class TestTransportError:
    """Test TransportError exception"""

    def test_with_request(self):
        """The message should say which request failed"""
        request = ApiRequest(verb="GET", url="https://www.eventbriteapi.com/v3/users/me/")
        error = TransportError("Connection refused", request)

        assert error.request is request
        assert str(error) == (
            "GET https://www.eventbriteapi.com/v3/users/me/ failed: Connection refused"
        )

    def test_without_request(self):
        error = TransportError("Connection refused")

        assert error.request is None
        assert str(error) == "Connection refused"
