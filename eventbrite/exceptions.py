"""
Custom exceptions for the Eventbrite API client
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ApiRequest


class EventbriteError(Exception):
    """Base exception for all Eventbrite client errors"""

    pass


class ConfigurationError(EventbriteError):
    """
    Raised when the client cannot be constructed from the given configuration.

    This includes:
    - Missing or empty OAuth token
    - Invalid timeout or base URL values
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")


class InvalidVerbError(EventbriteError):
    """Raised when a call uses an HTTP verb outside GET/POST/PUT/PATCH/DELETE"""

    def __init__(self, verb: object):
        self.verb = verb
        super().__init__(f"Unrecognised HTTP verb: {verb!r}")


class TransportError(EventbriteError):
    """
    Raised when no response could be obtained from the API.

    This only really happens when the network is interrupted or the
    connection is refused. HTTP error statuses are NOT transport errors; they
    come back as normal responses.
    """

    def __init__(self, message: str, request: "ApiRequest | None" = None):
        self.request = request
        if request is not None:
            super().__init__(f"{request.verb} {request.url} failed: {message}")
        else:
            super().__init__(message)
