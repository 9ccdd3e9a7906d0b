"""
Eventbrite API client - bearer-token authenticated calls with normalized responses
"""

from .client import CURRENT_USER_ENDPOINT, VERSION, EventbriteClient
from .exceptions import ConfigurationError, EventbriteError, InvalidVerbError, TransportError
from .http_client import HttpClient, Transport
from .models import (
    ApiRequest,
    ClientConfig,
    NormalizedResponse,
    RequestOptions,
    merge_headers,
    merge_options,
)

__version__ = VERSION

__all__ = [
    "CURRENT_USER_ENDPOINT",
    "ApiRequest",
    "ClientConfig",
    "ConfigurationError",
    "EventbriteClient",
    "EventbriteError",
    "HttpClient",
    "InvalidVerbError",
    "NormalizedResponse",
    "RequestOptions",
    "Transport",
    "TransportError",
    "merge_headers",
    "merge_options",
]
