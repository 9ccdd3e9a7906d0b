"""
Client for the Eventbrite REST API (v3)
https://www.eventbrite.com/platform/api

A lightweight wrapper: every call is authenticated with a bearer token, sent
through an injectable transport and reduced to a {code, headers, body} shape.
"""

import threading
from collections.abc import Mapping
from concurrent.futures import Future
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from .config import Config
from .config import config as default_config
from .exceptions import ConfigurationError, InvalidVerbError, TransportError
from .http_client import HttpClient, Transport
from .logging_config import get_module_logger
from .models import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    HTTP_VERBS,
    ApiRequest,
    ClientConfig,
    NormalizedResponse,
    RequestOptions,
    merge_headers,
    merge_options,
)
from .response import normalize_response

logger = get_module_logger("client")

VERSION = "0.1.0"

CURRENT_USER_ENDPOINT = "users/me/"

_CONFIG_KEYS = ("base_url", "headers", "timeout", "transport")


class EventbriteClient:
    """
    Eventbrite API client

    Diagnostics (last_request / last_response) are kept per thread, so a
    client can be shared between threads without calls seeing each other's
    requests.
    """

    def __init__(
        self,
        token: str,
        config: Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        config_obj: Config | None = None,
    ):
        """
        Initialize the client

        Args:
            token: The OAuth token to authenticate requests with
            config: Optional overrides: base_url, headers, timeout, transport
            transport: Transport to send requests through (takes precedence
                       over config["transport"]; an HttpClient if neither)
            config_obj: Config object (optional, uses global config if None)

        Raises:
            ConfigurationError: Missing token or invalid overrides
        """
        self._settings = config_obj or default_config
        self.config = self._build_config(token, dict(config or {}), transport)
        self.transport: Transport = self.config.transport
        # Injected transports belong to the caller, close() leaves them open
        self._owns_transport = self.transport is None
        if self.transport is None:
            self.transport = HttpClient(
                timeout=self.config.timeout,
                max_workers=self._settings.get("api.transport.max_workers", 4),
            )
        self._diagnostics = threading.local()

    def _build_config(
        self, token: str, overrides: dict[str, Any], transport: Transport | None
    ) -> ClientConfig:
        if not isinstance(token, str) or not token.strip():
            raise ConfigurationError(
                "An OAuth token is required to connect to the Eventbrite API.", "token"
            )

        unknown = sorted(set(overrides) - set(_CONFIG_KEYS))
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

        base_url = overrides.get("base_url") or self._settings.get(
            "api.eventbrite.base_url", DEFAULT_BASE_URL
        )
        timeout = overrides.get("timeout", self._settings.get("api.timeouts.api_request"))
        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
            raise ConfigurationError(f"must be a positive number, got {timeout!r}", "timeout")

        # Added last so they're always there and can't be overwritten
        headers = merge_headers(
            overrides.get("headers"),
            {
                "User-Agent": f"eventbrite-python/{VERSION} {requests.utils.default_user_agent()}",
                "Authorization": f"Bearer {token}",
            },
        )

        return ClientConfig(
            token=token,
            base_url=base_url,
            headers=headers,
            timeout=float(timeout),
            transport=transport if transport is not None else overrides.get("transport"),
        )

    # Verb shortcuts

    def get(self, endpoint, params=None, body=None, headers=None, options=None):
        """Shortcut for make_request("GET", ...)"""
        return self.make_request("GET", endpoint, params, body, headers, options)

    def post(self, endpoint, params=None, body=None, headers=None, options=None):
        """Shortcut for make_request("POST", ...)"""
        return self.make_request("POST", endpoint, params, body, headers, options)

    def put(self, endpoint, params=None, body=None, headers=None, options=None):
        """Shortcut for make_request("PUT", ...)"""
        return self.make_request("PUT", endpoint, params, body, headers, options)

    def patch(self, endpoint, params=None, body=None, headers=None, options=None):
        """Shortcut for make_request("PATCH", ...)"""
        return self.make_request("PATCH", endpoint, params, body, headers, options)

    def delete(self, endpoint, params=None, body=None, headers=None, options=None):
        """Shortcut for make_request("DELETE", ...)"""
        return self.make_request("DELETE", endpoint, params, body, headers, options)

    def request(self, method: str, endpoint: str, *args, **kwargs):
        """
        Call any supported verb by name, e.g. client.request("patch", "events/1/")

        Raises:
            InvalidVerbError: method is not GET/POST/PUT/PATCH/DELETE
        """
        if not self.valid_method(method):
            raise InvalidVerbError(method)
        return self.make_request(method.upper(), endpoint, *args, **kwargs)

    def make_request(
        self,
        verb: str,
        endpoint: str,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ):
        """
        A slightly friendlier wrapper around call()

        Splits the options bag into separate parameters. params and headers
        are merged over the ones already in options (explicit values win),
        body replaces any body in options.

        Args:
            verb: HTTP verb
            endpoint: Path relative to the base URL
            params: Query string parameters
            body: Request body (dicts and lists are sent as JSON)
            headers: Extra headers for this request
            options: Pre-existing RequestOptions or options dict

        Returns:
            NormalizedResponse, or the transport response if raw_response is set
        """
        return self.call(verb, endpoint, merge_options(options, params, body, headers))

    @staticmethod
    def valid_method(http_method: Any) -> bool:
        """Checks if the HTTP method is one the client supports (case-insensitive)"""
        return isinstance(http_method, str) and http_method.upper() in HTTP_VERBS

    def call(
        self,
        verb: str,
        endpoint: str,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ):
        """
        Make the call to Eventbrite

        Non-2xx statuses are returned like any other response.

        Args:
            verb: GET, POST, PUT, PATCH or DELETE (any case)
            endpoint: Path relative to the base URL, may carry a query string
            options: RequestOptions or options dict

        Returns:
            NormalizedResponse, or the untouched transport response when
            options.raw_response is set

        Raises:
            InvalidVerbError: Unsupported verb (the transport is not called)
            TransportError: No response could be obtained
        """
        opts = RequestOptions.from_value(options)
        request = self._build_request(verb, endpoint, opts)
        self._diagnostics.last_request = request

        try:
            response = self.transport.send(request)
        except OSError as e:
            # requests.RequestException is an OSError too; TransportError passes through
            logger.error(f"{request.verb} {request.url} failed: {e}")
            raise TransportError(str(e), request) from e

        return self._finish(request, response, opts)

    def call_async(
        self,
        verb: str,
        endpoint: str,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ) -> Future:
        """
        Like call(), but returns at once with a Future

        The request is handed to the transport's send_async(). The future
        resolves to what call() would have returned, or raises what it would
        have raised. Only last_request is recorded for async calls.

        Raises:
            InvalidVerbError: Unsupported verb (raised immediately)
            ConfigurationError: The transport has no send_async()
        """
        opts = RequestOptions.from_value(options)
        request = self._build_request(verb, endpoint, opts)

        send_async = getattr(self.transport, "send_async", None)
        if send_async is None:
            raise ConfigurationError("does not support asynchronous sends", "transport")

        self._diagnostics.last_request = request
        outer: Future = Future()

        def _resolve(inner: Future) -> None:
            if inner.cancelled():
                outer.cancel()
                return
            error = inner.exception()
            if error is not None:
                if isinstance(error, OSError):
                    wrapped = TransportError(str(error), request)
                    wrapped.__cause__ = error
                    error = wrapped
                outer.set_exception(error)
                return
            try:
                outer.set_result(self._finish(request, inner.result(), opts, record=False))
            except Exception as e:
                outer.set_exception(e)

        send_async(request).add_done_callback(_resolve)
        return outer

    def _build_request(self, verb: str, endpoint: str, options: RequestOptions) -> ApiRequest:
        if not self.valid_method(verb):
            raise InvalidVerbError(verb)

        return ApiRequest(
            verb=verb.upper(),
            url=self._build_url(endpoint, options.query),
            headers=merge_headers(self.config.headers, options.headers),
            body=options.body,
            protocol_version=options.protocol_version,
        )

    def _build_url(self, endpoint: str, query: Mapping[str, Any]) -> str:
        if urlsplit(endpoint).scheme:
            url = endpoint
        else:
            url = f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        if not query:
            return url

        scheme, netloc, path, existing, fragment = urlsplit(url)
        # Repeated keys in the endpoint survive unless params replace them
        kept = [(k, v) for k, v in parse_qsl(existing, keep_blank_values=True) if k not in query]
        encoded = "&".join(part for part in (urlencode(kept), urlencode(query, doseq=True)) if part)
        return urlunsplit((scheme, netloc, path, encoded, fragment))

    def _finish(self, request: ApiRequest, response: Any, options: RequestOptions, record=True):
        if response is None:
            # This only really happens when the network is interrupted
            raise TransportError("A bad response was received.", request)
        if record:
            self._diagnostics.last_response = response

        logger.debug(f"{request.verb} {request.url} -> {response.status_code}")

        if options.raw_response:
            return response
        return normalize_response(response)

    def can_connect(self) -> bool:
        """
        Checks if the client can connect to the Eventbrite API

        Calls the current user endpoint: True for a 2xx status, otherwise
        False. Transport failures are raised, not turned into False.
        """
        endpoint = self._settings.get("api.eventbrite.current_user_endpoint", CURRENT_USER_ENDPOINT)
        response: NormalizedResponse = self.get(endpoint)
        return str(response.code).startswith("2")

    @property
    def last_request(self) -> ApiRequest | None:
        """The last request built on this thread"""
        return getattr(self._diagnostics, "last_request", None)

    @property
    def last_response(self) -> Any:
        """The last raw transport response received on this thread"""
        return getattr(self._diagnostics, "last_response", None)

    def get_last_request(self) -> ApiRequest | None:
        return self.last_request

    def get_last_response(self) -> Any:
        return self.last_response

    def close(self) -> None:
        """Close the HttpClient this client created; injected transports are left open"""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "EventbriteClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
