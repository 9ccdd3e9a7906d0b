"""HTTP transport abstraction for dependency injection and testability."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Protocol

import requests

from .exceptions import TransportError
from .logging_config import get_module_logger
from .models import DEFAULT_TIMEOUT, ApiRequest

logger = get_module_logger("http_client")


class Transport(Protocol):
    """
    What EventbriteClient needs from an HTTP client.

    send() returns an object exposing status_code, headers and text, or
    raises TransportError when no response could be obtained. Any object
    with this method can be injected, which is how tests run without a
    network.
    """

    def send(self, request: ApiRequest) -> Any: ...


class HttpClient:
    """
    Default transport, backed by a requests.Session.

    This abstraction enables:
    - Dependency injection for testing
    - Connection reuse across calls
    - A single place where the timeout is applied
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        max_workers: int = 4,
    ):
        """
        Args:
            timeout: Request timeout in seconds, applied to every send()
            session: Pre-configured requests.Session (a new one if None)
            max_workers: Threads available to send_async()
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    def send(self, request: ApiRequest) -> requests.Response:
        """
        Send a request and return the response, whatever its status.

        dict and list bodies are sent as JSON, everything else as-is.

        Args:
            request: Request built by EventbriteClient.call()

        Returns:
            requests.Response object

        Raises:
            TransportError: Connection refused, interrupted, timed out, ...
        """
        kwargs: dict[str, Any] = {"headers": request.headers, "timeout": self.timeout}
        if isinstance(request.body, dict | list):
            kwargs["json"] = request.body
        elif request.body is not None:
            kwargs["data"] = request.body

        try:
            return self.session.request(request.verb, request.url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error on {request.verb} {request.url}: {e}")
            raise TransportError(str(e), request) from e

    def send_async(self, request: ApiRequest) -> Future:
        """
        Send a request on a worker thread.

        Returns:
            Future resolving to what send() returns (or raising what it raises)
        """
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="eventbrite"
                )
            return self._executor.submit(self.send, request)

    def close(self) -> None:
        """Wait for pending async sends, then release pooled connections."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
