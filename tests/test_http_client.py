"""
Tests for the HttpClient transport

These tests verify that HttpClient correctly maps ApiRequest values onto a
requests.Session and wraps network failures.
"""

import threading
import time
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from eventbrite.exceptions import TransportError
from eventbrite.http_client import HttpClient
from eventbrite.models import ApiRequest
from tests.test_helpers import create_response

URL = "https://www.eventbriteapi.com/v3/users/me/"


@pytest.fixture
def session():
    mock_session = Mock()
    mock_session.request.return_value = create_response(200, "{}")
    return mock_session


class TestHttpClientSend:
    """Test HttpClient.send()"""

    def test_basic_request(self, session):
        """Should send verb, URL, headers and timeout through the session"""
        client = HttpClient(timeout=15, session=session)
        request = ApiRequest(verb="GET", url=URL, headers={"Authorization": "Bearer t"})

        response = client.send(request)

        session.request.assert_called_once_with(
            "GET", URL, headers={"Authorization": "Bearer t"}, timeout=15
        )
        assert response is session.request.return_value

    @pytest.mark.parametrize("body", [{"event": {"name": "x"}}, [1, 2]])
    def test_structured_body_sent_as_json(self, session, body):
        client = HttpClient(session=session)

        client.send(ApiRequest(verb="POST", url=URL, body=body))

        call_kwargs = session.request.call_args[1]
        assert call_kwargs["json"] == body
        assert "data" not in call_kwargs

    @pytest.mark.parametrize("body", ["name=x", b"\x00\x01"])
    def test_text_body_sent_as_data(self, session, body):
        client = HttpClient(session=session)

        client.send(ApiRequest(verb="PUT", url=URL, body=body))

        call_kwargs = session.request.call_args[1]
        assert call_kwargs["data"] == body
        assert "json" not in call_kwargs

    def test_error_status_returned(self, session):
        """4xx/5xx responses are responses, not failures"""
        session.request.return_value = create_response(500, "oops")
        client = HttpClient(session=session)

        assert client.send(ApiRequest(verb="GET", url=URL)).status_code == 500

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.Timeout("timed out"),
            requests.exceptions.TooManyRedirects("loop"),
        ],
    )
    def test_request_exceptions_wrapped(self, session, error):
        session.request.side_effect = error
        client = HttpClient(session=session)
        request = ApiRequest(verb="GET", url=URL)

        with pytest.raises(TransportError) as exc_info:
            client.send(request)

        assert exc_info.value.request is request
        assert exc_info.value.__cause__ is error

    @patch("eventbrite.http_client.requests.Session")
    def test_creates_session_when_none_given(self, mock_session_class):
        client = HttpClient()

        assert client.session is mock_session_class.return_value
        assert client.timeout == 30.0


class TestHttpClientAsync:
    """Test send_async() and close()"""

    def test_send_async_returns_future(self, session):
        client = HttpClient(session=session, max_workers=1)

        future = client.send_async(ApiRequest(verb="GET", url=URL))

        assert future.result(timeout=5) is session.request.return_value
        client.close()

    def test_send_async_failure(self, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        client = HttpClient(session=session, max_workers=1)

        future = client.send_async(ApiRequest(verb="GET", url=URL))

        with pytest.raises(TransportError):
            future.result(timeout=5)
        client.close()

    @patch("eventbrite.http_client.ThreadPoolExecutor")
    def test_concurrent_first_sends_share_one_executor(self, mock_executor_class, session):
        """Racing first calls to send_async() should create a single executor"""

        def slow_executor(*args, **kwargs):
            time.sleep(0.05)
            return MagicMock()

        mock_executor_class.side_effect = slow_executor
        client = HttpClient(session=session)
        start = threading.Barrier(4)

        def send():
            start.wait()
            client.send_async(ApiRequest(verb="GET", url=URL))

        workers = [threading.Thread(target=send) for _ in range(4)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        assert mock_executor_class.call_count == 1

    def test_close_releases_session(self, session):
        with HttpClient(session=session):
            pass

        session.close.assert_called_once()
