"""Integration tests against a local HTTP server"""

from __future__ import annotations

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from retryable_http.domain.checks import status_code_check
from retryable_http.domain.errors import UnsuccessfulStatusCodeError
from retryable_http.infrastructure.executor import (
    new_executor,
    with_acceptability_check,
    with_delay,
    with_max_attempts,
    with_transport,
)
from retryable_http.infrastructure.transport import prepare_request


class _ScriptedHandler(BaseHTTPRequestHandler):
    """Answers with the next scripted status code; the last one repeats."""

    def do_GET(self):
        server = self.server
        with server.lock:
            server.hits += 1
            hits = server.hits
            status = server.statuses[min(hits, len(server.statuses)) - 1]
        body = f"attempt {hits}".encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _ScriptedHandler)
    httpd.lock = threading.Lock()
    httpd.hits = 0
    httpd.statuses = [200]
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield httpd
    finally:
        httpd.shutdown()
        httpd.server_close()


def _session() -> requests.Session:
    session = requests.Session()
    session.trust_env = False  # ignore proxy settings from the environment
    return session


def _url(httpd) -> str:
    host, port = httpd.server_address[:2]
    return f"http://{host}:{port}/"


def test_default_executor_status_ok(server):
    """Test a default executor against a server always returning 200"""
    with _session() as session:
        executor = new_executor(with_transport(session))
        response, error = executor.execute(prepare_request("GET", _url(server), transport=session))

    assert error is None
    assert response.status_code == 200
    assert server.hits == 1


def test_default_executor_bad_request(server):
    """Test a default executor against a server always returning 400"""
    server.statuses = [400]
    with _session() as session:
        executor = new_executor(with_transport(session))
        response, error = executor.execute(prepare_request("GET", _url(server), transport=session))

    assert isinstance(error, UnsuccessfulStatusCodeError)
    assert response is not None
    assert response.status_code == 400


def test_retries_until_status_ok(server):
    """Test 400, 400, 200 with three attempts and a 100ms delay"""
    server.statuses = [400, 400, 200]
    with _session() as session:
        executor = new_executor(
            with_transport(session),
            with_max_attempts(3),
            with_delay(0.1),
            with_acceptability_check(status_code_check(200, 200)),
        )
        start = time.monotonic()
        response, error = executor.execute(prepare_request("GET", _url(server), transport=session), timeout=5)
        elapsed = time.monotonic() - start

    assert error is None
    assert response.status_code == 200
    assert response.text == "attempt 3"
    assert server.hits == 3
    assert elapsed >= 0.2


def test_connection_refused_on_every_attempt():
    """Test that connection errors are retried and the last one returned"""
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _ScriptedHandler)
    url = _url(httpd)
    httpd.server_close()

    with _session() as session:
        executor = new_executor(with_transport(session), with_max_attempts(2), with_delay(0.05))
        start = time.monotonic()
        response, error = executor.execute(prepare_request("GET", url, transport=session), timeout=2)
        elapsed = time.monotonic() - start

    assert response is None
    assert isinstance(error, requests.exceptions.ConnectionError)
    assert elapsed >= 0.05
