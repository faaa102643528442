"""Tests for fixerio.api_client — single-request httpx transport.

HttpClient must provide:
- GET requests returning the body as text
- Exactly one request per call, including on error statuses
- Translation of every httpx failure into fixerio.ConnectionError
- Context manager protocol
- Request statistics
- Configurable timeout, headers, User-Agent
"""

import httpx
import pytest

import fixerio
from fixerio.api_client import DEFAULT_TIMEOUT, HttpClient, Transport


# ── Helpers ──────────────────────────────────────────────────────────────────


def make_client(handler, **kwargs):
    """Create an HttpClient with a mock HTTP transport.

    The handler receives an httpx.Request and returns an httpx.Response.
    This avoids real network calls.
    """
    transport = httpx.MockTransport(handler)
    return HttpClient(transport=transport, **kwargs)


def rates_handler(request):
    """Always returns 200 with a rates body."""
    return httpx.Response(200, json={"base": "EUR", "rates": {"USD": 1.1}})


# ── Basic request tests ─────────────────────────────────────────────────────


class TestGet:
    """GET requests that return the body."""

    def test_returns_body_text(self):
        client = make_client(lambda request: httpx.Response(200, text="hello world"))
        assert client.get("http://api.fixer.io/latest") == "hello world"
        client.close()

    def test_returns_json_text_unparsed(self):
        client = make_client(rates_handler)
        body = client.get("http://api.fixer.io/latest")
        assert isinstance(body, str)
        assert '"USD": 1.1' in body or '"USD":1.1' in body
        client.close()

    def test_requests_exact_url(self):
        seen = []

        def handler(request):
            seen.append(request.url)
            return httpx.Response(200, text="{}")

        client = make_client(handler)
        client.get("https://api.fixer.io/2023-01-15?base=USD&symbols=EUR,GBP")
        assert len(seen) == 1
        url = seen[0]
        assert url.scheme == "https"
        assert url.host == "api.fixer.io"
        assert url.path == "/2023-01-15"
        assert url.params["base"] == "USD"
        assert url.params["symbols"] == "EUR,GBP"
        client.close()

    def test_uses_get_method(self):
        def handler(request):
            assert request.method == "GET"
            return httpx.Response(200, text="{}")

        client = make_client(handler)
        client.get("http://api.fixer.io/latest")
        client.close()

    def test_satisfies_transport_protocol(self):
        client = make_client(rates_handler)
        assert isinstance(client, Transport)
        client.close()


# ── Error translation tests ─────────────────────────────────────────────────


class TestErrors:
    """Every transport failure surfaces as fixerio.ConnectionError."""

    def test_client_error_status(self):
        attempts = []

        def handler(request):
            attempts.append(1)
            return httpx.Response(404, text="Not Found")

        client = make_client(handler)
        with pytest.raises(fixerio.ConnectionError, match="404"):
            client.get("http://api.fixer.io/latest")
        assert len(attempts) == 1  # no retries
        client.close()

    def test_server_error_status_not_retried(self):
        attempts = []

        def handler(request):
            attempts.append(1)
            return httpx.Response(503)

        client = make_client(handler)
        with pytest.raises(fixerio.ConnectionError, match="503"):
            client.get("http://api.fixer.io/latest")
        assert len(attempts) == 1
        client.close()

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(fixerio.ConnectionError, match="Connection refused") as exc_info:
            client.get("http://api.fixer.io/latest")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        client.close()

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        with pytest.raises(fixerio.ConnectionError, match="timed out"):
            client.get("http://api.fixer.io/latest")
        client.close()

    def test_error_is_package_error(self):
        client = make_client(lambda request: httpx.Response(400))
        with pytest.raises(fixerio.FixerioError):
            client.get("http://api.fixer.io/latest")
        client.close()

    def test_get_after_close(self):
        client = make_client(rates_handler)
        client.close()
        with pytest.raises(fixerio.ConnectionError, match="closed"):
            client.get("http://api.fixer.io/latest")


# ── Context manager tests ────────────────────────────────────────────────────


class TestContextManager:
    """Context manager protocol."""

    def test_works_as_context_manager(self):
        with make_client(rates_handler) as client:
            assert "rates" in client.get("http://api.fixer.io/latest")

    def test_close_is_idempotent(self):
        client = make_client(rates_handler)
        client.close()
        client.close()  # should not raise


# ── Stats tests ──────────────────────────────────────────────────────────────


class TestStats:
    """Request statistics."""

    def test_request_count_increments(self):
        client = make_client(rates_handler)
        assert client.stats["requests"] == 0
        client.get("http://api.fixer.io/latest")
        assert client.stats["requests"] == 1
        client.get("http://api.fixer.io/2020-01-01")
        assert client.stats["requests"] == 2
        client.close()

    def test_failed_requests_are_counted(self):
        client = make_client(lambda request: httpx.Response(500))
        with pytest.raises(fixerio.ConnectionError):
            client.get("http://api.fixer.io/latest")
        assert client.stats["requests"] == 1
        client.close()


# ── Configuration tests ──────────────────────────────────────────────────────


class TestConfiguration:
    """Configurable parameters."""

    def test_custom_user_agent(self):
        def handler(request):
            assert request.headers["user-agent"] == "MyTool/1.0"
            return httpx.Response(200, text="{}")

        client = make_client(handler, user_agent="MyTool/1.0")
        client.get("http://api.fixer.io/latest")
        client.close()

    def test_custom_headers(self):
        def handler(request):
            assert request.headers["x-custom"] == "value"
            return httpx.Response(200, text="{}")

        client = make_client(handler, headers={"X-Custom": "value"})
        client.get("http://api.fixer.io/latest")
        client.close()

    def test_default_user_agent(self):
        def handler(request):
            ua = request.headers.get("user-agent", "")
            assert ua == f"fixerio-python/{fixerio.__version__}"
            return httpx.Response(200, text="{}")

        client = make_client(handler)
        client.get("http://api.fixer.io/latest")
        client.close()

    def test_default_timeout(self):
        client = make_client(rates_handler)
        assert client.timeout == DEFAULT_TIMEOUT
        client.close()

    def test_custom_timeout(self):
        client = make_client(rates_handler, timeout=5.0)
        assert client.timeout == 5.0
        client.close()
