"""HTTP transport used by the exchange client.

Provides the ``Transport`` protocol that ``Exchange`` depends on, and
``HttpClient``, the default httpx-backed implementation.

Any object with a ``get(url)`` method returning the response body can
stand in for ``HttpClient``, which keeps the client testable without a
network. ``HttpClient`` itself accepts an ``httpx.BaseTransport`` so the
HTTP layer can be exercised against ``httpx.MockTransport``.

Usage::

    from fixerio.api_client import HttpClient

    with HttpClient(timeout=10) as http:
        body = http.get("https://api.fixer.io/latest?base=USD")
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import httpx

from fixerio import __version__
from fixerio.exceptions import ConnectionError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"fixerio-python/{__version__}"


@runtime_checkable
class Transport(Protocol):
    """Anything able to perform a GET and return the response body."""

    def get(self, url: str) -> str | bytes: ...


class HttpClient:
    """Single-request HTTP client backed by ``httpx.Client``.

    Issues exactly one request per call: no retries, no rate limiting and
    no caching. All httpx failures, including error status codes, are
    raised as ``fixerio.ConnectionError``.

    Args:
        timeout: Request timeout in seconds (default 30).
        user_agent: User-Agent header string.
        headers: Additional HTTP headers to include in all requests.
        transport: Optional ``httpx.BaseTransport`` for testing
            (e.g., ``httpx.MockTransport``). If provided, used instead
            of the default network transport.

    Examples:
        >>> with HttpClient() as http:
        ...     body = http.get("http://api.fixer.io/latest?base=EUR")
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._request_count = 0

        req_headers = {"User-Agent": self.user_agent}
        if headers:
            req_headers.update(headers)

        client_kwargs = {
            "timeout": timeout,
            "headers": req_headers,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport

        self._http = httpx.Client(**client_kwargs)

    # ── Public API ────────────────────────────────────────────────────────

    def get(self, url: str) -> str:
        """Make a GET request and return the response body as text.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Response body as a string.

        Raises:
            ConnectionError: If the request fails to complete or the
                server answers with a 4xx/5xx status.
        """
        if self._http is None:
            raise ConnectionError("HTTP client is closed")

        self._request_count += 1
        try:
            response = self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug(f"GET {url} failed: {exc}")
            raise ConnectionError(str(exc)) from exc
        return response.text

    @property
    def stats(self) -> dict:
        """Return request statistics.

        Returns:
            Dict with key ``requests`` (number of HTTP requests attempted).
        """
        return {"requests": self._request_count}

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._http:
            self._http.close()
            self._http = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
