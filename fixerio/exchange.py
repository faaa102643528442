"""fixer.io exchange rate client.

``Exchange`` accumulates request parameters through chained calls, then
``get()`` issues one GET request and returns the ``rates`` object of the
response::

    from fixerio import Exchange

    rates = (
        Exchange()
        .secure()
        .base("USD")
        .symbols("EUR", "GBP")
        .historical("January 15, 2023")
        .get()
    )
    # {"EUR": 0.92, "GBP": 0.82}

URL construction (``build_url``) and response parsing (``parse_rates``)
are plain functions of their inputs and perform no I/O.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date

import httpx

from fixerio.api_client import HttpClient, Transport
from fixerio.dates import normalize_date
from fixerio.exceptions import ConfigurationError, ConnectionError, ResponseError
from fixerio.models import ExchangeConfig, Scheme

logger = logging.getLogger(__name__)

API_HOST = "api.fixer.io"


def build_url(config: ExchangeConfig, host: str = API_HOST) -> str:
    """Form the request URL for a configuration.

    Args:
        config: Accumulated request parameters.
        host: API host name (default ``api.fixer.io``).

    Returns:
        Absolute URL such as
        ``http://api.fixer.io/latest?base=EUR&symbols=USD,GBP``.
    """
    url = f"{Scheme(config.protocol).value}://{host}/{config.endpoint}"
    url += f"?base={config.base}"
    if config.symbols:
        url += "&symbols=" + ",".join(config.symbols)
    return url


def parse_rates(body: str | bytes) -> dict[str, float]:
    """Extract the ``rates`` object from a response body.

    Args:
        body: Raw response body containing JSON.

    Returns:
        Mapping of currency code to rate, exactly as sent by the API.

    Raises:
        ResponseError: If the body is not JSON, or has no ``rates``
            object.
    """
    try:
        data = json.loads(body)
    except (ValueError, TypeError, RecursionError) as exc:
        raise ResponseError() from exc

    rates = data.get("rates") if isinstance(data, dict) else None
    if not isinstance(rates, dict):
        raise ResponseError()
    return rates


class Exchange:
    """Builder and client for one exchange rate query.

    Configuration methods mutate the instance and return it, so calls can
    be chained. Configuration persists between ``get()`` calls.

    Args:
        transport: Object with a ``get(url)`` method returning the response
            body. Defaults to a new ``HttpClient``, which this instance
            then owns and closes in ``close()``. A supplied transport is
            never closed here.
        host: API host name (default ``api.fixer.io``).

    Raises:
        TypeError: If ``transport`` has no ``get`` method.
    """

    def __init__(self, transport: Transport | None = None, *, host: str = API_HOST):
        if transport is not None and not isinstance(transport, Transport):
            raise TypeError(
                f"transport must provide get(url), got {type(transport).__name__}"
            )
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpClient()
        self.host = host
        self._config = ExchangeConfig()

    @property
    def config(self) -> ExchangeConfig:
        """Current request parameters."""
        return self._config

    # ── Configuration ─────────────────────────────────────────────────────

    def secure(self) -> Exchange:
        """Use https instead of http."""
        self._config.protocol = Scheme.HTTPS
        return self

    def base(self, currency: str) -> Exchange:
        """Set the base currency.

        The code is passed through as given; unknown codes are left for
        the API to reject.

        Raises:
            ConfigurationError: If ``currency`` is empty.
        """
        if not currency:
            raise ConfigurationError("Base currency must not be empty")
        self._config.base = currency
        return self

    def symbols(self, *currencies: str | Iterable[str]) -> Exchange:
        """Limit the returned rates to some currencies.

        Accepts either a list of arguments or a single sequence, so
        ``symbols("USD", "GBP")`` and ``symbols(["USD", "GBP"])`` are
        equivalent. Called with nothing (or an empty sequence) it removes
        the filter and all currencies are returned.
        """
        if len(currencies) == 1 and not isinstance(currencies[0], str):
            return self.set_symbols(currencies[0])
        return self.set_symbols(currencies)

    def set_symbols(self, currencies: Iterable[str] | None) -> Exchange:
        """Replace the currency filter with ``currencies``, in order.

        A single string is taken as one currency code.
        """
        if isinstance(currencies, str):
            currencies = [currencies]
        self._config.symbols = list(currencies) if currencies else []
        return self

    def historical(self, when: str | date) -> Exchange:
        """Request rates for a past date instead of the latest ones.

        Args:
            when: Date expression (``"2023-01-15"``, ``"January 15, 2023"``,
                ``"yesterday"``) or a ``date``.

        Raises:
            ConfigurationError: If ``when`` is not a readable date. The
                existing configuration is left untouched.
        """
        self._config.date = normalize_date(when)
        return self

    def latest(self) -> Exchange:
        """Drop a historical date set earlier."""
        self._config.date = None
        return self

    # ── Request ───────────────────────────────────────────────────────────

    def build_url(self) -> str:
        """URL that ``get()`` would request with the current configuration."""
        return build_url(self._config, self.host)

    def get(self) -> dict[str, float]:
        """Make the request and return the rates.

        Returns:
            Mapping of currency code to rate relative to the base currency.

        Raises:
            ConnectionError: If the request fails or times out, or the
                server answers with an error status.
            ResponseError: If the response body is malformed.
        """
        url = self.build_url()
        logger.debug(f"GET {url}")

        # Callers only need to handle one exception type for transport
        # failures, whichever transport produced them
        try:
            body = self.transport.get(url)
        except ConnectionError:
            raise
        except (httpx.HTTPError, OSError) as exc:
            logger.debug(f"GET {url} failed: {exc}")
            raise ConnectionError(str(exc)) from exc

        return parse_rates(body)

    def close(self) -> None:
        """Close the transport if this instance created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
