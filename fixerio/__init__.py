"""Client for the fixer.io foreign exchange rates API.

Builds a request for the latest or a historical set of rates, performs a
single GET through an injectable transport, and returns the ``rates``
object of the response as a plain dict.

Example:
    >>> from fixerio import Exchange
    >>> with Exchange() as exchange:
    ...     rates = exchange.base("USD").symbols("EUR", "GBP").get()
    >>> rates["EUR"]
    0.92
"""

__version__ = "0.1.0"

from fixerio.exceptions import (
    ConfigurationError,
    ConnectionError,
    FixerioError,
    ResponseError,
)
from fixerio.models import ExchangeConfig, Scheme
from fixerio.api_client import HttpClient, Transport
from fixerio.exchange import Exchange, build_url, parse_rates
from fixerio.dates import normalize_date

__all__ = [
    # Client
    "Exchange",
    "build_url",
    "parse_rates",
    "normalize_date",
    # Configuration
    "ExchangeConfig",
    "Scheme",
    # Transport
    "HttpClient",
    "Transport",
    # Errors
    "FixerioError",
    "ConnectionError",
    "ResponseError",
    "ConfigurationError",
]
