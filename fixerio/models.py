"""Configuration model for exchange rate requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_BASE = "EUR"


class Scheme(str, Enum):
    """URL scheme used to reach the API."""

    HTTP = "http"
    HTTPS = "https"


@dataclass
class ExchangeConfig:
    """Accumulated request parameters for one ``Exchange`` instance.

    Args:
        protocol: URL scheme, plain http unless ``secure()`` was called.
        base: Currency all returned rates are relative to.
        symbols: Currencies to return, in request order. Empty means all.
        date: Historical date as ``YYYY-MM-DD``, or None for latest rates.
    """

    protocol: Scheme = Scheme.HTTP
    base: str = DEFAULT_BASE
    symbols: list[str] = field(default_factory=list)
    date: str | None = None

    @property
    def is_historical(self) -> bool:
        """Whether the request targets a specific past date."""
        return self.date is not None

    @property
    def endpoint(self) -> str:
        """Path segment of the request: the date, or ``latest``."""
        return self.date if self.is_historical else "latest"
