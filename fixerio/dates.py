"""Normalization of date expressions for historical queries.

Accepts ISO dates, free-form expressions such as ``"January 15, 2023"``
or ``"15 Jan 2023"``, relative expressions, and ``date``/``datetime``
objects. Everything is reduced to the ``YYYY-MM-DD`` form the API expects.

Numeric dates separated by dashes or dots (``"01-12-2023"``,
``"01.12.2023"``) are read day first; slash dates (``"12/01/2023"``) are
read month first.

Relative expressions supported:

- keywords ``today``, ``now``, ``yesterday``, ``tomorrow``
- ``"<n> <unit> ago"``, e.g. ``"3 days ago"``, ``"1 week ago"``
- signed offsets, e.g. ``"-1 day"``, ``"+2 weeks"``

where ``<unit>`` is day, week, month or year (singular or plural).
Weekday expressions such as ``"last friday"`` are not supported and
raise ``ConfigurationError``.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from fixerio.exceptions import ConfigurationError

DATE_FORMAT = "%Y-%m-%d"

# Offsets in days from the current local date
_RELATIVE_DAYS = {
    "today": 0,
    "now": 0,
    "yesterday": -1,
    "tomorrow": 1,
}

_DAY_FIRST_RE = re.compile(r"^\d{1,2}[-.]\d{1,2}[-.]\d{4}$")
_AGO_RE = re.compile(r"^(\d+)\s+(day|week|month|year)s?\s+ago$")
_OFFSET_RE = re.compile(r"^([+-])\s*(\d+)\s+(day|week|month|year)s?$")


def _shift(reference: date, amount: int, unit: str) -> date:
    return reference + relativedelta(**{f"{unit}s": amount})


def _parse_relative(text: str, reference: date) -> date | None:
    """Resolve a relative expression, or None if ``text`` is not one."""
    offset = _RELATIVE_DAYS.get(text)
    if offset is not None:
        return _shift(reference, offset, "day")

    match = _AGO_RE.match(text)
    if match:
        return _shift(reference, -int(match.group(1)), match.group(2))

    match = _OFFSET_RE.match(text)
    if match:
        sign = -1 if match.group(1) == "-" else 1
        return _shift(reference, sign * int(match.group(2)), match.group(3))
    return None


def normalize_date(value: str | date, today: date | None = None) -> str:
    """Convert a date expression to ``YYYY-MM-DD``.

    Args:
        value: A ``date``/``datetime`` or a string date expression.
        today: Reference date for relative expressions. Defaults to the
            current local date.

    Returns:
        The calendar date formatted as ``YYYY-MM-DD``.

    Raises:
        ConfigurationError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date().strftime(DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid date: {value!r}")

    text = value.strip()
    if not text:
        raise ConfigurationError("Invalid date: empty expression")

    relative = _parse_relative(" ".join(text.lower().split()), today or date.today())
    if relative is not None:
        return relative.strftime(DATE_FORMAT)

    try:
        parsed = date_parser.parse(text, dayfirst=bool(_DAY_FIRST_RE.match(text)))
    except (ValueError, OverflowError) as exc:
        raise ConfigurationError(f"Invalid date: {value!r}") from exc
    return parsed.date().strftime(DATE_FORMAT)
