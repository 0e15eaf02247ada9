"""Parsing of the CNB daily rate feed.

The feed is newline-separated, pipe-delimited text::

    17.10.2026 #201
    země|měna|množství|kód|kurz
    Austrálie|dolar|1|AUD|15,216
    Maďarsko|forint|100|HUF|7,050

Rates are quoted in CZK per `množství` units of the foreign currency; the
table produced here holds the inverse (foreign units per one CZK).
"""

from __future__ import annotations

import math
import re
from typing import Final, NamedTuple

from ..core.models import BASE_CURRENCY, FeedHeader, RateTable
from ..core.utils import parse_decimal

HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(r"země\|měna\|množství\|kód\|kurz")
_ISSUE_LINE: Final[re.Pattern[str]] = re.compile(
    r"^(?P<date>\d{1,2}\.\d{1,2}\.\d{4})(?:\s*#\s*(?P<seq>\d+))?"
)

MIN_FIELDS: Final[int] = 5


class FeedRow(NamedTuple):
    currency_code: str
    quantity: float
    rate: float


def is_header_or_empty_line(line: str) -> bool:
    return not line or bool(HEADER_PATTERN.search(line.strip())) or "|" not in line


def parse_line(line: str) -> FeedRow | None:
    """Extract code, quantity and rate from one data line.

    Returns None for rows with too few fields or non-numeric values.
    """
    fields = line.split("|")
    if len(fields) < MIN_FIELDS:
        return None

    try:
        quantity = parse_decimal(fields[2])
        rate = parse_decimal(fields[4])
    except ValueError:
        return None
    if not math.isfinite(quantity) or not math.isfinite(rate) or rate == 0:
        return None

    return FeedRow(currency_code=fields[3].strip(), quantity=quantity, rate=rate)


def per_unit_rate(row: FeedRow) -> float:
    if row.quantity > 1:
        return row.rate / row.quantity
    return row.rate


def parse_rates(text: str) -> RateTable:
    """Parse feed text into {"CZK": {code: 1 / per-unit rate}}.

    Later rows for the same code overwrite earlier ones. An input without
    data rows yields an empty dict.
    """
    rates: dict[str, float] = {}
    for line in (text or "").split("\n"):
        if is_header_or_empty_line(line):
            continue
        row = parse_line(line)
        if row is None:
            continue
        rates[row.currency_code] = 1 / per_unit_rate(row)

    if not rates:
        return {}
    return {BASE_CURRENCY: rates}


def parse_feed_header(text: str) -> FeedHeader | None:
    """Return issue date and sequence number from the first feed line."""
    first = (text or "").lstrip().split("\n", 1)[0].strip()
    match = _ISSUE_LINE.match(first)
    if not match:
        return None
    seq = match.group("seq")
    return FeedHeader(issued=match.group("date"), sequence=int(seq) if seq else None)
