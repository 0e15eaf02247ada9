"""Utility helpers for cnb-import.

Нормализация валютных кодов и чисел из текстового фида ЧНБ.
"""

from __future__ import annotations

from typing import Any


def normalize_code(code: str) -> str:
    """Normalize currency code to uppercase trimmed string."""
    return (code or "").strip().upper()


def parse_decimal(value: Any) -> float:
    """Parse a number that may use a comma as decimal separator.

    Raises:
        ValueError: when the value is not numeric
    """
    text = str(value if value is not None else "").strip().replace(",", ".")
    if not text:
        raise ValueError("empty number")
    return float(text)


def format_rate(value: float, decimals: int = 6) -> str:
    """Format rate with fixed decimals."""
    return f"{float(value):.{decimals}f}"
