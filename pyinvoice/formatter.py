"""Text and locale formatting utilities for PyInvoice."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

_WS_RE = re.compile(r"\s+")
_CENTS = Decimal("0.01")


def normalize(line: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WS_RE.sub(" ", line).strip()


def normalize_date(value: str) -> str:
    """Convert an Italian ``dd.mm.yyyy`` date to ``dd/mm/yyyy``."""
    if not value:
        return ""
    return value.replace(".", "/")


def parse_amount(value: Optional[str]) -> Optional[Decimal]:
    """Parse an Italian formatted amount such as ``1.234,56``.

    Dots are thousands separators and the comma is the decimal separator.
    Returns ``None`` when ``value`` is empty or not a finite number, never 0.
    """
    if not value:
        return None
    canonical = value.replace(".", "").replace(",", ".", 1)
    try:
        number = Decimal(canonical)
        if not number.is_finite():
            return None
        # raises when the rounded value exceeds the context precision
        return number.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
