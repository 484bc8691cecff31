"""Assemble one invoice record from the lines of a document."""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .extractors import (
    extract_amount,
    extract_block,
    extract_prefixed_value,
    extract_two_values,
    extract_value,
)
from .formatter import normalize_date, parse_amount

FIELD_NAMES = (
    "customer_name",
    "po_no",
    "po_date",
    "order_no",
    "order_date",
    "delivery_note_no",
    "delivery_date",
    "invoice_no",
    "invoice_date",
    "invoice_value",
    "term_of_payment",
)

# Labels of the invoice template the extractors look for.
DEFAULT_LAYOUT: Dict[str, str] = {
    "anchor": "ITALY",
    "po_no": "PO / no",
    "po_date": "PO / date",
    "order": "Order no.",
    "delivery_note": "Deliv. note no.",
    "invoice": "Invoice no.",
    "term_of_payment": "Term of payment:",
    "amount_marker": "Sum of positions*",
}

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split extracted PDF text into lines."""
    if not text:
        return []
    return _LINE_SPLIT_RE.split(text)


def build_layout(overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Return ``DEFAULT_LAYOUT`` updated with ``overrides``."""
    layout = dict(DEFAULT_LAYOUT)
    if not overrides:
        return layout
    unknown = sorted(set(overrides) - set(DEFAULT_LAYOUT))
    if unknown:
        raise ValueError(f"Unknown layout keys: {', '.join(unknown)}")
    for key, value in overrides.items():
        if not isinstance(value, str) or not value:
            raise ValueError(f"Layout entry {key!r} must be a non-empty string")
        layout[key] = value
    return layout


def assemble_record(
    lines: Sequence[str], layout: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Run every extractor over ``lines`` and return a complete record.

    Every field is extracted independently, so a missing label only blanks
    its own field. All keys of ``FIELD_NAMES`` are always present.
    """
    labels = layout or DEFAULT_LAYOUT

    customer_name = extract_block(lines, labels["anchor"])
    po_no = extract_value(lines, labels["po_no"])
    po_date = normalize_date(extract_value(lines, labels["po_date"]))
    order_no, order_date = extract_two_values(lines, labels["order"])
    delivery_note_no, delivery_date = extract_two_values(lines, labels["delivery_note"])
    invoice_no, invoice_date = extract_two_values(lines, labels["invoice"])
    term_of_payment = extract_prefixed_value(lines, labels["term_of_payment"])
    invoice_value = parse_amount(extract_amount(lines, labels["amount_marker"]))

    record = {
        "customer_name": customer_name,
        "po_no": po_no,
        "po_date": po_date,
        "order_no": order_no,
        "order_date": normalize_date(order_date),
        "delivery_note_no": delivery_note_no,
        "delivery_date": normalize_date(delivery_date),
        "invoice_no": invoice_no,
        "invoice_date": normalize_date(invoice_date),
        "invoice_value": invoice_value,
        "term_of_payment": term_of_payment,
    }

    missing = [name for name in FIELD_NAMES if record[name] in ("", None)]
    if missing:
        logging.debug("Fields not found: %s", ", ".join(missing))
    return record


def parse_invoice_text(
    text: str, layout: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Split ``text`` into lines and assemble its record."""
    return assemble_record(split_lines(text), layout)


def record_to_json(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a JSON serializable copy of ``record``."""
    result: Dict[str, Any] = {}
    for name in FIELD_NAMES:
        value = record.get(name)
        if isinstance(value, Decimal):
            value = float(value)
        result[name] = value
    return result
