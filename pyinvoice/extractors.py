"""Label based value extraction from invoice text lines.

Each extractor scans the normalized form of every line but reads values from
the original line. A missing label is a normal outcome: the extractors return
an empty value instead of raising.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .formatter import normalize


def find_line(lines: Sequence[str], label: str) -> Optional[str]:
    """Return the first line whose normalized text contains ``label``."""
    for line in lines:
        if label in normalize(line):
            return line
    return None


def _after_colon(line: str) -> Optional[str]:
    head, sep, tail = line.partition(":")
    if not sep:
        return None
    return tail


def extract_value(lines: Sequence[str], label: str) -> str:
    """Value following the first colon of the line containing ``label``."""
    line = find_line(lines, label)
    if line is None:
        return ""
    value = _after_colon(line)
    return value.strip() if value is not None else ""


def extract_two_values(lines: Sequence[str], label: str) -> Tuple[str, str]:
    """Split a ``label: first / second`` line into its two values."""
    line = find_line(lines, label)
    if line is None:
        return "", ""
    value = _after_colon(line)
    if value is None:
        return "", ""
    parts = value.split("/")
    second = parts[1].strip() if len(parts) > 1 else ""
    return parts[0].strip(), second


def extract_block(lines: Sequence[str], anchor: str, size: int = 4) -> str:
    """Join the ``size`` lines ending with the line equal to ``anchor``.

    Used for the customer address block, which ends with the country line.
    When the anchor sits near the top of the document the block starts at the
    first line.
    """
    for i, line in enumerate(lines):
        if line.strip() == anchor:
            start = max(0, i - size + 1)
            block: List[str] = [normalize(ln) for ln in lines[start : i + 1]]
            return ", ".join(block)
    return ""


def extract_prefixed_value(lines: Sequence[str], prefix: str) -> str:
    """Value of the first line whose normalized text starts with ``prefix``."""
    for line in lines:
        if normalize(line).startswith(prefix):
            value = _after_colon(line)
            return value.strip() if value is not None else ""
    return ""


def extract_amount(lines: Sequence[str], marker: str) -> str:
    """Raw locale formatted number following ``marker`` on its line."""
    line = find_line(lines, marker)
    if line is None:
        return ""
    match = re.search(re.escape(marker) + r"\s*([\d.,]+)", normalize(line))
    return match.group(1) if match else ""
