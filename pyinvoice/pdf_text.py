"""Text extraction from PDF invoices."""

from __future__ import annotations

import io
import logging
import os
from typing import BinaryIO, Optional, Union

from pdfminer.high_level import extract_text as pdfminer_extract_text
from PyPDF2 import PdfReader

from .errors import DocumentReadError

PdfSource = Union[str, "os.PathLike[str]", bytes]

# pdfminer output shorter than this is considered empty and retried with PyPDF2
MIN_TEXT_LENGTH = 10


def source_name(source: PdfSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return os.fspath(source)


def _open(source: PdfSource) -> BinaryIO:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(source)
    return open(source, "rb")


def _extract_with_pdfminer(source: PdfSource) -> str:
    with _open(source) as fh:
        return pdfminer_extract_text(fh) or ""


def _extract_with_pypdf2(source: PdfSource) -> str:
    with _open(source) as fh:
        reader = PdfReader(fh)
        return "\n".join(page.extract_text() or "" for page in reader.pages)


def extract_pdf_text(source: PdfSource, name: Optional[str] = None) -> str:
    """Return the text layer of ``source`` (a path or raw PDF bytes).

    pdfminer.six keeps the line structure better and is tried first; PyPDF2
    is used when pdfminer fails or returns almost nothing. Raises
    :class:`DocumentReadError` when neither library can read the document.
    A readable PDF without a text layer yields an empty string. ``name`` is
    used in logs and errors instead of the path or byte count.
    """
    name = name or source_name(source)
    try:
        text = _extract_with_pdfminer(source)
    except OSError as exc:
        logging.error("Cannot open %s: %s", name, exc)
        raise DocumentReadError(name, str(exc)) from exc
    except Exception as exc:  # pylint: disable=broad-except
        logging.debug("pdfminer failed on %s: %s", name, exc)
        text = ""
    if len(text.strip()) >= MIN_TEXT_LENGTH:
        return text

    logging.debug("Falling back to PyPDF2 for %s", name)
    try:
        fallback = _extract_with_pypdf2(source)
    except Exception as exc:  # pylint: disable=broad-except
        logging.error("Cannot read %s: %s", name, exc)
        raise DocumentReadError(name, str(exc)) from exc
    if len(fallback.strip()) > len(text.strip()):
        text = fallback
    if not text.strip():
        logging.warning("No text layer found in %s", name)
    return text
