"""Conversion entry points and logging setup for PyInvoice."""

import logging
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .batch import Batch, convert_sources
from .excel import write_workbook
from .pdf_text import PdfSource
from .record import build_layout


def setup_logging(log_file: str = "pyinvoice.log", *, log_level: int = logging.INFO) -> None:
    handler = RotatingFileHandler(
        log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )


def log_level_from_name(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def extract_records(
    sources: Sequence[PdfSource],
    settings: Optional[Mapping[str, Any]] = None,
    *,
    names: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """Return the records of ``sources`` in submission order."""
    settings = settings or {}
    layout = build_layout(settings.get("layout"))
    with Batch() as batch:
        convert_sources(
            sources,
            batch,
            layout,
            workers=int(settings.get("workers", 1)),
            names=names,
        )
        return batch.records()


def convert_to_excel(
    sources: Sequence[PdfSource],
    output_file: str,
    settings: Optional[Mapping[str, Any]] = None,
    *,
    names: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """Convert ``sources`` into one workbook at ``output_file``.

    Nothing is written when a document cannot be read.
    """
    settings = settings or {}
    records = extract_records(sources, settings, names=names)
    write_workbook(records, output_file, sheet=settings.get("sheet", "Data"))
    return records
