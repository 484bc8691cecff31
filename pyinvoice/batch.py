"""Batch processing of invoice documents.

A :class:`Batch` is owned by the caller and lives for one convert operation.
Records are staged in a SQLite table and handed back in insertion order.
"""

from __future__ import annotations

import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .errors import BatchClosedError
from .pdf_text import PdfSource, extract_pdf_text, source_name
from .record import FIELD_NAMES, assemble_record, split_lines

Document = Union[str, Sequence[str]]

TABLE = "invoices"


class Batch:
    """Ordered collection of invoice records for one operation.

    Use it as a context manager, or call :meth:`open` and :meth:`close`
    explicitly. ``db_path`` defaults to a private in-memory database.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "Batch":
        if self._conn is not None:
            return self
        self._conn = sqlite3.connect(self.db_path)
        columns = ", ".join(f"{name} TEXT" for name in FIELD_NAMES)
        self._conn.execute(f"DROP TABLE IF EXISTS {TABLE}")
        self._conn.execute(
            f"CREATE TABLE {TABLE} (id INTEGER PRIMARY KEY AUTOINCREMENT, {columns})"
        )
        self._conn.commit()
        return self

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None

    def __enter__(self) -> "Batch":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise BatchClosedError("Batch is not open")
        return self._conn

    def append(self, record: Mapping[str, Any]) -> None:
        conn = self._connection()
        values = []
        for name in FIELD_NAMES:
            value = record.get(name)
            values.append(str(value) if isinstance(value, Decimal) else value)
        placeholders = ", ".join("?" for _ in FIELD_NAMES)
        conn.execute(
            f"INSERT INTO {TABLE} ({', '.join(FIELD_NAMES)}) VALUES ({placeholders})",
            values,
        )
        conn.commit()

    def records(self) -> List[Dict[str, Any]]:
        conn = self._connection()
        rows = conn.execute(
            f"SELECT {', '.join(FIELD_NAMES)} FROM {TABLE} ORDER BY id"
        ).fetchall()
        result = []
        for row in rows:
            record = dict(zip(FIELD_NAMES, row))
            amount = record["invoice_value"]
            record["invoice_value"] = Decimal(amount) if amount is not None else None
            result.append(record)
        return result

    def __len__(self) -> int:
        conn = self._connection()
        return conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()[0]


def aggregate(
    documents: Iterable[Document],
    batch: Batch,
    layout: Optional[Mapping[str, str]] = None,
) -> Batch:
    """Assemble one record per document and append it to ``batch`` in order.

    A document is either the extracted text or its list of lines.
    """
    count = 0
    for document in documents:
        lines = split_lines(document) if isinstance(document, str) else document
        batch.append(assemble_record(lines, layout))
        count += 1
    logging.info("Batch collected %d records", count)
    return batch


def read_documents(
    sources: Sequence[PdfSource],
    *,
    workers: int = 1,
    names: Optional[Sequence[str]] = None,
) -> List[str]:
    """Extract the text of every source, keeping the order of ``sources``.

    With ``workers`` greater than one the extraction runs on a thread pool.
    The first :class:`~pyinvoice.errors.DocumentReadError` propagates.
    """
    if names is None:
        names = [source_name(s) for s in sources]
    if workers <= 1 or len(sources) <= 1:
        return [extract_pdf_text(s, n) for s, n in zip(sources, names)]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(extract_pdf_text, sources, names))


def convert_sources(
    sources: Sequence[PdfSource],
    batch: Batch,
    layout: Optional[Mapping[str, str]] = None,
    *,
    workers: int = 1,
    names: Optional[Sequence[str]] = None,
) -> Batch:
    """Read ``sources`` as PDFs and aggregate their records into ``batch``."""
    logging.info("Converting %d documents", len(sources))
    texts = read_documents(sources, workers=workers, names=names)
    return aggregate(texts, batch, layout)
