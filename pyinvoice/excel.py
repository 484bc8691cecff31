"""Write invoice records to an Excel workbook."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Tuple

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter

from .record import FIELD_NAMES
from .utils import excel_lock

COLUMN_WIDTH = 30
AMOUNT_FORMAT = "#,##0.00"


def _cell_value(value: Any) -> Any:
    return None if value == "" else value


def write_workbook(
    records: Iterable[Mapping[str, Any]], path: str, sheet: str = "Data"
) -> int:
    """Write a header row and one row per record to ``path``.

    Returns the number of data rows written.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    ws.append(list(FIELD_NAMES))
    for idx in range(1, len(FIELD_NAMES) + 1):
        ws.column_dimensions[get_column_letter(idx)].width = COLUMN_WIDTH

    amount_col = FIELD_NAMES.index("invoice_value") + 1
    count = 0
    for record in records:
        ws.append([_cell_value(record.get(name)) for name in FIELD_NAMES])
        count += 1
        cell = ws.cell(row=count + 1, column=amount_col)
        if cell.value is not None:
            cell.number_format = AMOUNT_FORMAT

    with excel_lock(path):
        wb.save(path)
    wb.close()
    logging.info("Wrote %d rows to %s", count, path)
    return count


def read_workbook(path: str, sheet: str = "Data") -> Tuple[List[Any], List[List[Any]]]:
    """Return the header and data rows of ``sheet`` in ``path``."""
    with excel_lock(path):
        wb = load_workbook(path)
        try:
            ws = wb[sheet]
            rows = [list(row) for row in ws.iter_rows(values_only=True)]
        finally:
            wb.close()
    if not rows:
        return [], []
    return rows[0], rows[1:]
