"""pyinvoice package."""

from .batch import Batch, aggregate, convert_sources
from .errors import BatchClosedError, DocumentReadError, InvoiceError
from .record import FIELD_NAMES, assemble_record, parse_invoice_text

__all__ = [
    "Batch",
    "BatchClosedError",
    "DocumentReadError",
    "FIELD_NAMES",
    "InvoiceError",
    "aggregate",
    "assemble_record",
    "convert_sources",
    "parse_invoice_text",
]
