"""Exceptions raised by PyInvoice.

Missing or unparseable fields are not errors: they show up as empty values in
the record. Only document level failures are raised.
"""


class InvoiceError(Exception):
    """Base class for PyInvoice errors."""


class DocumentReadError(InvoiceError):
    """The text of a document could not be read. Aborts the whole batch."""

    def __init__(self, source: str, reason: str = ""):
        self.source = source
        self.reason = reason
        message = f"Cannot read document {source}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class BatchClosedError(InvoiceError):
    """A record was added to or read from a batch that is not open."""
