import json
from decimal import Decimal

import pytest

from pyinvoice.record import (
    DEFAULT_LAYOUT,
    FIELD_NAMES,
    assemble_record,
    build_layout,
    parse_invoice_text,
    record_to_json,
    split_lines,
)


def test_assemble_record(invoice_lines):
    record = assemble_record(invoice_lines)
    assert list(record) == list(FIELD_NAMES)
    assert record == {
        "customer_name": "Acme Srl, Via Roma 1, 00100 Roma, ITALY",
        "po_no": "4500012345",
        "po_date": "15/01/2024",
        "order_no": "998",
        "order_date": "10/01/2024",
        "delivery_note_no": "80001234",
        "delivery_date": "20/01/2024",
        "invoice_no": "90004567",
        "invoice_date": "31/01/2024",
        "invoice_value": Decimal("12345.67"),
        "term_of_payment": "60 days net",
    }


def test_parse_invoice_text_splits_crlf(invoice_text):
    record = parse_invoice_text(invoice_text.replace("\n", "\r\n"))
    assert record["invoice_no"] == "90004567"
    assert record["customer_name"] == "Acme Srl, Via Roma 1, 00100 Roma, ITALY"


def test_empty_document_yields_complete_record():
    record = assemble_record([])
    assert list(record) == list(FIELD_NAMES)
    assert record["invoice_value"] is None
    assert all(record[name] == "" for name in FIELD_NAMES if name != "invoice_value")


def test_unrecognized_document_does_not_raise():
    record = parse_invoice_text("Dear customer,\nthank you for your order.\n")
    assert list(record) == list(FIELD_NAMES)
    assert record["customer_name"] == ""
    assert record["invoice_value"] is None


def test_fields_are_independent(invoice_lines):
    lines = [ln for ln in invoice_lines if ln != "ITALY" and not ln.startswith("Sum of")]
    record = assemble_record(lines)
    assert record["customer_name"] == ""
    assert record["invoice_value"] is None
    assert record["invoice_no"] == "90004567"
    assert record["term_of_payment"] == "60 days net"


def test_unparseable_amount_is_none_not_zero():
    record = assemble_record(["Sum of positions* ,,,"])
    assert record["invoice_value"] is None


def test_oversized_amount_is_a_field_miss():
    lines = ["Invoice no.: 1 / 01.01.2024", "Sum of positions* " + "9" * 30 + ",00"]
    record = assemble_record(lines)
    assert list(record) == list(FIELD_NAMES)
    assert record["invoice_value"] is None
    assert record["invoice_no"] == "1"
    assert record["invoice_date"] == "01/01/2024"


def test_custom_layout():
    layout = build_layout({"anchor": "GERMANY", "invoice": "Rechnung Nr."})
    lines = ["Muster GmbH", "Hauptstr. 5", "10115 Berlin", "GERMANY", "Rechnung Nr.: 77 / 01.02.2024"]
    record = assemble_record(lines, layout)
    assert record["customer_name"] == "Muster GmbH, Hauptstr. 5, 10115 Berlin, GERMANY"
    assert record["invoice_no"] == "77"
    assert record["invoice_date"] == "01/02/2024"


def test_build_layout_defaults_and_validation():
    assert build_layout() == DEFAULT_LAYOUT
    assert build_layout() is not DEFAULT_LAYOUT
    with pytest.raises(ValueError, match="Unknown layout keys: colour"):
        build_layout({"colour": "red"})
    with pytest.raises(ValueError):
        build_layout({"anchor": ""})


def test_split_lines():
    assert split_lines("") == []
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]


def test_record_to_json(invoice_lines):
    data = record_to_json(assemble_record(invoice_lines))
    assert data["invoice_value"] == 12345.67
    assert json.loads(json.dumps(data)) == data
    assert record_to_json(assemble_record([]))["invoice_value"] is None
