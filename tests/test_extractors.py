from pyinvoice.extractors import (
    extract_amount,
    extract_block,
    extract_prefixed_value,
    extract_two_values,
    extract_value,
    find_line,
)


def test_extract_value():
    lines = ["Header", "PO / no: 12345"]
    assert extract_value(lines, "PO / no") == "12345"


def test_extract_value_absent_label():
    assert extract_value(["PO / no: 12345"], "Invoice no.") == ""
    assert extract_value([], "PO / no") == ""


def test_extract_value_without_colon():
    assert extract_value(["PO / no 12345"], "PO / no") == ""


def test_extract_value_matches_normalized_line():
    # the label is found even when the PDF text spreads it with extra spaces
    assert extract_value(["PO  /\tno:   777  "], "PO / no") == "777"


def test_extract_value_keeps_text_after_later_colons():
    assert extract_value(["Delivery time: 10:30"], "Delivery time") == "10:30"


def test_extract_value_first_match_wins():
    lines = ["PO / no: first", "PO / no: second"]
    assert extract_value(lines, "PO / no") == "first"
    assert find_line(lines, "PO / no") == "PO / no: first"


def test_extract_two_values():
    lines = ["Order no.: 998 / 2024-01-10"]
    assert extract_two_values(lines, "Order no.") == ("998", "2024-01-10")


def test_extract_two_values_missing_second_half():
    assert extract_two_values(["Order no.: 998"], "Order no.") == ("998", "")


def test_extract_two_values_absent_or_without_colon():
    assert extract_two_values(["Something else"], "Order no.") == ("", "")
    assert extract_two_values(["Order no. 998 / 1"], "Order no.") == ("", "")


def test_extract_block():
    lines = ["Acme Srl", "Via Roma 1", "00100 Roma", "ITALY"]
    assert extract_block(lines, "ITALY") == "Acme Srl, Via Roma 1, 00100 Roma, ITALY"


def test_extract_block_takes_four_lines_ending_at_anchor():
    lines = ["Invoice", "Acme   Srl", " Via Roma 1 ", "00100 Roma", "  ITALY  ", "PO / no: 1"]
    assert extract_block(lines, "ITALY") == "Acme Srl, Via Roma 1, 00100 Roma, ITALY"


def test_extract_block_anchor_must_match_whole_line():
    lines = ["Made in ITALY", "ITALY SPA"]
    assert extract_block(lines, "ITALY") == ""


def test_extract_block_clamps_to_document_start():
    assert extract_block(["Acme Srl", "ITALY"], "ITALY") == "Acme Srl, ITALY"
    assert extract_block(["ITALY"], "ITALY") == "ITALY"


def test_extract_prefixed_value():
    lines = ["Terms", "Term of payment: 30 days net"]
    assert extract_prefixed_value(lines, "Term of payment:") == "30 days net"


def test_extract_prefixed_value_requires_prefix():
    lines = ["See Term of payment: 30 days"]
    assert extract_prefixed_value(lines, "Term of payment:") == ""


def test_extract_amount():
    lines = ["Sum of positions*   1.234,56 EUR"]
    assert extract_amount(lines, "Sum of positions*") == "1.234,56"


def test_extract_amount_no_number():
    assert extract_amount(["Sum of positions* EUR"], "Sum of positions*") == ""
    assert extract_amount(["Total 1.234,56"], "Sum of positions*") == ""
