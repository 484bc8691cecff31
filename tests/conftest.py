import sys
from pathlib import Path

import pytest

# Ensure project root is on the path for test execution environments
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


INVOICE_TEXT = """Invoice
Acme Srl
Via Roma 1
00100 Roma
ITALY
PO / no: 4500012345
PO / date: 15.01.2024
Order no.: 998 / 10.01.2024
Deliv. note no.: 80001234 / 20.01.2024
Invoice no.: 90004567 / 31.01.2024
Term of payment: 60 days net
Pos. Description Qty Price
Sum of positions*   12.345,67 EUR
"""


@pytest.fixture
def invoice_text():
    return INVOICE_TEXT


@pytest.fixture
def invoice_lines():
    return INVOICE_TEXT.splitlines()
