import pytest

from statement_ocr.classify import clear_custom_rules, reload_rules
from statement_ocr.config import load_settings

RECEIPT_TEXT = (
    "Transaction successful\n"
    "Ref#530026036841\n"
    "30-Sep-2025 11:58:42 PM\n"
    "PKR 1\n"
    "From\tMUHAMMAD HARIS HASSAN\n"
    "**********6197\n"
    "To\tZAINAB HASSAN\n"
    "*******2344\n"
)

EASYPAISA_TEXT = """easypaisa
Transaction Successful
Sent to
BOB RAZA
03001234567
Sent by
ALICE KHAN
03117654321
Amount
500
Fee
10
ID#1234567890
12 March 2025
09:15 AM
"""

JAZZCASH_TEXT = """JazzCash
Money has been sent
Rs. 1,500.00
TID: 987654321
On October 5, 2025 at 14:32
To
ZAINAB HASSAN
03451112233
From
MUHAMMAD HARIS
03009998877
Fee Rs. 0.00
Total Amount Rs. 1,500.00
"""

# Anchors sit on lines 11 (50,000.00) and 14 (12,345.67).
LEDGER_TEXT = """SONERI BANK LIMITED
Account Title: VISION DEVELOPERS PVT LTD
Account: 020401037938961
Currency: PKR
From Date: 01-Sep-2025 To Date: 30-Sep-2025
Txn. Date Value Date Description
01-Sep-2025 Balance Brought Forward 2,500,000.00
FT25246ABC12
MEEZAN BANK
PK36MEZN0001234567890123
03-Sep-2025 RAAST Incoming Transfer
50,000.00 2,550,000.00
05-Sep-2025 IBFT
Ref:778899
12,345.67
HABIB BANK
2,562,345.67
"""


@pytest.fixture
def receipt_text():
    return RECEIPT_TEXT


@pytest.fixture
def easypaisa_text():
    return EASYPAISA_TEXT


@pytest.fixture
def jazzcash_text():
    return JAZZCASH_TEXT


@pytest.fixture
def ledger_text():
    return LEDGER_TEXT


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch):
    for name in (
        "OCR_WINDOW_RADIUS",
        "OCR_MIN_TRANSACTION_AMOUNT",
        "OCR_BALANCE_THRESHOLD",
        "OCR_MAX_AMOUNT",
        "OCR_PHONE_DIGITS",
        "OCR_ACCOUNT_MIN_DIGITS",
        "OCR_HOME_CURRENCY",
        "DOCUMENT_RULES_FILE",
        "NAME_EXCLUSIONS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    clear_custom_rules()
    reload_rules()
    yield
    load_settings.cache_clear()
    clear_custom_rules()
    reload_rules()
