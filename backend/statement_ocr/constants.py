"""Compiled patterns and vocabularies shared by the extraction modules."""

import re

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_ALT = "|".join(MONTH_NAMES)

# ---------------- Numbers ---------------- #
# Exactly two decimals, optional thousands separators.
AMOUNT_RX = re.compile(r"(?<![\d,])(?<!\d\.)(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}(?![\d])")
# Looser form used by receipt labels ("PKR 1", "Rs. 1,500.5").
LOOSE_NUMBER = r"\d+(?:,\d{3})*(?:\.\d{1,2})?"
BARE_NUMBER_RX = re.compile(
    rf"^(?:PKR|Rs\.?)?\s*(?P<num>{LOOSE_NUMBER})$", re.IGNORECASE
)
# Digit runs not glued to letters, other digits or mask asterisks.
DIGIT_RUN_RX = re.compile(r"(?<![A-Za-z0-9*])\d+(?![A-Za-z0-9]|\.\d)")

# ---------------- Dates / times ---------------- #
DASH_DATE_RX = re.compile(r"\b\d{1,2}-[A-Za-z]{3}-\d{4}\b")
LONG_DATE_RX = re.compile(rf"\b\d{{1,2}}\s+(?:{_MONTH_ALT})\s+\d{{4}}\b", re.IGNORECASE)
SLASH_DATE_RX = re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b")
ON_DATE_RX = re.compile(rf"\bOn\s+((?:{_MONTH_ALT})\s+\d{{1,2}},\s+\d{{4}})", re.IGNORECASE)
TIME_RX = re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?(?:\s*[AP]M\b)?", re.IGNORECASE)
MERIDIEM_TIME_RX = re.compile(r"\b(\d{1,2}:\d{2}(?::\d{2})?\s*[AP]M)\b", re.IGNORECASE)
PLAIN_TIME_RX = re.compile(r"\b(\d{1,2}:\d{2}(?::\d{2})?)\b")
DATE_TIME_RX = re.compile(
    r"\d{1,2}-[A-Za-z]{3}-\d{4}\s+(?:at\s+)?(\d{1,2}:\d{2}(?::\d{2})?\s*(?:[AP]M)?)",
    re.IGNORECASE,
)

# ---------------- Ledger tokens ---------------- #
TXN_TYPE_RX = re.compile(
    r"\b(Brought\s+Forward|RAAST|RAST|IBFT|IBET|Transfer|Incoming|Balance|Brought|Forward)\b",
    re.IGNORECASE,
)
PREFERRED_TXN_TYPE_RX = re.compile(r"^(RAAST|IBFT|Transfer|Incoming)$", re.IGNORECASE)
BANK_TOKEN_RX = re.compile(
    r"\b(ALHABIB|HABIB|MEEZAN|UNITED|ASKARI|MBL|MMB|JazzCash|EasyPaisa|BANK|LIMITED)\b",
    re.IGNORECASE,
)
PREFERRED_BANK_RX = re.compile(
    r"^(ALHABIB|HABIB|MEEZAN|UNITED|ASKARI|MBL|MMB|JazzCash|EasyPaisa)$", re.IGNORECASE
)
IBAN_RX = re.compile(r"\bPK\d{2}[A-Z]{4}\d{4,}\b")
MASKED_ACCOUNT_RX = re.compile(r"(?<![A-Za-z0-9*])(?:PK)?\*{3,}\d{4}(?!\d)")
REFERENCE_RX = re.compile(r"\b(Ref:\s*\d+|FT\d+[A-Z0-9]+)", re.IGNORECASE)

# ---------------- Account header labels ---------------- #
ACCOUNT_LABEL_RX = {
    "account_number": re.compile(r"\bAccount(?:\s*No\.?)?:\s*(\d+)", re.IGNORECASE),
    "currency": re.compile(r"\bCurrency:?\s*([A-Z]{3})\b"),
    "account_type": re.compile(
        r"\bAccount Type:?\s*([^0-9\n]+?)(?=\s*(?:From Date|To Date|$))", re.IGNORECASE
    ),
    "from_date": re.compile(r"\bFrom Date:?\s*(\d{2}-[A-Za-z]{3}-\d{4})", re.IGNORECASE),
    "to_date": re.compile(r"\bTo Date:?\s*(\d{2}-[A-Za-z]{3}-\d{4})", re.IGNORECASE),
    "statement_date": re.compile(
        r"\bStatement Date:?\s*(\d{2}-[A-Za-z]{3}-\d{4}(?:\s+\d{2}:\d{2}:\d{2})?)",
        re.IGNORECASE,
    ),
    "account_title": re.compile(
        r"\bAccount Title:?\s*([^0-9\n]+?)(?=\s*(?:Customer Address|OLD Number|$))",
        re.IGNORECASE,
    ),
    "bank_name": re.compile(r"\bBank Name:?\s*([^0-9\n]+?)(?=\s*(?:Branch Name|$))", re.IGNORECASE),
    "branch_name": re.compile(r"\bBranch Name:?\s*([^\n]+?)(?=\s*(?:Txn\. Date|$))", re.IGNORECASE),
}

# ---------------- Receipt labels ---------------- #
TID_RX = re.compile(r"\bTID:\s*(\d+)", re.IGNORECASE)
ID_HASH_RX = re.compile(r"ID#\s*(\d+)", re.IGNORECASE)
REF_HASH_RX = re.compile(r"Ref#\s*(\d+)", re.IGNORECASE)
PKR_AMOUNT_RX = re.compile(rf"\bPKR\s*({LOOSE_NUMBER})", re.IGNORECASE)
RS_AMOUNT_RX = re.compile(rf"\bRs\.\s*({LOOSE_NUMBER})", re.IGNORECASE)
AMOUNT_LABEL_RX = re.compile(r"^Amount:?$", re.IGNORECASE)
INLINE_AMOUNT_RX = re.compile(
    rf"^Amount\s*[:\-]?\s*(?:PKR|Rs\.?)?\s*({LOOSE_NUMBER})", re.IGNORECASE
)
FEE_LABEL_RX = re.compile(r"\bFee\b", re.IGNORECASE)
FEE_INLINE_RX = re.compile(
    rf"\bFee\s*[:\-]?\s*(?:PKR|Rs\.?)?\s*({LOOSE_NUMBER})", re.IGNORECASE
)
TOTAL_LABEL_RX = re.compile(r"\bTotal\s*Amount\b", re.IGNORECASE)
TOTAL_INLINE_RX = re.compile(
    rf"\bTotal\s*Amount\s*[:\-]?\s*(?:PKR|Rs\.?)?\s*({LOOSE_NUMBER})", re.IGNORECASE
)
CHARGE_LINE_RX = re.compile(r"\b(Fee|Total)\b", re.IGNORECASE)

# ---------------- Name sections ---------------- #
FROM_MARKER_RX = re.compile(r"\b(From|Sent by)\b")
TO_MARKER_RX = re.compile(r"\b(To|Sent to)\b")
INLINE_MARKER_RX = re.compile(r"^(?:From|Sent by|To|Sent to)\s*[:\-]?\s+(?P<rest>.+)$")
NAME_SHAPE_RX = re.compile(r"^[A-Z][A-Z ]+$")

DEFAULT_NAME_EXCLUSIONS = frozenset(
    {
        "CURRENT",
        "ACCOUNT",
        "BANK",
        "PURPOSE",
        "TRANSACTION",
        "OTHERS",
        "INTER",
        "BEST",
        "DIGITAL",
        "EXCELLENCE",
        "SUCCESSFUL",
        "SUCCESS",
        "MONEY",
        "TRANSFERRED",
        "TRANSFER",
        "PKR",
        "RS",
        "TID",
        "ID",
        "REF",
        "FEE",
        "AMOUNT",
        "TOTAL",
        "SHARE",
        "SAVE",
        "VIEW",
        "SECURELY",
        "PAID",
        "VIA",
        "TA",
        "ON",
        "AT",
        "PM",
        "AM",
        "SENT",
        "BY",
        "TO",
        "FROM",
        "FOR",
        "DETAILS",
        "RECEIPT",
        "STATUS",
        "BALANCE",
        "RAAST",
        "IBFT",
    }
    | {m.upper() for m in MONTH_NAMES}
)
DEFAULT_NAME_EXCLUDED_PHRASES = ("JAZZCASH", "EASYPAISA", "MOBILE ACCOUNT")
