"""Keyword classification of OCR documents.

Three ordered rule tables map raw text to coarse labels; the first matching
rule wins:

  * document type  -> "bank_transfer" | "mobile_payment" | "other"
  * payment service -> "JazzCash", "EasyPaisa", "RAAST", "Meezan Bank", ...
  * status          -> "Failed" | "Pending" | "Success"

Callers use :func:`classify_document` to decide which parser profile to run;
the receipt parser uses :func:`detect_service` and :func:`detect_status`.

Extensibility (document-type rules only):
  * Environment variable DOCUMENT_RULES_FILE (JSON) can supply overrides:
        { "bank_transfer": ["REGEX1", ...], "mobile_payment": [...] }
    These replace (not merge) the default patterns for listed labels.
  * ``register_custom_rule(label, pattern, prepend=False)`` adds rules at
    runtime; custom rules are evaluated before the defaults.
"""

from __future__ import annotations

import json
import logging
import os
import re
from functools import lru_cache
from threading import RLock
from typing import Dict, Iterable, List, NamedTuple, Pattern

logger = logging.getLogger(__name__)

DOCUMENT_LABELS: List[str] = ["bank_transfer", "mobile_payment", "other"]
FALLBACK_LABEL = "other"
UNKNOWN_SERVICE = "Unknown"


class LabelRule(NamedTuple):
    label: str
    pattern: Pattern


DEFAULT_DOCUMENT_REGEX: Dict[str, List[str]] = {
    "bank_transfer": [
        r"\bINTER\s*BANK\b",
        r"\b(IBFT|FUNDS? TRANSFER|BANK TRANSFER)\b",
        r"\bTRANSFERRED SUCCESSFULLY\b",
    ],
    "mobile_payment": [
        r"\b(JAZZ\s*CASH|EASY\s*PAISA)\b",
        r"\bMONEY HAS BEEN SENT\b",
        r"\bMOBILE ACCOUNT\b",
    ],
}

SERVICE_RULES: List[LabelRule] = [
    LabelRule("JazzCash", re.compile(r"JazzCash", re.IGNORECASE)),
    LabelRule("EasyPaisa", re.compile(r"easypaisa", re.IGNORECASE)),
    LabelRule("RAAST", re.compile(r"\bRAAST\b", re.IGNORECASE)),
    LabelRule("Meezan Bank", re.compile(r"\bMeezan Bank\b", re.IGNORECASE)),
    LabelRule("Bank Transfer", re.compile(r"\bCurrent Account\b", re.IGNORECASE)),
    LabelRule("Alfalah Bank", re.compile(r"\b(alfor|Alfalah|Best Bank)\b", re.IGNORECASE)),
    LabelRule("Inter Bank Transfer", re.compile(r"\bInter Bank\b", re.IGNORECASE)),
]

STATUS_RULES: List[LabelRule] = [
    LabelRule("Failed", re.compile(r"\b(unsuccessful|failed|declined|rejected)\b", re.IGNORECASE)),
    LabelRule("Pending", re.compile(r"\b(pending|processing|in progress)\b", re.IGNORECASE)),
    LabelRule(
        "Success",
        re.compile(
            r"\b(Transaction successful|Money has been sent|Transferred Successfully|"
            r"Payment successful|Sent successfully)\b",
            re.IGNORECASE,
        ),
    ),
]
DEFAULT_STATUS = "Success"

_custom_rules: List[LabelRule] = []
_custom_rules_lock = RLock()


def register_custom_rule(label: str, regex: str, prepend: bool = False) -> None:
    """Register a document-type rule at runtime.

    Args:
        label:   One of DOCUMENT_LABELS (else ValueError).
        regex:   Regex string, matched case-insensitively against the text.
        prepend: If True, evaluated before previously registered custom rules.
    """
    if label not in DOCUMENT_LABELS:
        raise ValueError(f"Unknown label '{label}'. Must be one of {DOCUMENT_LABELS}.")
    rule = LabelRule(label, re.compile(regex, re.IGNORECASE))
    with _custom_rules_lock:
        if prepend:
            _custom_rules.insert(0, rule)
        else:
            _custom_rules.append(rule)
        _compile_rules.cache_clear()


def custom_rules() -> List[LabelRule]:
    with _custom_rules_lock:
        return list(_custom_rules)


def clear_custom_rules() -> int:
    with _custom_rules_lock:
        count = len(_custom_rules)
        _custom_rules.clear()
        _compile_rules.cache_clear()
    return count


def _load_overrides_from_file() -> Dict[str, List[str]]:
    path = os.environ.get("DOCUMENT_RULES_FILE")
    if not path or not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable DOCUMENT_RULES_FILE %s", path)
        return {}
    overrides: Dict[str, List[str]] = {}
    if isinstance(data, dict):
        for k, v in data.items():
            if k in DOCUMENT_LABELS and isinstance(v, list):
                overrides[k] = [str(x) for x in v if isinstance(x, str)]
    return overrides


@lru_cache(maxsize=1)
def _compile_rules() -> List[LabelRule]:
    overrides = _load_overrides_from_file()
    rules: List[LabelRule] = []
    for label in DOCUMENT_LABELS:
        regexes: Iterable[str] = overrides.get(label, DEFAULT_DOCUMENT_REGEX.get(label, []))
        for rx in regexes:
            try:
                rules.append(LabelRule(label, re.compile(rx, re.IGNORECASE)))
            except re.error:
                logger.warning("Skipping invalid %s rule %r", label, rx)
                continue
    with _custom_rules_lock:
        return list(_custom_rules) + rules


def reload_rules() -> int:
    """Clear the compiled rule cache; returns the number of rules after reload."""
    _compile_rules.cache_clear()
    return len(_compile_rules())


def _first_label(rules: Iterable[LabelRule], text: str, default: str) -> str:
    for rule in rules:
        if rule.pattern.search(text):
            return rule.label
    return default


def classify_document(text: str) -> str:
    """Map document text to "bank_transfer", "mobile_payment" or "other"."""
    if not isinstance(text, str):
        raise TypeError(f"document text must be str, not {type(text).__name__}")
    if not text.strip():
        return FALLBACK_LABEL
    return _first_label(_compile_rules(), text, FALLBACK_LABEL)


def detect_service(text: str) -> str:
    return _first_label(SERVICE_RULES, text, UNKNOWN_SERVICE)


def detect_status(text: str) -> str:
    return _first_label(STATUS_RULES, text, DEFAULT_STATUS)


__all__ = [
    "DOCUMENT_LABELS",
    "DEFAULT_DOCUMENT_REGEX",
    "LabelRule",
    "classify_document",
    "clear_custom_rules",
    "custom_rules",
    "detect_service",
    "detect_status",
    "register_custom_rule",
    "reload_rules",
]
