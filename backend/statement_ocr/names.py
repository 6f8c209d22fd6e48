"""Sender / receiver resolution for payment receipts.

Receipts print two name blocks ("From"/"Sent by" and "To"/"Sent to") but OCR
often shuffles them, repeats labels, or drops a label entirely. Names are
upper-case lines; which role a name gets depends on where it sits relative
to the *last* From marker and the *last* To marker:

  1. both markers   -> first name between From and To is the sender,
                       first name after To is the receiver (sections swap
                       when To is printed first)
  2. only From      -> first name after From is the sender, first other
                       name is the receiver
  3. only To        -> mirror image of (2)
  4. no markers     -> first two names in document order

If the markers are present but neither role could be filled, (4) applies.

Phones and accounts ignore the sections entirely: the first/second match
in the document fill the from/to slots.

The exclusion lexicon can be extended without code changes by pointing the
``NAME_EXCLUSIONS_FILE`` environment variable at a JSON list of words.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable, List, Optional, Sequence

from .config import ExtractionSettings, resolve_settings
from .constants import (
    DEFAULT_NAME_EXCLUDED_PHRASES,
    DEFAULT_NAME_EXCLUSIONS,
    FROM_MARKER_RX,
    TO_MARKER_RX,
)
from .models import NameSections
from .patterns import (
    DIGITS,
    MASKED,
    RECEIPT_PROFILE,
    Occurrence,
    OccurrenceKind,
    extract_occurrences,
    of_kind,
)

logger = logging.getLogger(__name__)


class NameLexicon:
    """Words and phrases that disqualify a line from being a person's name.

    A candidate is excluded when any of its words is a listed word, or when
    it contains a listed phrase. Matching is case-insensitive.
    """

    def __init__(self, words: Iterable[str] = (), phrases: Iterable[str] = ()):
        self.words = frozenset(w.strip().upper() for w in words if w and w.strip())
        self.phrases = tuple(p.strip().upper() for p in phrases if p and p.strip())

    def extend(self, words: Iterable[str] = (), phrases: Iterable[str] = ()) -> "NameLexicon":
        return NameLexicon(self.words | set(words), self.phrases + tuple(phrases))

    def excludes(self, text: str) -> bool:
        up = text.upper()
        if any(token in self.words for token in up.split()):
            return True
        padded = f" {' '.join(up.split())} "
        return any(f" {phrase} " in padded for phrase in self.phrases)

    def __contains__(self, text: str) -> bool:
        return self.excludes(text)


def _load_extra_exclusions() -> List[str]:
    path = os.environ.get("NAME_EXCLUSIONS_FILE")
    if not path or not os.path.isfile(path):
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable NAME_EXCLUSIONS_FILE %s", path)
        return []
    if not isinstance(data, list):
        return []
    return [str(x) for x in data if isinstance(x, str)]


def default_lexicon() -> NameLexicon:
    return NameLexicon(
        DEFAULT_NAME_EXCLUSIONS, DEFAULT_NAME_EXCLUDED_PHRASES
    ).extend(_load_extra_exclusions())


def find_markers(lines: Sequence[str]) -> tuple[int, int]:
    """Return ``(from_index, to_index)``; -1 when a marker is absent.

    Later markers override earlier ones. A line carrying both labels counts
    as a From marker.
    """
    from_index = to_index = -1
    for i, line in enumerate(lines):
        if FROM_MARKER_RX.search(line):
            from_index = i
        elif TO_MARKER_RX.search(line):
            to_index = i
    return from_index, to_index


def _after(candidate: Occurrence, marker: int) -> bool:
    # A name printed on the marker line itself ("From ALI") belongs to it.
    if candidate.line_index == marker:
        return candidate.raw_text != candidate.value
    return candidate.line_index > marker


def _first(candidates: Sequence[Occurrence], test) -> Optional[Occurrence]:
    for c in candidates:
        if test(c):
            return c
    return None


def assign_names(
    candidates: Sequence[Occurrence], from_index: int, to_index: int
) -> tuple[str, str]:
    sender: Optional[Occurrence] = None
    receiver: Optional[Occurrence] = None
    if from_index >= 0 and to_index >= 0 and from_index < to_index:
        sender = _first(
            candidates, lambda c: _after(c, from_index) and c.line_index < to_index
        )
        receiver = _first(candidates, lambda c: _after(c, to_index))
    elif from_index >= 0 and to_index >= 0:
        # "Sent to" block printed above "Sent by"
        receiver = _first(
            candidates, lambda c: _after(c, to_index) and c.line_index < from_index
        )
        sender = _first(candidates, lambda c: _after(c, from_index))
    elif from_index >= 0:
        sender = _first(candidates, lambda c: _after(c, from_index))
        receiver = _first(candidates, lambda c: c is not sender)
    elif to_index >= 0:
        receiver = _first(candidates, lambda c: _after(c, to_index))
        sender = _first(candidates, lambda c: c is not receiver)

    if sender is None and receiver is None:
        sender = candidates[0] if candidates else None
        receiver = candidates[1] if len(candidates) > 1 else None
    return (
        sender.value if sender is not None else "",
        receiver.value if receiver is not None else "",
    )


def resolve_names(
    lines: Sequence[str],
    occurrences: Sequence[Occurrence] | None = None,
    lexicon: NameLexicon | None = None,
    settings: ExtractionSettings | None = None,
) -> NameSections:
    """Fill sender/receiver names, phones and accounts from receipt lines."""
    settings = resolve_settings(settings)
    lexicon = lexicon if lexicon is not None else default_lexicon()
    if occurrences is None:
        occurrences = extract_occurrences(lines, RECEIPT_PROFILE, settings)

    candidates = [
        c
        for c in of_kind(occurrences, OccurrenceKind.NAME_CANDIDATE)
        if not lexicon.excludes(c.value)
    ]
    from_index, to_index = find_markers(lines)
    logger.debug(
        "name markers from=%d to=%d, %d candidates", from_index, to_index, len(candidates)
    )
    from_name, to_name = assign_names(candidates, from_index, to_index)
    result = NameSections(from_name=from_name, to_name=to_name)

    phones: List[str] = []
    for o in of_kind(occurrences, OccurrenceKind.PHONE_NUMBER):
        if o.value not in phones:
            phones.append(o.value)
    if phones:
        result.from_phone = phones[0]
    if len(phones) > 1:
        result.to_phone = phones[1]

    accounts = [
        o.value
        for o in of_kind(occurrences, OccurrenceKind.ACCOUNT_NUMBER)
        if o.subkind == MASKED
        or (o.subkind == DIGITS and len(o.value) >= settings.account_min_digits)
    ]
    if accounts:
        result.from_account = accounts[0]
    if len(accounts) > 1:
        result.to_account = accounts[1]
    return result


__all__ = [
    "NameLexicon",
    "assign_names",
    "default_lexicon",
    "find_markers",
    "resolve_names",
]
