from statement_ocr.patterns import Occurrence, OccurrenceKind
from statement_ocr.proximity import (
    closest,
    closest_in_value,
    first,
    nearest,
    window_bounds,
)


def occ(line, value="x", kind=OccurrenceKind.DATE):
    return Occurrence(kind, value, str(value), line)


def test_closest_prefers_smaller_line_distance():
    anchor = occ(10, 5000.0, OccurrenceKind.AMOUNT)
    chosen = closest(anchor, [occ(5, "a"), occ(12, "b")])
    assert chosen.line_index == 12


def test_closest_tie_goes_to_first_seen():
    anchor = occ(10, kind=OccurrenceKind.AMOUNT)
    chosen = closest(anchor, [occ(8, "before"), occ(12, "after")])
    assert chosen.value == "before"


def test_closest_preferred_subset_wins_over_distance():
    anchor = occ(10, kind=OccurrenceKind.AMOUNT)
    candidates = [occ(10, "BANK"), occ(14, "MEEZAN")]
    chosen = closest(anchor, candidates, preferred=lambda c: c.value == "MEEZAN")
    assert chosen.value == "MEEZAN"


def test_closest_falls_back_when_nothing_preferred():
    anchor = occ(10, kind=OccurrenceKind.AMOUNT)
    chosen = closest(anchor, [occ(9, "BANK")], preferred=lambda c: False)
    assert chosen.value == "BANK"


def test_closest_empty():
    assert closest(occ(3), []) is None


def test_nearest_is_inclusive_and_keeps_order():
    anchor = occ(20)
    candidates = [occ(4), occ(5), occ(35), occ(36), occ(19)]
    assert [c.line_index for c in nearest(anchor, candidates, 15)] == [5, 35, 19]


def test_window_bounds_clipped():
    assert window_bounds(occ(3), 15) == (0, 18)
    assert window_bounds(occ(3), 15, line_count=10) == (0, 9)
    assert window_bounds(occ(50), 15, line_count=100) == (35, 65)


def test_closest_in_value():
    balances = [occ(1, 2_500_000.0), occ(2, 1_100_000.0), occ(3, 1_050_000.0)]
    assert closest_in_value(50_000.0, balances).value == 1_050_000.0
    assert closest_in_value(50_000.0, []) is None


def test_first():
    items = [occ(1, "a"), occ(2, "b")]
    assert first(items).value == "a"
    assert first(items, 1).value == "b"
    assert first(items, 2) is None
