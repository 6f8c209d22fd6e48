"""Line-window association around an anchor occurrence."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .patterns import Occurrence

Predicate = Callable[[Occurrence], bool]


def window_bounds(anchor: Occurrence, radius: int, line_count: int | None = None) -> Tuple[int, int]:
    """Inclusive ``(start, end)`` line indices of the window around ``anchor``.

    When ``line_count`` is given the window is clipped to the document.
    """
    start = max(0, anchor.line_index - radius)
    end = anchor.line_index + radius
    if line_count is not None:
        end = min(end, line_count - 1)
    return start, end


def nearest(
    anchor: Occurrence, candidates: Sequence[Occurrence], radius: int
) -> List[Occurrence]:
    """Candidates whose line lies within ``radius`` lines of the anchor.

    Input order (document order) is preserved.
    """
    start, end = window_bounds(anchor, radius)
    return [c for c in candidates if start <= c.line_index <= end]


def closest(
    anchor: Occurrence,
    candidates: Sequence[Occurrence],
    preferred: Optional[Predicate] = None,
) -> Optional[Occurrence]:
    """Pick the candidate with the smallest line distance to ``anchor``.

    If ``preferred`` is given and any candidate satisfies it, only those are
    considered. Ties go to the first candidate seen.
    """
    pool = list(candidates)
    if preferred is not None:
        narrowed = [c for c in pool if preferred(c)]
        if narrowed:
            pool = narrowed
    best: Optional[Occurrence] = None
    best_distance = None
    for c in pool:
        distance = abs(c.line_index - anchor.line_index)
        if best_distance is None or distance < best_distance:
            best, best_distance = c, distance
    return best


def closest_in_value(target: float, candidates: Sequence[Occurrence]) -> Optional[Occurrence]:
    """Numeric counterpart of :func:`closest`: nearest ``value`` to ``target``."""
    best: Optional[Occurrence] = None
    best_gap = None
    for c in candidates:
        gap = abs(float(c.value) - target)
        if best_gap is None or gap < best_gap:
            best, best_gap = c, gap
    return best


def first(candidates: Sequence[Occurrence], position: int = 0) -> Optional[Occurrence]:
    return candidates[position] if len(candidates) > position else None


__all__ = ["closest", "closest_in_value", "first", "nearest", "window_bounds"]
