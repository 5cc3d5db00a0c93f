"""Post-packing sanity checks.

A packer is trusted to keep every card inside the viewport across the
scroll axis and to never overlap two cards. These helpers detect, and where
the error is only float noise, repair violations of that contract.
"""

from __future__ import annotations

import dataclasses
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from app.cardlayout.layout.models import CardPosition, ViewportSize

EPSILON = 1e-6


def is_in_viewport(pos: CardPosition, viewport: ViewportSize, tolerance: float = EPSILON) -> bool:
    return (
        pos.x >= -tolerance
        and pos.y >= -tolerance
        and pos.right <= viewport.width + tolerance
        and pos.bottom <= viewport.height + tolerance
    )


def is_overlapping(a: CardPosition, b: CardPosition, tolerance: float = EPSILON) -> bool:
    """True when the rectangles share area. Touching edges do not count."""
    return not (
        a.right <= b.x + tolerance
        or b.right <= a.x + tolerance
        or a.bottom <= b.y + tolerance
        or b.bottom <= a.y + tolerance
    )


def clamp_position(pos: CardPosition, viewport: ViewportSize, scroll_axis: Optional[str] = None) -> CardPosition:
    """Shift a card back inside the viewport without resizing it.

    The scroll axis (if given) is only clamped at 0, since content may extend
    past the viewport along it.
    """

    x = max(0.0, pos.x)
    y = max(0.0, pos.y)
    if scroll_axis != "x":
        x = max(0.0, min(x, viewport.width - pos.width))
    if scroll_axis != "y":
        y = max(0.0, min(y, viewport.height - pos.height))
    if x == pos.x and y == pos.y:
        return pos
    return dataclasses.replace(pos, x=x, y=y)


def containment_overshoot(pos: CardPosition, viewport: ViewportSize, scroll_axis: str) -> float:
    """How far (in px) a card pokes out of the area it must stay within; 0 when contained."""
    over = max(0.0, -pos.x, -pos.y)
    if scroll_axis != "x":
        over = max(over, pos.right - viewport.width)
    if scroll_axis != "y":
        over = max(over, pos.bottom - viewport.height)
    return over


def find_overlap(
    positions: Sequence[CardPosition], tolerance: float = EPSILON
) -> Optional[Tuple[CardPosition, CardPosition]]:
    """Return the first overlapping pair, or None.

    Cards are grouped by column: inside a column, sorting by y means only
    neighbours can collide. Columns are compared pairwise only where their
    horizontal spans intersect, which for a well-formed layout is never.
    """

    by_column: Dict[int, List[CardPosition]] = defaultdict(list)
    for pos in positions:
        by_column[pos.column].append(pos)

    spans = []
    for column, members in by_column.items():
        members.sort(key=lambda p: (p.y, p.x))
        for a, b in zip(members, members[1:]):
            if is_overlapping(a, b, tolerance):
                return a, b
        spans.append((min(p.x for p in members), max(p.right for p in members), column))

    spans.sort()
    for i, (_, end, column) in enumerate(spans):
        for start_j, _, other in spans[i + 1:]:
            if start_j >= end - tolerance:
                break
            pair = _first_overlap_between(by_column[column], by_column[other], tolerance)
            if pair is not None:
                return pair
    return None


def _first_overlap_between(
    left: List[CardPosition], right: List[CardPosition], tolerance: float
) -> Optional[Tuple[CardPosition, CardPosition]]:
    for a in left:
        for b in right:
            if is_overlapping(a, b, tolerance):
                return a, b
    return None
