"""Masonry packing (variable card heights, fixed column width).

This module is intentionally UI-framework agnostic.

Each card keeps its own height and drops into whichever column is currently
shortest, so the layout can be produced in one streaming pass without
knowing the heights of later cards.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.models import CardDescriptor, CardPosition


def card_height(card: CardDescriptor, config: LayoutConfig) -> float:
    if card.min_height < 0:
        raise ValueError(f"card {card.id!r} has negative min_height")
    if card.min_height > 0:
        return float(card.min_height)
    return float(config.default_card_height)


def pack_masonry(
    cards: Iterable[CardDescriptor],
    *,
    columns: int,
    card_width: float,
    config: LayoutConfig,
) -> Tuple[List[CardPosition], float]:
    """Compute placements and the content height.

    Algorithm: greedy assignment to the shortest column. The minimum search is
    a linear scan, O(n * columns); column counts are small enough that a heap
    would not pay for itself.

    Returns (placements, content_height). content_height includes the
    padding on both ends and is just 2*padding for an empty list.
    """

    if columns < 0:
        raise ValueError("columns must be >= 0")
    if columns == 0:
        return [], 0.0
    if card_width <= 0:
        raise ValueError("card_width must be > 0")

    gap = config.gap
    pad = config.padding
    col_heights = [float(pad) for _ in range(columns)]

    placements: List[CardPosition] = []
    for card in cards:
        # Select shortest column (stable: choose lowest index on ties).
        col = min(range(columns), key=lambda c: col_heights[c])
        x = pad + col * (card_width + gap)
        y = col_heights[col]
        h = card_height(card, config)

        placements.append(
            CardPosition(
                card_id=card.id,
                x=x,
                y=y,
                width=card_width,
                height=h,
                column=col,
            )
        )

        col_heights[col] = y + h + gap

    total = max(col_heights) - (gap if placements else 0) + pad
    return placements, max(0.0, total)
