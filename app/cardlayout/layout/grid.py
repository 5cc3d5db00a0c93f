"""Uniform-size grid packing.

Cards are placed in the caller's order. A vertical layout fills a row left to
right and wraps to the next row; a horizontal layout fills a column top to
bottom and wraps to the next column, because it grows sideways.
"""

from __future__ import annotations

from typing import Iterable, List

from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.models import CardDescriptor, CardPosition


def grid_cell(index: int, *, columns: int, rows: int, direction: str) -> tuple[int, int]:
    """Return (column, row) of the index-th card."""
    if index < 0:
        raise ValueError("index must be >= 0")
    if direction == "horizontal":
        if rows <= 0:
            raise ValueError("rows must be > 0")
        return index // rows, index % rows
    if columns <= 0:
        raise ValueError("columns must be > 0")
    return index % columns, index // columns


def pack_grid(
    cards: Iterable[CardDescriptor],
    *,
    columns: int,
    rows: int,
    card_width: float,
    card_height: float,
    direction: str,
    config: LayoutConfig,
) -> List[CardPosition]:
    """Assign a cell to each card. Returns [] when the cross axis has no tracks."""

    if columns < 0 or rows < 0:
        raise ValueError("columns/rows must be >= 0")
    cross_tracks = rows if direction == "horizontal" else columns
    if cross_tracks == 0:
        return []

    pad = config.padding
    pitch_x = card_width + config.gap
    pitch_y = card_height + config.gap

    placements: List[CardPosition] = []
    for index, card in enumerate(cards):
        col, row = grid_cell(index, columns=columns, rows=rows, direction=direction)
        placements.append(
            CardPosition(
                card_id=card.id,
                x=pad + col * pitch_x,
                y=pad + row * pitch_y,
                width=card_width,
                height=card_height,
                column=col,
                row=row,
            )
        )
    return placements
