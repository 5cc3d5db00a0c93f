"""Plain data passed into and out of the layout engine.

All types are frozen: callers hand descriptors in, the engine hands
positions back, and nobody mutates either afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardDescriptor:
    """One card to lay out.

    min_height is the card's own height for masonry. A non-positive value
    means "unknown" and the configured default height is used instead.

    min_width is accepted for callers that track it but does not affect
    layout: column width always comes from card_threshold_width.
    """

    id: str
    min_width: float = 0
    min_height: float = 0


@dataclass(frozen=True)
class ViewportSize:
    """Visible area of the card container.

    Negative sizes are accepted and treated like 0; containers report them
    briefly while they are being mounted or torn down.
    """

    width: float
    height: float

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height


@dataclass(frozen=True)
class ResolvedLayout:
    """Strategy, direction and track sizes chosen for one layout pass."""

    strategy: str
    direction: str
    columns: int
    rows: int
    card_width: float
    card_height: float

    @property
    def is_degenerate(self) -> bool:
        return self.columns == 0 or (self.strategy == "grid" and self.rows == 0)


@dataclass(frozen=True)
class CardPosition:
    card_id: str
    x: float
    y: float
    width: float
    height: float
    column: int
    # Masonry has no row concept; its positions carry None.
    row: Optional[int] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
