"""Pick a packing strategy and scroll direction for a viewport."""

from __future__ import annotations

from typing import Tuple

from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.models import ViewportSize


def select_layout(viewport: ViewportSize, config: LayoutConfig) -> Tuple[str, str]:
    """Return (strategy, direction).

    Explicit settings win. With "auto", uniform card heights mean grid and
    anything else means masonry; wide viewports scroll sideways, tall or
    square ones scroll down.
    """

    if config.strategy != "auto":
        strategy = config.strategy
    else:
        strategy = "grid" if config.fixed_card_height else "masonry"

    if config.direction != "auto":
        direction = config.direction
    else:
        direction = "horizontal" if viewport.is_landscape else "vertical"

    return strategy, direction
