"""Track-count and card-size math shared by the grid and masonry packers."""

from __future__ import annotations

import math
from typing import Optional

from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.models import ResolvedLayout, ViewportSize


def choose_columns(
    *,
    available_px: float,
    threshold_px: float,
    gap_px: float,
    max_columns: Optional[int] = None,
) -> int:
    """Choose how many tracks of at least threshold_px fit into available_px.

    Policy:
    - the largest N with N*threshold + (N-1)*gap <= available
    - 0 when not even one track fits (the caller treats that as
      "viewport too small", not as an error)
    - clamp to max_columns when given

    Works for rows as well; the name follows the common case.
    """

    if threshold_px <= 0:
        raise ValueError("threshold_px must be > 0")
    if gap_px < 0:
        raise ValueError("gap_px must be >= 0")
    if max_columns is not None and max_columns <= 0:
        raise ValueError("max_columns must be > 0")
    if available_px <= 0:
        return 0

    # N*min + (N-1)*gap <= available
    # => N <= (available+gap)/(min+gap)
    n = int(math.floor((available_px + gap_px) / (threshold_px + gap_px)))
    if max_columns is not None:
        n = min(max_columns, n)
    return max(0, n)


def choose_rows(*, available_px: float, threshold_px: float, gap_px: float) -> int:
    return choose_columns(available_px=available_px, threshold_px=threshold_px, gap_px=gap_px)


def track_size(available_px: float, count: int, gap_px: float) -> float:
    """Size of each of `count` equal tracks filling available_px with gaps between."""
    if count <= 0:
        raise ValueError("count must be > 0")
    if gap_px < 0:
        raise ValueError("gap_px must be >= 0")

    usable = available_px - gap_px * (count - 1)
    if usable <= 0:
        raise ValueError("available space too small for given count/gap")
    return usable / count


def available_area(viewport: ViewportSize, config: LayoutConfig) -> tuple[float, float]:
    """Viewport minus padding on both sides, clamped at 0."""
    width = max(0.0, viewport.width - 2 * config.padding)
    height = max(0.0, viewport.height - 2 * config.padding)
    return width, height


def compute_packing(
    viewport: ViewportSize,
    config: LayoutConfig,
    strategy: str,
    direction: str,
) -> ResolvedLayout:
    """Derive track counts and card size for one layout pass.

    The axis across the scroll direction is the constrained one: a vertical
    layout with zero columns, or a horizontal grid with zero rows, is
    degenerate and comes back with columns == rows == 0. The scroll axis
    always keeps at least one track, since cards there may simply scroll.

    The available height only matters to grids: a vertical grid with no
    height left still gets one row of threshold-height cards.

    Masonry only fixes the column width; card_height is 0 because every
    card brings its own height.
    """

    width, height = available_area(viewport, config)
    empty = ResolvedLayout(strategy, direction, 0, 0, 0.0, 0.0)
    if width <= 0:
        return empty

    columns = choose_columns(
        available_px=width,
        threshold_px=config.card_threshold_width,
        gap_px=config.gap,
        max_columns=config.max_columns,
    )

    if strategy == "masonry":
        if columns == 0:
            return empty
        return ResolvedLayout(
            strategy,
            direction,
            columns,
            0,
            track_size(width, columns, config.gap),
            0.0,
        )

    rows = choose_rows(
        available_px=height,
        threshold_px=config.card_threshold_height,
        gap_px=config.gap,
    )
    if direction == "horizontal":
        if rows == 0:
            return empty
        columns = max(1, columns)
    else:
        if columns == 0:
            return empty
        rows = max(1, rows)

    card_width = track_size(width, columns, config.gap)
    if config.fixed_card_height or height <= 0:
        # No height to fill; rows scroll at the threshold height.
        card_height = float(config.card_threshold_height)
    else:
        card_height = track_size(height, rows, config.gap)

    return ResolvedLayout(strategy, direction, columns, rows, card_width, card_height)
