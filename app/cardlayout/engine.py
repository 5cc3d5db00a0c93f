"""Card layout engine.

Owns the current configuration, viewport and position map for one card
surface. Every recompute builds a fresh map and swaps it in only after it
has been validated, so readers never see a half-updated layout.

The engine is synchronous and not thread-safe; callers on several threads
must serialize access themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.cardlayout.layout.columns import compute_packing
from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.errors import InvariantViolation
from app.cardlayout.layout.grid import pack_grid
from app.cardlayout.layout.masonry import pack_masonry
from app.cardlayout.layout.models import CardDescriptor, CardPosition, ResolvedLayout, ViewportSize
from app.cardlayout.layout.selector import select_layout
from app.cardlayout.layout.validation import (
    EPSILON,
    clamp_position,
    containment_overshoot,
    find_overlap,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    config: LayoutConfig
    viewport: ViewportSize
    cards: Tuple[CardDescriptor, ...]
    resolved: ResolvedLayout
    positions: Dict[str, CardPosition]
    extent: Tuple[float, float]


class LayoutEngine:
    """Positions an ordered list of cards inside a viewport.

    strict: raise InvariantViolation when a packer misbehaves. Defaults to
    on whenever assertions are enabled; with it off the engine clamps, logs
    and counts the problem in `invariant_violations`.
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        viewport: Optional[ViewportSize] = None,
        *,
        strict: bool = __debug__,
    ) -> None:
        self._config = config or LayoutConfig()
        self._viewport = viewport or ViewportSize(0, 0)
        self._cards: Tuple[CardDescriptor, ...] = ()
        self._positions: Dict[str, CardPosition] = {}
        self._resolved: Optional[ResolvedLayout] = None
        self._extent = (0.0, 0.0)
        self.strict = strict
        self.invariant_violations = 0

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def viewport(self) -> ViewportSize:
        return self._viewport

    @property
    def resolved(self) -> Optional[ResolvedLayout]:
        return self._resolved

    @property
    def positions(self) -> Dict[str, CardPosition]:
        return dict(self._positions)

    def compute_layout(
        self, cards: Iterable[CardDescriptor], viewport: Optional[ViewportSize] = None
    ) -> Dict[str, CardPosition]:
        """Lay out `cards` in the given order and return the new position map.

        Omitting `viewport` reuses the current one. A viewport too small for a
        single track yields an empty map, not an error.
        """
        snapshot = self._layout(tuple(cards), viewport or self._viewport, self._config)
        return self._commit(snapshot)

    def resize(self, viewport: ViewportSize) -> Dict[str, CardPosition]:
        """Re-run the layout for the last card list at a new viewport size."""
        return self.compute_layout(self._cards, viewport)

    def update_config(self, **changes: Any) -> Dict[str, CardPosition]:
        """Merge `changes` into the config and re-run the layout.

        Raises ConfigurationError, leaving the current config and positions
        in place, when the merged config is invalid.
        """
        config = self._config.replace(**changes)
        snapshot = self._layout(self._cards, self._viewport, config)
        logger.info(
            "layout config updated: %s",
            ", ".join(f"{key}={value!r}" for key, value in sorted(changes.items())),
        )
        return self._commit(snapshot)

    def set_config(self, config: LayoutConfig) -> Dict[str, CardPosition]:
        """Swap in a whole config, e.g. when a preset is applied."""
        return self._commit(self._layout(self._cards, self._viewport, config))

    def reset_positions(self) -> None:
        """Forget the current positions and card list without recomputing.

        The card list goes too, so a later `resize` lays out nothing until
        the next `compute_layout` supplies cards again.
        """
        self._positions = {}
        self._cards = ()
        self._resolved = None
        self._extent = (0.0, 0.0)

    def get_position(self, card_id: str) -> Optional[CardPosition]:
        return self._positions.get(card_id)

    def content_size(self) -> ViewportSize:
        """Size of the scrollable content; never smaller than the viewport."""
        width, height = self._extent
        return ViewportSize(max(width, self._viewport.width), max(height, self._viewport.height))

    def _layout(
        self,
        cards: Tuple[CardDescriptor, ...],
        viewport: ViewportSize,
        config: LayoutConfig,
    ) -> _Snapshot:
        _check_cards(cards)
        strategy, direction = select_layout(viewport, config)
        resolved = compute_packing(viewport, config, strategy, direction)

        extent = (viewport.width, viewport.height)
        if resolved.is_degenerate or not cards:
            placements: List[CardPosition] = []
        elif strategy == "masonry":
            placements, height = pack_masonry(
                cards,
                columns=resolved.columns,
                card_width=resolved.card_width,
                config=config,
            )
            extent = (viewport.width, max(viewport.height, height))
        else:
            placements = pack_grid(
                cards,
                columns=resolved.columns,
                rows=resolved.rows,
                card_width=resolved.card_width,
                card_height=resolved.card_height,
                direction=direction,
                config=config,
            )
            extent = (
                max(viewport.width, max(p.right for p in placements) + config.padding),
                max(viewport.height, max(p.bottom for p in placements) + config.padding),
            )

        placements = self._validate(placements, viewport, _scroll_axis(resolved))
        logger.debug(
            "layout %s/%s: %d cards, %d columns, %d rows, viewport %gx%g",
            strategy,
            direction,
            len(placements),
            resolved.columns,
            resolved.rows,
            viewport.width,
            viewport.height,
        )
        return _Snapshot(
            config=config,
            viewport=viewport,
            cards=cards,
            resolved=resolved,
            positions={p.card_id: p for p in placements},
            extent=extent,
        )

    def _commit(self, snapshot: _Snapshot) -> Dict[str, CardPosition]:
        self._config = snapshot.config
        self._viewport = snapshot.viewport
        self._cards = snapshot.cards
        self._resolved = snapshot.resolved
        self._positions = snapshot.positions
        self._extent = snapshot.extent
        return dict(self._positions)

    def _validate(self, placements: List[CardPosition], vp: ViewportSize, scroll_axis: str) -> List[CardPosition]:
        checked: List[CardPosition] = []
        for pos in placements:
            over = containment_overshoot(pos, vp, scroll_axis)
            if over > EPSILON:
                self._violation(f"card {pos.card_id!r} exceeds the viewport by {over:g}px")
            if over > 0:
                pos = clamp_position(pos, vp, scroll_axis)
            checked.append(pos)

        pair = find_overlap(checked)
        if pair is not None:
            a, b = pair
            self._violation(f"cards {a.card_id!r} and {b.card_id!r} overlap")
        return checked

    def _violation(self, message: str) -> None:
        self.invariant_violations += 1
        if self.strict:
            raise InvariantViolation(message)
        logger.warning("layout invariant violated: %s", message)


def _scroll_axis(resolved: ResolvedLayout) -> str:
    # Masonry always stacks down its columns.
    if resolved.strategy == "grid" and resolved.direction == "horizontal":
        return "x"
    return "y"


def _check_cards(cards: Tuple[CardDescriptor, ...]) -> None:
    seen = set()
    for card in cards:
        if card.id in seen:
            raise ValueError(f"duplicate card id {card.id!r}")
        if card.min_width < 0 or card.min_height < 0:
            raise ValueError(f"card {card.id!r} has a negative size")
        seen.add(card.id)
