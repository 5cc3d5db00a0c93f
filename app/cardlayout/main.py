from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
import argparse
import json
import logging
import sys

from app.cardlayout.engine import LayoutEngine
from app.cardlayout.layout.config import DIRECTIONS, STRATEGIES, LayoutConfig
from app.cardlayout.layout.errors import ConfigurationError
from app.cardlayout.layout.models import CardDescriptor, ViewportSize

# Heights cycled through when cards are generated with --count.
DEMO_HEIGHTS = (120, 180, 90, 150, 210)


def load_cards(path: str) -> list[CardDescriptor]:
    """Read a JSON list of {"id", "min_width", "min_height"} objects."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON list of cards")
    cards = []
    for item in raw:
        cards.append(
            CardDescriptor(
                id=str(item["id"]),
                min_width=float(item.get("min_width", item.get("minWidth", 0))),
                min_height=float(item.get("min_height", item.get("minHeight", 0))),
            )
        )
    return cards


def demo_cards(count: int) -> list[CardDescriptor]:
    return [
        CardDescriptor(id=f"card-{i}", min_height=DEMO_HEIGHTS[i % len(DEMO_HEIGHTS)])
        for i in range(count)
    ]


def load_config(path: str | None = None, **overrides) -> LayoutConfig:
    data = {}
    if path:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: expected a JSON object")
    data.update({key: value for key, value in overrides.items() if value is not None})
    return LayoutConfig.from_mapping(data)


def run_layout(
    cards: list[CardDescriptor],
    viewport: ViewportSize,
    config: LayoutConfig,
) -> dict:
    """Lay out `cards` once and return a JSON-ready report."""
    engine = LayoutEngine(config)
    positions = engine.compute_layout(cards, viewport)
    content = engine.content_size()
    return {
        "layout": asdict(engine.resolved),
        "viewport": asdict(viewport),
        "content": asdict(content),
        "positions": [asdict(positions[card.id]) for card in cards if card.id in positions],
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Card layout smoke runner")
    parser.add_argument("--width", type=float, required=True, help="Viewport width")
    parser.add_argument("--height", type=float, required=True, help="Viewport height")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--cards", help="JSON file with the ordered card list")
    source.add_argument("--count", type=int, default=12, help="Generate this many demo cards")
    parser.add_argument("--config", help="JSON file with layout options")
    parser.add_argument("--strategy", choices=STRATEGIES)
    parser.add_argument("--direction", choices=DIRECTIONS)
    parser.add_argument("--gap", type=float)
    parser.add_argument("--padding", type=float)
    parser.add_argument("--fixed-card-height", action="store_true", default=None)
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(
            args.config,
            strategy=args.strategy,
            direction=args.direction,
            gap=args.gap,
            padding=args.padding,
            fixed_card_height=args.fixed_card_height,
        )
        viewport = ViewportSize(args.width, args.height)
        cards = load_cards(args.cards) if args.cards else demo_cards(args.count)
        report = run_layout(cards, viewport, config)
    except (OSError, KeyError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
