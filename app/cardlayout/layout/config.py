"""Layout configuration value object.

A LayoutConfig is validated on construction, so any instance that exists is
usable by the packers. Updates go through `replace`, which builds and
validates a new instance and leaves the old one untouched.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from app.cardlayout.layout.errors import ConfigurationError

STRATEGIES = ("auto", "grid", "masonry")
DIRECTIONS = ("auto", "vertical", "horizontal")

# camelCase names used by settings/preset payloads.
_ALIASES = {
    "cardThresholdWidth": "card_threshold_width",
    "cardThresholdHeight": "card_threshold_height",
    "fixedCardHeight": "fixed_card_height",
    "defaultCardHeight": "default_card_height",
    "maxColumns": "max_columns",
}


@dataclass(frozen=True)
class LayoutConfig:
    strategy: str = "auto"
    direction: str = "auto"
    card_threshold_width: float = 240
    card_threshold_height: float = 120
    fixed_card_height: bool = False
    gap: float = 16
    padding: float = 16
    default_card_height: float = 120
    max_columns: Optional[int] = None

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"strategy must be one of {', '.join(STRATEGIES)} (got {self.strategy!r})"
            )
        if self.direction not in DIRECTIONS:
            raise ConfigurationError(
                f"direction must be one of {', '.join(DIRECTIONS)} (got {self.direction!r})"
            )
        if not isinstance(self.fixed_card_height, bool):
            raise ConfigurationError("fixed_card_height must be a bool")

        for name in ("card_threshold_width", "card_threshold_height", "default_card_height"):
            value = _number(name, getattr(self, name))
            if value <= 0:
                raise ConfigurationError(f"{name} must be > 0")
        for name in ("gap", "padding"):
            value = _number(name, getattr(self, name))
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0")

        if self.max_columns is not None:
            if isinstance(self.max_columns, bool) or not isinstance(self.max_columns, int):
                raise ConfigurationError("max_columns must be an int or None")
            if self.max_columns < 1:
                raise ConfigurationError("max_columns must be >= 1")

    def replace(self, **changes: Any) -> "LayoutConfig":
        """Return a validated copy with `changes` applied."""
        unknown = sorted(set(changes) - _field_names())
        if unknown:
            raise ConfigurationError(f"unknown layout option(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["LayoutConfig"] = None) -> "LayoutConfig":
        """Build a config from a settings dict, on top of `base` (or the defaults).

        Accepts both snake_case field names and the camelCase spelling used by
        stored presets.
        """
        changes = {_ALIASES.get(key, key): value for key, value in data.items()}
        return (base or cls()).replace(**changes)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def _field_names() -> set[str]:
    return {f.name for f in dataclasses.fields(LayoutConfig)}


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite")
    return float(value)
