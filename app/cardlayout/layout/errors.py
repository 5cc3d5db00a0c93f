"""Exceptions raised by the card layout engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A LayoutConfig value is out of range or not recognized."""


class InvariantViolation(AssertionError):
    """A packer produced a position that escapes the viewport or overlaps another card.

    This always signals a bug in a packer, never bad input.
    """
