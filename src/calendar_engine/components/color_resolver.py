#!/usr/bin/env python3
"""
Agricultural Calendar Engine
Component: Color Resolver

Resolves a cell's effective fill color through an ordered list of strategies.
The first strategy that returns a color wins:

    red priority -> direct rgb -> indexed palette -> theme + tint -> pattern only

Every strategy is a plain function of a FillStyle so it can be tested on its own.
"""

import logging
import re
from typing import Callable, Optional, Tuple

from ..models import Cell, ColorRef, FillStyle
from ..palettes import (
    INDEXED_PALETTE, NEUTRAL_GRAY, RED, RED_INDEXED_SLOTS, RED_RGB_SIGNATURES,
    THEME_PALETTE, WHITE,
)

logger = logging.getLogger(__name__)

_HEX_PATTERN = re.compile(r'^[0-9A-F]{6}([0-9A-F]{2})?$')

Strategy = Callable[[FillStyle], Optional[str]]


def normalize_hex(value: Optional[str]) -> Optional[str]:
    """
    Normalize a 6-digit RGB or 8-digit ARGB hex string to '#RRGGBB'.

    Returns None for anything that is not a hex color.
    """
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lstrip('#').upper()
    if not _HEX_PATTERN.match(cleaned):
        return None
    if len(cleaned) == 8:
        cleaned = cleaned[2:]
    return f"#{cleaned}"


def apply_tint(hex_color: str, tint: float) -> str:
    """Lighten (tint > 0) or darken (tint < 0) each RGB channel independently."""
    rgb = hex_color.lstrip('#')
    channels = []
    for i in (0, 2, 4):
        channel = int(rgb[i:i + 2], 16)
        if tint < 0:
            channel = channel * (1 + tint)
        else:
            channel = channel + (255 - channel) * tint
        channels.append(max(0, min(255, int(round(channel)))))
    return "#" + "".join(f"{channel:02X}" for channel in channels)


def _safe_index(ref: ColorRef) -> Optional[int]:
    if ref.indexed is None or isinstance(ref.indexed, bool):
        return None
    try:
        return int(ref.indexed)
    except (TypeError, ValueError):
        return None


def _theme_hex(ref: ColorRef) -> Optional[str]:
    if ref.theme is None:
        return None
    try:
        base = THEME_PALETTE.get(int(ref.theme))
        tint = float(ref.tint or 0.0)
    except (TypeError, ValueError):
        return None
    if base is None:
        return None
    if tint:
        return apply_tint(base, max(-1.0, min(1.0, tint)))
    return base


def ref_color(ref: ColorRef) -> Optional[str]:
    """Color named by a single reference (rgb, then indexed, then theme), white included."""
    normalized = normalize_hex(ref.rgb)
    if normalized:
        return normalized
    index = _safe_index(ref)
    if index is not None:
        return INDEXED_PALETTE.get(index, NEUTRAL_GRAY)
    return _theme_hex(ref)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def red_priority(fill: FillStyle) -> Optional[str]:
    """Return pure red when any fill color field carries a red signature."""
    refs = fill.fill_colors()
    for ref in refs:
        normalized = normalize_hex(ref.rgb)
        if normalized and normalized[1:] in RED_RGB_SIGNATURES:
            return RED
    for ref in refs:
        if _safe_index(ref) in RED_INDEXED_SLOTS:
            return RED
    return None


def direct_color(fill: FillStyle) -> Optional[str]:
    """Foreground then background RGB; white counts as no color."""
    for ref in fill.fill_colors():
        normalized = normalize_hex(ref.rgb)
        if normalized and normalized != WHITE:
            return normalized
    return None


def indexed_color(fill: FillStyle) -> Optional[str]:
    """Look the index up in the built-in palette; unknown indices become gray."""
    for ref in fill.fill_colors():
        index = _safe_index(ref)
        if index is None:
            continue
        color = INDEXED_PALETTE.get(index, NEUTRAL_GRAY)
        if color != WHITE:
            return color
    return None


def theme_color(fill: FillStyle) -> Optional[str]:
    """Theme palette lookup with the tint transform applied."""
    for ref in fill.fill_colors():
        color = _theme_hex(ref)
        if color and color != WHITE:
            return color
    return None


def is_plain_background(fill: Optional[FillStyle]) -> bool:
    """True when every fill color present is white, i.e. an ordinary background."""
    if fill is None:
        return False
    refs = fill.fill_colors()
    if not refs:
        return False
    return all(ref_color(ref) == WHITE for ref in refs)


def pattern_only(fill: FillStyle) -> Optional[str]:
    """An intentional pattern fill without a usable color still signals activity."""
    if not fill.has_pattern:
        return None
    if any(ref_color(ref) for ref in fill.fill_colors()):
        # a color that earlier strategies rejected (white)
        return None
    return NEUTRAL_GRAY


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("red_priority", red_priority),
    ("direct", direct_color),
    ("indexed", indexed_color),
    ("theme", theme_color),
    ("pattern", pattern_only),
)


class ColorResolver:
    """Resolves the effective fill color of a cell."""

    def __init__(self, strategies: Tuple[Tuple[str, Strategy], ...] = STRATEGIES):
        self.strategies = strategies

    def resolve(self, cell: Cell) -> Optional[str]:
        """Return the cell's color as '#RRGGBB', or None when none can be established."""
        color, _ = self.resolve_with_strategy(cell)
        return color

    def resolve_with_strategy(self, cell: Cell) -> Tuple[Optional[str], Optional[str]]:
        """Return (color, name of the strategy that produced it)."""
        fill = cell.fill if cell is not None else None
        if fill is None:
            return None, None
        for name, strategy in self.strategies:
            try:
                color = strategy(fill)
            except Exception as e:
                logger.debug(f"Color strategy '{name}' failed: {e}")
                continue
            if color:
                return color, name
        return None, None
