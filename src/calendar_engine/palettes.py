#!/usr/bin/env python3
"""
Agricultural Calendar Engine - Color Palettes
Fixed lookup tables used to turn indexed and theme color references into RGB
"""

from typing import Dict, FrozenSet, Tuple

NEUTRAL_GRAY = "#CCCCCC"
WHITE = "#FFFFFF"
RED = "#FF0000"

# Excel legacy palette, indices 0-63
_LEGACY_PALETTE: Tuple[str, ...] = (
    "000000", "FFFFFF", "FF0000", "00FF00", "0000FF", "FFFF00", "FF00FF", "00FFFF",
    "000000", "FFFFFF", "FF0000", "00FF00", "0000FF", "FFFF00", "FF00FF", "00FFFF",
    "800000", "008000", "000080", "808000", "800080", "008080", "C0C0C0", "808080",
    "9999FF", "993366", "FFFFCC", "CCFFFF", "660066", "FF8080", "0066CC", "CCCCFF",
    "000080", "FF00FF", "FFFF00", "00FFFF", "800080", "800000", "008080", "0000FF",
    "00CCFF", "CCFFFF", "CCFFCC", "FFFF99", "99CCFF", "FF99CC", "CC99FF", "FFCC99",
    "3366FF", "33CCCC", "99CC00", "FFCC00", "FF9900", "FF6600", "666699", "969696",
    "003366", "339966", "003300", "333300", "993300", "993366", "333399", "333333",
)

# Custom range reused across uploaded calendars
CUSTOM_PALETTE: Dict[int, str] = {
    65: "#00B0F0",  # site selection
    66: "#BF9000",  # land preparation
    67: "#FF6600",
    68: "#008000",
    69: "#800080",
}

INDEXED_PALETTE: Dict[int, str] = {
    index: f"#{rgb}" for index, rgb in enumerate(_LEGACY_PALETTE)
}
INDEXED_PALETTE.update(CUSTOM_PALETTE)

# Default Office theme: lt1, dk1, lt2, dk2, accent1-6, hlink, folHlink
THEME_PALETTE: Dict[int, str] = {
    0: "#FFFFFF",
    1: "#000000",
    2: "#E7E6E6",
    3: "#44546A",
    4: "#4472C4",
    5: "#ED7D31",
    6: "#A5A5A5",
    7: "#FFC000",
    8: "#5B9BD5",
    9: "#70AD47",
    10: "#0563C1",
    11: "#954F72",
}

RED_RGB_SIGNATURES: FrozenSet[str] = frozenset({"FF0000", "FE0000", "EE0000", "C00000"})
RED_INDEXED_SLOTS: FrozenSet[int] = frozenset({2, 10, 60, 68})
