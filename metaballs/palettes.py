"""
Fill colours for metaball outlines.

jgraph's ``pcfill`` takes three channel values in 0..1.  Colours here are
plain float triples and are passed to the renderer unchanged, so values
outside 0..1 are not rejected.

Includes a complementary-hue helper so an alternate body colour can be
derived from the main one.
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Dict, List, Tuple

RGB255 = Tuple[int, int, int]


@dataclass(frozen=True)
class Color:
    """Immutable fill colour (r, g, b channels, nominally 0..1)."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def to_rgb255(self) -> RGB255:
        """Clamp to 0..255 integers for raster display."""
        return _clamp_rgb(self.r, self.g, self.b)


# ── Named colours ────────────────────────────────────────────────────────

COLORS: Dict[str, Color] = {
    "black": Color(0.0, 0.0, 0.0),
    "white": Color(1.0, 1.0, 1.0),
    "grey": Color(0.5, 0.5, 0.5),
    "red": Color(0.8, 0.1, 0.05),
    "orange": Color(0.9, 0.45, 0.05),
    "gold": Color(0.85, 0.65, 0.1),
    "green": Color(0.15, 0.65, 0.1),
    "cyan": Color(0.05, 0.6, 0.65),
    "blue": Color(0.1, 0.2, 0.75),
    "purple": Color(0.5, 0.1, 0.65),
    "magenta": Color(0.75, 0.1, 0.45),
}

DEFAULT_COLOR = "black"


def _clamp_rgb(r: float, g: float, b: float) -> RGB255:
    return (
        max(0, min(255, int(r * 255))),
        max(0, min(255, int(g * 255))),
        max(0, min(255, int(b * 255))),
    )


def complementary(base: Color) -> Color:
    """Return the complementary (opposite hue) colour.

    Greys have no hue, so they map to their value inverse instead.
    """
    h, s, v = colorsys.rgb_to_hsv(base.r, base.g, base.b)
    if s == 0.0:
        return Color(1.0 - base.r, 1.0 - base.g, 1.0 - base.b)
    r, g, b = colorsys.hsv_to_rgb((h + 0.5) % 1.0, s, v)
    return Color(r, g, b)


# ── Accessors ─────────────────────────────────────────────────────────────

def get_color(name: str) -> Color:
    if name not in COLORS:
        available = ", ".join(list_colors())
        raise KeyError(f"Unknown colour '{name}'. Available: {available}")
    return COLORS[name]


def list_colors() -> List[str]:
    return sorted(COLORS.keys())


def parse_color(text: str) -> Color:
    """Parse a colour name or an ``r,g,b`` triple such as ``0.2,0.4,1``.

    Raises:
        ValueError: if *text* is neither a known name nor three numbers.
    """
    text = text.strip()
    if text.lower() in COLORS:
        return get_color(text.lower())
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise ValueError(
            f"Invalid colour '{text}': expected a name ({', '.join(list_colors())}) "
            "or three comma-separated numbers"
        )
    try:
        r, g, b = (float(p) for p in parts)
    except ValueError:
        raise ValueError(f"Invalid colour '{text}': channels must be numbers") from None
    return Color(r, g, b)
