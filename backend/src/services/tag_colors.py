"""Tag color derivation for entry cards and tag badges."""

from __future__ import annotations

import re
from typing import Mapping, Optional

from ..models.entry import CardStyles
from ..models.tag import TagColor

DEFAULT_TAG_PALETTE: tuple[str, ...] = (
    "bg-red-500/10 text-red-400 border-red-500/20",
    "bg-blue-500/10 text-blue-400 border-blue-500/20",
    "bg-green-500/10 text-green-400 border-green-500/20",
    "bg-amber-500/10 text-amber-400 border-amber-500/20",
    "bg-purple-500/10 text-purple-400 border-purple-500/20",
    "bg-pink-500/10 text-pink-400 border-pink-500/20",
    "bg-indigo-500/10 text-indigo-400 border-indigo-500/20",
    "bg-orange-500/10 text-orange-400 border-orange-500/20",
    "bg-teal-500/10 text-teal-400 border-teal-500/20",
    "bg-cyan-500/10 text-cyan-400 border-cyan-500/20",
)

DEFAULT_CARD_STYLES = CardStyles(
    border_color="border-white/10",
    shadow_color="shadow-primary/5",
    stripe_color="bg-primary/20",
)

# Accent colors for the stock tags when the user has no color record.
FALLBACK_CARD_COLORS: dict[str, str] = {
    "A.I": "purple-500",
    "LIFE": "blue-500",
    "READ": "green-500",
    "Research": "pink-500",
    "WORK": "orange-500",
}

BORDER_COLOR_PATTERN = re.compile(r"border-([a-z]+-\d+)")

TagColorMap = Mapping[str, TagColor]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def tag_hash(tag: str) -> int:
    """
    Rolling hash ``h = code + ((h << 5) - h)`` over UTF-16 code units.

    The shift wraps to a signed 32-bit integer while the subtraction does not,
    matching the browser implementation so web and API colors agree.
    """
    value = 0
    units = tag.encode("utf-16-le")
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        value = code + (_to_int32(_to_int32(value) << 5) - value)
    return value


def default_tag_color(tag: str) -> str:
    """Palette entry for a tag without a user-defined color."""
    return DEFAULT_TAG_PALETTE[abs(tag_hash(tag)) % len(DEFAULT_TAG_PALETTE)]


def get_tag_color_classes(tag: str, tag_colors: TagColorMap) -> str:
    """Return the class triple for a tag, preferring the user's color record."""
    colors = tag_colors.get(tag)
    if colors is not None:
        return f"{colors.background_color} {colors.border_color} {colors.text_color}"
    return default_tag_color(tag)


def _accent_styles(color_name: str) -> CardStyles:
    return CardStyles(
        border_color=f"border-{color_name}/50",
        shadow_color=f"shadow-{color_name}/20",
        stripe_color=f"bg-{color_name}",
    )


def get_card_styles(first_tag: Optional[str], tag_colors: TagColorMap) -> CardStyles:
    """Card border, shadow and stripe classes derived from an entry's first tag."""
    if not first_tag:
        return DEFAULT_CARD_STYLES

    colors = tag_colors.get(first_tag)
    if colors is not None:
        match = BORDER_COLOR_PATTERN.search(colors.border_color)
        if match:
            return _accent_styles(match.group(1))

    fallback = FALLBACK_CARD_COLORS.get(first_tag)
    if fallback:
        return _accent_styles(fallback)

    return DEFAULT_CARD_STYLES


__all__ = [
    "DEFAULT_TAG_PALETTE",
    "DEFAULT_CARD_STYLES",
    "tag_hash",
    "default_tag_color",
    "get_tag_color_classes",
    "get_card_styles",
]
