"""Presentation helpers: entry cards with titles, relative times and colors."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Optional

from ..models.entry import Entry, EntryCard
from ..models.tag import TagView
from .tag_colors import TagColorMap, get_card_styles, get_tag_color_classes

UNTITLED = "Untitled"
UNKNOWN_TIME = "Unknown time"
ARABIC_PATTERN = re.compile(r"[\u0600-\u06FF]")

MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400


def is_arabic(text: Optional[str]) -> bool:
    return bool(ARABIC_PATTERN.search(text or ""))


def text_direction(*texts: Optional[str]) -> str:
    """'rtl' when any of the texts contains Arabic script."""
    return "rtl" if any(is_arabic(text) for text in texts) else "ltr"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _calendar_months_between(earlier: datetime, later: datetime) -> int:
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return max(months, 0)


def _distance_words(earlier: datetime, later: datetime) -> str:
    seconds = (later - earlier).total_seconds()
    minutes = _round_half_up(seconds / 60)

    if minutes < 1:
        return "less than a minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        return f"about {_plural(_round_half_up(minutes / 60), 'hour')}"
    if minutes < 2520:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        return _plural(_round_half_up(minutes / MINUTES_IN_DAY), "day")
    if minutes < MINUTES_IN_TWO_MONTHS:
        return f"about {_plural(_round_half_up(minutes / MINUTES_IN_MONTH), 'month')}"

    months = _calendar_months_between(earlier, later)
    if months < 12:
        return _plural(_round_half_up(minutes / MINUTES_IN_MONTH), "month")

    years, remainder = divmod(months, 12)
    if remainder < 3:
        return f"about {_plural(years, 'year')}"
    if remainder < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def time_ago(created_at: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Relative time with suffix, e.g. '5 minutes ago' or 'in about 2 hours'."""
    if created_at is None:
        return UNKNOWN_TIME
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if created_at <= now:
        return f"{_distance_words(created_at, now)} ago"
    return f"in {_distance_words(now, created_at)}"


def build_entry_card(
    entry: Entry,
    tag_colors: TagColorMap,
    now: Optional[datetime] = None,
) -> EntryCard:
    """Attach display values to an entry."""
    first_tag = entry.tags[0] if entry.tags else None
    return EntryCard(
        **entry.model_dump(),
        display_title=entry.title or UNTITLED,
        time_ago=time_ago(entry.created_at, now),
        direction=text_direction(entry.title, entry.content),
        tag_views=[
            TagView(name=tag, classes=get_tag_color_classes(tag, tag_colors))
            for tag in entry.tags
        ],
        card_styles=get_card_styles(first_tag, tag_colors),
    )


__all__ = [
    "UNTITLED",
    "UNKNOWN_TIME",
    "is_arabic",
    "text_direction",
    "time_ago",
    "build_entry_card",
]
