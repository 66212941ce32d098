"""Time-window filtering of collected items.

Both window forms use strict inequalities: an item created exactly on a
boundary is outside the window.
"""

from __future__ import annotations

from typing import Iterable, List

from .models import TimeWindow, TrackedItem


def in_window(item: TrackedItem, window: TimeWindow) -> bool:
    """Return whether ``item`` was created strictly inside ``window``."""
    if window.is_open:
        return item.created_at > window.start
    return window.start < item.created_at < window.end


def filter_window(items: Iterable[TrackedItem], window: TimeWindow) -> List[TrackedItem]:
    return [item for item in items if in_window(item, window)]
