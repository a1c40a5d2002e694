"""Active outline item lookup."""

from __future__ import annotations

from collections.abc import Iterable

from regionscope.document import Position, Range
from regionscope.outline.models import OutlineItem


def active_item(top_level_items: Iterable[OutlineItem], position: Position) -> OutlineItem | None:
    """Innermost item whose range contains ``position``.

    Descends from the top level into the first child containing the
    position and stops when no child does.
    """
    active: OutlineItem | None = None
    candidates: Iterable[OutlineItem] = top_level_items
    while True:
        container = next((item for item in candidates if item.range.contains(position)), None)
        if container is None:
            return active
        if container.is_leaf:
            return container
        active = container
        candidates = container.children


def item_identity(item: OutlineItem | None) -> tuple[str, Range] | None:
    """What makes two active items "the same" for change notification."""
    if item is None:
        return None
    return item.id, item.range
