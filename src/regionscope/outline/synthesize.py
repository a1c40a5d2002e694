"""Merge region and symbol items into one outline tree.

Both inputs must already be sorted by range start. The two streams are
merged in start order; at equal starts a region that reaches at least as far
as the symbol goes first, so regions win as containers over symbols of the
same span. A stack holds the open containers: before an item is placed,
containers that do not fully contain it are closed. The item then becomes a
child of the innermost open container (or a top-level item) and is opened
as a container itself.

Every child's range is therefore contained in its parent's range.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import structlog

from regionscope.outline.models import OutlineItem

logger = structlog.get_logger()


def _merged(
    region_items: Sequence[OutlineItem], symbol_items: Sequence[OutlineItem]
) -> Iterator[OutlineItem]:
    i = j = 0
    while i < len(region_items) and j < len(symbol_items):
        region, symbol = region_items[i], symbol_items[j]
        region_first = region.range.start < symbol.range.start or (
            region.range.start == symbol.range.start and region.range.end >= symbol.range.end
        )
        if region_first:
            yield region
            i += 1
        else:
            yield symbol
            j += 1
    yield from region_items[i:]
    yield from symbol_items[j:]


def synthesize(
    region_items: Sequence[OutlineItem], symbol_items: Sequence[OutlineItem]
) -> tuple[list[OutlineItem], set[str]]:
    """Build the outline tree.

    Args:
        region_items: Flat region items, sorted by start
        symbol_items: Flat symbol items, sorted by start

    Returns:
        The top-level items and the ids of every item that has children.
    """
    top_level: list[OutlineItem] = []
    all_parent_ids: set[str] = set()
    open_items: list[OutlineItem] = []

    for item in _merged(region_items, symbol_items):
        item.parent = None
        item.children = []
        while open_items and not open_items[-1].range.contains_range(item.range):
            open_items.pop()
        if open_items:
            container = open_items[-1]
            container.add_child(item)
            all_parent_ids.add(container.id)
        else:
            top_level.append(item)
        open_items.append(item)

    logger.debug(
        "outline_merged",
        region_items=len(region_items),
        symbol_items=len(symbol_items),
        top_level_items=len(top_level),
    )
    return top_level, all_parent_ids
