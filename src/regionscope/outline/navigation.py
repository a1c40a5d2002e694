"""Where the cursor lands when an outline or region entry is chosen."""

from __future__ import annotations

from regionscope.document import Position, TextDocument
from regionscope.outline.models import ItemType, OutlineItem
from regionscope.regions.models import Region


def _first_non_whitespace(document: TextDocument, line: int) -> Position:
    if 0 <= line < document.line_count:
        return Position(line, document.first_non_whitespace_character(line))
    return Position(line, 0)


def go_to_target(item: OutlineItem, document: TextDocument) -> Position:
    """Regions land on the first non-blank character of their start line,
    symbols on their exact start."""
    start = item.range.start
    if item.item_type is ItemType.REGION:
        return _first_non_whitespace(document, start.line)
    return start


def go_to_region_target(region: Region, document: TextDocument) -> Position:
    return _first_non_whitespace(document, region.start_line)
