"""Flat outline item lists built from region and symbol snapshots.

Items come out without parents or children; ``synthesize`` nests them.
Ids are ``<kind id>-<display name>-<occurrence>``, counted per kind and name
in flattened (depth-first) order, so an item keeps its id across edits as
long as no earlier item of the same kind and name appears or disappears.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from regionscope.document import TextDocument
from regionscope.outline.models import REGION_ICON_ID, REGION_KIND_ID, ItemType, OutlineItem
from regionscope.regions.models import FlattenedRegionEntry, Region
from regionscope.symbols.display import (
    ModifierDisplayOptions,
    modifier_badges,
    modifier_tooltip,
    visibility_color,
)
from regionscope.symbols.extract import ModifierExtractor
from regionscope.symbols.models import DocumentSymbol
from regionscope.symbols.modifiers import DEFAULT_MODIFIERS


class ItemIdAllocator:
    """Hands out occurrence-counted ids for one item kind family."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def allocate(self, kind_id: str, display_name: str) -> str:
        partial_id = f"{kind_id}-{display_name}"
        self._counts[partial_id] += 1
        return f"{partial_id}-{self._counts[partial_id]}"


def region_items(flattened_regions: Iterable[FlattenedRegionEntry | Region]) -> list[OutlineItem]:
    ids = ItemIdAllocator()
    items: list[OutlineItem] = []
    for entry in flattened_regions:
        region = entry.region if isinstance(entry, FlattenedRegionEntry) else entry
        display_name = region.display_name
        item_range = region.range
        items.append(
            OutlineItem(
                id=ids.allocate(REGION_KIND_ID, display_name),
                display_name=display_name,
                item_type=ItemType.REGION,
                range=item_range,
                kind_id=REGION_KIND_ID,
                icon_id=REGION_ICON_ID,
                tooltip=f"{display_name}: {item_range.describe()}",
            )
        )
    return items


def symbol_items(
    flattened_symbols: Iterable[DocumentSymbol],
    document: TextDocument | None,
    *,
    extractor: ModifierExtractor | None = None,
    options: ModifierDisplayOptions | None = None,
) -> list[OutlineItem]:
    """Outline items for symbols, with modifiers when display options ask for them.

    Modifiers are only extracted when a document is available to read
    declarations from.
    """
    options = options or ModifierDisplayOptions()
    extractor = extractor or ModifierExtractor()
    ids = ItemIdAllocator()
    items: list[OutlineItem] = []
    for symbol in flattened_symbols:
        kind_id = symbol.kind.kind_id
        if options.extracts_modifiers and document is not None:
            modifiers = extractor.extract(symbol, document)
        else:
            modifiers = DEFAULT_MODIFIERS

        color_id = None
        if options.show_visibility_colors:
            color_id = visibility_color(modifiers.visibility, distinct=options.use_distinct_colors)

        items.append(
            OutlineItem(
                id=ids.allocate(kind_id, symbol.name),
                display_name=symbol.name,
                item_type=ItemType.SYMBOL,
                range=symbol.range,
                kind_id=kind_id,
                icon_id=kind_id,
                color_id=color_id,
                modifiers=modifiers,
                description=(
                    modifier_badges(modifiers, options) if options.show_static_indicator else None
                ),
                tooltip=modifier_tooltip(f"{symbol.name}: {symbol.range.describe()}", modifiers),
            )
        )
    return items


def sort_by_start(items: list[OutlineItem]) -> list[OutlineItem]:
    """Stable sort by range start; depth-first order is not start order."""
    return sorted(items, key=lambda item: item.range.start)
