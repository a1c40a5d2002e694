"""Merged outline tree nodes.

An ``OutlineItem`` wraps either a region or a symbol. Items are compared by
value (id, name, range, modifiers and children); the parent back-reference
and the wrapped source object do not take part, so two syntheses of the same
snapshot compare equal.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from regionscope.document import Range
from regionscope.symbols.modifiers import DEFAULT_MODIFIERS, SymbolModifiers

REGION_KIND_ID = "region"
REGION_ICON_ID = "symbol-namespace"


class ItemType(str, Enum):
    REGION = "region"
    SYMBOL = "symbol"


@dataclass(eq=True)
class OutlineItem:
    """A node of the merged region + symbol outline.

    Attributes:
        id: Unique within one synthesized snapshot, stable across syntheses
            while the item's kind, name and occurrence order are unchanged
        display_name: Label shown for the item
        item_type: Whether the item stems from a region or a symbol
        range: Extent used for containment and cursor tracking
        kind_id: ``region`` or ``symbol-<kind>``
        icon_id: Theme icon identifier
        color_id: Theme color for the icon, None when uncolored
        modifiers: Extracted symbol modifiers, defaults for regions
        description: Badge text shown beside the label
        tooltip: Hover text, decorated with modifiers
        children: Items nested directly inside, ordered by start
        parent: Enclosing item, None at top level
    """

    id: str
    display_name: str
    item_type: ItemType
    range: Range
    kind_id: str
    icon_id: str
    color_id: str | None = None
    modifiers: SymbolModifiers = DEFAULT_MODIFIERS
    description: str | None = None
    tooltip: str = ""
    children: list[OutlineItem] = field(default_factory=list)
    parent: OutlineItem | None = field(default=None, compare=False, repr=False)

    @property
    def is_region(self) -> bool:
        return self.item_type is ItemType.REGION

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_branch(self) -> bool:
        return bool(self.children)

    def add_child(self, child: OutlineItem) -> None:
        child.parent = self
        self.children.append(child)

    def walk(self) -> Iterator[OutlineItem]:
        yield self
        for child in self.children:
            yield from child.walk()

    def ancestors(self) -> Iterator[OutlineItem]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent
