"""Merged region + symbol outline and its synchronization controller."""

from regionscope.outline.active import active_item, item_identity
from regionscope.outline.controller import OutlineController, SyncState, SyncStatus
from regionscope.outline.items import ItemIdAllocator, region_items, sort_by_start, symbol_items
from regionscope.outline.models import ItemType, OutlineItem
from regionscope.outline.navigation import go_to_region_target, go_to_target
from regionscope.outline.synthesize import synthesize

__all__ = [
    "ItemIdAllocator",
    "ItemType",
    "OutlineController",
    "OutlineItem",
    "SyncState",
    "SyncStatus",
    "active_item",
    "go_to_region_target",
    "go_to_target",
    "item_identity",
    "region_items",
    "sort_by_start",
    "symbol_items",
    "synthesize",
]
