"""Keeps the merged outline in step with the region and symbol stores.

The controller listens to both stores and resynthesizes after a debounce.
A resynthesis only proceeds when both stores hold the same versioned
document id; otherwise the controller waits for the lagging store, whose
next publish triggers another attempt. Cursor movement recomputes the active
item on its own debounce window and is ignored while items are being rebuilt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from regionscope.core.errors import InternalError
from regionscope.core.events import EventEmitter, SubscriptionGroup
from regionscope.core.scheduling import Debouncer
from regionscope.document import Position
from regionscope.outline.active import active_item, item_identity
from regionscope.outline.items import region_items, sort_by_start, symbol_items
from regionscope.outline.models import OutlineItem
from regionscope.outline.synthesize import synthesize
from regionscope.regions.store import RegionStore
from regionscope.symbols.display import ModifierDisplayOptions
from regionscope.symbols.extract import ModifierExtractor
from regionscope.symbols.store import SymbolStore

logger = structlog.get_logger()


class SyncState(Enum):
    """Synchronization controller state."""

    IDLE = "idle"
    AWAITING_AGREEMENT = "awaiting_agreement"
    SYNTHESIZED = "synthesized"


@dataclass
class SyncStatus:
    """Snapshot of the controller, for logging and the CLI."""

    state: SyncState
    versioned_document_id: str | None
    synthesis_count: int
    item_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "versioned_document_id": self.versioned_document_id,
            "synthesis_count": self.synthesis_count,
            "item_count": self.item_count,
        }


class OutlineController:
    """Owns the full outline of the active document."""

    def __init__(
        self,
        region_store: RegionStore | None,
        symbol_store: SymbolStore | None,
        *,
        extractor: ModifierExtractor | None = None,
        display_options: ModifierDisplayOptions | None = None,
        outline_debounce_sec: float = 0.1,
        active_item_debounce_sec: float = 0.1,
    ) -> None:
        if region_store is None:
            raise InternalError.precondition_failed("OutlineController", "region store is required")
        if symbol_store is None:
            raise InternalError.precondition_failed("OutlineController", "symbol store is required")

        self._regions = region_store
        self._symbols = symbol_store
        self._extractor = extractor or ModifierExtractor()
        self._display_options = display_options or ModifierDisplayOptions()

        self._state = SyncState.IDLE
        self._document_id: str | None = None
        self._versioned_document_id: str | None = None
        self._top_level_items: list[OutlineItem] = []
        self._all_parent_ids: set[str] = set()
        self._active_item: OutlineItem | None = None
        self._cursor: Position | None = None
        self._is_refreshing_items = False
        self._synthesis_count = 0
        self._closed = False

        self.on_did_change_full_outline_items = EventEmitter("full_outline_items")
        self.on_did_change_active_full_outline_item = EventEmitter("active_full_outline_item")

        self._outline_debouncer = Debouncer(
            outline_debounce_sec, self._refresh_full_outline, name="outline_refresh"
        )
        self._active_item_debouncer = Debouncer(
            active_item_debounce_sec, self._refresh_active_item, name="active_item_refresh"
        )

        self._subscriptions = SubscriptionGroup()
        for emitter in (
            region_store.on_did_change_regions,
            region_store.on_did_refresh,
            symbol_store.on_did_change_document_symbols,
            symbol_store.on_did_refresh,
        ):
            self._subscriptions.add(emitter.subscribe(self._outline_debouncer.schedule))

    # -- snapshot accessors -------------------------------------------------

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def document_id(self) -> str | None:
        return self._document_id

    @property
    def versioned_document_id(self) -> str | None:
        return self._versioned_document_id

    @property
    def top_level_items(self) -> list[OutlineItem]:
        return self._top_level_items

    @property
    def all_parent_ids(self) -> set[str]:
        return self._all_parent_ids

    @property
    def active_item(self) -> OutlineItem | None:
        return self._active_item

    @property
    def cursor(self) -> Position | None:
        return self._cursor

    @property
    def synthesis_count(self) -> int:
        """Number of completed syntheses; skipped attempts are not counted."""
        return self._synthesis_count

    def status(self) -> SyncStatus:
        return SyncStatus(
            state=self._state,
            versioned_document_id=self._versioned_document_id,
            synthesis_count=self._synthesis_count,
            item_count=sum(1 for root in self._top_level_items for _ in root.walk()),
        )

    # -- inputs ---------------------------------------------------------------

    def notify_active_document_changed(self) -> None:
        self._outline_debouncer.schedule()

    def notify_document_changed(self, document_id: str) -> None:
        """The active document's text changed.

        The stores will republish shortly and the active item is recomputed
        after the resynthesis, so a pending cursor-driven refresh is dropped.
        """
        if document_id == self._regions.document_id:
            self._active_item_debouncer.cancel()

    def notify_cursor_moved(self, position: Position) -> None:
        self._cursor = position
        if self._is_refreshing_items:
            return
        self._active_item_debouncer.schedule()

    def flush(self) -> bool:
        """Run pending debounced work now. Returns True if anything ran."""
        ran_outline = self._outline_debouncer.flush()
        ran_active = self._active_item_debouncer.flush()
        return ran_outline or ran_active

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._outline_debouncer.cancel()
        self._active_item_debouncer.cancel()
        self._subscriptions.dispose()
        self.on_did_change_full_outline_items.dispose()
        self.on_did_change_active_full_outline_item.dispose()

    # -- refresh --------------------------------------------------------------

    def _refresh_full_outline(self) -> None:
        region_id = self._regions.versioned_document_id
        symbol_id = self._symbols.versioned_document_id
        if region_id != symbol_id:
            self._state = SyncState.AWAITING_AGREEMENT
            logger.debug("synthesis_deferred", regions=region_id, symbols=symbol_id)
            return

        self._document_id = self._regions.document_id
        self._versioned_document_id = region_id
        self._refresh_items()
        self._refresh_active_item()

    def _refresh_items(self) -> None:
        self._is_refreshing_items = True
        try:
            regions = sort_by_start(region_items(self._regions.flattened_regions))
            symbols = sort_by_start(
                symbol_items(
                    self._symbols.flattened_symbols,
                    self._regions.document,
                    extractor=self._extractor,
                    options=self._display_options,
                )
            )
            top_level, all_parent_ids = synthesize(regions, symbols)
            self._synthesis_count += 1
            self._state = SyncState.SYNTHESIZED if self._document_id is not None else SyncState.IDLE

            changed = top_level != self._top_level_items
            self._top_level_items = top_level
            self._all_parent_ids = all_parent_ids
            logger.debug(
                "outline_synthesized",
                regions=len(regions),
                symbols=len(symbols),
                changed=changed,
                **self.status().to_dict(),
            )
            if changed:
                self.on_did_change_full_outline_items.fire()
        finally:
            self._is_refreshing_items = False

    def _refresh_active_item(self) -> None:
        self._active_item_debouncer.cancel()
        if self._cursor is None:
            return
        previous = item_identity(self._active_item)
        self._active_item = active_item(self._top_level_items, self._cursor)
        if item_identity(self._active_item) != previous:
            self.on_did_change_active_full_outline_item.fire()
