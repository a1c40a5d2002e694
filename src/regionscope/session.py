"""Per-document outline session.

An ``OutlineSession`` wires one region store, one symbol store, one modifier
cache and one outline controller together for the active document. There is
no module-level state: every collaborator is created here and handed to the
components that need it.

Example::

    with OutlineSession(load_config(), symbol_provider=PythonSymbolProvider()) as session:
        session.open(TextDocument.from_path(path))
        session.move_cursor(Position(12))
        session.flush()
        print(session.get_active_full_outline_item())
"""

from __future__ import annotations

from types import TracebackType

import structlog

from regionscope.config.models import RegionScopeConfig
from regionscope.core.errors import InternalError
from regionscope.core.logging import bind_document_id, clear_document_id
from regionscope.document import Position, TextDocument
from regionscope.outline.controller import OutlineController
from regionscope.outline.models import OutlineItem
from regionscope.outline.navigation import go_to_region_target, go_to_target
from regionscope.regions import navigation
from regionscope.regions.models import FlattenedRegionEntry, InvalidMarker, Region
from regionscope.regions.parser import RegionParser
from regionscope.regions.patterns import BoundaryPatternTable
from regionscope.regions.store import RegionStore
from regionscope.symbols.display import ModifierDisplayOptions
from regionscope.symbols.extract import ModifierCache, ModifierExtractor
from regionscope.symbols.store import SymbolProvider, SymbolStore

logger = structlog.get_logger()

# Upper bound on flush rounds; each round can only schedule work for later stages
_MAX_FLUSH_ROUNDS = 8


class OutlineSession:
    """Region and outline state for one active document."""

    def __init__(
        self,
        config: RegionScopeConfig | None = None,
        *,
        symbol_provider: SymbolProvider | None = None,
    ) -> None:
        self.config = config or RegionScopeConfig()
        self.pattern_table = BoundaryPatternTable.from_config(self.config.regions)
        self.modifier_cache = ModifierCache(
            max_entries=self.config.modifiers.cache_max_entries,
            evict_count=self.config.modifiers.cache_evict_count,
        )
        self.region_store = RegionStore(
            RegionParser(self.pattern_table),
            debounce_sec=self.config.regions.parse_debounce_sec,
        )
        self.symbol_store = SymbolStore(
            symbol_provider,
            debounce_sec=self.config.sync.symbol_refresh_debounce_sec,
        )
        self.controller = OutlineController(
            self.region_store,
            self.symbol_store,
            extractor=ModifierExtractor(self.modifier_cache),
            display_options=ModifierDisplayOptions.from_config(self.config.outline),
            outline_debounce_sec=self.config.sync.outline_debounce_sec,
            active_item_debounce_sec=self.config.sync.active_item_debounce_sec,
        )
        self._document: TextDocument | None = None
        self._cursor = Position(0)
        self._closed = False

    # -- lifecycle ------------------------------------------------------------

    @property
    def document(self) -> TextDocument:
        return self._require_document()

    @property
    def is_open(self) -> bool:
        return self._document is not None

    @property
    def cursor(self) -> Position:
        return self._cursor

    def open(self, document: TextDocument) -> None:
        """Make ``document`` the active document and parse it right away."""
        if self._closed:
            raise InternalError.precondition_failed("OutlineSession", "session is closed")
        self._document = document
        bind_document_id(document.uri)
        logger.debug(
            "session_opened",
            language_id=document.language_id,
            version=document.version,
            lines=document.line_count,
        )
        self.region_store.refresh(document)
        self.symbol_store.refresh(document)
        self.controller.notify_active_document_changed()

    def update(self, document: TextDocument) -> None:
        """The active document's text changed; reparse after the debounce."""
        current = self._require_document()
        if document.uri != current.uri:
            raise InternalError.precondition_failed(
                "OutlineSession",
                f"update for {document.uri} while {current.uri} is active",
            )
        self._document = document
        self.controller.notify_document_changed(document.uri)
        self.region_store.schedule_refresh(document)
        self.symbol_store.schedule_refresh(document)

    def move_cursor(self, position: Position) -> None:
        self._require_document()
        self._cursor = position
        if self.config.outline.should_auto_highlight_active_item:
            self.controller.notify_cursor_moved(position)

    def flush(self) -> None:
        """Run all pending debounced work: stores first, then the controller."""
        for _ in range(_MAX_FLUSH_ROUNDS):
            ran_regions = self.region_store.flush()
            ran_symbols = self.symbol_store.flush()
            ran_outline = self.controller.flush()
            if not (ran_regions or ran_symbols or ran_outline):
                return

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.controller.close()
        self.region_store.close()
        self.symbol_store.close()
        self.modifier_cache.clear()
        self._document = None
        clear_document_id()
        logger.debug("session_closed")

    def __enter__(self) -> OutlineSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_document(self) -> TextDocument:
        if self._document is None:
            raise InternalError.precondition_failed("OutlineSession", "no document is open")
        return self._document

    # -- snapshot accessors ---------------------------------------------------

    def get_top_level_regions(self) -> list[Region]:
        self._require_document()
        return self.region_store.top_level_regions

    def get_flattened_regions(self) -> list[FlattenedRegionEntry]:
        self._require_document()
        return self.region_store.flattened_regions

    def get_invalid_markers(self) -> list[InvalidMarker]:
        self._require_document()
        return self.region_store.invalid_markers

    def get_top_level_full_outline_items(self) -> list[OutlineItem]:
        self._require_document()
        return self.controller.top_level_items

    def get_active_full_outline_item(self) -> OutlineItem | None:
        self._require_document()
        return self.controller.active_item

    # -- navigation -----------------------------------------------------------

    def _line(self, line: int | None) -> int:
        return self._cursor.line if line is None else line

    def next_region(self, line: int | None = None) -> Region | None:
        return navigation.next_region(self.get_flattened_regions(), self._line(line))

    def previous_region(self, line: int | None = None) -> Region | None:
        return navigation.previous_region(self.get_flattened_regions(), self._line(line))

    def active_region(self, line: int | None = None) -> Region | None:
        return navigation.active_region(self.get_top_level_regions(), self._line(line))

    def go_to_next_region(self) -> Position | None:
        """Move the cursor to the next region's start; returns the new position."""
        region = self.next_region()
        if region is None:
            return None
        return self._go_to(go_to_region_target(region, self.document))

    def go_to_previous_region(self) -> Position | None:
        region = self.previous_region()
        if region is None:
            return None
        return self._go_to(go_to_region_target(region, self.document))

    def go_to_item(self, item: OutlineItem) -> Position:
        return self._go_to(go_to_target(item, self.document))

    def _go_to(self, position: Position) -> Position:
        self.move_cursor(position)
        return position
