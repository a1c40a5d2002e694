"""Versioned region snapshot for the active document.

The store reparses on every text change (debounced) and always records the
document version it parsed, even when the result is unchanged. Change events
fire only when the derived value differs from the previous snapshot: editing
inside a region bumps the version silently, renaming or moving a region fires
``on_did_change_regions``.
"""

from __future__ import annotations

import structlog

from regionscope.core.events import EventEmitter
from regionscope.core.scheduling import Debouncer
from regionscope.document import TextDocument, versioned_document_id
from regionscope.regions.flatten import flatten_regions
from regionscope.regions.models import FlattenedRegionEntry, InvalidMarker, Region
from regionscope.regions.parser import RegionParser

logger = structlog.get_logger()


class RegionStore:
    """Owns the region tree and invalid markers of one active document."""

    def __init__(self, parser: RegionParser, *, debounce_sec: float = 0.1) -> None:
        self._parser = parser
        self._document_id: str | None = None
        self._version: int | None = None
        self._top_level_regions: list[Region] = []
        self._flattened_regions: list[FlattenedRegionEntry] = []
        self._invalid_markers: list[InvalidMarker] = []
        self._document: TextDocument | None = None
        self._pending_document: TextDocument | None = None
        self._debouncer = Debouncer(debounce_sec, self._refresh_pending, name="region_parse")
        self.on_did_change_regions = EventEmitter("regions")
        self.on_did_change_invalid_markers = EventEmitter("invalid_markers")
        # Fires after every refresh, changed or not
        self.on_did_refresh = EventEmitter("region_refresh")

    # -- snapshot accessors -------------------------------------------------

    @property
    def document_id(self) -> str | None:
        return self._document_id

    @property
    def version(self) -> int | None:
        return self._version

    @property
    def versioned_document_id(self) -> str | None:
        if self._document_id is None or self._version is None:
            return None
        return versioned_document_id(self._document_id, self._version)

    @property
    def document(self) -> TextDocument | None:
        """The document the current snapshot was parsed from."""
        return self._document

    @property
    def top_level_regions(self) -> list[Region]:
        return self._top_level_regions

    @property
    def flattened_regions(self) -> list[FlattenedRegionEntry]:
        return self._flattened_regions

    @property
    def invalid_markers(self) -> list[InvalidMarker]:
        return self._invalid_markers

    # -- refresh ------------------------------------------------------------

    def refresh(self, document: TextDocument) -> None:
        """Parse ``document`` now and publish the result."""
        self._debouncer.cancel()
        self._pending_document = None
        result = self._parser.parse(document)

        regions_changed = result.top_level_regions != self._top_level_regions
        markers_changed = result.invalid_markers != self._invalid_markers

        # The version is recorded before notifying, so listeners comparing
        # versions across stores see this parse
        self._document_id = document.uri
        self._version = document.version
        self._document = document
        if regions_changed:
            self._top_level_regions = result.top_level_regions
            self._flattened_regions = flatten_regions(result.top_level_regions)
        if markers_changed:
            self._invalid_markers = result.invalid_markers

        logger.debug(
            "region_store_refreshed",
            document_id=document.uri,
            version=document.version,
            regions_changed=regions_changed,
            markers_changed=markers_changed,
        )
        if regions_changed:
            self.on_did_change_regions.fire()
        if markers_changed:
            self.on_did_change_invalid_markers.fire()
        self.on_did_refresh.fire()

    def schedule_refresh(self, document: TextDocument) -> None:
        """Debounced ``refresh``; only the latest scheduled document is parsed."""
        self._pending_document = document
        self._debouncer.schedule()

    def flush(self) -> bool:
        return self._debouncer.flush()

    def _refresh_pending(self) -> None:
        document = self._pending_document
        if document is not None:
            self.refresh(document)

    def clear(self) -> None:
        """Forget the active document (e.g. no editor is focused)."""
        self._debouncer.cancel()
        self._pending_document = None
        self._document_id = None
        self._version = None
        self._document = None
        had_regions = bool(self._top_level_regions)
        had_markers = bool(self._invalid_markers)
        self._top_level_regions = []
        self._flattened_regions = []
        self._invalid_markers = []
        if had_regions:
            self.on_did_change_regions.fire()
        if had_markers:
            self.on_did_change_invalid_markers.fire()
        self.on_did_refresh.fire()

    def close(self) -> None:
        self._debouncer.cancel()
        self.on_did_change_regions.dispose()
        self.on_did_change_invalid_markers.dispose()
        self.on_did_refresh.dispose()
