"""Tests for regions/store.py."""

from __future__ import annotations

import pytest

from regionscope.document import TextDocument
from regionscope.regions.parser import RegionParser
from regionscope.regions.patterns import BoundaryPatternTable
from regionscope.regions.store import RegionStore


@pytest.fixture
def store() -> RegionStore:
    return RegionStore(RegionParser(BoundaryPatternTable.build()), debounce_sec=0)


class _Counter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


class TestRefresh:
    """Value-gated change events."""

    def test_initial_parse_fires_change(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        changes = _Counter()
        store.on_did_change_regions.subscribe(changes)

        store.refresh(sample_ts_document)

        assert changes.count == 1
        assert len(store.top_level_regions) == 4
        assert len(store.flattened_regions) == 9
        assert store.versioned_document_id == "file:///workspace/sample.ts@1"
        assert store.document is sample_ts_document

    def test_unchanged_regions_bump_version_silently(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        """Given an edit inside a region, the version moves and no event fires."""
        store.refresh(sample_ts_document)
        changes = _Counter()
        refreshes = _Counter()
        store.on_did_change_regions.subscribe(changes)
        store.on_did_refresh.subscribe(refreshes)

        lines = list(sample_ts_document.lines)
        lines[5] = 'import { b } from "b";'
        store.refresh(sample_ts_document.with_lines(lines))

        assert changes.count == 0
        assert refreshes.count == 1
        assert store.version == 2

    def test_renamed_region_fires_change(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        store.refresh(sample_ts_document)
        changes = _Counter()
        store.on_did_change_regions.subscribe(changes)

        lines = list(sample_ts_document.lines)
        lines[4] = "// #region Dependencies"
        store.refresh(sample_ts_document.with_lines(lines))

        assert changes.count == 1
        assert store.top_level_regions[0].name == "Dependencies"

    def test_invalid_marker_event_independent(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        store.refresh(sample_ts_document)
        marker_changes = _Counter()
        store.on_did_change_invalid_markers.subscribe(marker_changes)

        lines = list(sample_ts_document.lines)
        lines[68] = "// #endregion"
        store.refresh(sample_ts_document.with_lines(lines))

        assert marker_changes.count == 1
        assert [m.line for m in store.invalid_markers] == [68]


class TestScheduling:
    """Debounced refresh without an event loop."""

    def test_only_latest_document_parsed(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        second = sample_ts_document.with_lines(sample_ts_document.lines)
        store.schedule_refresh(sample_ts_document)
        store.schedule_refresh(second)

        assert store.version is None
        assert store.flush() is True
        assert store.version == 2
        assert store.flush() is False

    def test_refresh_cancels_pending(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        store.schedule_refresh(sample_ts_document)
        store.refresh(sample_ts_document)

        assert store.flush() is False


class TestClear:
    """Forgetting the document."""

    def test_clear_resets_snapshot(
        self, store: RegionStore, sample_ts_document: TextDocument
    ) -> None:
        store.refresh(sample_ts_document)
        changes = _Counter()
        store.on_did_change_regions.subscribe(changes)

        store.clear()

        assert changes.count == 1
        assert store.document_id is None
        assert store.versioned_document_id is None
        assert store.top_level_regions == []
        assert store.document is None

    def test_close_disposes_emitters(self, store: RegionStore) -> None:
        store.close()

        with pytest.raises(RuntimeError, match="disposed"):
            store.on_did_change_regions.subscribe(lambda: None)
