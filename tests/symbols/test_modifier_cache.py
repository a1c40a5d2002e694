"""Tests for ModifierCache and ModifierExtractor."""

from __future__ import annotations

import pytest

from regionscope.document import Position, Range, TextDocument
from regionscope.symbols.extract import ModifierCache, ModifierExtractor
from regionscope.symbols.models import DocumentSymbol, SymbolKind
from regionscope.symbols.modifiers import DEFAULT_MODIFIERS, Visibility


def _key(i: int) -> tuple[str, int, int, int, str]:
    return ("file:///m.cs", 1, i, 0, f"s{i}")


class TestModifierCache:
    """Bounded insertion-order cache."""

    def test_evict_count_above_capacity_rejected(self) -> None:
        with pytest.raises(ValueError, match="evict_count"):
            ModifierCache(max_entries=10, evict_count=11)

    def test_evicts_oldest_batch_past_capacity(self) -> None:
        """Given 5001 inserts, the oldest 1000 entries are dropped in one batch."""
        cache = ModifierCache()
        for i in range(5000):
            cache.put(_key(i), DEFAULT_MODIFIERS)

        assert len(cache) == 5000

        cache.put(_key(5000), DEFAULT_MODIFIERS)

        assert len(cache) == 4001
        assert _key(0) not in cache
        assert _key(999) not in cache
        assert _key(1000) in cache
        assert _key(5000) in cache

    def test_small_bounds(self) -> None:
        cache = ModifierCache(max_entries=3, evict_count=2)
        for i in range(4):
            cache.put(_key(i), DEFAULT_MODIFIERS)

        assert len(cache) == 2
        assert cache.get(_key(3)) is DEFAULT_MODIFIERS
        assert cache.get(_key(0)) is None

    def test_clear(self) -> None:
        cache = ModifierCache()
        cache.put(_key(1), DEFAULT_MODIFIERS)

        cache.clear()

        assert len(cache) == 0


class TestModifierExtractor:
    """Cached extraction."""

    @pytest.fixture
    def document(self) -> TextDocument:
        return TextDocument(
            uri="file:///m.cs",
            language_id="csharp",
            version=3,
            lines=("public void Run() {}",),
        )

    @pytest.fixture
    def symbol(self) -> DocumentSymbol:
        span = Range(Position(0, 12), Position(0, 15))
        return DocumentSymbol(name="Run", kind=SymbolKind.METHOD, range=span, selection_range=span)

    def test_key_includes_version_and_position(
        self, document: TextDocument, symbol: DocumentSymbol
    ) -> None:
        assert ModifierCache.key_for(symbol, document) == ("file:///m.cs", 3, 0, 12, "Run")

    def test_second_extraction_hits_cache(
        self, document: TextDocument, symbol: DocumentSymbol
    ) -> None:
        extractor = ModifierExtractor()

        first = extractor.extract(symbol, document)
        second = extractor.extract(symbol, document)

        assert first.visibility is Visibility.PUBLIC
        assert second is first
        assert len(extractor.cache) == 1

    def test_new_version_is_a_new_entry(
        self, document: TextDocument, symbol: DocumentSymbol
    ) -> None:
        extractor = ModifierExtractor()
        extractor.extract(symbol, document)

        extractor.extract(symbol, document.with_lines(["private void Run() {}"]))

        assert len(extractor.cache) == 2

    def test_shared_cache(self, document: TextDocument, symbol: DocumentSymbol) -> None:
        cache = ModifierCache(max_entries=10, evict_count=5)

        ModifierExtractor(cache).extract(symbol, document)

        assert ModifierCache.key_for(symbol, document) in cache
