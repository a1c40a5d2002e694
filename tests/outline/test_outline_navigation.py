"""Tests for outline/active.py and outline/navigation.py."""

from __future__ import annotations

import pytest

from regionscope.document import Position, Range, TextDocument
from regionscope.outline.active import active_item, item_identity
from regionscope.outline.items import region_items, sort_by_start, symbol_items
from regionscope.outline.models import OutlineItem
from regionscope.outline.navigation import go_to_region_target, go_to_target
from regionscope.outline.synthesize import synthesize
from regionscope.regions.flatten import flatten_regions
from regionscope.regions.models import Region
from regionscope.regions.parser import RegionParser
from regionscope.regions.patterns import BoundaryPatternTable
from regionscope.symbols.models import DocumentSymbol, SymbolKind, flatten_symbols


@pytest.fixture
def outline(
    sample_ts_document: TextDocument, sample_ts_symbols: list[DocumentSymbol]
) -> list[OutlineItem]:
    parsed = RegionParser(BoundaryPatternTable.build()).parse(sample_ts_document)
    regions = sort_by_start(region_items(flatten_regions(parsed.top_level_regions)))
    symbols = sort_by_start(symbol_items(flatten_symbols(sample_ts_symbols), sample_ts_document))
    top, _ = synthesize(regions, symbols)
    return top


class TestActiveItem:
    """Innermost item under the cursor."""

    @pytest.mark.parametrize(
        ("position", "expected"),
        [
            (Position(5, 0), "region-Imports-1"),
            (Position(9, 3), "region-Classes-1"),
            (Position(12, 0), "symbol-class-Outer-1"),
            (Position(23, 10), "symbol-method-run-1"),
            (Position(32, 0), "region-Nested Method Region-1"),
            (Position(32, 10), "symbol-method-helper-1"),
            (Position(49, 0), "region-Another Nested Region-1"),
            (Position(58, 2), "region-Classes-1"),
        ],
    )
    def test_descends_to_innermost(
        self, outline: list[OutlineItem], position: Position, expected: str
    ) -> None:
        item = active_item(outline, position)

        assert item is not None
        assert item.id == expected

    @pytest.mark.parametrize("position", [Position(0, 0), Position(8, 0), Position(69, 0)])
    def test_outside_every_item(self, outline: list[OutlineItem], position: Position) -> None:
        assert active_item(outline, position) is None

    def test_end_position_is_inclusive(self, outline: list[OutlineItem]) -> None:
        """The closing marker line counts up to its last character."""
        item = active_item(outline, Position(7, 13))

        assert item is not None
        assert item.id == "region-Imports-1"
        assert active_item(outline, Position(7, 14)) is None

    def test_ancestors(self, outline: list[OutlineItem]) -> None:
        helper = active_item(outline, Position(32, 10))

        assert helper is not None
        assert [a.id for a in helper.ancestors()] == [
            "region-Nested Method Region-1",
            "region-Methods-1",
            "symbol-class-Outer-1",
            "region-Classes-1",
        ]


class TestItemIdentity:
    """Identity used for active item change notification."""

    def test_none(self) -> None:
        assert item_identity(None) is None

    def test_id_and_range(self, outline: list[OutlineItem]) -> None:
        imports = outline[0]

        assert item_identity(imports) == ("region-Imports-1", imports.range)


class TestGoToTarget:
    """Cursor target for chosen entries."""

    def test_region_lands_on_first_non_blank(
        self, outline: list[OutlineItem], sample_ts_document: TextDocument
    ) -> None:
        constructor = outline[1].children[0].children[0]

        assert constructor.id == "region-Constructor-1"
        assert go_to_target(constructor, sample_ts_document) == Position(15, 2)

    def test_symbol_lands_on_range_start(
        self, outline: list[OutlineItem], sample_ts_document: TextDocument
    ) -> None:
        outer = outline[1].children[0]

        assert go_to_target(outer, sample_ts_document) == Position(10, 0)

    def test_region_target(self, sample_ts_document: TextDocument) -> None:
        region = Region(name="Nested Method Region", start_line=31, end_line=35)

        assert go_to_region_target(region, sample_ts_document) == Position(31, 4)

    def test_line_past_end_of_document(self, sample_ts_document: TextDocument) -> None:
        region = Region(name=None, start_line=500, end_line=501)

        assert go_to_region_target(region, sample_ts_document) == Position(500, 0)

    def test_symbol_range_kept_exactly(self, sample_ts_document: TextDocument) -> None:
        item = symbol_items(
            [
                DocumentSymbol(
                    name="x",
                    kind=SymbolKind.VARIABLE,
                    range=Range(Position(61, 5), Position(61, 7)),
                    selection_range=Range(Position(61, 5), Position(61, 7)),
                )
            ],
            sample_ts_document,
        )[0]

        assert go_to_target(item, sample_ts_document) == Position(61, 5)
