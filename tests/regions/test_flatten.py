"""Tests for regions/flatten.py."""

import pytest

from regionscope.document import TextDocument
from regionscope.regions.flatten import flatten_regions, unflatten_regions
from regionscope.regions.models import FlattenedRegionEntry, Region
from regionscope.regions.parser import RegionParser
from regionscope.regions.patterns import BoundaryPatternTable


@pytest.fixture
def sample_regions(sample_ts_document: TextDocument) -> list[Region]:
    parser = RegionParser(BoundaryPatternTable.build())
    return parser.parse(sample_ts_document).top_level_regions


class TestFlattenRegions:
    """Pre-order flattening with ancestor counts."""

    def test_pre_order(self, sample_regions: list[Region]) -> None:
        """Each region precedes its children; children precede the next sibling."""
        flattened = flatten_regions(sample_regions)

        assert [(e.name, e.ancestor_count) for e in flattened] == [
            ("Imports", 0),
            ("Classes", 0),
            ("Constructor", 1),
            ("Methods", 1),
            ("Nested Method Region", 2),
            ("Sibling Classes", 1),
            ("Another Nested Region", 2),
            ("Type Definitions", 0),
            (None, 0),
        ]

    def test_start_lines_ascending(self, sample_regions: list[Region]) -> None:
        starts = [e.start_line for e in flatten_regions(sample_regions)]

        assert starts == sorted(starts)

    def test_entries_share_region_objects(self, sample_regions: list[Region]) -> None:
        flattened = flatten_regions(sample_regions)

        assert flattened[1].region is sample_regions[1]

    def test_empty(self) -> None:
        assert flatten_regions([]) == []


class TestUnflattenRegions:
    """Rebuilding trees from flattened entries."""

    def test_round_trip(self, sample_regions: list[Region]) -> None:
        rebuilt = unflatten_regions(flatten_regions(sample_regions))

        assert rebuilt == sample_regions
        assert rebuilt[1] is not sample_regions[1]
        assert rebuilt[1].children[0].parent is rebuilt[1]

    def test_skipped_level_rejected(self) -> None:
        """An entry two levels below its predecessor has no parent to attach to."""
        entries = [
            FlattenedRegionEntry(Region(name="A", start_line=0, end_line=9), 0),
            FlattenedRegionEntry(Region(name="B", start_line=1, end_line=2), 2),
        ]

        with pytest.raises(ValueError, match="skips a level"):
            unflatten_regions(entries)
