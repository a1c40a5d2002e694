"""Tests for regions/navigation.py.

Uses the sample TypeScript document, whose regions start on lines
4, 9, 15, 22, 31, 39, 48, 60 and 64.
"""

from __future__ import annotations

import pytest

from regionscope.document import TextDocument
from regionscope.regions.flatten import flatten_regions
from regionscope.regions.models import FlattenedRegionEntry, Region
from regionscope.regions.navigation import active_region, next_region, previous_region
from regionscope.regions.parser import RegionParser
from regionscope.regions.patterns import BoundaryPatternTable

SAMPLE_STARTS = [4, 9, 15, 22, 31, 39, 48, 60, 64]


@pytest.fixture
def top_level(sample_ts_document: TextDocument) -> list[Region]:
    return RegionParser(BoundaryPatternTable.build()).parse(sample_ts_document).top_level_regions


@pytest.fixture
def flattened(top_level: list[Region]) -> list[FlattenedRegionEntry]:
    return flatten_regions(top_level)


class TestNextRegion:
    """Tests for next_region."""

    @pytest.mark.parametrize(
        ("cursor_line", "expected_start"),
        [(0, 4), (4, 9), (5, 9), (9, 15), (32, 39), (60, 64)],
    )
    def test_first_region_after_cursor(
        self, flattened: list[FlattenedRegionEntry], cursor_line: int, expected_start: int
    ) -> None:
        region = next_region(flattened, cursor_line)

        assert region is not None
        assert region.start_line == expected_start

    @pytest.mark.parametrize("cursor_line", [64, 65, 69])
    def test_wraps_to_first(self, flattened: list[FlattenedRegionEntry], cursor_line: int) -> None:
        region = next_region(flattened, cursor_line)

        assert region is not None
        assert region.name == "Imports"

    def test_cycles_through_every_region(self, flattened: list[FlattenedRegionEntry]) -> None:
        """Given repeated next jumps, every region is visited once per cycle."""
        line = 0
        visited = []
        for _ in range(len(SAMPLE_STARTS) + 1):
            region = next_region(flattened, line)
            assert region is not None
            line = region.start_line
            visited.append(line)

        assert visited == [*SAMPLE_STARTS, SAMPLE_STARTS[0]]

    def test_accepts_plain_regions(self, flattened: list[FlattenedRegionEntry]) -> None:
        regions = [e.region for e in flattened]

        assert next_region(regions, 5) is flattened[1].region

    def test_no_regions(self) -> None:
        assert next_region([], 10) is None


class TestPreviousRegion:
    """Tests for previous_region."""

    def test_inside_region_returns_its_start(self, flattened: list[FlattenedRegionEntry]) -> None:
        """From inside a region the previous boundary is the region's own start."""
        region = previous_region(flattened, 5)

        assert region is not None
        assert region.name == "Imports"

    def test_on_start_line_returns_region_before(
        self, flattened: list[FlattenedRegionEntry]
    ) -> None:
        region = previous_region(flattened, 9)

        assert region is not None
        assert region.name == "Imports"

    def test_innermost_start_before_cursor(self, flattened: list[FlattenedRegionEntry]) -> None:
        region = previous_region(flattened, 32)

        assert region is not None
        assert region.name == "Nested Method Region"

    @pytest.mark.parametrize("cursor_line", [0, 4])
    def test_wraps_to_last(self, flattened: list[FlattenedRegionEntry], cursor_line: int) -> None:
        region = previous_region(flattened, cursor_line)

        assert region is not None
        assert region.start_line == 64

    def test_cycles_backwards(self, flattened: list[FlattenedRegionEntry]) -> None:
        line = 69
        visited = []
        for _ in range(len(SAMPLE_STARTS)):
            region = previous_region(flattened, line)
            assert region is not None
            line = region.start_line
            visited.append(line)

        assert visited == list(reversed(SAMPLE_STARTS))

    def test_no_regions(self) -> None:
        assert previous_region([], 10) is None


class TestActiveRegion:
    """Tests for active_region."""

    @pytest.mark.parametrize(
        ("cursor_line", "expected"),
        [
            (4, "Imports"),
            (7, "Imports"),
            (10, "Classes"),
            (16, "Constructor"),
            (32, "Nested Method Region"),
            (36, "Methods"),
            (49, "Another Nested Region"),
            (56, "Classes"),
            (65, None),
        ],
    )
    def test_innermost_containing_region(
        self, top_level: list[Region], cursor_line: int, expected: str | None
    ) -> None:
        region = active_region(top_level, cursor_line)

        assert region is not None
        assert region.name == expected

    @pytest.mark.parametrize("cursor_line", [0, 8, 59, 63, 67])
    def test_outside_every_region(self, top_level: list[Region], cursor_line: int) -> None:
        assert active_region(top_level, cursor_line) is None
