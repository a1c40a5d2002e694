"""Region tree data model.

A region is a span of lines bounded by matched start/end markers. Region
trees are owned by the snapshot that produced them; parents hold their
children, children keep a non-owning back-reference to their parent.

Equality is structural: two regions are equal when their names, line spans
and children are equal. The parent back-reference takes no part in equality,
so trees from two parses of the same text compare equal.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from regionscope.document import Range

UNNAMED_REGION_DISPLAY_NAME = "Unnamed Region"


class BoundaryType(str, Enum):
    """Which side of a region a marker line opens or closes."""

    START = "start"
    END = "end"


@dataclass(eq=True)
class Region:
    """A named or unnamed region with its nested children.

    Attributes:
        name: Title captured from the start marker, or None
        start_line: Line of the start marker
        end_line: Line of the end marker (inclusive)
        end_character: Length of the end marker line, so the outline range
            covers the whole closing line
        children: Regions nested directly inside, ordered by start line
        parent: Enclosing region, None for top-level regions
    """

    name: str | None
    start_line: int
    end_line: int
    end_character: int = 0
    children: list[Region] = field(default_factory=list)
    parent: Region | None = field(default=None, compare=False, repr=False)

    @property
    def range(self) -> Range:
        return Range.from_lines(self.start_line, self.end_line, 0, self.end_character)

    @property
    def display_name(self) -> str:
        return self.name if self.name else UNNAMED_REGION_DISPLAY_NAME

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def add_child(self, child: Region) -> None:
        child.parent = self
        self.children.append(child)

    def walk(self) -> Iterator[Region]:
        """Yield this region and its descendants, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class InvalidMarker:
    """A boundary line the stack matcher could not pair."""

    line: int
    boundary_type: BoundaryType


@dataclass(frozen=True, slots=True)
class FlattenedRegionEntry:
    """A region plus its ancestor count, in depth-first order."""

    region: Region
    ancestor_count: int

    @property
    def start_line(self) -> int:
        return self.region.start_line

    @property
    def name(self) -> str | None:
        return self.region.name


@dataclass(frozen=True)
class RegionParseResult:
    """Output of one full parse of a document."""

    top_level_regions: list[Region]
    invalid_markers: list[InvalidMarker]

    @property
    def region_count(self) -> int:
        return sum(1 for root in self.top_level_regions for _ in root.walk())
