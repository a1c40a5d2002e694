"""Line-oriented region parser.

Scans a document once, matching each line against the language's boundary
pairs and pairing markers with a stack:

- a start match pushes a new open region
- an end match pops the innermost open region, closes it on this line and
  attaches it to the new stack top (or to the top level); with nothing open
  the line becomes an invalid ``end`` marker
- after the last line every region still open becomes an invalid ``start``
  marker and is dropped; regions it had already collected move up to its
  enclosing region (or to the top level), so matched regions survive

Matching ignores lexical context (strings, block comments) beyond what the
patterns themselves encode. There is no incremental mode: every change is a
full rescan.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from regionscope.document import TextDocument
from regionscope.regions.models import BoundaryType, InvalidMarker, Region, RegionParseResult
from regionscope.regions.patterns import BoundaryPatternTable, CompiledBoundaryPair, extract_title

logger = structlog.get_logger()


class RegionParser:
    """Builds region trees for documents using a boundary pattern table."""

    def __init__(self, table: BoundaryPatternTable) -> None:
        self._table = table

    @property
    def table(self) -> BoundaryPatternTable:
        return self._table

    def parse(self, document: TextDocument) -> RegionParseResult:
        return self.parse_lines(document.lines, document.language_id)

    def parse_lines(self, lines: Sequence[str], language_id: str) -> RegionParseResult:
        pairs = self._table.pairs_for(language_id)
        if not pairs or not lines:
            return RegionParseResult(top_level_regions=[], invalid_markers=[])

        top_level: list[Region] = []
        invalid: list[InvalidMarker] = []
        stack: list[Region] = []

        for line_idx, text in enumerate(lines):
            boundary, title = _classify_line(text, pairs)
            if boundary is BoundaryType.START:
                stack.append(Region(name=title, start_line=line_idx, end_line=line_idx))
            elif boundary is BoundaryType.END:
                if not stack:
                    invalid.append(InvalidMarker(line=line_idx, boundary_type=BoundaryType.END))
                    continue
                region = stack.pop()
                region.end_line = line_idx
                region.end_character = len(text)
                if stack:
                    stack[-1].add_child(region)
                else:
                    top_level.append(region)

        if stack:
            _discard_unclosed(stack, top_level, invalid)
            invalid.sort(key=lambda m: m.line)

        logger.debug(
            "regions_parsed",
            language_id=language_id,
            line_count=len(lines),
            top_level_count=len(top_level),
            invalid_count=len(invalid),
        )
        return RegionParseResult(top_level_regions=top_level, invalid_markers=invalid)


def _classify_line(
    text: str, pairs: tuple[CompiledBoundaryPair, ...]
) -> tuple[BoundaryType | None, str | None]:
    # Start patterns take priority over end patterns across all pairs
    for pair in pairs:
        match = pair.match_start(text)
        if match is not None:
            return BoundaryType.START, extract_title(match)
    for pair in pairs:
        if pair.match_end(text) is not None:
            return BoundaryType.END, None
    return None, None


def _discard_unclosed(
    stack: list[Region], top_level: list[Region], invalid: list[InvalidMarker]
) -> None:
    """Turn still-open regions into start markers, promoting their children."""
    while stack:
        unclosed = stack.pop()
        invalid.append(InvalidMarker(line=unclosed.start_line, boundary_type=BoundaryType.START))
        if stack:
            for child in unclosed.children:
                stack[-1].add_child(child)
            stack[-1].children.sort(key=lambda r: r.start_line)
        else:
            for child in unclosed.children:
                child.parent = None
                top_level.append(child)
            top_level.sort(key=lambda r: r.start_line)
