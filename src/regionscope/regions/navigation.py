"""Cursor-relative region navigation over flattened regions.

``previous_region`` means "previous boundary crossed": from inside a region
it returns that region's own start, from a region's start line it returns
the region before it. Both directions wrap around the document.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from regionscope.regions.models import FlattenedRegionEntry, Region

FlattenedRegions = Sequence[FlattenedRegionEntry] | Sequence[Region]


def _regions(flattened: FlattenedRegions) -> list[Region]:
    return [e.region if isinstance(e, FlattenedRegionEntry) else e for e in flattened]


def next_region(flattened: FlattenedRegions, cursor_line: int) -> Region | None:
    """First region starting after ``cursor_line``, wrapping to the first region."""
    regions = _regions(flattened)
    if not regions:
        return None
    for region in regions:
        if region.start_line > cursor_line:
            return region
    return regions[0]


def previous_region(flattened: FlattenedRegions, cursor_line: int) -> Region | None:
    """Last region starting before ``cursor_line``, wrapping to the last region."""
    regions = _regions(flattened)
    if not regions:
        return None
    for region in reversed(regions):
        if region.start_line < cursor_line:
            return region
    return regions[-1]


def active_region(top_level_regions: Iterable[Region], cursor_line: int) -> Region | None:
    """Innermost region whose line span contains ``cursor_line``."""
    active: Region | None = None
    candidates: Iterable[Region] = top_level_regions
    while True:
        container = next((r for r in candidates if r.contains_line(cursor_line)), None)
        if container is None:
            return active
        active = container
        candidates = container.children
