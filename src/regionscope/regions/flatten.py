"""Depth-first flattening of region trees."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from regionscope.regions.models import FlattenedRegionEntry, Region


def flatten_regions(top_level_regions: Iterable[Region]) -> list[FlattenedRegionEntry]:
    """Pre-order flattening: each region precedes its children, children precede
    the next sibling. Top-level regions have an ancestor count of 0.
    """
    flattened: list[FlattenedRegionEntry] = []

    def visit(region: Region, depth: int) -> None:
        flattened.append(FlattenedRegionEntry(region=region, ancestor_count=depth))
        for child in region.children:
            visit(child, depth + 1)

    for root in top_level_regions:
        visit(root, 0)
    return flattened


def unflatten_regions(entries: Sequence[FlattenedRegionEntry]) -> list[Region]:
    """Rebuild a detached tree from flattened entries using ancestor counts.

    The result holds fresh ``Region`` objects, structurally equal to the tree
    the entries were flattened from.
    """
    top_level: list[Region] = []
    # path[d] is the most recent rebuilt region at depth d
    path: list[Region] = []
    for entry in entries:
        depth = entry.ancestor_count
        if depth > len(path):
            raise ValueError(
                f"Entry at line {entry.start_line} skips a level (depth {depth}, "
                f"expected at most {len(path)})"
            )
        source = entry.region
        copy = Region(
            name=source.name,
            start_line=source.start_line,
            end_line=source.end_line,
            end_character=source.end_character,
        )
        del path[depth:]
        if depth == 0:
            top_level.append(copy)
        else:
            path[-1].add_child(copy)
        path.append(copy)
    return top_level
