"""Region markers: patterns, parsing, flattening, navigation and the region store."""

from regionscope.regions.flatten import flatten_regions, unflatten_regions
from regionscope.regions.models import (
    BoundaryType,
    FlattenedRegionEntry,
    InvalidMarker,
    Region,
    RegionParseResult,
)
from regionscope.regions.navigation import active_region, next_region, previous_region
from regionscope.regions.parser import RegionParser
from regionscope.regions.patterns import (
    DEFAULT_PATTERNS,
    BoundaryPattern,
    BoundaryPatternTable,
    CompiledBoundaryPair,
)
from regionscope.regions.store import RegionStore

__all__ = [
    "BoundaryPattern",
    "BoundaryPatternTable",
    "BoundaryType",
    "CompiledBoundaryPair",
    "DEFAULT_PATTERNS",
    "FlattenedRegionEntry",
    "InvalidMarker",
    "Region",
    "RegionParseResult",
    "RegionParser",
    "RegionStore",
    "active_region",
    "flatten_regions",
    "next_region",
    "previous_region",
    "unflatten_regions",
]
