"""Document symbols as delivered by an external language analyzer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum

from regionscope.document import Range


class SymbolKind(IntEnum):
    """Symbol kinds, numbered as in the Language Server Protocol."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26

    @property
    def kind_id(self) -> str:
        """Stable identifier used in outline ids, e.g. ``symbol-enummember``."""
        return "symbol-" + self.name.lower().replace("_", "")


@dataclass(eq=True)
class DocumentSymbol:
    """A symbol and its nested children.

    Attributes:
        name: Symbol name as shown in the outline
        kind: Symbol kind
        range: Full extent, including body and leading decorators
        selection_range: The declaration itself (usually the name)
        detail: Optional extra text such as a signature
        children: Nested symbols
    """

    name: str
    kind: SymbolKind
    range: Range
    selection_range: Range
    detail: str = ""
    children: list[DocumentSymbol] = field(default_factory=list)

    def walk(self) -> Iterator[DocumentSymbol]:
        yield self
        for child in self.children:
            yield from child.walk()


def flatten_symbols(top_level_symbols: Iterable[DocumentSymbol]) -> list[DocumentSymbol]:
    """Depth-first pre-order flattening of a symbol tree."""
    return [symbol for root in top_level_symbols for symbol in root.walk()]
