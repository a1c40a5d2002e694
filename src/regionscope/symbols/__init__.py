"""Document symbols, their modifiers and the symbol store."""

from regionscope.symbols.display import (
    ModifierDisplayOptions,
    modifier_badges,
    modifier_tooltip,
    visibility_color,
    visibility_indicator,
    visibility_level,
)
from regionscope.symbols.extract import (
    ModifierCache,
    ModifierExtractor,
    extract_symbol_modifiers,
    python_visibility,
    supports_language,
)
from regionscope.symbols.models import DocumentSymbol, SymbolKind, flatten_symbols
from regionscope.symbols.modifiers import (
    DEFAULT_MODIFIERS,
    MemberModifiers,
    SymbolModifiers,
    Visibility,
    has_any_modifier,
    modifier_description,
)
from regionscope.symbols.python_provider import PythonSymbolProvider
from regionscope.symbols.store import SymbolProvider, SymbolStore

__all__ = [
    "DEFAULT_MODIFIERS",
    "DocumentSymbol",
    "MemberModifiers",
    "ModifierCache",
    "ModifierDisplayOptions",
    "ModifierExtractor",
    "PythonSymbolProvider",
    "SymbolKind",
    "SymbolModifiers",
    "SymbolProvider",
    "SymbolStore",
    "Visibility",
    "extract_symbol_modifiers",
    "flatten_symbols",
    "has_any_modifier",
    "modifier_badges",
    "modifier_description",
    "modifier_tooltip",
    "python_visibility",
    "supports_language",
    "visibility_color",
    "visibility_indicator",
    "visibility_level",
]
