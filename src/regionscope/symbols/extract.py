"""Heuristic modifier extraction from a symbol's declaration text.

For each supported language a static table maps visibility keywords and
member keywords to modifiers. The searched text is the declaration line
(``selection_range.start.line``) plus up to three preceding lines, stopping
at a blank line or at a line opening with a closing bracket so modifiers of
the previous declaration do not bleed in.

Keywords match on word boundaries, case-insensitively, and also in decorator
(``@keyword``) and attribute (``[keyword]``) form. Multi-word visibilities
such as ``protected internal`` are tried before single words.

Python has no visibility keywords; visibility comes from the name:
``__name`` is private, any other leading underscore (dunders included)
protected, anything else public.

Languages without a table get default modifiers.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

import structlog

from regionscope.document import TextDocument
from regionscope.symbols.models import DocumentSymbol
from regionscope.symbols.modifiers import (
    DEFAULT_MODIFIERS,
    MemberModifiers,
    SymbolModifiers,
    Visibility,
)

logger = structlog.get_logger()

MAX_LOOKBACK_LINES = 3
_DECLARATION_BREAK_RE = re.compile(r"^\s*[}\])]")


@dataclass(frozen=True)
class ModifierPatternSet:
    """Keyword tables for a group of languages."""

    languages: tuple[str, ...]
    visibility_keywords: Mapping[str, Visibility] = field(default_factory=dict)
    member_keywords: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    visibility_from_name: bool = False


CSHARP_PATTERNS = ModifierPatternSet(
    languages=("csharp",),
    visibility_keywords={
        "public": Visibility.PUBLIC,
        "private": Visibility.PRIVATE,
        "protected": Visibility.PROTECTED,
        "internal": Visibility.INTERNAL,
        "protected internal": Visibility.PROTECTED_INTERNAL,
        "internal protected": Visibility.PROTECTED_INTERNAL,
        "private protected": Visibility.PRIVATE_PROTECTED,
        "protected private": Visibility.PRIVATE_PROTECTED,
    },
    member_keywords={
        "is_static": ("static",),
        "is_readonly": ("readonly",),
        "is_const": ("const",),
        "is_abstract": ("abstract",),
        "is_virtual": ("virtual",),
        "is_override": ("override",),
        "is_async": ("async",),
        "is_sealed": ("sealed",),
        "is_extern": ("extern",),
        "is_volatile": ("volatile",),
        "is_new": ("new",),
    },
)

JAVA_PATTERNS = ModifierPatternSet(
    languages=("java",),
    # Package-private has no keyword and stays DEFAULT
    visibility_keywords={
        "public": Visibility.PUBLIC,
        "private": Visibility.PRIVATE,
        "protected": Visibility.PROTECTED,
    },
    member_keywords={
        "is_static": ("static",),
        "is_const": ("final",),
        "is_abstract": ("abstract",),
        "is_volatile": ("volatile",),
        "is_sealed": ("sealed",),
    },
)

KOTLIN_PATTERNS = ModifierPatternSet(
    languages=("kotlin",),
    visibility_keywords={
        "public": Visibility.PUBLIC,
        "private": Visibility.PRIVATE,
        "protected": Visibility.PROTECTED,
        "internal": Visibility.INTERNAL,
    },
    member_keywords={
        "is_static": ("companion",),
        "is_const": ("const", "val"),
        "is_abstract": ("abstract",),
        "is_override": ("override",),
        "is_sealed": ("sealed",),
    },
)

TYPESCRIPT_PATTERNS = ModifierPatternSet(
    languages=("typescript", "typescriptreact", "javascript", "javascriptreact"),
    visibility_keywords={
        "public": Visibility.PUBLIC,
        "private": Visibility.PRIVATE,
        "protected": Visibility.PROTECTED,
    },
    member_keywords={
        "is_static": ("static",),
        "is_readonly": ("readonly",),
        "is_const": ("const",),
        "is_abstract": ("abstract",),
        "is_async": ("async",),
        "is_override": ("override",),
    },
)

CPP_PATTERNS = ModifierPatternSet(
    languages=("cpp", "c"),
    visibility_keywords={
        "public": Visibility.PUBLIC,
        "private": Visibility.PRIVATE,
        "protected": Visibility.PROTECTED,
    },
    member_keywords={
        "is_static": ("static",),
        "is_const": ("const", "constexpr"),
        "is_virtual": ("virtual",),
        "is_override": ("override",),
        "is_volatile": ("volatile",),
        "is_extern": ("extern",),
    },
)

PYTHON_PATTERNS = ModifierPatternSet(
    languages=("python",),
    member_keywords={
        "is_static": ("staticmethod", "classmethod"),
        "is_abstract": ("abstractmethod",),
        "is_async": ("async",),
    },
    visibility_from_name=True,
)

ALL_PATTERN_SETS: tuple[ModifierPatternSet, ...] = (
    CSHARP_PATTERNS,
    JAVA_PATTERNS,
    KOTLIN_PATTERNS,
    TYPESCRIPT_PATTERNS,
    CPP_PATTERNS,
    PYTHON_PATTERNS,
)


@dataclass(frozen=True)
class _CompiledPatternSet:
    visibility: tuple[tuple[re.Pattern[str], Visibility], ...]
    members: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...]
    visibility_from_name: bool


def _keyword_regex(keyword: str) -> str:
    # Multi-word keywords tolerate any whitespace between words
    return r"\s+".join(re.escape(word) for word in keyword.split())


def _compile(pattern_set: ModifierPatternSet) -> _CompiledPatternSet:
    # Longest first, so "protected internal" wins over "protected"
    ordered = sorted(pattern_set.visibility_keywords.items(), key=lambda kv: -len(kv[0]))
    visibility = tuple(
        (re.compile(rf"\b{_keyword_regex(kw)}\b", re.IGNORECASE), vis) for kw, vis in ordered
    )
    members = tuple(
        (
            flag,
            tuple(
                re.compile(form, re.IGNORECASE)
                for kw in keywords
                for form in (
                    rf"\b{_keyword_regex(kw)}\b",
                    rf"@{re.escape(kw)}\b",
                    rf"\[{re.escape(kw)}\]",
                )
            ),
        )
        for flag, keywords in pattern_set.member_keywords.items()
    )
    return _CompiledPatternSet(visibility, members, pattern_set.visibility_from_name)


def _compile_all() -> dict[str, _CompiledPatternSet]:
    by_language: dict[str, _CompiledPatternSet] = {}
    for pattern_set in ALL_PATTERN_SETS:
        compiled = _compile(pattern_set)
        for lang in pattern_set.languages:
            by_language[lang] = compiled
    return by_language


_COMPILED_BY_LANGUAGE = _compile_all()


def supports_language(language_id: str) -> bool:
    return language_id in _COMPILED_BY_LANGUAGE


def python_visibility(name: str) -> Visibility:
    """Visibility implied by Python naming conventions."""
    if name.startswith("__") and not name.endswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def declaration_text(symbol: DocumentSymbol, document: TextDocument) -> str:
    """Declaration line plus up to three attached lines above it."""
    symbol_line = symbol.selection_range.start.line
    if document.line_count == 0 or not 0 <= symbol_line < document.line_count:
        return ""

    start_line = symbol_line
    for offset in range(1, MAX_LOOKBACK_LINES + 1):
        prev_line = symbol_line - offset
        if prev_line < 0:
            break
        text = document.line_at(prev_line)
        if not text.strip() or _DECLARATION_BREAK_RE.match(text):
            break
        start_line = prev_line

    return "\n".join(document.lines[start_line : symbol_line + 1])


def extract_symbol_modifiers(symbol: DocumentSymbol, document: TextDocument) -> SymbolModifiers:
    """Uncached extraction for one symbol."""
    compiled = _COMPILED_BY_LANGUAGE.get(document.language_id)
    if compiled is None:
        return DEFAULT_MODIFIERS

    text = declaration_text(symbol, document)

    if compiled.visibility_from_name:
        visibility = python_visibility(symbol.name)
    else:
        visibility = next(
            (vis for regex, vis in compiled.visibility if regex.search(text)),
            Visibility.DEFAULT,
        )

    flags = {
        flag: True
        for flag, regexes in compiled.members
        if any(regex.search(text) for regex in regexes)
    }
    return SymbolModifiers(visibility=visibility, member_modifiers=MemberModifiers(**flags))


CacheKey = tuple[str, int, int, int, str]


class ModifierCache:
    """Extraction results keyed by document version and symbol position.

    Entries are evicted in insertion order: once the cache grows past
    ``max_entries`` the oldest ``evict_count`` entries are dropped. Entries of
    old document versions are never invalidated explicitly; they simply age out.
    """

    def __init__(self, max_entries: int = 5000, evict_count: int = 1000) -> None:
        if evict_count > max_entries:
            raise ValueError("evict_count cannot exceed max_entries")
        self.max_entries = max_entries
        self.evict_count = evict_count
        self._entries: dict[CacheKey, SymbolModifiers] = {}

    @staticmethod
    def key_for(symbol: DocumentSymbol, document: TextDocument) -> CacheKey:
        start = symbol.range.start
        return (document.uri, document.version, start.line, start.character, symbol.name)

    def get(self, key: CacheKey) -> SymbolModifiers | None:
        return self._entries.get(key)

    def put(self, key: CacheKey, modifiers: SymbolModifiers) -> None:
        self._entries[key] = modifiers
        if len(self._entries) > self.max_entries:
            oldest = list(self._entries)[: self.evict_count]
            for stale in oldest:
                del self._entries[stale]
            logger.debug("modifier_cache_evicted", evicted=len(oldest), remaining=len(self._entries))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class ModifierExtractor:
    """Cached modifier extraction bound to one cache."""

    def __init__(self, cache: ModifierCache | None = None) -> None:
        self.cache = cache if cache is not None else ModifierCache()

    def extract(self, symbol: DocumentSymbol, document: TextDocument) -> SymbolModifiers:
        key = ModifierCache.key_for(symbol, document)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        modifiers = extract_symbol_modifiers(symbol, document)
        self.cache.put(key, modifiers)
        return modifiers
