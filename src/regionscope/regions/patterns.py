"""Per-language boundary pattern pairs.

Each language maps to an ordered tuple of compiled (start, end) regex pairs.
The parser tries pairs in that order; the first pair whose start pattern
matches a line wins, and end patterns are only tried when no start pattern
matched.

Region titles come from a named group ``name``. User patterns may spell it
``(?P<name>...)`` or ``(?<name>...)``; the second form is rewritten before
compilation.

Resolution per language:
1. ``overrides[language]`` replaces the built-in defaults when present
2. ``additions[language]`` is appended after whichever list was chosen
3. An unknown language resolves to no pairs and never matches

A pattern that fails to compile disables region parsing for its own
language only; every other language keeps working.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from regionscope.core.errors import PatternError

if TYPE_CHECKING:
    from regionscope.config.models import PatternPairConfig, RegionsConfig

logger = structlog.get_logger()

TITLE_GROUP = "name"

# JavaScript-style named group "(?<name>" but not lookbehind "(?<=" / "(?<!"
_JS_NAMED_GROUP_RE = re.compile(r"\(\?<(?=[A-Za-z_])")


@dataclass(frozen=True, slots=True)
class BoundaryPattern:
    """Uncompiled (start, end) regex source pair."""

    start: str
    end: str


# =============================================================================
# Built-in defaults
# =============================================================================

_SLASH = BoundaryPattern(
    start=r"^\s*//\s*#?region\b\s*(?P<name>.*?)\s*$",
    end=r"^\s*//\s*#?endregion\b",
)
_HASH = BoundaryPattern(
    start=r"^\s*#\s*region\b\s*(?P<name>.*?)\s*$",
    end=r"^\s*#\s*endregion\b",
)
_DASH = BoundaryPattern(
    start=r"^\s*--\s*#?region\b\s*(?P<name>.*?)\s*$",
    end=r"^\s*--\s*#?endregion\b",
)
_PRAGMA = BoundaryPattern(
    start=r"^\s*#pragma\s+region\b\s*(?P<name>.*?)\s*$",
    end=r"^\s*#pragma\s+endregion\b",
)
_CSHARP = BoundaryPattern(
    start=r"^\s*#region\b\s*(?P<name>.*?)\s*$",
    end=r"^\s*#endregion\b",
)
_VB = BoundaryPattern(
    start=r"(?i)^\s*#region\b\s*\"?(?P<name>[^\"]*?)\"?\s*$",
    end=r"(?i)^\s*#end\s+region\b",
)
_ML_BLOCK = BoundaryPattern(
    start=r"^\s*\(\*\s*#region\b\s*(?P<name>.*?)\s*\*\)",
    end=r"^\s*\(\*\s*#endregion\b.*\*\)",
)
_CSS_BLOCK = BoundaryPattern(
    start=r"^\s*/\*\s*#region\b\s*(?P<name>.*?)\s*\*/",
    end=r"^\s*/\*\s*#endregion\b.*\*/",
)
_MARKUP = BoundaryPattern(
    start=r"^\s*<!--\s*#?region\b\s*(?P<name>.*?)\s*-->",
    end=r"^\s*<!--\s*#?endregion\b.*-->",
)
_BATCH = BoundaryPattern(
    start=r"(?i)^\s*(?:::|rem)\s*#region\b\s*(?P<name>.*?)\s*$",
    end=r"(?i)^\s*(?:::|rem)\s*#endregion\b",
)

_SLASH_LANGUAGES = (
    "typescript",
    "typescriptreact",
    "javascript",
    "javascriptreact",
    "java",
    "kotlin",
    "scala",
    "groovy",
    "go",
    "rust",
    "swift",
    "dart",
    "php",
    "jsonc",
)
_HASH_LANGUAGES = (
    "python",
    "shellscript",
    "powershell",
    "ruby",
    "perl",
    "r",
    "yaml",
    "toml",
    "makefile",
    "dockerfile",
    "coffeescript",
)
_DASH_LANGUAGES = ("lua", "sql", "haskell")
_MARKUP_LANGUAGES = ("html", "xml", "markdown", "vue", "svelte")

DEFAULT_PATTERNS: dict[str, tuple[BoundaryPattern, ...]] = {
    **{lang: (_SLASH,) for lang in _SLASH_LANGUAGES},
    **{lang: (_HASH,) for lang in _HASH_LANGUAGES},
    **{lang: (_DASH,) for lang in _DASH_LANGUAGES},
    **{lang: (_MARKUP,) for lang in _MARKUP_LANGUAGES},
    "c": (_SLASH, _PRAGMA),
    "cpp": (_SLASH, _PRAGMA),
    "csharp": (_CSHARP,),
    "vb": (_VB,),
    "fsharp": (_SLASH, _ML_BLOCK),
    "bat": (_BATCH,),
    "css": (_CSS_BLOCK,),
    "scss": (_SLASH, _CSS_BLOCK),
    "less": (_SLASH, _CSS_BLOCK),
}


# =============================================================================
# Compiled pairs
# =============================================================================


@dataclass(frozen=True, slots=True)
class CompiledBoundaryPair:
    """A compiled (start, end) pair for one language."""

    start: re.Pattern[str]
    end: re.Pattern[str]

    def match_start(self, line: str) -> re.Match[str] | None:
        return self.start.search(line)

    def match_end(self, line: str) -> re.Match[str] | None:
        return self.end.search(line)


def extract_title(match: re.Match[str]) -> str | None:
    """Region title from a start match; empty or missing titles give None."""
    if TITLE_GROUP not in match.re.groupindex:
        return None
    title = match.group(TITLE_GROUP)
    if title is None:
        return None
    title = title.strip()
    return title or None


def normalize_pattern(pattern: str) -> str:
    """Rewrite JavaScript-style named groups to Python syntax."""
    return _JS_NAMED_GROUP_RE.sub("(?P<", pattern)


def compile_pair(language_id: str, pattern: BoundaryPattern) -> CompiledBoundaryPair:
    """Compile one pair.

    Raises:
        PatternError: If either side is empty or not a valid regex.
    """
    if not pattern.start:
        raise PatternError.missing_pair(language_id, "start")
    if not pattern.end:
        raise PatternError.missing_pair(language_id, "end")
    compiled: list[re.Pattern[str]] = []
    for source in (pattern.start, pattern.end):
        try:
            compiled.append(re.compile(normalize_pattern(source)))
        except re.error as e:
            raise PatternError.invalid_regex(language_id, source, str(e)) from e
    return CompiledBoundaryPair(start=compiled[0], end=compiled[1])


class BoundaryPatternTable:
    """Mapping from language identifier to its ordered compiled pairs."""

    def __init__(
        self,
        pairs_by_language: Mapping[str, tuple[CompiledBoundaryPair, ...]],
        invalid_languages: Iterable[str] = (),
    ) -> None:
        self._pairs = dict(pairs_by_language)
        self._invalid_languages = frozenset(invalid_languages)

    @classmethod
    def build(
        cls,
        overrides: Mapping[str, Iterable[BoundaryPattern]] | None = None,
        additions: Mapping[str, Iterable[BoundaryPattern]] | None = None,
    ) -> BoundaryPatternTable:
        """Resolve defaults, overrides and additions, then compile every language."""
        overrides = overrides or {}
        additions = additions or {}
        sources: dict[str, list[BoundaryPattern]] = {
            lang: list(pairs) for lang, pairs in DEFAULT_PATTERNS.items()
        }
        for lang, pairs in overrides.items():
            sources[lang] = list(pairs)
        for lang, pairs in additions.items():
            sources.setdefault(lang, []).extend(pairs)

        compiled: dict[str, tuple[CompiledBoundaryPair, ...]] = {}
        invalid: list[str] = []
        for lang, patterns in sources.items():
            try:
                compiled[lang] = tuple(compile_pair(lang, p) for p in patterns)
            except PatternError as e:
                # Fail closed for this language only
                logger.warning("boundary_pattern_invalid", **e.details)
                compiled[lang] = ()
                invalid.append(lang)
        return cls(compiled, invalid)

    @classmethod
    def from_config(cls, config: RegionsConfig | None = None) -> BoundaryPatternTable:
        if config is None:
            return cls.build()
        return cls.build(
            overrides={lang: _to_patterns(pairs) for lang, pairs in config.overrides.items()},
            additions={lang: _to_patterns(pairs) for lang, pairs in config.additions.items()},
        )

    def pairs_for(self, language_id: str) -> tuple[CompiledBoundaryPair, ...]:
        """Ordered pairs for a language; empty for unknown or invalid languages."""
        return self._pairs.get(language_id, ())

    def supports(self, language_id: str) -> bool:
        return bool(self._pairs.get(language_id))

    @property
    def languages(self) -> frozenset[str]:
        return frozenset(lang for lang, pairs in self._pairs.items() if pairs)

    @property
    def invalid_languages(self) -> frozenset[str]:
        return self._invalid_languages


def _to_patterns(pairs: Iterable[PatternPairConfig]) -> list[BoundaryPattern]:
    return [BoundaryPattern(start=p.start, end=p.end) for p in pairs]
