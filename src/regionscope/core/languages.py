"""Canonical language definitions.

Maps file extensions and well-known filenames to editor language identifiers
(``python``, ``typescriptreact``, ``csharp``...). Boundary patterns and
modifier tables are keyed by these identifiers.

Rules:
1. Extensions include the dot and are matched case-insensitively
2. Filenames are EXACT, lowercase matches
3. An extension maps to exactly one language identifier
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Language:
    """Canonical definition for a language identifier.

    Attributes:
        language_id: Editor language identifier (lowercase)
        extensions: File extensions including dot
        filenames: Special filenames to detect (lowercase, EXACT match only)
    """

    language_id: str
    extensions: frozenset[str]
    filenames: frozenset[str] = field(default_factory=frozenset)


ALL_LANGUAGES: tuple[Language, ...] = (
    Language("python", frozenset({".py", ".pyi", ".pyw"})),
    Language("typescript", frozenset({".ts", ".mts", ".cts"})),
    Language("typescriptreact", frozenset({".tsx"})),
    Language("javascript", frozenset({".js", ".mjs", ".cjs"})),
    Language("javascriptreact", frozenset({".jsx"})),
    Language("csharp", frozenset({".cs", ".csx"})),
    Language("vb", frozenset({".vb"})),
    Language("fsharp", frozenset({".fs", ".fsi", ".fsx"})),
    Language("java", frozenset({".java"})),
    Language("kotlin", frozenset({".kt", ".kts"})),
    Language("scala", frozenset({".scala", ".sc"})),
    Language("groovy", frozenset({".groovy", ".gradle"})),
    Language("c", frozenset({".c", ".h"})),
    Language("cpp", frozenset({".cpp", ".cc", ".cxx", ".hpp", ".hh", ".hxx"})),
    Language("go", frozenset({".go"})),
    Language("rust", frozenset({".rs"})),
    Language("swift", frozenset({".swift"})),
    Language("dart", frozenset({".dart"})),
    Language("php", frozenset({".php"})),
    Language("ruby", frozenset({".rb"}), frozenset({"gemfile", "rakefile"})),
    Language("perl", frozenset({".pl", ".pm"})),
    Language("r", frozenset({".r"})),
    Language("lua", frozenset({".lua"})),
    Language("sql", frozenset({".sql"})),
    Language("haskell", frozenset({".hs"})),
    Language("shellscript", frozenset({".sh", ".bash", ".zsh"})),
    Language("powershell", frozenset({".ps1", ".psm1"})),
    Language("bat", frozenset({".bat", ".cmd"})),
    Language("coffeescript", frozenset({".coffee"})),
    Language("yaml", frozenset({".yaml", ".yml"})),
    Language("toml", frozenset({".toml"})),
    Language("jsonc", frozenset({".jsonc"})),
    Language("makefile", frozenset({".mk"}), frozenset({"makefile", "gnumakefile"})),
    Language("dockerfile", frozenset(), frozenset({"dockerfile", "containerfile"})),
    Language("css", frozenset({".css"})),
    Language("scss", frozenset({".scss"})),
    Language("less", frozenset({".less"})),
    Language("html", frozenset({".html", ".htm"})),
    Language("xml", frozenset({".xml", ".xaml", ".svg"})),
    Language("markdown", frozenset({".md", ".markdown"})),
    Language("vue", frozenset({".vue"})),
    Language("svelte", frozenset({".svelte"})),
)

LANGUAGES_BY_ID: dict[str, Language] = {lang.language_id: lang for lang in ALL_LANGUAGES}

EXTENSION_TO_LANGUAGE_ID: dict[str, str] = {
    ext: lang.language_id for lang in ALL_LANGUAGES for ext in lang.extensions
}

FILENAME_TO_LANGUAGE_ID: dict[str, str] = {
    name: lang.language_id for lang in ALL_LANGUAGES for name in lang.filenames
}

PLAINTEXT = "plaintext"


def detect_language_id(path: str | Path) -> str:
    """Language identifier for a path, or ``plaintext`` when unknown."""
    p = Path(path)
    by_name = FILENAME_TO_LANGUAGE_ID.get(p.name.lower())
    if by_name is not None:
        return by_name
    return EXTENSION_TO_LANGUAGE_ID.get(p.suffix.lower(), PLAINTEXT)
