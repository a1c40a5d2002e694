"""Text document abstraction consumed by the parser, extractor and stores.

Positions are zero-based. A document is an immutable snapshot: editing
produces a new ``TextDocument`` with the same ``uri`` and a higher ``version``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from pathlib import Path

from regionscope.core.languages import detect_language_id


@total_ordering
@dataclass(frozen=True, slots=True)
class Position:
    """A zero-based (line, character) location."""

    line: int
    character: int = 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (self.line, self.character) < (other.line, other.character)


@dataclass(frozen=True, slots=True)
class Range:
    """An inclusive span between two positions."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def from_lines(
        cls, start_line: int, end_line: int, start_character: int = 0, end_character: int = 0
    ) -> Range:
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end

    def contains_range(self, other: Range) -> bool:
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: Range) -> bool:
        return self.start <= other.end and other.start <= self.end

    def describe(self) -> str:
        """Human readable one-based line span, e.g. ``Lines 5-9``."""
        if self.start.line == self.end.line:
            return f"Line {self.start.line + 1}"
        return f"Lines {self.start.line + 1}-{self.end.line + 1}"


@dataclass(frozen=True)
class TextDocument:
    """Immutable snapshot of a document's text.

    Attributes:
        uri: Stable document identity across versions
        language_id: Editor language identifier
        version: Monotonically increasing edit counter
        lines: Line texts without line terminators
    """

    uri: str
    language_id: str
    version: int
    lines: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_text(cls, uri: str, language_id: str, text: str, version: int = 1) -> TextDocument:
        return cls(uri=uri, language_id=language_id, version=version, lines=_split_lines(text))

    @classmethod
    def from_path(cls, path: Path, language_id: str | None = None) -> TextDocument:
        text = path.read_text(encoding="utf-8", errors="replace")
        return cls.from_text(
            uri=path.resolve().as_uri(),
            language_id=language_id or detect_language_id(path),
            text=text,
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def versioned_id(self) -> str:
        return versioned_document_id(self.uri, self.version)

    def line_at(self, line: int) -> str:
        if not 0 <= line < len(self.lines):
            raise IndexError(f"Line {line} out of range for document with {len(self.lines)} lines")
        return self.lines[line]

    def first_non_whitespace_character(self, line: int) -> int:
        text = self.line_at(line)
        return len(text) - len(text.lstrip())

    def with_text(self, text: str) -> TextDocument:
        """The next version of this document, holding ``text``."""
        return TextDocument(
            uri=self.uri,
            language_id=self.language_id,
            version=self.version + 1,
            lines=_split_lines(text),
        )

    def with_lines(self, lines: list[str] | tuple[str, ...]) -> TextDocument:
        return TextDocument(
            uri=self.uri, language_id=self.language_id, version=self.version + 1, lines=tuple(lines)
        )


def versioned_document_id(document_id: str, version: int) -> str:
    return f"{document_id}@{version}"


_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _split_lines(text: str) -> tuple[str, ...]:
    # Only editor line breaks count; form feeds and U+2028 stay inside a line
    if text == "":
        return ()
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return tuple(lines)
