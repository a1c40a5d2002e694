"""Visibility and member modifiers derived for a symbol.

Modifiers are decorations inferred from source text, not authoritative
language semantics. They are recomputed per document version.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum


class Visibility(str, Enum):
    """Visibility / access level of a symbol."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PROTECTED_INTERNAL = "protected-internal"
    PRIVATE_PROTECTED = "private-protected"
    PACKAGE = "package"  # Java/Kotlin package-private
    DEFAULT = "default"  # Unknown / not determined

    @property
    def label(self) -> str:
        """Source-style spelling, e.g. ``protected internal``."""
        return self.value.replace("-", " ")


@dataclass(frozen=True, slots=True)
class MemberModifiers:
    """Boolean member flags; all False by default."""

    is_static: bool = False
    is_readonly: bool = False
    is_const: bool = False
    is_abstract: bool = False
    is_virtual: bool = False
    is_override: bool = False
    is_async: bool = False
    is_sealed: bool = False
    is_extern: bool = False
    is_volatile: bool = False
    is_new: bool = False  # C# member hiding

    def any(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


# Order used when describing flags: (flag, word)
_DESCRIPTION_ORDER: tuple[tuple[str, str], ...] = (
    ("is_static", "static"),
    ("is_abstract", "abstract"),
    ("is_virtual", "virtual"),
    ("is_override", "override"),
    ("is_sealed", "sealed"),
    ("is_readonly", "readonly"),
    ("is_const", "const"),
    ("is_async", "async"),
    ("is_extern", "extern"),
    ("is_volatile", "volatile"),
    ("is_new", "new"),
)


@dataclass(frozen=True, slots=True)
class SymbolModifiers:
    """Complete modifier information for a symbol."""

    visibility: Visibility = Visibility.DEFAULT
    member_modifiers: MemberModifiers = MemberModifiers()


DEFAULT_MODIFIERS = SymbolModifiers()


def has_any_modifier(modifiers: SymbolModifiers) -> bool:
    return modifiers.visibility is not Visibility.DEFAULT or modifiers.member_modifiers.any()


def modifier_description(modifiers: SymbolModifiers) -> str:
    """Short description such as ``protected internal static async``."""
    parts: list[str] = []
    if modifiers.visibility is not Visibility.DEFAULT:
        parts.append(modifiers.visibility.label)
    member = modifiers.member_modifiers
    parts.extend(word for flag, word in _DESCRIPTION_ORDER if getattr(member, flag))
    return " ".join(parts)
