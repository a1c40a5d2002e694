"""Presentation helpers for symbol modifiers.

Renderers receive color identifiers and short text badges; drawing icons is
left to the consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from regionscope.symbols.modifiers import SymbolModifiers, Visibility, modifier_description

if TYPE_CHECKING:
    from regionscope.config.models import OutlineConfig

# Theme color ids borrowed from symbol icon colors
VISIBILITY_COLORS: dict[Visibility, str | None] = {
    Visibility.PUBLIC: "symbolIcon.methodForeground",
    Visibility.PRIVATE: "symbolIcon.fieldForeground",
    Visibility.PROTECTED: "symbolIcon.propertyForeground",
    Visibility.INTERNAL: "symbolIcon.moduleForeground",
    Visibility.PROTECTED_INTERNAL: "symbolIcon.propertyForeground",
    Visibility.PRIVATE_PROTECTED: "symbolIcon.fieldForeground",
    Visibility.PACKAGE: "symbolIcon.moduleForeground",
    Visibility.DEFAULT: None,
}

VISIBILITY_COLORS_DISTINCT: dict[Visibility, str | None] = {
    Visibility.PUBLIC: "charts.green",
    Visibility.PRIVATE: "charts.red",
    Visibility.PROTECTED: "charts.yellow",
    Visibility.INTERNAL: "charts.blue",
    Visibility.PROTECTED_INTERNAL: "charts.orange",
    Visibility.PRIVATE_PROTECTED: "charts.purple",
    Visibility.PACKAGE: "charts.blue",
    Visibility.DEFAULT: None,
}

_INDICATORS: dict[Visibility, str] = {
    Visibility.PUBLIC: "🟢",
    Visibility.PRIVATE: "🔴",
    Visibility.PROTECTED: "🟡",
    Visibility.INTERNAL: "🔵",
    Visibility.PROTECTED_INTERNAL: "🟠",
    Visibility.PRIVATE_PROTECTED: "🟣",
    Visibility.PACKAGE: "🔵",
}

# Higher = more accessible
_VISIBILITY_LEVELS: dict[Visibility, int] = {
    Visibility.PUBLIC: 4,
    Visibility.PROTECTED_INTERNAL: 3,
    Visibility.PROTECTED: 2,
    Visibility.INTERNAL: 2,
    Visibility.PACKAGE: 2,
    Visibility.PRIVATE_PROTECTED: 1,
    Visibility.PRIVATE: 0,
}


@dataclass(frozen=True, slots=True)
class ModifierDisplayOptions:
    """How modifiers are surfaced on outline items.

    Attributes:
        show_visibility_colors: Extract modifiers and color items by visibility
        use_distinct_colors: Chart colors instead of symbol icon colors
        show_static_indicator: Attach the badge description (static, const...)
    """

    show_visibility_colors: bool = True
    use_distinct_colors: bool = True
    show_static_indicator: bool = False

    @classmethod
    def from_config(cls, config: OutlineConfig) -> ModifierDisplayOptions:
        return cls(
            show_visibility_colors=config.modifier_display != "off",
            use_distinct_colors=config.use_distinct_modifier_colors,
            show_static_indicator=config.modifier_display == "color_and_description",
        )

    @property
    def extracts_modifiers(self) -> bool:
        return self.show_visibility_colors


def visibility_color(visibility: Visibility, *, distinct: bool = True) -> str | None:
    colors = VISIBILITY_COLORS_DISTINCT if distinct else VISIBILITY_COLORS
    return colors[visibility]


def visibility_indicator(visibility: Visibility) -> str:
    return _INDICATORS.get(visibility, "")


def visibility_level(visibility: Visibility) -> int:
    """Numeric accessibility for sorting/filtering; -1 when unknown."""
    return _VISIBILITY_LEVELS.get(visibility, -1)


def modifier_tooltip(base_tooltip: str, modifiers: SymbolModifiers) -> str:
    description = modifier_description(modifiers)
    if not description:
        return base_tooltip
    return f"[{description}] {base_tooltip}"


def modifier_badges(
    modifiers: SymbolModifiers, options: ModifierDisplayOptions | None = None
) -> str | None:
    """Badge text shown beside an item, e.g. ``static, readonly, async``."""
    options = options or ModifierDisplayOptions(show_static_indicator=True)
    member = modifiers.member_modifiers
    parts: list[str] = []
    if options.show_static_indicator and member.is_static:
        parts.append("static")
    if member.is_readonly:
        parts.append("readonly")
    elif member.is_const:
        parts.append("const")
    if member.is_abstract:
        parts.append("abstract")
    if member.is_async:
        parts.append("async")
    return ", ".join(parts) if parts else None
