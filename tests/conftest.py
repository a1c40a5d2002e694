"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of regionscope modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("regionscope"):
        del sys.modules[module_name]

from regionscope.document import Position, Range, TextDocument  # noqa: E402
from regionscope.symbols.models import DocumentSymbol, SymbolKind  # noqa: E402


def _sample_lines() -> list[str]:
    lines = [""] * 70
    layout = {
        4: "// #region Imports",
        5: 'import { a } from "a";',
        7: "// #endregion",
        9: "// #region Classes",
        10: "class Outer {",
        15: "  // #region Constructor",
        16: "  constructor() {}",
        21: "  // #endregion",
        22: "  // #region Methods",
        23: "  run(): void {}",
        31: "    // #region Nested Method Region",
        32: "    helper(): void {}",
        35: "    // #endregion",
        38: "  // #endregion",
        39: "  // #region Sibling Classes",
        40: "  class Inner {}",
        48: "    // #region Another Nested Region",
        50: "    // #endregion",
        55: "  // #endregion",
        57: "}",
        58: "// #endregion",
        60: "// #region Type Definitions",
        61: "type Id = string;",
        62: "// #endregion",
        64: "// #region",
        66: "// #endregion",
    }
    for line, text in layout.items():
        lines[line] = text
    return lines


@pytest.fixture
def sample_ts_document() -> TextDocument:
    """TypeScript document with nine regions, nested up to three levels."""
    return TextDocument.from_text(
        uri="file:///workspace/sample.ts",
        language_id="typescript",
        text="\n".join(_sample_lines()),
    )


def _symbol(
    name: str,
    kind: SymbolKind,
    start: tuple[int, int],
    end: tuple[int, int],
    children: list[DocumentSymbol] | None = None,
) -> DocumentSymbol:
    span = Range(Position(*start), Position(*end))
    selection = Range(span.start, Position(start[0], start[1] + len(name)))
    return DocumentSymbol(
        name=name, kind=kind, range=span, selection_range=selection, children=children or []
    )


@pytest.fixture
def sample_ts_symbols() -> list[DocumentSymbol]:
    """Symbols an analyzer would report for ``sample_ts_document``."""
    return [
        _symbol(
            "Outer",
            SymbolKind.CLASS,
            (10, 0),
            (57, 1),
            children=[
                _symbol("run", SymbolKind.METHOD, (23, 2), (23, 16)),
                _symbol("helper", SymbolKind.METHOD, (32, 4), (32, 21)),
                _symbol("Inner", SymbolKind.CLASS, (40, 2), (40, 16)),
            ],
        )
    ]
