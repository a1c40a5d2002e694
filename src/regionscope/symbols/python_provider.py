"""Document symbols for Python source, derived with :mod:`ast`.

Stands in for a language server when the CLI outlines a Python file. Only
definitions are reported: classes, functions and methods (nested
definitions included) plus simple assignments at module and class level.
"""

from __future__ import annotations

import ast
import re

import structlog

from regionscope.document import Position, Range, TextDocument
from regionscope.symbols.models import DocumentSymbol, SymbolKind

logger = structlog.get_logger()

_FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


class PythonSymbolProvider:
    """Callable symbol provider for ``python`` documents."""

    language_id = "python"

    def __call__(self, document: TextDocument) -> list[DocumentSymbol]:
        return self.provide(document)

    def provide(self, document: TextDocument) -> list[DocumentSymbol]:
        if document.language_id != self.language_id:
            return []
        try:
            tree = ast.parse(document.text)
        except SyntaxError as e:
            logger.warning(
                "python_symbols_syntax_error",
                document_id=document.uri,
                line=e.lineno,
                error=e.msg,
            )
            return []
        return _Collector(document).collect(tree.body, scope="module")


class _Collector:
    def __init__(self, document: TextDocument) -> None:
        self.document = document

    def collect(self, nodes: list[ast.stmt], *, scope: str) -> list[DocumentSymbol]:
        symbols: list[DocumentSymbol] = []
        for node in nodes:
            if isinstance(node, ast.ClassDef):
                symbols.append(self._class_symbol(node))
            elif isinstance(node, _FunctionNode):
                symbols.append(self._function_symbol(node, in_class=scope == "class"))
            elif scope != "function" and isinstance(node, ast.Assign | ast.AnnAssign):
                kind = SymbolKind.FIELD if scope == "class" else SymbolKind.VARIABLE
                symbols.extend(self._assignment_symbols(node, kind))
        return symbols

    def _class_symbol(self, node: ast.ClassDef) -> DocumentSymbol:
        bases = ", ".join(ast.unparse(base) for base in node.bases)
        return DocumentSymbol(
            name=node.name,
            kind=SymbolKind.CLASS,
            range=self._definition_range(node),
            selection_range=self._name_range(node, node.name),
            detail=f"({bases})" if bases else "",
            children=self.collect(node.body, scope="class"),
        )

    def _function_symbol(self, node: _FunctionNode, *, in_class: bool) -> DocumentSymbol:
        if in_class:
            kind = SymbolKind.CONSTRUCTOR if node.name == "__init__" else SymbolKind.METHOD
        else:
            kind = SymbolKind.FUNCTION
        return DocumentSymbol(
            name=node.name,
            kind=kind,
            range=self._definition_range(node),
            selection_range=self._name_range(node, node.name),
            detail=f"({ast.unparse(node.args)})",
            children=self.collect(node.body, scope="function"),
        )

    def _assignment_symbols(
        self, node: ast.Assign | ast.AnnAssign, kind: SymbolKind
    ) -> list[DocumentSymbol]:
        targets = node.targets if isinstance(node, ast.Assign) else [node.target]
        names = [
            name_node
            for target in targets
            for name_node in ast.walk(target)
            if isinstance(name_node, ast.Name)
        ]
        full = self._node_range(node)
        return [
            DocumentSymbol(
                name=name_node.id,
                kind=kind,
                range=full,
                selection_range=self._node_range(name_node),
            )
            for name_node in names
        ]

    def _definition_range(self, node: ast.ClassDef | _FunctionNode) -> Range:
        # Decorators belong to the definition
        first = node.decorator_list[0] if node.decorator_list else node
        start = self._position(first.lineno, first.col_offset)
        if node.decorator_list:
            start = Position(start.line, max(0, start.character - 1))
        return Range(start, self._end_position(node))

    def _name_range(self, node: ast.ClassDef | _FunctionNode, name: str) -> Range:
        line = node.lineno - 1
        text = self._line_text(line)
        header = self._position(node.lineno, node.col_offset).character
        match = re.compile(rf"\b(?:class|def)\s+({re.escape(name)})\b").search(text, header)
        index = match.start(1) if match else header
        return Range(Position(line, index), Position(line, index + len(name)))

    def _node_range(self, node: ast.AST) -> Range:
        return Range(self._position(node.lineno, node.col_offset), self._end_position(node))

    def _end_position(self, node: ast.AST) -> Position:
        end_line = node.end_lineno if node.end_lineno is not None else node.lineno
        end_col = node.end_col_offset if node.end_col_offset is not None else 0
        return self._position(end_line, end_col)

    def _position(self, lineno: int, col_offset: int) -> Position:
        # ast reports one-based lines and UTF-8 byte columns
        line = lineno - 1
        text = self._line_text(line)
        prefix = text.encode("utf-8")[:col_offset].decode("utf-8", errors="ignore")
        return Position(line, len(prefix))

    def _line_text(self, line: int) -> str:
        if 0 <= line < self.document.line_count:
            return self.document.lines[line]
        return ""
