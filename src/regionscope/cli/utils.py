"""CLI utilities."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click

from regionscope.config import load_config
from regionscope.core.errors import RegionScopeError
from regionscope.document import TextDocument
from regionscope.outline.models import OutlineItem
from regionscope.regions.models import Region
from regionscope.session import OutlineSession
from regionscope.symbols.python_provider import PythonSymbolProvider

file_argument = click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
language_option = click.option(
    "--language",
    "language_id",
    default=None,
    help="Language identifier (default: detected from the file extension)",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")


def line_option(*, required: bool) -> Any:
    return click.option(
        "--line",
        type=click.IntRange(min=1),
        required=required,
        help="Cursor line (1-based)",
    )


@contextmanager
def open_session(
    file: Path, language_id: str | None, *, with_symbols: bool = False
) -> Iterator[OutlineSession]:
    """Open ``file`` in a session with all debounced work already flushed.

    With ``with_symbols``, Python files get symbols from the ast provider.

    Raises:
        click.ClickException: If configuration cannot be loaded
    """
    try:
        config = load_config(Path.cwd())
    except RegionScopeError as e:
        raise click.ClickException(str(e)) from e

    document = TextDocument.from_path(file, language_id)
    provider = PythonSymbolProvider() if with_symbols and document.language_id == "python" else None
    with OutlineSession(config, symbol_provider=provider) as session:
        session.open(document)
        session.flush()
        yield session


def region_label(region: Region) -> str:
    return f"{region.display_name} ({region.range.describe()})"


def region_to_dict(region: Region, *, with_children: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": region.name,
        "display_name": region.display_name,
        "start_line": region.start_line,
        "end_line": region.end_line,
    }
    if with_children:
        data["children"] = [region_to_dict(child) for child in region.children]
    return data


def item_to_dict(item: OutlineItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "display_name": item.display_name,
        "item_type": item.item_type.value,
        "kind": item.kind_id,
        "start": [item.range.start.line, item.range.start.character],
        "end": [item.range.end.line, item.range.end.character],
        "visibility": item.modifiers.visibility.value,
        "description": item.description,
        "children": [item_to_dict(child) for child in item.children],
    }
