"""rgs outline command - merged region and symbol outline."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from regionscope.cli.utils import (
    file_argument,
    item_to_dict,
    json_option,
    language_option,
    line_option,
    open_session,
)
from regionscope.document import Position
from regionscope.outline.models import OutlineItem

# rich color names for the distinct chart colors
_CHART_STYLES = {
    "charts.green": "green",
    "charts.red": "red",
    "charts.yellow": "yellow",
    "charts.blue": "blue",
    "charts.orange": "dark_orange",
    "charts.purple": "magenta",
}


def _item_label(item: OutlineItem, active: OutlineItem | None) -> str:
    kind = "region" if item.is_region else item.kind_id.removeprefix("symbol-")
    style = _CHART_STYLES.get(item.color_id or "", "")
    name = escape(item.display_name)
    if style:
        name = f"[{style}]{name}[/{style}]"
    label = f"[dim]{kind}[/dim] [bold]{name}[/bold]"
    if item.description:
        label += f" [italic]{escape(item.description)}[/italic]"
    if active is not None and item.id == active.id:
        label = f"[reverse]{label}[/reverse]"
    return label


def _add_item_nodes(tree: Tree, items: list[OutlineItem], active: OutlineItem | None) -> None:
    for item in items:
        _add_item_nodes(tree.add(_item_label(item, active)), item.children, active)


@click.command()
@file_argument
@line_option(required=False)
@language_option
@json_option
def outline_command(file: Path, line: int | None, language_id: str | None, as_json: bool) -> None:
    """Show the merged outline of FILE.

    Python files include symbols; other languages show regions only.
    With --line, the active item at that line is highlighted.
    """
    with open_session(file, language_id, with_symbols=True) as session:
        if line is not None:
            session.move_cursor(Position(line - 1))
            session.flush()

        items = session.get_top_level_full_outline_items()
        active = session.get_active_full_outline_item()

        if as_json:
            click.echo(
                json.dumps(
                    {
                        "document": session.document.uri,
                        "version": session.document.version,
                        "items": [item_to_dict(item) for item in items],
                        "active": active.id if active else None,
                        "status": session.controller.status().to_dict(),
                    },
                    indent=2,
                )
            )
            return

        console = Console()
        if not items:
            console.print(f"[yellow]Empty outline[/yellow] for {escape(file.name)}")
            return
        tree = Tree(f"[cyan]{escape(file.name)}[/cyan]")
        _add_item_nodes(tree, items, active)
        console.print(tree)
        if line is not None:
            console.print(f"Active: {escape(active.display_name) if active else '-'}")
