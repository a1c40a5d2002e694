"""rgs region commands - region tree, invalid markers and navigation."""

import json
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from regionscope.cli.utils import (
    file_argument,
    json_option,
    language_option,
    line_option,
    open_session,
    region_label,
    region_to_dict,
)
from regionscope.regions.models import Region
from regionscope.session import OutlineSession


def _add_region_nodes(tree: Tree, regions: list[Region]) -> None:
    for region in regions:
        name = escape(region.display_name)
        label = f"[bold]{name}[/bold] [dim]{region.range.describe()}[/dim]"
        _add_region_nodes(tree.add(label), region.children)


@click.command()
@file_argument
@language_option
@json_option
def regions_command(file: Path, language_id: str | None, as_json: bool) -> None:
    """Show the region tree of FILE."""
    with open_session(file, language_id) as session:
        regions = session.get_top_level_regions()
        if as_json:
            click.echo(json.dumps([region_to_dict(r) for r in regions], indent=2))
            return

        console = Console()
        if not regions:
            console.print(f"[yellow]No regions[/yellow] in {escape(file.name)}")
            return
        language_id = escape(session.document.language_id)
        tree = Tree(f"[cyan]{escape(file.name)}[/cyan] [dim]({language_id})[/dim]")
        _add_region_nodes(tree, regions)
        console.print(tree)


@click.command()
@file_argument
@language_option
@json_option
@click.pass_context
def markers_command(ctx: click.Context, file: Path, language_id: str | None, as_json: bool) -> None:
    """List unmatched region markers in FILE.

    Exits with status 1 when any are found.
    """
    with open_session(file, language_id) as session:
        markers = session.get_invalid_markers()
        if as_json:
            click.echo(
                json.dumps(
                    [{"line": m.line, "boundary_type": m.boundary_type.value} for m in markers],
                    indent=2,
                )
            )
        else:
            console = Console()
            if not markers:
                console.print(f"[green]✓[/green] No invalid markers in {escape(file.name)}")
            for marker in markers:
                console.print(
                    f"[red]✗[/red] {escape(file.name)}:{marker.line + 1}: "
                    f"unmatched region {marker.boundary_type.value} marker"
                )
    if markers:
        ctx.exit(1)


def _navigation_command(
    lookup: Callable[[OutlineSession, int], Region | None], help_text: str
) -> click.Command:
    @click.command(help=help_text)
    @file_argument
    @line_option(required=True)
    @language_option
    @json_option
    def command(file: Path, line: int, language_id: str | None, as_json: bool) -> None:
        with open_session(file, language_id) as session:
            region = lookup(session, line - 1)
            if as_json:
                data = region_to_dict(region, with_children=False) if region else None
                click.echo(json.dumps(data))
            elif region is None:
                click.echo("No region")
            else:
                click.echo(region_label(region))

    return command


next_command = _navigation_command(
    lambda session, line: session.next_region(line),
    "Show the first region starting after --line, wrapping to the first region.",
)
previous_command = _navigation_command(
    lambda session, line: session.previous_region(line),
    "Show the last region starting before --line, wrapping to the last region.",
)
active_command = _navigation_command(
    lambda session, line: session.active_region(line),
    "Show the innermost region containing --line.",
)
