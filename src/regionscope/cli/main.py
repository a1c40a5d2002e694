"""RegionScope CLI - rgs command."""

import click

from regionscope.cli.outline import outline_command
from regionscope.cli.regions import (
    active_command,
    markers_command,
    next_command,
    previous_command,
    regions_command,
)
from regionscope.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="rgs")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """RegionScope - region markers and merged outlines for source files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(regions_command, name="regions")
cli.add_command(markers_command, name="markers")
cli.add_command(next_command, name="next")
cli.add_command(previous_command, name="previous")
cli.add_command(active_command, name="active")
cli.add_command(outline_command, name="outline")


if __name__ == "__main__":
    cli()
