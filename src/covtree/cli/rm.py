"""covtree rm command - remove files and folders."""

from pathlib import Path

import click
from rich.markup import escape

from covtree.cli.utils import cli_errors
from covtree.core.console import status
from covtree.core.fs import remove_elements


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--accept-absence/--no-accept-absence",
    default=True,
    show_default=True,
    help="Continue when an element does not exist instead of failing.",
)
def rm_command(paths: tuple[Path, ...], accept_absence: bool) -> None:
    """Remove a set of files and folders."""
    with cli_errors():
        missing = remove_elements(paths, accept_absence=accept_absence)
    for path in missing:
        status(f"The <{escape(str(path))}> element does not exist.", style="warning")
