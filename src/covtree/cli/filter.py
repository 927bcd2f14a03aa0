"""covtree filter command - drop tracefile blocks by source path."""

from pathlib import Path

import click
from rich.markup import escape

from covtree.cli.utils import cli_errors, get_config, load_tracefile
from covtree.core.console import pluralize, status
from covtree.coverage import filter_tracefile, write_tracefile


@click.command()
@click.option(
    "-i",
    "--input",
    "tracefile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tracefile to filter (default: paths.tracefile from config).",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("coverage/filtered.lcov.info"),
    show_default=True,
    help="Destination tracefile.",
)
@click.option(
    "-f",
    "--filters",
    "patterns",
    multiple=True,
    help="Regular expression; blocks whose source path matches are dropped. Repeatable.",
)
@click.option(
    "--mode",
    type=click.Choice(["a", "w"]),
    default="a",
    show_default=True,
    help="a: append to an existing output. w: overwrite it.",
)
@click.pass_context
def filter_command(
    ctx: click.Context,
    tracefile_path: Path | None,
    output_path: Path,
    patterns: tuple[str, ...],
    mode: str,
) -> None:
    """Filter a tracefile.

    Blocks that are kept are written exactly as they appear in the input.
    """
    config = get_config(ctx)
    with cli_errors():
        tracefile = load_tracefile(tracefile_path, config)
        filtered = filter_tracefile(tracefile, patterns)
        write_tracefile(output_path, filtered, append=mode == "a")

    dropped = len(tracefile) - len(filtered)
    status(
        f"Kept {pluralize(len(filtered), 'file')}, dropped {dropped} "
        f"-> {escape(str(output_path))}",
        style="success",
    )
