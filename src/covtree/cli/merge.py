"""covtree merge command - sum several tracefiles into one."""

from pathlib import Path

import click
from rich.markup import escape

from covtree.cli.utils import cli_errors, get_config, load_tracefile
from covtree.core.console import pluralize, status
from covtree.coverage import merge_tracefiles, write_tracefile


@click.command()
@click.argument(
    "tracefiles",
    nargs=-1,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("coverage/merged.lcov.info"),
    show_default=True,
    help="Destination tracefile (overwritten).",
)
@click.pass_context
def merge_command(ctx: click.Context, tracefiles: tuple[Path, ...], output_path: Path) -> None:
    """Merge TRACEFILES into one.

    Hit counts of a line reported by several tracefiles are added up.
    """
    config = get_config(ctx)
    with cli_errors():
        merged = merge_tracefiles(load_tracefile(path, config) for path in tracefiles)
        write_tracefile(output_path, merged)

    status(
        f"Merged {pluralize(len(tracefiles), 'tracefile')} "
        f"({pluralize(len(merged), 'file')}) -> {escape(str(output_path))}",
        style="success",
    )
