"""covtree CLI - covtree command."""

import click

from covtree import __version__
from covtree.cli.check import check_command
from covtree.cli.filter import filter_command
from covtree.cli.merge import merge_command
from covtree.cli.report import report_command
from covtree.cli.rm import rm_command
from covtree.cli.utils import cli_errors
from covtree.config.loader import load_config
from covtree.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="covtree")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """covtree - Aggregate, merge, filter and gate LCOV coverage tracefiles."""
    ctx.ensure_object(dict)
    with cli_errors():
        config = load_config()
    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    ctx.obj["config"] = config


cli.add_command(check_command, name="check")
cli.add_command(filter_command, name="filter")
cli.add_command(merge_command, name="merge")
cli.add_command(report_command, name="report")
cli.add_command(rm_command, name="rm")
cli.add_command(rm_command, name="remove")


if __name__ == "__main__":
    cli()
