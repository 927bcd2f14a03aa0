"""covtree report command - show a tracefile as a coverage tree."""

import json
from pathlib import Path

import click

from covtree.cli.render import render_tree
from covtree.cli.utils import cli_errors, get_config, load_tracefile
from covtree.core.console import status
from covtree.coverage import Thresholds, build_summary, build_text_summary, build_tree, merge


@click.command()
@click.option(
    "-i",
    "--input",
    "tracefile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tracefile to report on (default: paths.tracefile from config).",
)
@click.option("--medium", type=float, default=None, help="Medium threshold (percent).")
@click.option("--high", type=float, default=None, help="High threshold (percent).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def report_command(
    ctx: click.Context,
    tracefile_path: Path | None,
    medium: float | None,
    high: float | None,
    as_json: bool,
) -> None:
    """Generate the coverage report of a tracefile.

    \b
    High:   HIGH <= coverage <= 100
    Medium: MEDIUM <= coverage < HIGH
    Low:    0 <= coverage < MEDIUM
    """
    config = get_config(ctx)
    with cli_errors():
        # Thresholds are validated before the tracefile is touched
        thresholds = Thresholds(
            medium=config.thresholds.medium if medium is None else medium,
            high=config.thresholds.high if high is None else high,
        )
        tracefile = load_tracefile(tracefile_path, config)
        root = build_tree(merge(tracefile))

    if as_json:
        click.echo(json.dumps(build_summary(root, thresholds), indent=2))
        return

    render_tree(root, thresholds)
    status(build_text_summary(root))
