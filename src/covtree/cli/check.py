"""covtree check command - gate on a minimum coverage value."""

from pathlib import Path

import click

from covtree.cli.render import render_tree
from covtree.cli.utils import cli_errors, get_config, load_tracefile
from covtree.core.console import status
from covtree.coverage import build_tree, check, format_percent, merge
from covtree.coverage.classify import validate_percent


@click.command()
@click.argument("minimum", type=float, required=False)
@click.option(
    "-i",
    "--input",
    "tracefile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tracefile to check (default: paths.tracefile from config).",
)
@click.pass_context
def check_command(ctx: click.Context, minimum: float | None, tracefile_path: Path | None) -> None:
    """Check the coverage value of a tracefile.

    Fails when the aggregate line coverage is below MINIMUM percent
    (default: check.minimum from config).
    """
    config = get_config(ctx)
    if minimum is None:
        minimum = config.check.minimum

    with cli_errors():
        validate_percent("minimum", minimum)
        tracefile = load_tracefile(tracefile_path, config)
        # Duplicate blocks from concatenated runs are summed before gating
        root = build_tree(merge(tracefile))
        result = check(root, minimum)

        render_tree(root, config.thresholds.to_thresholds())
        observed = format_percent(result.observed_percent)
        if result.passed:
            status(
                f"Coverage {observed}% meets the minimum {format_percent(minimum)}%",
                style="success",
            )
        result.raise_for_status()
