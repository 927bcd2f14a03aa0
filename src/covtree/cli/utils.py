"""CLI utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from covtree.config.models import CovtreeConfig
from covtree.core.errors import CovtreeError, MissingElementError
from covtree.core.logging import get_log_file_path
from covtree.coverage import Tracefile, read_tracefile


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn covtree errors into click errors (exit status 1)."""
    try:
        yield
    except CovtreeError as e:
        message = str(e)
        if log_path := get_log_file_path():
            message += f"\nSee log: {log_path}"
        raise click.ClickException(message) from e


def get_config(ctx: click.Context) -> CovtreeConfig:
    return ctx.find_object(dict)["config"]  # type: ignore[index, no-any-return]


def load_tracefile(path: Path | None, config: CovtreeConfig) -> Tracefile:
    """Read the given tracefile, or the configured default one.

    Raises:
        MissingElementError: If the tracefile does not exist.
        FormatError: If it cannot be read or parsed.
    """
    tracefile_path = path or Path(config.paths.tracefile)
    if not tracefile_path.is_file():
        raise MissingElementError.not_found(str(tracefile_path))
    return read_tracefile(tracefile_path, base_dir=config.paths.base_dir)
