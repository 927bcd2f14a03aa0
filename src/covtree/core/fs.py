"""Filesystem element removal."""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from pathlib import Path

import structlog

from covtree.core.errors import MissingElementError

log = structlog.get_logger()


def remove_elements(paths: Iterable[Path], *, accept_absence: bool = True) -> list[Path]:
    """Remove files and folders (recursively).

    Args:
        paths: Files and/or folders to remove.
        accept_absence: When True, missing elements are skipped and reported
            in the return value. When False, the first missing element raises.

    Returns:
        The paths that did not exist.

    Raises:
        MissingElementError: If an element is missing and absence is not accepted.
    """
    missing: list[Path] = []
    for path in paths:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        elif accept_absence:
            log.info("element.missing", path=str(path))
            missing.append(path)
        else:
            raise MissingElementError.not_found(str(path))
    return missing
