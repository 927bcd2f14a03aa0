"""Reading and writing tracefiles on disk."""

from __future__ import annotations

from pathlib import Path

from covtree.core.errors import FormatError
from covtree.coverage.models import Tracefile
from covtree.coverage.parser import parse_tracefile


def _read_text(path: Path) -> str:
    # newline="" disables newline translation; CRLF blocks must survive a round trip
    with path.open(newline="") as f:
        return f.read()


def read_tracefile(path: Path, *, base_dir: str | Path | None = None) -> Tracefile:
    """Read and parse a tracefile.

    Raises:
        FormatError: If the file cannot be read or its content is malformed.
    """
    try:
        content = _read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise FormatError.unreadable(str(path), str(e)) from e
    return parse_tracefile(content, base_dir=base_dir)


def write_tracefile(path: Path, tracefile: Tracefile, *, append: bool = False) -> None:
    """Write a tracefile, creating parent directories as needed.

    With ``append``, the blocks are added after the existing content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = tracefile.to_lcov()
    if append and path.exists():
        existing = _read_text(path)
        if existing and not existing.endswith("\n"):
            existing += "\r\n" if "\r\n" in existing else "\n"
        content = existing + content
    path.write_text(content, newline="")
