"""LCOV tracefile parser.

Only the records that matter for line coverage are read:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- end_of_record

Every other directive (TN, FN, FNDA, BRDA, LF, LH, ...) is skipped. A
malformed block rejects the whole tracefile: dropping records silently would
skew the coverage used for gating.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

import structlog

from covtree.core.errors import FormatError
from covtree.coverage.models import (
    END_OF_RECORD_TAG,
    LINE_DATA_TAG,
    SOURCE_FILE_TAG,
    FileRecord,
    LineRecord,
    Tracefile,
)
from covtree.coverage.paths import canonicalize

log = structlog.get_logger()

_LINE_DATA = re.compile(r"DA:([0-9]+),([0-9]+)(?:,[^,\s]+)?")


def _split_blocks(text: str) -> Iterator[tuple[int, list[str]]]:
    """Yield (first line number, lines) for each trace block.

    Blank lines between blocks are skipped. Lines keep their endings so the
    block text can be rebuilt byte for byte.
    """
    block: list[str] = []
    start = 0
    for line_no, line in enumerate(text.splitlines(keepends=True), start=1):
        if not block:
            if not line.strip():
                continue
            start = line_no
        block.append(line)
        if line.strip() == END_OF_RECORD_TAG:
            yield start, block
            block = []
    # Trailing block without a terminator
    if block:
        yield start, block


def _parse_line_data(line_no: int, line: str) -> LineRecord:
    stripped = line.strip()
    match = _LINE_DATA.fullmatch(stripped)
    if match is None:
        raise FormatError.invalid_line_data(line_no, stripped)
    return LineRecord(line_number=int(match.group(1)), hits=int(match.group(2)))


def parse_block(
    start: int,
    block: list[str],
    *,
    base_dir: str | Path | None = None,
) -> FileRecord:
    """Parse one trace block into a FileRecord.

    Args:
        start: 1-based line number of the block's first line in the tracefile.
        block: The block's lines, line endings included.
        base_dir: Directory relative source paths are resolved against.

    Raises:
        FormatError: If the block has no source path or a malformed DA record.
    """
    declared: str | None = None
    # line number -> record; a repeated line keeps its first position, last hits win
    lines: dict[int, LineRecord] = {}

    for offset, line in enumerate(block):
        stripped = line.strip()
        if stripped.startswith(SOURCE_FILE_TAG):
            if declared is None:
                declared = stripped[len(SOURCE_FILE_TAG) :].strip()
        elif stripped.startswith(LINE_DATA_TAG):
            record = _parse_line_data(start + offset, line)
            lines[record.line_number] = record

    if not declared:
        raise FormatError.missing_source(start)

    raw = "".join(block).rstrip("\r\n")
    return FileRecord(
        source_path=canonicalize(declared, base_dir),
        raw=raw,
        lines=tuple(lines.values()),
    )


def parse_tracefile(text: str, *, base_dir: str | Path | None = None) -> Tracefile:
    """Parse tracefile text into a Tracefile.

    Args:
        text: Concatenated trace blocks.
        base_dir: Directory relative source paths are resolved against.
                  Defaults to the current working directory.

    Returns:
        Tracefile with one FileRecord per block, in block order. Empty input
        gives an empty Tracefile.

    Raises:
        FormatError: On the first malformed block; no partial result.
    """
    if base_dir is None:
        base_dir = Path.cwd()

    files = tuple(
        parse_block(start, block, base_dir=base_dir) for start, block in _split_blocks(text)
    )
    log.debug("tracefile.parsed", files=len(files))
    return Tracefile(files=files)
