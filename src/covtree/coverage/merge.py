"""Tracefile merging with cumulative-hit semantics.

Tracefiles from independent test runs are combined per source file:

- lines[n] = sum(lines[n] across all records for the file)
- line numbers = union across all records for the file

Summing makes the merged hit counts the total execution count over all
runs. The rule is associative and commutative, so any number of tracefiles
can be merged pairwise in any order with the same per-file result.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from covtree.coverage.models import FileRecord, LineRecord, Tracefile

log = structlog.get_logger()


def merge_file_records(records: Iterable[FileRecord]) -> FileRecord:
    """Merge FileRecords describing the same source file.

    Args:
        records: FileRecords to merge (must share the same source path).

    Returns:
        The record itself when only one is given, otherwise a new record with
        summed hits, lines ordered by line number and regenerated raw text.
    """
    records_list = list(records)
    if not records_list:
        raise ValueError("Cannot merge an empty list of file records")
    if len(records_list) == 1:
        return records_list[0]

    source_path = records_list[0].source_path
    if any(record.source_path != source_path for record in records_list):
        raise ValueError(f"Cannot merge records of different files into {source_path}")

    merged_hits: dict[int, int] = {}
    for record in records_list:
        for line in record.lines:
            merged_hits[line.line_number] = merged_hits.get(line.line_number, 0) + line.hits

    return FileRecord.from_lines(
        source_path,
        (LineRecord(line_number=n, hits=hits) for n, hits in sorted(merged_hits.items())),
    )


def merge_tracefiles(tracefiles: Iterable[Tracefile]) -> Tracefile:
    """Merge Tracefiles into a new Tracefile.

    Records are grouped by canonical path in first-seen order. A path that
    appears once keeps its record untouched; repeated paths, within one
    tracefile or across several, are combined by ``merge_file_records``.
    """
    by_path: dict[str, list[FileRecord]] = {}
    inputs = 0
    for tracefile in tracefiles:
        inputs += 1
        for record in tracefile:
            by_path.setdefault(record.source_path, []).append(record)

    merged = Tracefile(files=tuple(merge_file_records(group) for group in by_path.values()))
    log.debug(
        "tracefile.merged",
        inputs=inputs,
        files=len(merged),
        combined=sum(1 for group in by_path.values() if len(group) > 1),
    )
    return merged


def merge(*tracefiles: Tracefile) -> Tracefile:
    """Convenience function to merge tracefiles as varargs."""
    return merge_tracefiles(tracefiles)
