"""Tracefile data model.

Line-centric model of an LCOV tracefile: a Tracefile holds one FileRecord per
trace block, and each FileRecord holds the LineRecords of its ``DA`` entries.
All three are immutable; transformations build new instances.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from covtree.coverage.classify import coverage_percent

SOURCE_FILE_TAG = "SF:"
LINE_DATA_TAG = "DA:"
END_OF_RECORD_TAG = "end_of_record"


@dataclass(frozen=True, slots=True)
class LineRecord:
    """Execution count of one source line."""

    line_number: int
    hits: int

    @property
    def has_been_hit(self) -> bool:
        return self.hits > 0

    def to_lcov(self) -> str:
        return f"{LINE_DATA_TAG}{self.line_number},{self.hits}"


@dataclass(frozen=True, slots=True, eq=False)
class FileRecord:
    """Coverage data of one source file (one trace block).

    ``source_path`` is the canonical path and the record's identity.
    ``raw`` is the block text as it appeared in the tracefile, or the
    regenerated text for records built from lines.

    Equality compares the path and the set of line records; ``raw`` and
    line order do not take part.
    """

    source_path: str
    raw: str
    lines: tuple[LineRecord, ...] = ()
    lines_found: int = field(init=False)
    lines_hit: int = field(init=False)

    def __post_init__(self) -> None:
        # Repeated line numbers: last hits win, first position kept
        by_number = {line.line_number: line for line in self.lines}
        if len(by_number) != len(self.lines):
            object.__setattr__(self, "lines", tuple(by_number.values()))
        object.__setattr__(self, "lines_found", len(self.lines))
        object.__setattr__(self, "lines_hit", sum(1 for line in self.lines if line.has_been_hit))

    @classmethod
    def from_lines(cls, source_path: str, lines: Iterable[LineRecord]) -> FileRecord:
        """Build a record whose raw block text is generated from its lines."""
        lines = tuple({line.line_number: line for line in lines}.values())
        raw = "\n".join(
            [
                f"{SOURCE_FILE_TAG}{source_path}",
                *(line.to_lcov() for line in lines),
                END_OF_RECORD_TAG,
            ]
        )
        return cls(source_path=source_path, raw=raw, lines=lines)

    @property
    def name(self) -> str:
        """File name of the source."""
        return Path(self.source_path).name

    @property
    def coverage_percent(self) -> float:
        return coverage_percent(self.lines_found, self.lines_hit)

    @property
    def uncovered_lines(self) -> list[int]:
        """Sorted line numbers with zero hits."""
        return sorted(line.line_number for line in self.lines if not line.has_been_hit)

    def hits_by_line(self) -> dict[int, int]:
        return {line.line_number: line.hits for line in self.lines}

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, FileRecord):
            return NotImplemented
        return self.source_path == other.source_path and frozenset(self.lines) == frozenset(
            other.lines
        )

    def __hash__(self) -> int:
        return hash((self.source_path, frozenset(self.lines)))


@dataclass(frozen=True, slots=True)
class Tracefile:
    """Ordered collection of FileRecords, one per trace block."""

    files: tuple[FileRecord, ...] = ()

    @classmethod
    def parse(cls, text: str, *, base_dir: str | Path | None = None) -> Tracefile:
        """Parse LCOV tracefile text. See ``covtree.coverage.parser``."""
        from covtree.coverage.parser import parse_tracefile

        return parse_tracefile(text, base_dir=base_dir)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.files)

    @property
    def paths(self) -> list[str]:
        return [record.source_path for record in self.files]

    @property
    def lines_found(self) -> int:
        return sum(record.lines_found for record in self.files)

    @property
    def lines_hit(self) -> int:
        return sum(record.lines_hit for record in self.files)

    @property
    def coverage_percent(self) -> float:
        return coverage_percent(self.lines_found, self.lines_hit)

    def to_lcov(self) -> str:
        """Serialize back to tracefile text.

        Records are written from their ``raw`` text, so blocks that were
        not regenerated come out exactly as they were read. Each block ends
        with its own line ending (CRLF blocks stay CRLF).
        """
        blocks = []
        for record in self.files:
            block = record.raw
            newline = "\r\n" if "\r\n" in block else "\n"
            if block.rsplit("\n", 1)[-1].strip() != END_OF_RECORD_TAG:
                block = f"{block}{newline}{END_OF_RECORD_TAG}"
            blocks.append(block + newline)
        return "".join(blocks)
