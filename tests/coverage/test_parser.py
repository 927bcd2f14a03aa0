"""Tests for tracefile parsing.

Covers:
- Block splitting and the SF / DA / end_of_record grammar
- Path canonicalization against a base directory
- FormatError on malformed blocks (no partial results)
- Raw block text fidelity
"""

from pathlib import Path

import pytest

from covtree.core.errors import ErrorCode, FormatError
from covtree.coverage import LineRecord, Tracefile, canonicalize, parse_tracefile


class TestParseTracefile:
    """Tests for parse_tracefile / Tracefile.parse."""

    def test_single_block(self, base_dir: Path) -> None:
        tracefile = Tracefile.parse("SF:lib/a.x\nDA:1,1\nDA:2,0\nend_of_record", base_dir=base_dir)

        assert len(tracefile) == 1
        record = tracefile.files[0]
        assert record.source_path == str(base_dir / "lib" / "a.x")
        assert record.lines == (LineRecord(1, 1), LineRecord(2, 0))
        assert record.lines_found == 2
        assert record.lines_hit == 1
        assert record.coverage_percent == 50.0

    def test_empty_string_yields_empty_tracefile(self) -> None:
        tracefile = parse_tracefile("")
        assert len(tracefile) == 0
        assert tracefile.files == ()

    def test_whitespace_only_yields_empty_tracefile(self) -> None:
        assert len(parse_tracefile("\n\n  \n")) == 0

    def test_blocks_kept_in_order(self, sample_lcov: str, base_dir: Path) -> None:
        tracefile = parse_tracefile(sample_lcov, base_dir=base_dir)

        assert tracefile.paths == [
            str(base_dir / "lib" / "a.x"),
            str(base_dir / "lib" / "b.x"),
            str(base_dir / "lib" / "sub" / "c.x"),
        ]
        assert [r.lines_found for r in tracefile] == [2, 4, 2]
        assert [r.lines_hit for r in tracefile] == [1, 3, 0]
        assert tracefile.lines_found == 8
        assert tracefile.lines_hit == 4

    def test_unknown_directives_are_ignored(self, base_dir: Path) -> None:
        text = (
            "TN:suite\n"
            "SF:a.x\n"
            "FN:3,main\n"
            "FNDA:1,main\n"
            "BRDA:3,0,0,1\n"
            "DA:3,1\n"
            "LF:1\n"
            "LH:1\n"
            "end_of_record\n"
        )
        record = parse_tracefile(text, base_dir=base_dir).files[0]
        assert record.lines == (LineRecord(3, 1),)

    def test_checksum_field_is_ignored(self, base_dir: Path) -> None:
        record = parse_tracefile("SF:a.x\nDA:4,2,Xyz09==\nend_of_record", base_dir=base_dir).files[0]
        assert record.lines == (LineRecord(4, 2),)

    def test_duplicate_line_last_hits_win_first_position_kept(self, base_dir: Path) -> None:
        text = "SF:a.x\nDA:1,5\nDA:2,0\nDA:1,7\nend_of_record"
        record = parse_tracefile(text, base_dir=base_dir).files[0]
        assert record.lines == (LineRecord(1, 7), LineRecord(2, 0))
        assert record.lines_found == 2

    def test_trailing_block_without_terminator(self, base_dir: Path) -> None:
        text = "SF:a.x\nDA:1,1\nend_of_record\nSF:b.x\nDA:1,0\n"
        tracefile = parse_tracefile(text, base_dir=base_dir)
        assert [Path(p).name for p in tracefile.paths] == ["a.x", "b.x"]
        assert tracefile.files[1].raw == "SF:b.x\nDA:1,0"

    def test_block_without_lines(self, base_dir: Path) -> None:
        record = parse_tracefile("SF:empty.x\nend_of_record", base_dir=base_dir).files[0]
        assert record.lines == ()
        assert record.coverage_percent == 100.0

    def test_crlf_line_endings(self, base_dir: Path) -> None:
        text = "SF:a.x\r\nDA:1,1\r\nDA:2,0\r\nend_of_record\r\n"
        record = parse_tracefile(text, base_dir=base_dir).files[0]
        assert record.source_path == str(base_dir / "a.x")
        assert record.lines_hit == 1
        assert record.raw == "SF:a.x\r\nDA:1,1\r\nDA:2,0\r\nend_of_record"

    def test_defaults_to_current_directory(
        self, base_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(base_dir)
        record = parse_tracefile("SF:src/a.x\nend_of_record").files[0]
        assert record.source_path == str(base_dir.resolve() / "src" / "a.x")


class TestRawBlockText:
    """Raw block text is kept verbatim."""

    def test_raw_spans_block_through_terminator(self, sample_lcov: str, base_dir: Path) -> None:
        tracefile = parse_tracefile(sample_lcov, base_dir=base_dir)

        assert tracefile.files[0].raw == (
            "TN:\nSF:lib/a.x\nDA:1,1\nDA:2,0\nLF:2\nLH:1\nend_of_record"
        )
        # Blank separator line is not part of the next block
        assert tracefile.files[1].raw.startswith("SF:lib/b.x\n")
        assert tracefile.files[2].raw == "SF:lib/sub/c.x\nFN:1,main\nDA:1,0\nDA:2,0\nend_of_record"

    def test_raw_keeps_declared_path_spelling(self, base_dir: Path) -> None:
        record = parse_tracefile("SF: ./lib\\a.x \nend_of_record", base_dir=base_dir).files[0]
        assert record.raw == "SF: ./lib\\a.x \nend_of_record"
        assert record.source_path == str(base_dir / "lib" / "a.x")


class TestFormatErrors:
    """Malformed tracefiles are rejected wholesale."""

    def test_missing_source_tag(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_tracefile("DA:1,1\nend_of_record")
        assert exc_info.value.code == ErrorCode.FORMAT_MISSING_SOURCE

    def test_empty_source_path(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_tracefile("SF:   \nDA:1,1\nend_of_record")
        assert exc_info.value.code == ErrorCode.FORMAT_MISSING_SOURCE

    def test_missing_source_in_later_block_fails_whole_parse(self) -> None:
        text = "SF:a.x\nDA:1,1\nend_of_record\nDA:2,2\nend_of_record\n"
        with pytest.raises(FormatError) as exc_info:
            parse_tracefile(text)
        assert exc_info.value.details == {"block_start": 4}

    @pytest.mark.parametrize(
        "line",
        [
            "DA:x,1",
            "DA:1,x",
            "DA:1",
            "DA:1,-1",
            "DA:-1,1",
            "DA:,1",
            "DA:1.5,1",
            "DA:1,1,a,b",
            "DA:1,1,",
            "DA:\u0661\u0662,1",
            "DA:1,\uff11",
        ],
    )
    def test_invalid_line_data(self, line: str) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_tracefile(f"SF:a.x\n{line}\nend_of_record")

        error = exc_info.value
        assert error.code == ErrorCode.FORMAT_INVALID_LINE_DATA
        assert error.details == {"line_no": 2, "line": line}

    def test_error_reports_absolute_line_number(self) -> None:
        text = "SF:a.x\nDA:1,1\nend_of_record\nSF:b.x\nDA:2,1\nDA:x,1\nend_of_record"
        with pytest.raises(FormatError) as exc_info:
            parse_tracefile(text)
        assert exc_info.value.details["line_no"] == 6
        assert "line 6" in str(exc_info.value)


class TestCanonicalize:
    """Tests for source path canonicalization."""

    def test_relative_resolved_against_base(self, base_dir: Path) -> None:
        assert canonicalize("lib/a.x", base_dir) == str(base_dir / "lib" / "a.x")

    def test_backslash_separators(self, base_dir: Path) -> None:
        assert canonicalize("lib\\sub\\a.x", base_dir) == str(base_dir / "lib" / "sub" / "a.x")

    def test_dot_segments_folded(self, base_dir: Path) -> None:
        assert canonicalize("./lib/../lib/./a.x", base_dir) == str(base_dir / "lib" / "a.x")

    def test_absolute_path_ignores_base(self, base_dir: Path, tmp_path: Path) -> None:
        absolute = str(tmp_path / "elsewhere" / "a.x")
        assert canonicalize(absolute, base_dir) == absolute

    def test_different_notations_coalesce(self, base_dir: Path) -> None:
        text = (
            f"SF:lib/a.x\nend_of_record\n"
            f"SF:.\\lib\\a.x\nend_of_record\n"
            f"SF:{base_dir / 'lib' / 'a.x'}\nend_of_record\n"
        )
        tracefile = parse_tracefile(text, base_dir=base_dir)
        assert len(set(tracefile.paths)) == 1
