"""LCOV tracefile parsing, aggregation, merging and gating.

This package provides:
- Tracefile parsing (SF / DA / end_of_record)
- A folder/file coverage tree with totals aggregated bottom-up
- Cumulative-hit merge and regex path filtering
- Coverage bands and a minimum-coverage check

Usage:
    from covtree.coverage import Tracefile, build_tree, check, merge

    tracefile = merge(Tracefile.parse(run_a), Tracefile.parse(run_b))
    root = build_tree(tracefile)
    result = check(root, minimum=80)
"""

from covtree.coverage.check import CheckResult, check
from covtree.coverage.classify import (
    Band,
    Thresholds,
    classify,
    coverage_percent,
    format_percent,
)
from covtree.coverage.filter import compile_patterns, filter_tracefile
from covtree.coverage.io import read_tracefile, write_tracefile
from covtree.coverage.merge import merge, merge_file_records, merge_tracefiles
from covtree.coverage.models import FileRecord, LineRecord, Tracefile
from covtree.coverage.parser import parse_tracefile
from covtree.coverage.paths import canonicalize
from covtree.coverage.report import build_summary, build_text_summary, node_summary
from covtree.coverage.tree import Folder, Leaf, Node, build_tree, walk

__all__ = [
    # Models
    "FileRecord",
    "LineRecord",
    "Tracefile",
    # Parsing
    "canonicalize",
    "parse_tracefile",
    "read_tracefile",
    "write_tracefile",
    # Tree
    "Folder",
    "Leaf",
    "Node",
    "build_tree",
    "walk",
    # Transformations
    "compile_patterns",
    "filter_tracefile",
    "merge",
    "merge_file_records",
    "merge_tracefiles",
    # Classification
    "Band",
    "CheckResult",
    "Thresholds",
    "check",
    "classify",
    "coverage_percent",
    "format_percent",
    # Report
    "build_summary",
    "build_text_summary",
    "node_summary",
]
