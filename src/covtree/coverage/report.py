"""Structured coverage report generation.

This module turns a coverage tree into plain data for renderers (terminal,
JSON). It carries no presentation concerns of its own.

Output schema for node_summary:
{
    "name": str,
    "path": str,
    "is_leaf": bool,
    "lines_found": int,
    "lines_hit": int,
    "coverage_percent": float,    # rounded to 2 decimals
    "band": "low" | "medium" | "high",
    "children": [<node_summary>, ...],   # folders only, ordered by name
    "missed_lines": str,                 # leaves only, e.g. "3-5,9"
}

Output schema for build_summary:
{
    "summary": {
        "total_files": int,
        "covered_files": int,
        "lines_found": int,
        "lines_hit": int,
        "coverage_percent": float,
        "band": str,
        "thresholds": {"medium": float, "high": float}
    },
    "tree": <node_summary of the root>
}
"""

from typing import Any

from covtree.coverage.classify import Thresholds, classify
from covtree.coverage.tree import Folder, Leaf, Node


def _compress_ranges(lines: list[int]) -> str:
    """Compress sorted line numbers into ranges: [1, 2, 3, 7] -> "1-3,7"."""
    if not lines:
        return ""
    parts: list[str] = []
    start = prev = lines[0]
    for line in lines[1:]:
        if line == prev + 1:
            prev = line
            continue
        parts.append(f"{start}-{prev}" if start != prev else str(start))
        start = prev = line
    parts.append(f"{start}-{prev}" if start != prev else str(start))
    return ",".join(parts)


def node_summary(node: Node, thresholds: Thresholds) -> dict[str, Any]:
    """Describe a node and its subtree.

    Args:
        node: Folder or Leaf.
        thresholds: Band thresholds for classification.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {
        "name": node.name,
        "path": node.path,
        "is_leaf": node.is_leaf,
        "lines_found": node.lines_found,
        "lines_hit": node.lines_hit,
        "coverage_percent": round(node.coverage_percent, 2),
        "band": classify(node, thresholds).value,
    }
    if isinstance(node, Leaf):
        result["missed_lines"] = _compress_ranges(node.record.uncovered_lines)
    else:
        result["children"] = [node_summary(child, thresholds) for child in node.children.values()]
    return result


def build_summary(root: Folder, thresholds: Thresholds) -> dict[str, Any]:
    """Build a structured coverage summary from a tree root."""
    leaves = list(root.files())
    covered_files = sum(
        1 for leaf in leaves if leaf.lines_found and leaf.lines_hit == leaf.lines_found
    )

    return {
        "summary": {
            "total_files": len(leaves),
            "covered_files": covered_files,
            "lines_found": root.lines_found,
            "lines_hit": root.lines_hit,
            "coverage_percent": round(root.coverage_percent, 2),
            "band": classify(root, thresholds).value,
            "thresholds": {"medium": thresholds.medium, "high": thresholds.high},
        },
        "tree": node_summary(root, thresholds),
    }


def build_text_summary(root: Folder) -> str:
    """Build a one-line text summary for display contexts."""
    if root.lines_found == 0:
        return "No coverage data"
    return f"Coverage: {root.coverage_percent:.2f}% ({root.lines_hit}/{root.lines_found} lines)"
