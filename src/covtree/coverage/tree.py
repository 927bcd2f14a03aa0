"""Coverage tree: a Tracefile laid out as folders and files.

The tree is a tagged variant of two node types:

- Folder: a directory, keyed children, totals summed over all descendants
- Leaf: one FileRecord

Both expose ``name``, ``path``, ``lines_found``, ``lines_hit``,
``coverage_percent`` and ``is_leaf``; renderers switch on ``is_leaf``.
Totals are computed once while the tree is built and never change after.

Usage:
    from covtree.coverage import Tracefile, build_tree

    root = build_tree(Tracefile.parse(text))
    for node in walk(root):
        print(node.path, node.coverage_percent)
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import PurePath
from types import MappingProxyType
import structlog

from covtree.core.errors import PathConflictError
from covtree.coverage.classify import coverage_percent
from covtree.coverage.models import FileRecord, Tracefile

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Leaf:
    """A source file in the coverage tree."""

    record: FileRecord

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def path(self) -> str:
        return self.record.source_path

    @property
    def lines_found(self) -> int:
        return self.record.lines_found

    @property
    def lines_hit(self) -> int:
        return self.record.lines_hit

    @property
    def coverage_percent(self) -> float:
        return self.record.coverage_percent

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Folder:
    """A directory in the coverage tree.

    ``children`` is read-only and iterates in lexicographic name order.
    """

    name: str
    path: str
    children: Mapping[str, Node] = field(default_factory=lambda: MappingProxyType({}))
    lines_found: int = 0
    lines_hit: int = 0

    @property
    def coverage_percent(self) -> float:
        return coverage_percent(self.lines_found, self.lines_hit)

    @property
    def is_leaf(self) -> bool:
        return False

    def files(self) -> Iterator[Leaf]:
        """All leaves below this folder, in traversal order."""
        for node in walk(self):
            if isinstance(node, Leaf):
                yield node


type Node = Folder | Leaf

# Build-time nesting: folder name -> subtree, file name -> record
type _Staging = dict[str, _Staging | FileRecord]


def walk(node: Node) -> Iterator[Node]:
    """Depth-first, pre-order traversal with children in name order."""
    yield node
    if isinstance(node, Folder):
        for child in node.children.values():
            yield from walk(child)


def _common_root(paths: list[str]) -> str:
    """Deepest directory containing every path, or "" if there is none."""
    if not paths:
        return ""
    try:
        return os.path.commonpath([os.path.dirname(p) for p in paths])
    except ValueError:
        # Mixed drives or mixed absolute/relative paths
        return ""


def _segments(path: str, root: str) -> tuple[str, ...]:
    if root:
        return PurePath(path).relative_to(root).parts
    return PurePath(path).parts


def _freeze(name: str, path: str, staging: _Staging) -> Folder:
    """Turn a staging dict into a Folder, summing totals bottom-up."""
    children: dict[str, Node] = {}
    for child_name in sorted(staging):
        entry = staging[child_name]
        if isinstance(entry, FileRecord):
            children[child_name] = Leaf(entry)
        else:
            children[child_name] = _freeze(child_name, os.path.join(path, child_name), entry)
    return Folder(
        name=name,
        path=path,
        children=MappingProxyType(children),
        lines_found=sum(child.lines_found for child in children.values()),
        lines_hit=sum(child.lines_hit for child in children.values()),
    )


def build_tree(tracefile: Tracefile) -> Folder:
    """Build the folder/file hierarchy of a Tracefile.

    The root folder is the deepest directory shared by all files; an empty
    tracefile gives an empty root with ``name == path == ""``.

    Raises:
        PathConflictError: If two records share a canonical path, or a file
            path is also the path of a folder.
    """
    paths = tracefile.paths
    root_path = _common_root(paths)

    staging: _Staging = {}
    for record in tracefile:
        *dirs, file_name = _segments(record.source_path, root_path)
        current = staging
        for segment in dirs:
            entry = current.setdefault(segment, {})
            if isinstance(entry, FileRecord):
                raise PathConflictError.file_folder_clash(entry.source_path)
            current = entry
        if file_name in current:
            if isinstance(current[file_name], FileRecord):
                raise PathConflictError.duplicate(record.source_path)
            raise PathConflictError.file_folder_clash(record.source_path)
        current[file_name] = record

    root_name = PurePath(root_path).name or root_path
    root = _freeze(root_name, root_path, staging)
    log.debug(
        "tree.built",
        root=root_path,
        files=len(paths),
        lines_found=root.lines_found,
        lines_hit=root.lines_hit,
    )
    return root
