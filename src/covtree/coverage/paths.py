"""Source path canonicalization.

Tracefiles written on different platforms or from different working
directories name the same file in different ways (``lib\\a.x``, ``./lib/a.x``,
``/repo/lib/a.x``). The canonical form is an absolute, lexically normalized
path; it is the identity of a FileRecord.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

_SEPARATORS = re.compile(r"[\\/]+")


def canonicalize(declared: str, base_dir: str | Path | None = None) -> str:
    """Resolve a declared source path to its canonical form.

    Both ``\\`` and ``/`` act as separators. Relative paths are joined to
    ``base_dir`` (the current working directory when omitted). ``.`` and
    ``..`` segments are folded lexically; symlinks are not resolved and the
    file does not have to exist.
    """
    declared = declared.strip()
    segments = _SEPARATORS.split(declared)
    normalized = os.sep.join(segments)
    if not os.path.isabs(normalized):
        base = Path(base_dir) if base_dir is not None else Path.cwd()
        normalized = os.path.join(os.path.abspath(base), normalized)
    return os.path.normpath(normalized)
