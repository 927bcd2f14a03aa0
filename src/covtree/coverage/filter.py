"""Tracefile filtering by source path.

Excluded records are dropped; every retained record keeps its raw block
text byte for byte, so a filtered tracefile is a subset of the original text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from covtree.core.errors import ConfigError
from covtree.coverage.models import Tracefile

log = structlog.get_logger()


def compile_patterns(patterns: Iterable[str | re.Pattern[str]]) -> list[re.Pattern[str]]:
    """Compile exclusion patterns.

    Raises:
        ConfigError: If a pattern is not a valid regular expression.
    """
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigError.invalid_value("filters", pattern, str(e)) from e
    return compiled


def filter_tracefile(
    tracefile: Tracefile,
    patterns: Iterable[str | re.Pattern[str]],
) -> Tracefile:
    """Drop records whose source path matches any pattern.

    Patterns are searched anywhere in the canonical path (``re.search``).

    Args:
        tracefile: Tracefile to filter.
        patterns: Regular expressions, as strings or compiled.

    Returns:
        The input itself when no patterns are given, otherwise a new
        Tracefile with the non-matching records in their original order.
    """
    compiled = compile_patterns(patterns)
    if not compiled:
        return tracefile

    kept = tuple(
        record
        for record in tracefile
        if not any(pattern.search(record.source_path) for pattern in compiled)
    )
    log.debug(
        "tracefile.filtered",
        patterns=len(compiled),
        kept=len(kept),
        dropped=len(tracefile) - len(kept),
    )
    return Tracefile(files=kept)
