"""covtree - LCOV tracefile aggregation, merging, filtering and gating."""

__version__ = "0.1.0"
