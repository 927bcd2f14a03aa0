"""Core module exports."""

from covtree.core.errors import (
    ConfigError,
    CoverageCheckError,
    CovtreeError,
    ErrorCode,
    FormatError,
    MissingElementError,
    PathConflictError,
)
from covtree.core.fs import remove_elements
from covtree.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "CoverageCheckError",
    "CovtreeError",
    "ErrorCode",
    "FormatError",
    "MissingElementError",
    "PathConflictError",
    # Filesystem
    "remove_elements",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
