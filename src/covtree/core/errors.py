"""covtree error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Tracefile format
- 4xxx: Coverage tree
- 5xxx: Coverage check
- 6xxx: Filesystem elements
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Tracefile format (3xxx)
    FORMAT_MISSING_SOURCE = 3001
    FORMAT_INVALID_LINE_DATA = 3002
    FORMAT_UNREADABLE = 3003

    # Coverage tree (4xxx)
    TREE_PATH_CONFLICT = 4001

    # Coverage check (5xxx)
    CHECK_BELOW_MINIMUM = 5001

    # Filesystem elements (6xxx)
    ELEMENT_NOT_FOUND = 6001


@dataclass(frozen=True, slots=True)
class CovtreeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'FORMAT_MISSING_SOURCE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovtreeError):
    """Configuration and argument validation errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class FormatError(CovtreeError):
    """Malformed tracefile content. Aborts the whole parse."""

    @classmethod
    def missing_source(cls, block_start: int) -> "FormatError":
        return cls(
            code=ErrorCode.FORMAT_MISSING_SOURCE,
            message=f"Source file tag not found in the tracefile block starting at line {block_start}",
            details={"block_start": block_start},
        )

    @classmethod
    def invalid_line_data(cls, line_no: int, line: str) -> "FormatError":
        return cls(
            code=ErrorCode.FORMAT_INVALID_LINE_DATA,
            message=f"Invalid line data at line {line_no}: {line!r}",
            details={"line_no": line_no, "line": line},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "FormatError":
        return cls(
            code=ErrorCode.FORMAT_UNREADABLE,
            message=f"Failed to read tracefile {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class PathConflictError(CovtreeError):
    """Two entries of a coverage tree resolve to the same path."""

    @classmethod
    def duplicate(cls, path: str) -> "PathConflictError":
        return cls(
            code=ErrorCode.TREE_PATH_CONFLICT,
            message=f"More than one tracefile block for {path}",
            details={"path": path},
        )

    @classmethod
    def file_folder_clash(cls, path: str) -> "PathConflictError":
        return cls(
            code=ErrorCode.TREE_PATH_CONFLICT,
            message=f"{path} is used both as a file and as a folder",
            details={"path": path},
        )


class CoverageCheckError(CovtreeError):
    """Observed coverage is below the required minimum."""

    @classmethod
    def below_minimum(cls, observed: float, minimum: float) -> "CoverageCheckError":
        return cls(
            code=ErrorCode.CHECK_BELOW_MINIMUM,
            message=f"Coverage {observed:.2f}% is below the minimum {minimum:.2f}%",
            details={"observed_percent": observed, "minimum_percent": minimum},
        )


class MissingElementError(CovtreeError):
    """An expected file or folder does not exist."""

    @classmethod
    def not_found(cls, path: str) -> "MissingElementError":
        return cls(
            code=ErrorCode.ELEMENT_NOT_FOUND,
            message=f"The <{path}> element does not exist",
            details={"path": path},
        )
