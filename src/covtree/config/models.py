"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVTREE__SECTION__KEY)
3. Project YAML (.covtree.yaml)
4. Global YAML (~/.config/covtree/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVTREE__<SECTION>__<KEY>=<VALUE>

Examples:
    COVTREE__LOGGING__LEVEL=DEBUG
    COVTREE__THRESHOLDS__MEDIUM=60
    COVTREE__CHECK__MINIMUM=80
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from covtree.coverage.classify import Thresholds

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _check_percent(name: str, v: float) -> float:
    if not (0.0 <= v <= 100.0):
        raise ValueError(f"{name} must be within 0-100, got {v}")
    return v


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVTREE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every parse, merge and filter step.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ThresholdsConfig(BaseModel):
    """Coverage band thresholds (percent).

    Env vars:
        COVTREE__THRESHOLDS__MEDIUM: Lower bound of the medium band
        COVTREE__THRESHOLDS__HIGH: Lower bound of the high band
    """

    medium: float = Field(default=75.0, description="medium <= coverage < high is medium.")
    high: float = Field(default=90.0, description="high <= coverage <= 100 is high.")

    @field_validator("medium", "high")
    @classmethod
    def validate_range(cls, v: float) -> float:
        return _check_percent("Threshold", v)

    @model_validator(mode="after")
    def validate_order(self) -> "ThresholdsConfig":
        if self.medium > self.high:
            raise ValueError(
                f"Medium threshold ({self.medium}) must not exceed high threshold ({self.high})"
            )
        return self

    def to_thresholds(self) -> Thresholds:
        return Thresholds(medium=self.medium, high=self.high)


class CheckConfig(BaseModel):
    """Minimum coverage gate.

    Env vars:
        COVTREE__CHECK__MINIMUM: Required aggregate coverage (percent)
    """

    minimum: float = Field(default=100.0, description="Checks fail below this percentage.")

    @field_validator("minimum")
    @classmethod
    def validate_minimum(cls, v: float) -> float:
        return _check_percent("Minimum", v)


class PathsConfig(BaseModel):
    """Path resolution settings.

    Env vars:
        COVTREE__PATHS__BASE_DIR: Directory relative SF paths are resolved against
        COVTREE__PATHS__TRACEFILE: Default tracefile location
    """

    base_dir: str | None = Field(
        default=None,
        description="Base directory for relative source paths. Default: current directory.",
    )
    tracefile: str = Field(
        default="coverage/lcov.info",
        description="Tracefile used when a command is given no input.",
    )


class CovtreeConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
