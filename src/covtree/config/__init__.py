"""Config module exports."""

from covtree.config.loader import load_config
from covtree.config.models import (
    CheckConfig,
    CovtreeConfig,
    LoggingConfig,
    LogOutputConfig,
    PathsConfig,
    ThresholdsConfig,
)

__all__ = [
    "load_config",
    "CovtreeConfig",
    "CheckConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "PathsConfig",
    "ThresholdsConfig",
]
