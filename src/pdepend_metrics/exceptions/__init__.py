"""Exception hierarchy for pdepend-metrics."""

from .base import PdependMetricsError
from .config import ConfigurationError, InvalidConfigError
from .execution import (
    ExecutionError,
    ExternalToolFailure,
    ProcessIdleTimeout,
    ProcessLaunchError,
    ProcessTimeout,
)
from .report import MalformedReport, MissingRootNode, ReportError, ReportReadError

__all__ = [
    "PdependMetricsError",
    "ExecutionError",
    "ProcessLaunchError",
    "ProcessTimeout",
    "ProcessIdleTimeout",
    "ExternalToolFailure",
    "ReportError",
    "ReportReadError",
    "MalformedReport",
    "MissingRootNode",
    "ConfigurationError",
    "InvalidConfigError",
]
