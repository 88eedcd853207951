"""
Shipyard Common Package

Shared building blocks for all Shipyard packages:
- Exception hierarchy (ShipyardError and subclasses)
- Structured JSON logger
- Defaults and policy constants

Usage:
    from shipyard_common import get_logger, ParseError, PackageManagerDefaults
"""

from .constants import (
    DEFAULT_EXCLUDED_PACKAGES,
    DEFAULT_FORBIDDEN_PACKAGES,
    LOG_LEVELS,
    SUPPORTED_BUNDLEFILE_VERSIONS,
    BundleDefaults,
    LoggingDefaults,
    PackageManagerDefaults,
)
from .errors import (
    CommandTimeoutError,
    ExecutionError,
    ForbiddenDependencyError,
    MissingDependencyError,
    ModuleNotFoundInGraphError,
    ParseError,
    PolicyViolationError,
    ShipyardError,
    ValidationError,
)
from .logger import (
    ShipyardLogger,
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ShipyardError",
    "ValidationError",
    "ParseError",
    "ModuleNotFoundInGraphError",
    "PolicyViolationError",
    "ForbiddenDependencyError",
    "ExecutionError",
    "CommandTimeoutError",
    "MissingDependencyError",
    # Logging
    "ShipyardLogger",
    "get_logger",
    "configure_logging",
    "set_run_id",
    "get_run_id",
    "clear_run_id",
    # Constants
    "SUPPORTED_BUNDLEFILE_VERSIONS",
    "LOG_LEVELS",
    "LoggingDefaults",
    "PackageManagerDefaults",
    "BundleDefaults",
    "DEFAULT_FORBIDDEN_PACKAGES",
    "DEFAULT_EXCLUDED_PACKAGES",
]
