"""
Shipyard Schema Package

Pydantic models for Bundlefile validation and resolution policy.

Usage:
    from shipyard_schema import BundleSpec, ResolutionPolicy
"""

from .bundlefile_v1 import (
    BundleConfig,
    BundleSpec,
    LoggingConfig,
    PackageManagerConfig,
    ResolutionPolicy,
)

__version__ = "0.1.0"

__all__ = [
    "BundleSpec",
    "BundleConfig",
    "PackageManagerConfig",
    "LoggingConfig",
    "ResolutionPolicy",
]
