"""Shipyard SDK - production bundle resolution for modular Node.js applications.

This package provides tools for:
- Loading and validating Bundlefiles
- Resolving the production dependency closure of a root module
- Enforcing exclusion and forbidden-package policies
- Planning the file list of a production bundle

Example:
    >>> from shipyard_sdk import load_bundlespec, DependencyResolver, BundlePlanner
    >>> spec = load_bundlespec("Bundlefile.yaml")
    >>> resolution = DependencyResolver.from_spec(spec, Path(".")).resolve(spec.bundle.root_module)
    >>> plan = BundlePlanner(Path(spec.bundle.assembly_dir), Path(".")).plan(resolution.packages)
"""

from .bundle import BundlePlan, BundlePlanner, PlannedFile
from .loader import expand_env_vars, load_bundlespec
from .resolve import (
    CommandRunner,
    DependencyResolution,
    DependencyResolver,
    ResolvedPackage,
    get_dependencies,
)

__version__ = "0.1.0"

__all__ = [
    # Loading
    "load_bundlespec",
    "expand_env_vars",

    # Resolution
    "DependencyResolver",
    "DependencyResolution",
    "ResolvedPackage",
    "CommandRunner",
    "get_dependencies",

    # Planning
    "BundlePlanner",
    "BundlePlan",
    "PlannedFile",
]
