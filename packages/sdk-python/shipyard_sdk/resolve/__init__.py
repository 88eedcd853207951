"""
Shipyard Dependency Resolution
==============================

Resolves which production packages a root module needs and where they
live on disk:

- Output parsing (package-manager JSON envelopes)
- Graph building (name@version -> bare names)
- Closure resolution with exclusion / forbidden policy
- Module store path resolution

Usage:
    from shipyard_sdk.resolve import DependencyResolver

    resolver = DependencyResolver(root_dir, dependencies_dir, policy)
    resolution = resolver.resolve("@eclipse-che/theia-assembly")

    print(resolution.paths)  # Package directories to bundle
"""

from .closure import resolve_closure
from .exec import CommandRunner, Runner
from .graph_builder import bare_module_name, build_graph
from .models import DependencyGraph, DependencyResolution, RawTreeNode, ResolvedPackage
from .output_parser import parse_config, parse_dependency_tree, resolve_modules_folder
from .path_resolver import resolve_paths
from .resolver import DependencyResolver, get_dependencies

__all__ = [
    # Models
    "RawTreeNode",
    "DependencyGraph",
    "ResolvedPackage",
    "DependencyResolution",
    # Phases
    "parse_dependency_tree",
    "parse_config",
    "resolve_modules_folder",
    "bare_module_name",
    "build_graph",
    "resolve_closure",
    "resolve_paths",
    # Execution
    "Runner",
    "CommandRunner",
    # Orchestration
    "DependencyResolver",
    "get_dependencies",
]
