"""
Shipyard Bundle Planning
========================

Turns resolved package directories into the list of files that make up
the production bundle.

Usage:
    from shipyard_sdk.bundle import BundlePlanner

    planner = BundlePlanner(assembly_dir, root_dir)
    plan = planner.plan(resolution.packages)

    print(plan.files)     # PlannedFile(source, target) entries
    print(plan.warnings)  # Any warnings
"""

from .pattern_resolver import list_files, resolve_glob_patterns
from .planner import BundlePlan, BundlePlanner, PlannedFile

__all__ = [
    "list_files",
    "resolve_glob_patterns",
    "BundlePlanner",
    "BundlePlan",
    "PlannedFile",
]
