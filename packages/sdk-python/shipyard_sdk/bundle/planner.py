"""
Bundle Planner
==============

Works out which files make up the production bundle:

- every file of every resolved package directory
- generated assembly output matched by the include patterns

The plan pairs each source file with its path inside the bundle. Copying
and cleanup are left to the caller.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from shipyard_common import BundleDefaults, MissingDependencyError, PackageManagerDefaults
from shipyard_common.logger import get_logger

from ..resolve.models import ResolvedPackage
from .pattern_resolver import list_files, resolve_glob_patterns

logger = get_logger("sdk.planner")


@dataclass(frozen=True)
class PlannedFile:
    """One file of the bundle."""

    source: str
    """Absolute path of the file to copy"""

    target: str
    """Path inside the bundle, relative and '/'-separated"""


@dataclass
class BundlePlan:
    """Result of bundle planning."""

    files: List[PlannedFile] = field(default_factory=list)
    """Files to copy, packages first, then assembly output"""

    packages: List[str] = field(default_factory=list)
    """Package directories the files were collected from"""

    warnings: List[str] = field(default_factory=list)
    """Warnings generated during planning"""


class BundlePlanner:
    """
    Plans the file list of a production bundle.

    Example:
        >>> planner = BundlePlanner(Path("/project/examples/assembly"), Path("/project"))
        >>> plan = planner.plan(resolution.packages)
        >>> plan.files[0]
        PlannedFile(source='/project/node_modules/@theia/core/lib/index.js',
                    target='node_modules/@theia/core/lib/index.js')
    """

    def __init__(
        self,
        assembly_dir: Path,
        root_dir: Path,
        include_patterns: Optional[List[str]] = None,
    ):
        """
        Args:
            assembly_dir: Directory holding the generated application
            root_dir: Project root; package targets are relative to it
            include_patterns: Assembly patterns to add (defaults to lib/**, src-gen/**, package.json)
        """
        self.assembly_dir = Path(os.path.abspath(assembly_dir))
        self.root_dir = Path(os.path.abspath(root_dir))
        self.include_patterns = (
            list(include_patterns) if include_patterns is not None else list(BundleDefaults.INCLUDE)
        )

    def plan(self, packages: Iterable[ResolvedPackage]) -> BundlePlan:
        """
        Build the file plan for the given packages.

        Raises:
            MissingDependencyError: If a package directory does not exist
        """
        packages = list(packages)
        plan = BundlePlan(packages=[package.path for package in packages])
        seen: Set[str] = set()

        # Check every directory before listing anything
        for package in packages:
            if not Path(package.path).is_dir():
                raise MissingDependencyError(package.path)

        for package in packages:
            package_dir = Path(os.path.abspath(package.path))
            for path in list_files(package_dir):
                self._add(plan, seen, path, self._package_target(package, package_dir, path))

        for pattern, matches in zip(
            self.include_patterns,
            resolve_glob_patterns(self.include_patterns, self.assembly_dir),
        ):
            if not matches:
                plan.warnings.append(
                    f"Include pattern '{pattern}' matched no files in {self.assembly_dir}"
                )
            for path in matches:
                self._add(plan, seen, path, self._relative(path, self.assembly_dir))

        logger.info(
            "Planned bundle",
            packages=len(plan.packages),
            files=len(plan.files),
            warnings=len(plan.warnings),
        )
        return plan

    def _package_target(self, package: ResolvedPackage, package_dir: Path, path: Path) -> str:
        if path.is_relative_to(self.assembly_dir):
            return self._relative(path, self.assembly_dir)
        if path.is_relative_to(self.root_dir):
            return self._relative(path, self.root_dir)
        # Module store outside the project: keep the conventional layout
        relative = self._relative(path, package_dir)
        return f"{PackageManagerDefaults.MODULES_DIRECTORY}/{package.name}/{relative}"

    @staticmethod
    def _relative(path: Path, base: Path) -> str:
        return path.relative_to(base).as_posix()

    @staticmethod
    def _add(plan: BundlePlan, seen: Set[str], path: Path, target: str) -> None:
        source = str(path)
        if source in seen:
            return
        seen.add(source)
        plan.files.append(PlannedFile(source=source, target=target))
