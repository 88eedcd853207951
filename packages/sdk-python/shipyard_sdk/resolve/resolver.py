"""
Dependency Resolver
===================

Runs the package manager, then drives the resolution phases in order:

1. List production dependencies and dump configuration (concurrently)
2. Parse the dependency tree
3. Parse the configuration and locate the module store
4. Build the dependency graph
5. Resolve the closure from the root module under the policy
6. Resolve closure members to module store paths

Any failure aborts the call; nothing partial is returned.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from shipyard_common import PackageManagerDefaults
from shipyard_common.logger import get_logger
from shipyard_schema import BundleSpec, ResolutionPolicy

from .closure import resolve_closure
from .exec import CommandRunner, Runner
from .graph_builder import build_graph
from .models import DependencyResolution
from .output_parser import parse_config, parse_dependency_tree, resolve_modules_folder
from .path_resolver import resolve_paths

logger = get_logger("sdk.resolver")


class DependencyResolver:
    """
    Resolve the production dependency directories of a root module.

    The resolver holds configuration only; every call builds its own graph
    and visited state, so one instance can serve concurrent resolutions.

    Example:
        >>> resolver = DependencyResolver(
        ...     root_dir="/project",
        ...     dependencies_dir="/project/examples/assembly",
        ...     policy=ResolutionPolicy(forbidden_packages=frozenset({"webpack"})),
        ... )
        >>> resolution = resolver.resolve("@eclipse-che/theia-assembly")
        >>> resolution.paths[:2]
        ['/project/node_modules/@theia/core', '/project/node_modules/inversify']
    """

    def __init__(
        self,
        root_dir: str,
        dependencies_dir: str,
        policy: Optional[ResolutionPolicy] = None,
        package_manager: str = PackageManagerDefaults.BINARY,
        timeout: Optional[float] = PackageManagerDefaults.TIMEOUT_SECONDS,
        max_output_bytes: int = PackageManagerDefaults.MAX_OUTPUT_BYTES,
        runner: Optional[Runner] = None,
    ):
        """
        Initialize the dependency resolver.

        Args:
            root_dir: Project root, used for the default module store location
            dependencies_dir: Working directory for the package-manager commands
            policy: Exclusion/forbidden policy; empty when omitted
            package_manager: Package-manager binary
            timeout: Per-command time bound in seconds
            max_output_bytes: Largest accepted command output
            runner: Command runner override (defaults to CommandRunner)
        """
        self.root_dir = root_dir
        self.dependencies_dir = dependencies_dir
        self.policy = policy or ResolutionPolicy()
        self.package_manager = package_manager
        self.runner: Runner = runner or CommandRunner(
            dependencies_dir,
            timeout=timeout,
            max_output_bytes=max_output_bytes,
        )

    @classmethod
    def from_spec(
        cls,
        spec: BundleSpec,
        base_dir: Path,
        runner: Optional[Runner] = None,
    ) -> "DependencyResolver":
        """
        Create a resolver from a Bundlefile.

        Relative directories in the Bundlefile are taken relative to base_dir.
        """
        return cls(
            root_dir=str((base_dir / spec.bundle.root_dir).resolve()),
            dependencies_dir=str((base_dir / spec.bundle.dependencies_dir).resolve()),
            policy=spec.policy,
            package_manager=spec.package_manager.binary,
            timeout=spec.package_manager.timeout_seconds,
            max_output_bytes=spec.package_manager.max_output_bytes,
            runner=runner,
        )

    @property
    def list_command(self) -> str:
        return f"{self.package_manager} {PackageManagerDefaults.LIST_PRODUCTION_ARGS}"

    @property
    def config_command(self) -> str:
        return f"{self.package_manager} {PackageManagerDefaults.CURRENT_CONFIG_ARGS}"

    async def resolve_async(self, root_module: str) -> DependencyResolution:
        """
        Resolve the production dependencies of ``root_module``.

        Returns:
            DependencyResolution with packages in first-visited order

        Raises:
            ExecutionError: If a package-manager command fails
            CommandTimeoutError: If a package-manager command times out
            ParseError: If command output cannot be parsed
            ModuleNotFoundInGraphError: If the root module is not reported
            ForbiddenDependencyError: If a forbidden package is reachable
        """
        log = logger.with_context(root_module=root_module)
        log.info("Get dependencies", cwd=self.dependencies_dir)

        tree_stdout, config_stdout = await self._run_commands(
            self.list_command,
            self.config_command,
        )

        nodes = parse_dependency_tree(tree_stdout, command=self.list_command)
        config = parse_config(config_stdout, command=self.config_command)
        modules_folder = resolve_modules_folder(config, self.root_dir)

        graph = build_graph(nodes)
        closure = resolve_closure(root_module, graph, self.policy)
        packages = resolve_paths(closure, modules_folder)

        log.info("Resolved dependencies", packages=len(packages), modules_folder=modules_folder)
        return DependencyResolution(
            root_module=root_module,
            modules_folder=modules_folder,
            packages=packages,
        )

    async def _run_commands(self, *commands: str) -> List[str]:
        """Run commands concurrently; the first failure cancels the rest."""
        tasks = [asyncio.ensure_future(self.runner.run(command)) for command in commands]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def resolve(self, root_module: str) -> DependencyResolution:
        """Blocking wrapper around resolve_async()."""
        return asyncio.run(self.resolve_async(root_module))


def get_dependencies(
    root_module: str,
    dependencies_dir: str,
    policy: Optional[ResolutionPolicy] = None,
    root_dir: str = "",
    package_manager: str = PackageManagerDefaults.BINARY,
) -> List[str]:
    """
    Get the production dependency directories of a root module.

    Dev dependencies are never part of the result.

    Examples:
        >>> get_dependencies("@eclipse-che/theia-assembly", "examples/assembly")
        ['/project/node_modules/@theia/core', ...]
    """
    resolver = DependencyResolver(
        root_dir=root_dir,
        dependencies_dir=dependencies_dir,
        policy=policy,
        package_manager=package_manager,
    )
    return resolver.resolve(root_module).paths
