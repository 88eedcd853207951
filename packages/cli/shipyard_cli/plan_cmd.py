"""Plan command - list the files that make up the production bundle."""

import json
from typing import Optional

import typer

from shipyard_common import ShipyardError
from shipyard_sdk import BundlePlanner

from .resolve_cmd import base_dir_for, run_resolution
from .utils import DEFAULT_BUNDLEFILE, console, fail, load_spec, setup_logging, warning


def plan(
    bundlefile: str = typer.Argument(DEFAULT_BUNDLEFILE, help="Path to Bundlefile"),
    root_module: Optional[str] = typer.Option(
        None,
        "--root-module",
        "-r",
        help="Root module to resolve from (overrides bundle.root_module)",
    ),
    cwd: Optional[str] = typer.Option(
        None,
        "--cwd",
        help="Directory to run the package manager in (overrides bundle.dependencies_dir)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full plan as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Resolve dependencies and list the files of the production bundle.

    Nothing is copied; the plan pairs each source file with its path
    inside the bundle.
    """
    spec = load_spec(bundlefile, root_module=root_module)
    setup_logging(spec, verbose)

    base_dir = base_dir_for(bundlefile)
    resolution = run_resolution(spec, base_dir, cwd)

    planner = BundlePlanner(
        assembly_dir=base_dir / spec.bundle.assembly_dir,
        root_dir=base_dir / spec.bundle.root_dir,
        include_patterns=spec.bundle.include,
    )
    try:
        bundle_plan = planner.plan(resolution.packages)
    except ShipyardError as e:
        fail(e)

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "root_module": resolution.root_module,
                    "target_dir": spec.bundle.target_dir,
                    "packages": bundle_plan.packages,
                    "files": [{"source": f.source, "target": f.target} for f in bundle_plan.files],
                    "warnings": bundle_plan.warnings,
                },
                indent=2,
            )
        )
        return

    for message in bundle_plan.warnings:
        warning(message)

    console.print("\n[bold cyan]Bundle Plan:[/bold cyan]")
    console.print(f"  • Root module: [green]{resolution.root_module}[/green]")
    console.print(f"  • Packages: [green]{len(bundle_plan.packages)}[/green]")
    console.print(f"  • Files: [green]{len(bundle_plan.files)}[/green]")
    console.print(f"  • Target: [green]{spec.bundle.target_dir}[/green]")
