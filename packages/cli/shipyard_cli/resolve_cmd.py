"""Resolve command - list the production dependencies of the root module."""

import json
from pathlib import Path
from typing import List, Optional

import typer

from shipyard_common import ShipyardError
from shipyard_schema import BundleSpec
from shipyard_sdk import DependencyResolution, DependencyResolver

from .utils import DEFAULT_BUNDLEFILE, console, fail, load_spec, setup_logging


def base_dir_for(bundlefile: str) -> Path:
    """Relative Bundlefile paths are taken from the Bundlefile's directory."""
    path = Path(bundlefile)
    return path.resolve().parent if path.is_file() else Path.cwd()


def run_resolution(spec: BundleSpec, base_dir: Path, cwd: Optional[str]) -> DependencyResolution:
    """Resolve the Bundlefile's root module, rendering any failure and exiting."""
    if cwd:
        bundle = spec.bundle.model_copy(update={"dependencies_dir": str(Path(cwd).resolve())})
        spec = spec.model_copy(update={"bundle": bundle})

    resolver = DependencyResolver.from_spec(spec, base_dir)
    try:
        return resolver.resolve(spec.bundle.root_module)
    except ShipyardError as e:
        fail(e)


def resolve(
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
    exclude: List[str] = typer.Option(
        [],
        "--exclude",
        "-x",
        help="Additional package to exclude (repeatable)",
    ),
    forbid: List[str] = typer.Option(
        [],
        "--forbid",
        help="Additional forbidden package (repeatable)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of plain paths"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Resolve the production dependency directories of the root module.

    \b
    Examples:
        shipyard resolve
        shipyard resolve --root-module @eclipse-che/theia-assembly --cwd examples/assembly
        shipyard resolve --exclude react --forbid webpack --json
    """
    spec = load_spec(bundlefile, root_module=root_module, exclude=exclude, forbid=forbid)
    setup_logging(spec, verbose)

    resolution = run_resolution(spec, base_dir_for(bundlefile), cwd)

    if as_json:
        typer.echo(
            json.dumps(
                [{"name": p.name, "path": p.path} for p in resolution.packages],
                indent=2,
            )
        )
        return

    console.print(
        f"[bold cyan]{len(resolution.packages)} production dependencies of "
        f"{resolution.root_module}[/bold cyan] [dim]({resolution.modules_folder})[/dim]",
        soft_wrap=True,
    )
    for path in resolution.paths:
        typer.echo(path)
