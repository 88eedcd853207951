"""Console helpers shared by CLI commands."""

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console

from shipyard_common import ShipyardError, configure_logging
from shipyard_schema import BundleConfig, BundleSpec, ResolutionPolicy
from shipyard_sdk import load_bundlespec

console = Console()

DEFAULT_BUNDLEFILE = "Bundlefile.yaml"


def success(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}")


def error(message: str) -> None:
    console.print(f"[bold red]✗ Error:[/bold red] {message}", soft_wrap=True)


def warning(message: str) -> None:
    console.print(f"[bold yellow]![/bold yellow] {message}", soft_wrap=True)


def fail(exc: ShipyardError) -> NoReturn:
    """Render a Shipyard error and exit with status 1."""
    error(f"{exc.message} [dim]({exc.code})[/dim]")
    raise typer.Exit(1)


def load_spec(
    bundlefile: str,
    root_module: Optional[str] = None,
    exclude: Optional[List[str]] = None,
    forbid: Optional[List[str]] = None,
) -> BundleSpec:
    """
    Load a Bundlefile and apply command-line overrides.

    Without a Bundlefile on disk, --root-module is enough to build a spec
    from the defaults.

    Raises:
        typer.Exit: If neither a Bundlefile nor a root module is available,
            or the Bundlefile is invalid
    """
    path = Path(bundlefile)
    try:
        if path.is_file():
            spec = load_bundlespec(path)
        elif root_module:
            spec = BundleSpec.model_validate({"version": "1.0", "bundle": {"root_module": root_module}})
        else:
            error(f"Bundlefile not found: {path} (pass --root-module to run without one)")
            raise typer.Exit(1)

        updates = {}
        if root_module:
            updates["bundle"] = BundleConfig.model_validate(
                {**spec.bundle.model_dump(), "root_module": root_module}
            )
        if exclude or forbid:
            updates["policy"] = ResolutionPolicy(
                excluded_packages=spec.policy.excluded_packages | frozenset(exclude or []),
                forbidden_packages=spec.policy.forbidden_packages | frozenset(forbid or []),
            )
        return spec.model_copy(update=updates) if updates else spec
    except ShipyardError as e:
        fail(e)


def setup_logging(spec: BundleSpec, verbose: bool) -> None:
    """Quiet by default so machine-readable output stays clean."""
    if verbose:
        level = "DEBUG"
    elif spec.logging is not None:
        level = spec.logging.level
    else:
        level = "WARNING"
    configure_logging("cli", log_level=level)
