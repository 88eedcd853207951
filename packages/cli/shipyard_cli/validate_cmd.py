"""Validate command - check a Bundlefile."""

import typer

from .utils import DEFAULT_BUNDLEFILE, console, load_spec, success


def validate(
    bundlefile: str = typer.Argument(DEFAULT_BUNDLEFILE, help="Path to Bundlefile"),
):
    """Validate a Bundlefile and show the effective configuration."""
    spec = load_spec(bundlefile)

    success(f"{bundlefile} is valid")
    console.print(f"  • Root module: [green]{spec.bundle.root_module}[/green]")
    console.print(f"  • Package manager: [green]{spec.package_manager.binary}[/green]")
    console.print(f"  • Excluded packages: [green]{len(spec.policy.excluded_packages)}[/green]")
    console.print(f"  • Forbidden packages: [green]{len(spec.policy.forbidden_packages)}[/green]")
