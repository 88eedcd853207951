"""Init command - create a Bundlefile."""

from pathlib import Path

import typer

from shipyard_common import (
    DEFAULT_EXCLUDED_PACKAGES,
    DEFAULT_FORBIDDEN_PACKAGES,
    BundleDefaults,
    PackageManagerDefaults,
    ShipyardError,
)
from shipyard_schema import BundleSpec

from .add_cmd import save_bundlefile
from .utils import DEFAULT_BUNDLEFILE, console, error, fail, success


def init(
    root_module: str = typer.Argument(..., help="Module whose production dependencies are bundled"),
    bundlefile: str = typer.Option(DEFAULT_BUNDLEFILE, "--file", "-f", help="Path to write"),
    package_manager: str = typer.Option(
        PackageManagerDefaults.BINARY,
        "--package-manager",
        "-p",
        help="Package-manager binary",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing Bundlefile"),
):
    """
    Create a Bundlefile with the stock policy.

    \b
    Examples:
        shipyard init @eclipse-che/theia-assembly
    """
    path = Path(bundlefile)
    if path.exists() and not force:
        error(f"{path} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    data = {
        "version": "1.0",
        "bundle": {
            "root_module": root_module,
            "root_dir": ".",
            "dependencies_dir": BundleDefaults.ASSEMBLY_DIR,
            "assembly_dir": BundleDefaults.ASSEMBLY_DIR,
            "target_dir": BundleDefaults.TARGET_DIR,
            "include": list(BundleDefaults.INCLUDE),
        },
        "package_manager": {
            "binary": package_manager,
            "timeout_seconds": PackageManagerDefaults.TIMEOUT_SECONDS,
        },
        "policy": {
            "excluded_packages": list(DEFAULT_EXCLUDED_PACKAGES),
            "forbidden_packages": list(DEFAULT_FORBIDDEN_PACKAGES),
        },
    }

    try:
        BundleSpec.model_validate(data)
    except ShipyardError as e:
        fail(e)

    save_bundlefile(path, data)
    success(f"Created {path}")
    console.print(f"  • Root module: [green]{root_module}[/green]")
