"""Add command - add packages to the policy of an existing Bundlefile."""

from pathlib import Path
from typing import List

import typer
import yaml

from shipyard_common import DEFAULT_EXCLUDED_PACKAGES, DEFAULT_FORBIDDEN_PACKAGES

from .utils import DEFAULT_BUNDLEFILE, console, error, success, warning

app = typer.Typer()


def load_bundlefile(path: Path) -> dict:
    """Load and parse a Bundlefile.

    Args:
        path: Path to Bundlefile

    Returns:
        Parsed Bundlefile as dict

    Raises:
        typer.Exit: If file doesn't exist or is invalid
    """
    if not path.exists():
        error(f"Bundlefile not found: {path}")
        raise typer.Exit(1)

    try:
        content = path.read_text()
        data = yaml.safe_load(content)
        if not isinstance(data, dict):
            error(f"Invalid Bundlefile format: {path}")
            raise typer.Exit(1)
        return data
    except yaml.YAMLError as e:
        error(f"YAML parsing error: {e}")
        raise typer.Exit(1)


def save_bundlefile(path: Path, data: dict) -> None:
    """Save Bundlefile data to file.

    Args:
        path: Path to Bundlefile
        data: Bundlefile data dict
    """
    content = yaml.dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    path.write_text(content)


def add_to_policy(path: Path, key: str, packages: List[str]) -> List[str]:
    """
    Append packages to one policy list of a Bundlefile.

    A Bundlefile without a policy section uses the stock lists, so those
    are written out first to keep the effective policy unchanged.

    Returns:
        The packages that were not already present
    """
    data = load_bundlefile(path)

    policy = data.get("policy")
    if policy is None:
        policy = {
            "excluded_packages": list(DEFAULT_EXCLUDED_PACKAGES),
            "forbidden_packages": list(DEFAULT_FORBIDDEN_PACKAGES),
        }
        data["policy"] = policy
    elif not isinstance(policy, dict):
        error(f"Invalid policy section in {path}")
        raise typer.Exit(1)

    current = list(policy.get(key) or [])
    added = []
    for package in packages:
        package = package.strip()
        if not package:
            continue
        if package in current:
            warning(f"'{package}' is already listed in policy.{key}")
            continue
        current.append(package)
        added.append(package)

    policy[key] = current
    save_bundlefile(path, data)
    return added


@app.command(name="exclude")
def add_exclude(
    packages: List[str] = typer.Argument(..., help="Packages to exclude from the bundle"),
    bundlefile: str = typer.Option(DEFAULT_BUNDLEFILE, "--file", "-f", help="Path to Bundlefile"),
):
    """
    Exclude packages (and anything reachable only through them).

    \b
    Examples:
        shipyard add exclude react react-dom
        shipyard add exclude electron --file build/Bundlefile.yaml
    """
    path = Path(bundlefile)
    added = add_to_policy(path, "excluded_packages", packages)

    success(f"Added {len(added)} excluded package(s) to {bundlefile}")
    for name in added:
        console.print(f"  • {name}")


@app.command(name="forbid")
def add_forbid(
    packages: List[str] = typer.Argument(..., help="Packages that must never be bundled"),
    bundlefile: str = typer.Option(DEFAULT_BUNDLEFILE, "--file", "-f", help="Path to Bundlefile"),
):
    """
    Forbid packages: resolution fails if any of them is reachable.

    \b
    Examples:
        shipyard add forbid webpack webpack-cli
    """
    path = Path(bundlefile)
    added = add_to_policy(path, "forbidden_packages", packages)

    success(f"Added {len(added)} forbidden package(s) to {bundlefile}")
    for name in added:
        console.print(f"  • {name}")
