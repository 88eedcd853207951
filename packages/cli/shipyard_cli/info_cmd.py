"""Info commands."""

from shipyard_sdk import __version__

from .utils import console


def version():
    """Show the Shipyard version."""
    console.print(f"shipyard [bold]{__version__}[/bold]")
