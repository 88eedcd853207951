"""shipyard CLI - Main entry point."""

import typer

from . import add_cmd, info_cmd, init_cmd, plan_cmd, resolve_cmd, validate_cmd

app = typer.Typer(
    name="shipyard",
    help="shipyard CLI - Resolve and plan production bundles",
    no_args_is_help=True,
    add_completion=False,
)

# Register all commands
app.command()(resolve_cmd.resolve)
app.command()(plan_cmd.plan)
app.command()(validate_cmd.validate)
app.command()(init_cmd.init)
app.command()(info_cmd.version)

# Register command groups
app.add_typer(add_cmd.app, name="add", help="Add packages to the Bundlefile policy")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
