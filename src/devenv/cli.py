#!/usr/bin/env python3
"""
dev-env-lib CLI - Main Entry Point
"""

import typer

from . import __version__
from .commands import images, networks, containers
from .core.config import load_settings
from .core.errors import ConfigError
from .utils.display import show_banner, show_quick_help, console
from .utils.logger import setup_logging, log_exception, debug_print

# Main app
app = typer.Typer(
    name="devenv",
    help="🐳 dev-env-lib - Docker helpers for development environments",
    add_completion=False,
    no_args_is_help=False
)

# Register command groups
app.add_typer(images.app, name="image", help="📦 Manage images")
app.add_typer(networks.app, name="network", help="🌐 Manage networks")
app.add_typer(containers.app, name="container", help="🐳 Manage containers")


@app.command()
def version():
    """ℹ️  Show version"""
    console.print(f"dev-env-lib {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Verbose logging and stack traces")
):
    """
    dev-env-lib CLI

    Build images, manage networks and containers, and wait for log output.
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        log_exception(e, "Invalid configuration")
        raise typer.Exit(1)

    setup_logging(debug=debug, level=settings.log_level)
    debug_print(f"Settings: {settings}")

    if ctx.invoked_subcommand is None:
        show_banner()
        show_quick_help()


if __name__ == "__main__":
    app()
