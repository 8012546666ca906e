"""
Network management commands
"""

import typer
from rich.markup import escape

from ..core import docker_ops
from ..core.errors import DevEnvError
from ..utils.display import console, show_command_output
from ..utils.logger import log_exception, exit_code_for

app = typer.Typer(no_args_is_help=True)


@app.command()
def create(
    name: str = typer.Argument(..., help="Network name")
):
    """🌐 Create a virtual network"""
    try:
        output = docker_ops.docker.create_network(name)
    except DevEnvError as e:
        log_exception(e, f"Failed to create network {name}")
        raise typer.Exit(exit_code_for(e))

    show_command_output(output)
    console.print(f"[green]✓ Network ready: {escape(name)}[/green]")


@app.command("rm")
def remove(
    name: str = typer.Argument(..., help="Network name")
):
    """🗑️  Remove a virtual network"""
    try:
        output = docker_ops.docker.remove_network(name)
    except DevEnvError as e:
        log_exception(e, f"Failed to remove network {name}")
        raise typer.Exit(exit_code_for(e))

    show_command_output(output)
    console.print(f"[green]✓ Network removed: {escape(name)}[/green]")
