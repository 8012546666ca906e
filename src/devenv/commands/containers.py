"""
Container management commands
Remove containers and wait for log output
"""

import re
import typer
from rich.markup import escape

from ..core import docker_ops
from ..core.errors import DevEnvError
from ..utils.display import console, show_command_output, create_progress_context
from ..utils.logger import log_exception, exit_code_for

app = typer.Typer(no_args_is_help=True)


@app.command("rm")
def remove(
    name: str = typer.Argument(..., help="Container name")
):
    """🗑️  Remove a container"""
    try:
        output = docker_ops.docker.remove_container(name)
    except DevEnvError as e:
        log_exception(e, f"Failed to remove container {name}")
        raise typer.Exit(exit_code_for(e))

    show_command_output(output)
    console.print(f"[green]✓ Container removed: {escape(name)}[/green]")


@app.command()
def wait(
    name: str = typer.Argument(..., help="Container name"),
    pattern: str = typer.Argument(..., help="Regular expression to wait for"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive match")
):
    """⏳ Follow container logs until the pattern appears (no timeout)"""
    try:
        regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error as e:
        console.print(f"[red]❌ Invalid pattern: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        with create_progress_context() as progress:
            progress.add_task(f"Waiting for {escape(name)} to print /{escape(pattern)}/...", total=None)
            docker_ops.docker.wait_for_container_output(name, regex)
    except DevEnvError as e:
        log_exception(e, f"Gave up waiting for {name}")
        raise typer.Exit(exit_code_for(e))

    console.print(f"[green]✓ {escape(name)} printed /{escape(pattern)}/[/green]")
