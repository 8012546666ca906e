"""
Image management commands
Build, remove and look up docker images
"""

import typer
from pathlib import Path
from rich.markup import escape
from typing import Optional

from ..core import docker_ops
from ..core.errors import DevEnvError
from ..utils.display import console, show_command_output, create_progress_context
from ..utils.logger import log_exception, exit_code_for

app = typer.Typer(no_args_is_help=True)


@app.command()
def build(
    name: str = typer.Argument(..., help="Tag for the image"),
    path: Optional[Path] = typer.Argument(None, help="Build context containing the Dockerfile"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show docker output")
):
    """🔨 Build an image"""
    try:
        with create_progress_context() as progress:
            progress.add_task(f"Building {escape(name)}...", total=None)
            output = docker_ops.docker.build_image(name, path)
    except DevEnvError as e:
        log_exception(e, f"Failed to build image {name}")
        raise typer.Exit(exit_code_for(e))

    show_command_output(output, verbose)
    console.print(f"[green]✓ Image built: {escape(name)}[/green]")


@app.command("rm")
def remove(
    name: str = typer.Argument(..., help="Image name")
):
    """🗑️  Remove an image"""
    try:
        output = docker_ops.docker.remove_image(name)
    except DevEnvError as e:
        log_exception(e, f"Failed to remove image {name}")
        raise typer.Exit(exit_code_for(e))

    show_command_output(output)
    console.print(f"[green]✓ Image removed: {escape(name)}[/green]")


@app.command()
def exists(
    name: str = typer.Argument(..., help="Image name")
):
    """🔍 Check whether an image exists (exit code 1 when it does not)"""
    try:
        found = docker_ops.docker.image_exists(name)
    except DevEnvError as e:
        log_exception(e, f"Failed to look up image {name}")
        raise typer.Exit(exit_code_for(e))

    if found:
        console.print(f"[green]✓ Image exists: {escape(name)}[/green]")
    else:
        console.print(f"[yellow]⚠ Image not found: {escape(name)}[/yellow]")
        raise typer.Exit(1)
