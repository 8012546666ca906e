"""
Display utilities for CLI
Handles spinners and formatted command output
"""

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.markup import escape

from ..core.cp import AggregatedOutput

console = Console()


def show_banner():
    """Show CLI banner"""
    console.print("""
╔══════════════════════════════════════════╗
║   🐳  dev-env-lib                        ║
║   Docker helpers for dev environments    ║
╚══════════════════════════════════════════╝
""")


def show_quick_help():
    """Show quick command reference"""
    console.print("""
[cyan]Quick Commands:[/cyan]
  devenv image build <name> <path>       Build an image
  devenv image rm <name>                 Remove an image
  devenv image exists <name>             Check if an image exists
  devenv network create <name>           Create a network
  devenv network rm <name>               Remove a network
  devenv container rm <name>             Remove a container
  devenv container wait <name> <regex>   Wait for log output
  devenv --help                          Full help
""")


def show_command_output(output: AggregatedOutput, verbose: bool = False):
    """Print captured output of a docker call"""
    if output.exit_code != 0:
        console.print(f"[yellow]⚠ Nothing to do (exit code {output.exit_code})[/yellow]")
    if verbose or output.exit_code != 0:
        if output.stdout.strip():
            console.print(f"[dim]{escape(output.stdout.strip())}[/dim]")
        if output.stderr.strip():
            console.print(f"[dim]{escape(output.stderr.strip())}[/dim]")


def create_progress_context():
    """Create a spinner context manager"""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True
    )
