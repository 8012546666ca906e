"""
Logging utilities for the CLI
"""

import logging
import traceback
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console(stderr=True)

# Global debug flag
_DEBUG_MODE = False


def set_debug_mode(debug: bool):
    """Enable or disable debug mode globally"""
    global _DEBUG_MODE
    _DEBUG_MODE = debug

    logging.getLogger("devenv").setLevel(logging.DEBUG if debug else logging.INFO)


def setup_logging(debug: bool = False, level: str = "INFO"):
    """Attach a Rich handler to the devenv logger"""
    root = logging.getLogger("devenv")
    root.handlers.clear()
    root.addHandler(
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            show_time=debug,
            show_path=debug
        )
    )
    root.propagate = False

    set_debug_mode(debug)
    if not debug:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))


def log_exception(e: Exception, context: str = ""):
    """Print an exception with context, plus the stack trace in debug mode"""
    if context:
        console.print(f"[red]❌ {escape(context)}[/red]")

    console.print(f"[red]Error: {type(e).__name__}: {escape(str(e))}[/red]")

    if _DEBUG_MODE:
        console.print("[dim]Stack trace:[/dim]")
        console.print("[dim]" + escape("".join(traceback.format_tb(e.__traceback__))) + "[/dim]")
    else:
        console.print("[yellow]💡 Tip: Run with --debug flag for detailed stack trace[/yellow]")


def debug_print(message: str):
    """Print debug message only in debug mode"""
    if _DEBUG_MODE:
        console.print(f"[dim cyan]DEBUG: {escape(message)}[/dim cyan]")


def exit_code_for(e: Exception) -> int:
    """Exit code the CLI should use for a failed operation"""
    code = getattr(e, "exit_code", None)
    return code if isinstance(code, int) and code > 0 else 1
