"""
Utils Package
Display and logging helpers for the CLI
"""

from .display import (
    console,
    show_banner,
    show_quick_help,
    show_command_output,
    create_progress_context
)
from .logger import setup_logging, log_exception, debug_print, exit_code_for

__all__ = [
    'console',
    'show_banner',
    'show_quick_help',
    'show_command_output',
    'create_progress_context',
    'setup_logging',
    'log_exception',
    'debug_print',
    'exit_code_for'
]
