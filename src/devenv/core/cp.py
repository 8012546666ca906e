"""
Child process helpers
Renders a command template, runs it and aggregates its output
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .config import Settings, load_settings
from .errors import ProcessError

logger = logging.getLogger("devenv.cp")

TEMPLATE_SUFFIX = ".j2"


@dataclass(frozen=True)
class AggregatedOutput:
    """Captured result of one process run"""
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    command: List[str] = field(default_factory=list)

    @classmethod
    def from_error(cls, error: ProcessError) -> "AggregatedOutput":
        return cls(error.exit_code, error.stdout, error.stderr, error.command)


def _quote(value: Any) -> str:
    return shlex.quote(str(value))


def create_environment(templates_dir: Path) -> Environment:
    """Jinja2 environment used for command templates"""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        keep_trailing_newline=False,
        autoescape=False
    )
    env.filters["quote"] = _quote
    return env


def render_command(template: str, model: Dict[str, Any], settings: Settings) -> List[str]:
    """Render a template into an argument vector"""
    env = create_environment(settings.templates_dir)
    try:
        line = env.get_template(template + TEMPLATE_SUFFIX).render(
            docker=settings.docker_binary,
            **model
        )
    except TemplateError as e:
        raise ValueError(f"Cannot render command template '{template}': {e}") from e
    return shlex.split(line)


def spawn_template(
    template: str,
    cwd: Union[str, Path],
    model: Dict[str, Any],
    settings: Optional[Settings] = None
) -> AggregatedOutput:
    """
    Run the command described by a template

    Args:
        template: Template name without suffix (e.g. 'remove_image')
        cwd: Working directory of the child process
        model: Values substituted into the template
        settings: Settings to use, loaded from config when omitted

    Returns:
        AggregatedOutput for a zero exit code

    Raises:
        ProcessError: the process exited with a non-zero code
    """
    settings = settings or load_settings()
    command = render_command(template, model, settings)

    logger.debug("Running %s in %s", " ".join(command), cwd)
    result = subprocess.run(
        command,
        cwd=str(cwd),
        capture_output=True,
        encoding="utf-8",
        errors="replace"
    )

    if result.returncode != 0:
        logger.warning("%s exited with code %d", command[0], result.returncode)
        if result.stderr:
            logger.debug("stderr: %s", result.stderr.strip())
        raise ProcessError(result.returncode, result.stdout, result.stderr, command)

    logger.debug("%s completed successfully", template)
    return AggregatedOutput(result.returncode, result.stdout, result.stderr, command)
