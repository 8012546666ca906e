"""
Docker operations
Image, network and container commands run through the docker CLI
"""

import logging
from pathlib import Path
import re
from typing import Optional, Sequence, Union

from .config import PACKAGE_DIR, Settings, load_settings
from .cp import AggregatedOutput, spawn_template
from .errors import DockerCommandError, MissingArgumentError, ProcessError, StreamClosedError
from .log_watcher import LogWatcher, WatchOutcome

logger = logging.getLogger("devenv.docker")

PathSegments = Union[str, Path, Sequence[Union[str, Path]]]

# docker exits with 1 when the target of a remove is already gone
ALREADY_ABSENT_EXIT_CODE = 1


def resolve_path(path: PathSegments) -> Path:
    """Join a list of segments (or take a single path) and make it absolute"""
    if isinstance(path, (list, tuple)):
        return Path(*path).resolve()
    return Path(path).resolve()


class Docker:
    """Thin wrapper over the docker command-line tool"""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    def _run(self, template: str, name: str, cwd: Union[str, Path] = PACKAGE_DIR, **model) -> AggregatedOutput:
        return spawn_template(template, cwd, dict(name=name, **model), settings=self.settings)

    def _run_tolerating_absent(self, template: str, name: str) -> AggregatedOutput:
        try:
            return self._run(template, name)
        except ProcessError as e:
            if e.exit_code != ALREADY_ABSENT_EXIT_CODE:
                raise DockerCommandError.from_process_error(e) from e
            logger.info("%s: %s not found or already in place, nothing to do", template, name)
            return AggregatedOutput.from_error(e)

    def build_image(self, name: str, dockerfile_path: Optional[PathSegments]) -> AggregatedOutput:
        """
        Build a docker image

        Args:
            name: Tag for the image
            dockerfile_path: Build context containing the Dockerfile, as a path
                or a list of segments joined and resolved against the cwd

        Raises:
            MissingArgumentError: dockerfile_path was not given
            ProcessError: docker build failed
        """
        if not dockerfile_path:
            raise MissingArgumentError("dockerfile_path")
        dockerfile_path = resolve_path(dockerfile_path)

        logger.info("Building image %s from %s", name, dockerfile_path)
        return self._run("build_image", name, cwd=dockerfile_path, dockerfile_path=str(dockerfile_path))

    def remove_image(self, name: str) -> AggregatedOutput:
        """Remove a docker image; a missing image is not an error"""
        return self._run_tolerating_absent("remove_image", name)

    def image_exists(self, name: str) -> bool:
        """Check `docker images` output for the configured marker"""
        response = self._run("get_image", name)
        return self.settings.image_marker in response.stdout

    def create_network(self, name: str) -> AggregatedOutput:
        """Create a virtual network; an existing network is not an error"""
        return self._run_tolerating_absent("create_network", name)

    def remove_network(self, name: str) -> AggregatedOutput:
        """Remove a virtual network; a missing network is not an error"""
        return self._run_tolerating_absent("remove_network", name)

    def remove_container(self, name: str) -> AggregatedOutput:
        """Remove a container; a missing container is not an error"""
        return self._run_tolerating_absent("remove_container", name)

    def wait_for_container_output(self, name: str, pattern: Union[str, re.Pattern]) -> WatchOutcome:
        """
        Tail the logs of a container until output matches the pattern

        Raises:
            MissingArgumentError: name or pattern was not given
            StreamClosedError: the log stream closed without a match
        """
        outcome = LogWatcher(self.settings).wait_for_output(name, pattern)
        if not outcome.matched:
            raise StreamClosedError(outcome.exit_code, outcome.message)
        return outcome


docker = Docker()
