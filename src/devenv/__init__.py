"""
dev-env-lib
Docker command-line helpers for development environments
"""

from .core import (
    Docker,
    docker,
    AggregatedOutput,
    WatchOutcome,
    DevEnvError,
    MissingArgumentError,
    ProcessError,
    DockerCommandError,
    StreamClosedError
)

__version__ = "1.0.0"
__description__ = "Shell out to the docker CLI to manage images, networks and containers"

__all__ = [
    '__version__',
    '__description__',
    'Docker',
    'docker',
    'AggregatedOutput',
    'WatchOutcome',
    'DevEnvError',
    'MissingArgumentError',
    'ProcessError',
    'DockerCommandError',
    'StreamClosedError'
]
