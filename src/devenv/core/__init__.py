"""
Core Package
Configuration, process spawning and Docker operations
"""

from .config import Settings, load_settings
from .cp import AggregatedOutput, spawn_template
from .docker_ops import Docker, docker
from .errors import (
    DevEnvError,
    MissingArgumentError,
    ConfigError,
    ProcessError,
    DockerCommandError,
    StreamClosedError
)
from .log_watcher import LogWatcher, WatchRequest, WatchOutcome

__all__ = [
    # Config
    'Settings',
    'load_settings',

    # Processes
    'AggregatedOutput',
    'spawn_template',

    # Docker operations
    'Docker',
    'docker',
    'LogWatcher',
    'WatchRequest',
    'WatchOutcome',

    # Errors
    'DevEnvError',
    'MissingArgumentError',
    'ConfigError',
    'ProcessError',
    'DockerCommandError',
    'StreamClosedError'
]
