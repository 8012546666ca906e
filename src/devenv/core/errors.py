"""
Exceptions raised by dev-env-lib
Every failure carries the exit code and captured output of the docker call
"""

from typing import List, Optional


class DevEnvError(Exception):
    """Base class for all dev-env-lib errors"""


class MissingArgumentError(DevEnvError, ValueError):
    """A required argument was not supplied; no process was started"""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing required argument: {argument}")


class ConfigError(DevEnvError):
    """Configuration file could not be parsed"""


class ProcessError(DevEnvError):
    """External process exited with a non-zero code"""

    def __init__(
        self,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
        command: Optional[List[str]] = None
    ):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.command = command or []
        super().__init__(self._describe())

    def _describe(self) -> str:
        message = f"Command failed with exit code {self.exit_code}"
        if self.command:
            message += f": {' '.join(self.command)}"
        if self.stderr.strip():
            message += f"\n{self.stderr.strip()}"
        return message


class DockerCommandError(ProcessError):
    """A docker operation failed with an exit code that is not downgraded"""

    @classmethod
    def from_process_error(cls, error: ProcessError) -> "DockerCommandError":
        return cls(error.exit_code, error.stdout, error.stderr, error.command)


class StreamClosedError(DevEnvError):
    """Log stream ended before the pattern was seen"""

    def __init__(self, exit_code: Optional[int], message: str = "stream closed without matching pattern"):
        self.exit_code = exit_code
        super().__init__(f"{message} (exit code {exit_code})")
