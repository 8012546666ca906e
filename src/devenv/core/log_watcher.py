"""
Container log watcher
Follows `docker logs -f` until a chunk of output matches a pattern

Each chunk read from stdout or stderr is matched on its own. A match that
spans two chunks is not detected. There is no timeout: the call returns only
when a chunk matches or the log stream closes.
"""

import logging
import queue
import re
import signal
import subprocess
import threading
from dataclasses import dataclass
from typing import IO, List, Optional, Tuple, Union

from .config import Settings, load_settings
from .errors import MissingArgumentError

logger = logging.getLogger("devenv.log_watcher")

CHUNK_SIZE = 4096
STREAM_CLOSED_MESSAGE = "stream closed without matching pattern"


@dataclass(frozen=True)
class WatchRequest:
    """Container to follow and the pattern to wait for"""
    container_name: str
    pattern: re.Pattern

    def __post_init__(self):
        if not self.container_name:
            raise MissingArgumentError("container_name")
        if self.pattern is None:
            raise MissingArgumentError("pattern")
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(self.pattern))


@dataclass(frozen=True)
class WatchOutcome:
    """Matched, or Failed with the exit code of the log process"""
    matched: bool
    exit_code: Optional[int] = None
    message: str = ""

    @classmethod
    def success(cls) -> "WatchOutcome":
        return cls(matched=True)

    @classmethod
    def failure(cls, exit_code: Optional[int], message: str = STREAM_CLOSED_MESSAGE) -> "WatchOutcome":
        return cls(matched=False, exit_code=exit_code, message=message)


def _pump(stream: IO[bytes], channel: str, chunks: "queue.Queue[Tuple[str, Optional[bytes]]]"):
    """Copy raw chunks from one pipe into the shared queue, then signal EOF"""
    try:
        for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
            chunks.put((channel, chunk))
    except (OSError, ValueError) as e:
        logger.debug("%s reader stopped: %s", channel, e)
    finally:
        chunks.put((channel, None))


class LogWatcher:
    """Waits for a container to print something matching a pattern"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()

    def command(self, container_name: str) -> List[str]:
        return [self.settings.docker_binary, "logs", "-f", container_name]

    def wait_for_output(self, container_name: str, pattern: Union[str, re.Pattern]) -> WatchOutcome:
        """Convenience wrapper building the WatchRequest"""
        return self.watch(WatchRequest(container_name, pattern))

    def watch(self, request: WatchRequest) -> WatchOutcome:
        command = self.command(request.container_name)
        logger.debug("Following logs: %s (pattern %r)", " ".join(command), request.pattern.pattern)

        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            bufsize=0
        )

        chunks: "queue.Queue[Tuple[str, Optional[bytes]]]" = queue.Queue()
        readers = [
            threading.Thread(target=_pump, args=(process.stdout, "stdout", chunks), daemon=True),
            threading.Thread(target=_pump, args=(process.stderr, "stderr", chunks), daemon=True),
        ]
        for reader in readers:
            reader.start()

        try:
            open_channels = len(readers)
            while open_channels:
                channel, chunk = chunks.get()
                if chunk is None:
                    open_channels -= 1
                    continue

                text = chunk.decode("utf-8", errors="replace")
                if request.pattern.search(text):
                    logger.info("Pattern %r matched in %s of %s",
                                request.pattern.pattern, channel, request.container_name)
                    process.send_signal(signal.SIGINT)
                    process.wait()
                    return WatchOutcome.success()

            exit_code = process.wait()
            logger.warning("Log stream for %s closed without a match (exit code %s)",
                           request.container_name, exit_code)
            return WatchOutcome.failure(exit_code)
        finally:
            # only reached with a live process when the caller was interrupted
            if process.poll() is None:
                process.kill()
                process.wait()
            for reader in readers:
                reader.join()
            for stream in (process.stdout, process.stderr):
                if stream is not None:
                    stream.close()
