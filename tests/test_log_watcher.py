"""Tests for LogWatcher."""

import os
import queue
import re
import signal
from unittest.mock import patch

import pytest

from devenv.core.config import Settings
from devenv.core.errors import MissingArgumentError
from devenv.core.log_watcher import (
    LogWatcher,
    WatchOutcome,
    WatchRequest,
    STREAM_CLOSED_MESSAGE,
)


def watch_with(process, pattern, name="web"):
    with patch("devenv.core.log_watcher.subprocess.Popen", return_value=process) as popen:
        outcome = LogWatcher(Settings()).wait_for_output(name, pattern)
    return outcome, popen


class TestWatchRequest:
    """Test WatchRequest validation."""

    def test_compiles_string_pattern(self):
        request = WatchRequest("web", "Server started")
        assert request.pattern.search("Server started")

    def test_keeps_compiled_pattern(self):
        pattern = re.compile("ready", re.IGNORECASE)
        assert WatchRequest("web", pattern).pattern is pattern

    def test_empty_container_name(self):
        with pytest.raises(MissingArgumentError):
            WatchRequest("", "ready")

    def test_missing_pattern(self):
        with pytest.raises(MissingArgumentError):
            WatchRequest("web", None)


class TestWaitForOutput:
    """Test wait_for_output against a fake process."""

    def test_match_interrupts_process_once(self, fake_process, gate):
        process = fake_process(stdout=[b"booting\n", b"Server started\n", gate, b"more\n"])
        outcome, popen = watch_with(process, re.compile("Server started"))

        assert outcome == WatchOutcome.success()
        assert process.signals == [signal.SIGINT]
        assert popen.call_args[0][0] == ["docker", "logs", "-f", "web"]

    def test_match_before_unrelated_output(self, fake_process, gate):
        process = fake_process(stdout=[b"Server started", gate, b"unrelated text"])
        outcome, _ = watch_with(process, re.compile("Server started"))

        assert outcome.matched
        assert process.consumed_at_signal == [b"Server started"]

    def test_match_on_stderr(self, fake_process, gate):
        process = fake_process(stdout=[gate], stderr=[b"listening on :8080\n", gate])
        outcome, _ = watch_with(process, re.compile(r"listening on :\d+"))

        assert outcome.matched
        assert process.signals == [signal.SIGINT]

    def test_stream_closed_without_match(self, fake_process):
        process = fake_process(stdout=[b"booting\n"], stderr=[b"warning\n"], returncode=1)
        outcome, _ = watch_with(process, re.compile("Server started"))

        assert not outcome.matched
        assert outcome.exit_code == 1
        assert outcome.message == STREAM_CLOSED_MESSAGE
        assert process.signals == []

    def test_match_split_across_chunks_is_not_detected(self, fake_process):
        process = fake_process(stdout=[b"Server sta", b"rted\n"], returncode=0)
        outcome, _ = watch_with(process, re.compile("Server started"))

        assert not outcome.matched
        assert outcome.exit_code == 0

    def test_streams_closed_after_watch(self, fake_process):
        process = fake_process(stdout=[b"ready"])
        watch_with(process, "ready")

        assert process.stdout.closed
        assert process.stderr.closed

    def test_invalid_utf8_does_not_break_matching(self, fake_process, gate):
        process = fake_process(stdout=[b"\xff\xfe ready\n", gate])
        outcome, _ = watch_with(process, "ready")
        assert outcome.matched

    def test_uses_configured_binary(self, fake_process, gate):
        process = fake_process(stdout=[b"ready", gate])
        with patch("devenv.core.log_watcher.subprocess.Popen", return_value=process) as popen:
            LogWatcher(Settings(docker_binary="/opt/docker")).wait_for_output("db", "ready")
        assert popen.call_args[0][0] == ["/opt/docker", "logs", "-f", "db"]

    def test_interrupted_watch_kills_process(self, fake_process, gate):
        class InterruptedQueue(queue.Queue):
            def get(self, *args, **kwargs):
                raise KeyboardInterrupt

        process = fake_process(stdout=[gate], stderr=[gate])
        with patch("devenv.core.log_watcher.queue.Queue", InterruptedQueue):
            with pytest.raises(KeyboardInterrupt):
                watch_with(process, "ready")

        assert process.killed
        assert process.signals == []
        assert process.returncode == -9
        assert process.stdout.closed
        assert process.stderr.closed


@pytest.mark.skipif(os.name != "posix", reason="needs /bin/sh")
class TestWaitForOutputProcess:
    """Test wait_for_output with a real child process."""

    def test_match_on_real_process(self, fake_docker):
        script = fake_docker('echo "booting"\necho "Server started" >&2\nexec sleep 30')
        outcome = LogWatcher(Settings(docker_binary=str(script))).wait_for_output("web", "Server started")

        assert outcome.matched

    def test_real_process_exit_code_is_reported(self, fake_docker):
        script = fake_docker('echo "logs for $3"\nexit 3')
        outcome = LogWatcher(Settings(docker_binary=str(script))).wait_for_output("web", "never printed")

        assert not outcome.matched
        assert outcome.exit_code == 3
