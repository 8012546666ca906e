"""Pytest configuration and shared fixtures."""

import os
import stat
import threading
from pathlib import Path

import pytest

from devenv.core.config import Settings


# Placed in a FakeStream's chunk list to block until the process is signalled
GATE = object()


class FakeStream:
    """Pipe stand-in returning preset chunks, then EOF."""

    def __init__(self, chunks, gate: threading.Event):
        self._chunks = list(chunks)
        self._gate = gate
        self.consumed = []
        self.closed = False

    def read(self, size):
        while self._chunks:
            chunk = self._chunks.pop(0)
            if chunk is GATE:
                self._gate.wait(5)
                continue
            self.consumed.append(chunk)
            return chunk
        return b""

    def close(self):
        self.closed = True


class FakeProcess:
    """Popen stand-in recording the signals it receives."""

    def __init__(self, stdout=(), stderr=(), returncode=0):
        self.interrupted = threading.Event()
        self.stdout = FakeStream(stdout, self.interrupted)
        self.stderr = FakeStream(stderr, self.interrupted)
        self.signals = []
        self.killed = False
        self.consumed_at_signal = None
        self.returncode = None
        self._exit_code = returncode

    def send_signal(self, sig):
        self.signals.append(sig)
        self.consumed_at_signal = list(self.stdout.consumed) + list(self.stderr.consumed)
        self._exit_code = -sig
        self.interrupted.set()

    def poll(self):
        return self.returncode

    def wait(self):
        self.returncode = self._exit_code
        return self.returncode

    def kill(self):
        self.killed = True
        self._exit_code = -9
        self.interrupted.set()


@pytest.fixture
def settings():
    """Default settings, independent of any config on the machine."""
    return Settings()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DEVENV_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("DEVENV_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_docker(tmp_path):
    """Write an executable standing in for the docker binary."""

    def _make(body: str) -> Path:
        script = tmp_path / "docker"
        script.write_text("#!/bin/sh\n" + body + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def fake_process():
    """Factory for Popen stand-ins: fake_process(stdout=[...], stderr=[...], returncode=0)."""
    return FakeProcess


@pytest.fixture
def gate():
    """Chunk marker that blocks a fake pipe until the process is signalled or killed."""
    return GATE
