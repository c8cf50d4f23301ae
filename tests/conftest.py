"""Shared fixtures for the cmdkit test-suite."""

import logging

import pytest

from cmdkit.output import LeveledOutput, Verbosity


class RecordingSink:
    """Sink that keeps every message it would show, with its level."""

    def __init__(self, verbosity=Verbosity.DEBUG):
        self.verbosity = verbosity
        self.records = []

    def writeln(self, messages, level=Verbosity.NORMAL):
        if self.verbosity < level:
            return
        if isinstance(messages, str):
            messages = [messages]
        self.records.extend((message, level) for message in messages)

    @property
    def messages(self):
        return [message for message, _ in self.records]


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def output(sink):
    return LeveledOutput(sink)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pid_dir(tmp_path):
    """Pid directory path with the trailing separator cmdkit expects."""
    return f"{tmp_path / 'pids'}/"


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch):
    """setup_logging() replaces root handlers; put the originals back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr("setproctitle.setproctitle", lambda title: None)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
