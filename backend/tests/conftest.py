"""
Pytest configuration for the Shuttle test suite.
"""

import sys
import threading
from pathlib import Path
from typing import List

import pytest

# Add backend to Python path for test imports
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

from shuttle.watchfolders.dispatcher import ActionDispatcher
from shuttle.watchfolders.stability import FileStabilityChecker


def no_sleep(seconds: float) -> None:
    """Sleep replacement: sampling proceeds instantly."""
    return None


class RecordingDispatcher(ActionDispatcher):
    """ActionDispatcher that keeps every submitted path and thread."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.submitted: List[str] = []
        self.threads: List[threading.Thread] = []
        self._lock = threading.Lock()

    def submit(self, file_path, rule_table, origin=None):
        thread = super().submit(file_path, rule_table, origin)
        with self._lock:
            self.submitted.append(file_path)
            self.threads.append(thread)
        return thread

    def join_all(self, timeout: float = 10.0) -> None:
        for thread in list(self.threads):
            thread.join(timeout)
            assert not thread.is_alive(), f"Dispatch thread {thread.name} hung"


class StubDispatcher:
    """Dispatcher stand-in that records submissions without touching files."""

    def __init__(self):
        self.submitted: List[str] = []
        self.origins: List[object] = []

    def submit(self, file_path, rule_table, origin=None):
        self.submitted.append(file_path)
        self.origins.append(origin)
        return None


@pytest.fixture
def instant_checker() -> FileStabilityChecker:
    """Stability checker that samples without real sleeps."""
    return FileStabilityChecker(sleep=no_sleep)


@pytest.fixture
def recording_dispatcher(instant_checker) -> RecordingDispatcher:
    return RecordingDispatcher(stability_checker=instant_checker)


@pytest.fixture
def stub_dispatcher() -> StubDispatcher:
    return StubDispatcher()


@pytest.fixture
def inbox(tmp_path: Path) -> Path:
    path = tmp_path / "in"
    path.mkdir()
    return path


@pytest.fixture
def outbox(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path
