"""
Pytest configuration and fixtures.
"""

import io
import sys
from pathlib import Path
from typing import Optional, Tuple

import pytest


def pytest_configure(config):
    """Configure pytest."""
    # Add src to path
    src_path = Path(__file__).parent.parent / "src"
    sys.path.insert(0, str(src_path))

    config.addinivalue_line("markers", "clock: simulation clock tests")
    config.addinivalue_line("markers", "render: terminal rendering tests")


def pytest_collection_modifyitems(config, items):
    """
    Modify test items to add helpful markers.
    """
    for item in items:
        nodeid = item.nodeid.lower()
        if "clock" in nodeid or "speed" in nodeid:
            item.add_marker("clock")
        if "render" in nodeid or "terminal" in nodeid or "status_line" in nodeid:
            item.add_marker("render")


class FakeTerminal(io.StringIO):
    """In-memory stream that can pretend to be a terminal."""

    def __init__(self, tty: bool = True) -> None:
        super().__init__()
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


class FakeTime:
    """Controllable time source for the simulation clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MutableSize:
    """Size provider whose answer can change between renders."""

    def __init__(self, size: Optional[Tuple[int, int]] = (80, 24)) -> None:
        self.size = size
        self.calls = 0

    def __call__(self) -> Optional[Tuple[int, int]]:
        self.calls += 1
        return self.size


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def terminal_size() -> MutableSize:
    return MutableSize()
