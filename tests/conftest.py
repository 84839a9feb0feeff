"""
Test Configuration
==================

Pytest fixtures and test configuration for WindowCast.
"""

import threading
from typing import List, Optional, Tuple

import numpy as np
import pytest

from windowcast.errors import FrameGrabError
from windowcast.window.base import WindowHandle


class FakeWindowSystem:
    """
    In-memory window backend.

    Holds a fixed list of windows; every knob the capture loop reads
    (liveness, minimised state, client size, grab failures) is a plain
    attribute tests can flip.
    """

    def __init__(self, titles: Optional[List[str]] = None) -> None:
        self.windows: List[WindowHandle] = [
            WindowHandle(handle=100 + i, title=title)
            for i, title in enumerate(titles or [])
        ]
        self.alive: bool = True
        self.minimized: bool = False
        self.size: Tuple[int, int] = (64, 48)
        self.grab_error: Optional[Exception] = None
        self.grab_calls: int = 0
        self.closed: bool = False

    def find_by_title(self, title: str) -> Optional[WindowHandle]:
        for window in self.windows:
            if window.title == title:
                return window
        return None

    def list_windows(self) -> List[WindowHandle]:
        return list(self.windows)

    def is_alive(self, window: WindowHandle) -> bool:
        return self.alive and window in self.windows

    def is_minimized(self, window: WindowHandle) -> bool:
        return self.minimized

    def client_size(self, window: WindowHandle) -> Tuple[int, int]:
        return self.size

    def grab_client(self, window: WindowHandle, width: int, height: int) -> np.ndarray:
        self.grab_calls += 1
        if self.grab_error is not None:
            raise self.grab_error
        # Horizontal gradient so the JPEG is not trivially uniform
        row = np.linspace(0, 255, width, dtype=np.uint8)
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :, 0] = row
        pixels[:, :, 1] = row[::-1]
        pixels[:, :, 2] = 128
        return pixels

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_system():
    """Provide a FakeWindowSystem with one target window."""
    return FakeWindowSystem(["Desktop", "Minecraft", "Notepad"])


@pytest.fixture
def target_window(fake_system):
    """Provide the target window of fake_system."""
    return fake_system.find_by_title("Minecraft")


@pytest.fixture
def stop_event():
    """Provide a fresh shutdown token."""
    return threading.Event()


@pytest.fixture
def grab_failure():
    """Provide a FrameGrabError to inject into the fake backend."""
    return FrameGrabError("BitBlt failed")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep host environment variables out of config tests."""
    for name in (
        "PORT",
        "WINDOWCAST_PORT",
        "WINDOWCAST_HOST",
        "WINDOWCAST_WINDOW_TITLES",
        "WINDOWCAST_TITLE_KEYWORD",
        "WINDOWCAST_INTERVAL_MS",
        "WINDOWCAST_JPEG_QUALITY",
        "WINDOWCAST_MAX_CONNECTIONS",
        "WINDOWCAST_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_window_system():
    """Provide the FakeWindowSystem class for tests that need custom titles."""
    return FakeWindowSystem
