"""
Window Module
=============

Target-window discovery and pixel access.

Components:
    - WindowSystem: Protocol for OS window backends
    - WindowHandle: Opaque reference to one top-level window
    - Win32WindowSystem: pywin32 backend (Windows only)
    - locate_window: Startup lookup by exact title, then keyword
"""

from windowcast.errors import WindowSystemUnavailable
from windowcast.window.base import WindowHandle, WindowSystem
from windowcast.window.locator import locate_window

# Win32 backend imported separately, pywin32 only exists on Windows
try:
    from windowcast.window.win32 import Win32WindowSystem
    _WIN32_AVAILABLE = True
except ImportError:
    _WIN32_AVAILABLE = False
    Win32WindowSystem = None  # type: ignore


def create_window_system() -> WindowSystem:
    """
    Create the window backend for this platform.

    Fails fast if no backend is available.

    Raises:
        WindowSystemUnavailable: If pywin32 is not importable
    """
    if not _WIN32_AVAILABLE:
        raise WindowSystemUnavailable(
            "Window capture requires the Win32 backend but pywin32 is not installed. "
            "Install with: pip install pywin32"
        )
    return Win32WindowSystem()


__all__ = [
    "WindowHandle",
    "WindowSystem",
    "Win32WindowSystem",
    "create_window_system",
    "locate_window",
    "_WIN32_AVAILABLE",
]
