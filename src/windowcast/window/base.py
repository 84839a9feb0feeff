"""
Window System Abstraction
=========================

Protocol for OS window backends.

The capture loop and the locator only talk to this interface, so the
pipeline can run against the Win32 backend in production and an
in-memory fake under test.

Design Rules:
    - Handles are opaque and owned by the OS
    - Pixel grabs return BGR uint8 arrays of shape (height, width, 3)
    - Backends raise FrameGrabError on capture failure, never return junk
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

import numpy as np


@dataclass(frozen=True)
class WindowHandle:
    """
    Reference to one top-level OS window.

    Attributes:
        handle: Native window handle (HWND on Windows)
        title: Window title at the time of lookup
    """

    handle: int
    title: str


class WindowSystem(Protocol):
    """
    Protocol for window backends.

    Implemented by:
        - Win32WindowSystem (pywin32, Windows)
        - FakeWindowSystem (tests)
    """

    def find_by_title(self, title: str) -> Optional[WindowHandle]:
        """Exact-title lookup. Returns None if no window has that title."""
        ...

    def list_windows(self) -> List[WindowHandle]:
        """Enumerate all top-level windows in z-order."""
        ...

    def is_alive(self, window: WindowHandle) -> bool:
        """Whether the handle still denotes an existing window."""
        ...

    def is_minimized(self, window: WindowHandle) -> bool:
        """Whether the window is currently iconic."""
        ...

    def client_size(self, window: WindowHandle) -> Tuple[int, int]:
        """Current client-area (width, height); may be zero."""
        ...

    def grab_client(self, window: WindowHandle, width: int, height: int) -> np.ndarray:
        """
        Copy the client area into an off-screen buffer.

        Returns:
            BGR image as np.ndarray (height, width, 3), dtype=uint8

        Raises:
            FrameGrabError: If the copy fails
        """
        ...

    def close(self) -> None:
        """Release backend resources."""
        ...
