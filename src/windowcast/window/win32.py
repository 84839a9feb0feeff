"""
Win32 Window Backend
====================

pywin32 implementation of the WindowSystem protocol.

This backend:
    - Looks windows up with FindWindow / EnumWindows
    - Copies the client area with BitBlt into a compatible bitmap
    - Converts the BGRA bitmap bits into a BGR numpy array

Design Rules:
    - Every GDI object created in a grab is released in the same grab
    - Failures surface as FrameGrabError, never as partially filled arrays
"""

import logging
from typing import List, Optional, Tuple

import numpy as np
import win32con
import win32gui
import win32ui

from windowcast.errors import FrameGrabError
from windowcast.window.base import WindowHandle


logger = logging.getLogger(__name__)


class Win32WindowSystem:
    """
    Window backend for Microsoft Windows.

    Stateless apart from the handles it hands out; safe to call from
    the capture thread while the main thread sits idle.
    """

    def find_by_title(self, title: str) -> Optional[WindowHandle]:
        """Exact-title lookup via FindWindow."""
        hwnd = win32gui.FindWindow(None, title)
        if not hwnd:
            return None
        return WindowHandle(handle=hwnd, title=win32gui.GetWindowText(hwnd))

    def list_windows(self) -> List[WindowHandle]:
        """Enumerate top-level windows via EnumWindows."""
        windows: List[WindowHandle] = []

        def enum_callback(hwnd, _):
            windows.append(WindowHandle(handle=hwnd, title=win32gui.GetWindowText(hwnd)))
            return True

        win32gui.EnumWindows(enum_callback, None)
        return windows

    def is_alive(self, window: WindowHandle) -> bool:
        return bool(win32gui.IsWindow(window.handle))

    def is_minimized(self, window: WindowHandle) -> bool:
        return bool(win32gui.IsIconic(window.handle))

    def client_size(self, window: WindowHandle) -> Tuple[int, int]:
        try:
            left, top, right, bottom = win32gui.GetClientRect(window.handle)
        except win32gui.error as e:
            logger.debug(f"GetClientRect failed for {window.handle}: {e}")
            return 0, 0
        return right - left, bottom - top

    def grab_client(self, window: WindowHandle, width: int, height: int) -> np.ndarray:
        """
        Copy the client area with BitBlt.

        Args:
            window: Target window
            width: Client width in pixels
            height: Client height in pixels

        Returns:
            BGR image as np.ndarray (height, width, 3), dtype=uint8

        Raises:
            FrameGrabError: If any GDI call fails
        """
        hwnd = window.handle
        window_dc = None
        source_dc = None
        memory_dc = None
        bitmap = None
        previous = None

        try:
            window_dc = win32gui.GetDC(hwnd)
            if not window_dc:
                raise FrameGrabError(f"GetDC returned no device context for {hwnd}")

            source_dc = win32ui.CreateDCFromHandle(window_dc)
            memory_dc = source_dc.CreateCompatibleDC()

            bitmap = win32ui.CreateBitmap()
            bitmap.CreateCompatibleBitmap(source_dc, width, height)
            previous = memory_dc.SelectObject(bitmap)

            memory_dc.BitBlt((0, 0), (width, height), source_dc, (0, 0), win32con.SRCCOPY)

            bits = bitmap.GetBitmapBits(True)
            bgra = np.frombuffer(bits, dtype=np.uint8)
            if bgra.size != width * height * 4:
                raise FrameGrabError(
                    f"Unexpected bitmap size for {hwnd}: got {bgra.size} bytes, "
                    f"expected {width * height * 4}"
                )

            return bgra.reshape((height, width, 4))[:, :, :3].copy()

        except win32ui.error as e:
            raise FrameGrabError(f"GDI capture failed for {hwnd}: {e}")
        finally:
            # A bitmap still selected into a DC cannot be deleted
            if previous is not None:
                memory_dc.SelectObject(previous)
            if memory_dc is not None:
                memory_dc.DeleteDC()
            if source_dc is not None:
                source_dc.DeleteDC()
            if window_dc:
                win32gui.ReleaseDC(hwnd, window_dc)
            if bitmap is not None:
                win32gui.DeleteObject(bitmap.GetHandle())

    def close(self) -> None:
        logger.debug("Win32WindowSystem closed")
