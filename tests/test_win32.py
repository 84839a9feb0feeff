"""
Win32 Backend Tests
===================

GDI resource handling in grab_client, with the pywin32 calls recorded.
"""

import pytest

pytest.importorskip("win32gui")

from windowcast.errors import FrameGrabError  # noqa: E402
from windowcast.window import win32 as backend  # noqa: E402
from windowcast.window.base import WindowHandle  # noqa: E402


class GdiError(Exception):
    pass


class RecordingGdi:
    """Stands in for win32gui/win32ui/win32con and logs every call."""

    SRCCOPY = 0x00CC0020
    error = GdiError

    def __init__(self, width, height, blit_error=None):
        self.calls = []
        self.bits = b"\x10\x20\x30\xff" * (width * height)
        self.blit_error = blit_error

    # win32gui
    def GetDC(self, hwnd):
        self.calls.append("GetDC")
        return 7

    def ReleaseDC(self, hwnd, dc):
        self.calls.append("ReleaseDC")

    def DeleteObject(self, handle):
        self.calls.append(("DeleteObject", handle))

    # win32ui
    def CreateDCFromHandle(self, handle):
        return RecordingDC(self, "source")

    def CreateBitmap(self):
        return RecordingBitmap(self)


class RecordingDC:
    def __init__(self, gdi, name):
        self.gdi = gdi
        self.name = name

    def CreateCompatibleDC(self):
        return RecordingDC(self.gdi, "memory")

    def SelectObject(self, obj):
        self.gdi.calls.append(("SelectObject", self.name, obj))
        return "stock-bitmap"

    def BitBlt(self, *args):
        if self.gdi.blit_error is not None:
            raise self.gdi.blit_error

    def DeleteDC(self):
        self.gdi.calls.append(("DeleteDC", self.name))


class RecordingBitmap:
    def __init__(self, gdi):
        self.gdi = gdi

    def CreateCompatibleBitmap(self, dc, width, height):
        pass

    def GetBitmapBits(self, as_bytes):
        return self.gdi.bits

    def GetHandle(self):
        return 42


@pytest.fixture
def window():
    return WindowHandle(handle=1234, title="Minecraft")


def _install(monkeypatch, gdi):
    monkeypatch.setattr(backend, "win32gui", gdi)
    monkeypatch.setattr(backend, "win32ui", gdi)
    monkeypatch.setattr(backend, "win32con", gdi)


class TestGrabClient:
    """Tests for GDI object lifetimes."""

    def test_returns_bgr_pixels(self, monkeypatch, window):
        gdi = RecordingGdi(4, 2)
        _install(monkeypatch, gdi)

        pixels = backend.Win32WindowSystem().grab_client(window, 4, 2)

        assert pixels.shape == (2, 4, 3)
        assert pixels[0, 0].tolist() == [0x10, 0x20, 0x30]

    def test_bitmap_deselected_before_delete(self, monkeypatch, window):
        gdi = RecordingGdi(4, 2)
        _install(monkeypatch, gdi)

        backend.Win32WindowSystem().grab_client(window, 4, 2)

        restore = gdi.calls.index(("SelectObject", "memory", "stock-bitmap"))
        assert restore < gdi.calls.index(("DeleteDC", "memory"))
        assert gdi.calls[-1] == ("DeleteObject", 42)

    def test_cleanup_runs_when_blit_fails(self, monkeypatch, window):
        gdi = RecordingGdi(4, 2, blit_error=GdiError("BitBlt failed"))
        _install(monkeypatch, gdi)

        with pytest.raises(FrameGrabError):
            backend.Win32WindowSystem().grab_client(window, 4, 2)

        assert ("SelectObject", "memory", "stock-bitmap") in gdi.calls
        assert "ReleaseDC" in gdi.calls
        assert gdi.calls[-1] == ("DeleteObject", 42)
