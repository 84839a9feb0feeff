"""
Stream Module
=============

Frame model and latest-frame storage.

This module provides the hand-off layer between capture and serving:
    - Frame: Immutable encoded capture
    - FrameStore: Thread-safe single-slot store (last write wins)

Example:
    from windowcast.stream import Frame, FrameStore

    store = FrameStore()
    store.publish(Frame(data=jpeg_bytes, width=640, height=480, timestamp=now))
    latest = store.snapshot()
"""

from windowcast.stream.frame import Frame
from windowcast.stream.store import FrameStore


__all__ = [
    "Frame",
    "FrameStore",
]
