"""
Frame Store
===========

Thread-safe single-slot holder for the most recent frame.

This module provides the FrameStore class, which acts as the interface
between the capture thread and the HTTP handlers.

Design Rules:
    - Holds exactly one frame (last write wins)
    - Publish is a reference swap under a lock, never an in-place copy
    - Exposes minimal metrics for observability
    - Does NOT process or modify frames
"""

import logging
import threading
from typing import Optional

from windowcast.stream.frame import Frame


logger = logging.getLogger(__name__)


class FrameStore:
    """
    Single-writer, many-reader store of the current frame.

    Frames are immutable, so swapping the reference under a lock is
    enough to guarantee that a snapshot is always one complete frame.
    A store that has never been published to is empty and
    ``snapshot()`` returns None.

    Example:
        store = FrameStore()

        # Capture thread
        store.publish(frame)

        # Any handler
        current = store.snapshot()
        if current is None:
            ...  # nothing captured yet
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: Optional[Frame] = None
        self._publish_count: int = 0

    @property
    def publish_count(self) -> int:
        """Total frames ever published."""
        with self._lock:
            return self._publish_count

    @property
    def is_empty(self) -> bool:
        """Whether no frame has been published yet."""
        return self.snapshot() is None

    def publish(self, frame: Frame) -> None:
        """
        Replace the current frame.

        Args:
            frame: Newly encoded frame. Must not be empty.

        Raises:
            ValueError: If the frame carries no bytes
        """
        if not frame.data:
            raise ValueError("Refusing to publish an empty frame")

        with self._lock:
            self._current = frame
            self._publish_count += 1

    def snapshot(self) -> Optional[Frame]:
        """
        Get the current frame.

        Returns:
            The most recently published frame, or None if nothing has
            been published yet.
        """
        with self._lock:
            return self._current

    def metrics(self) -> dict:
        """
        Get store metrics for observability.

        Returns:
            Dict with publish_count, current frame_id and size
        """
        with self._lock:
            current = self._current
            count = self._publish_count
        return {
            "publish_count": count,
            "frame_id": current.frame_id if current else None,
            "frame_size": current.size if current else 0,
        }
