"""
Frame Data Model
=================

Internal frame representation for the capture pipeline.

This module defines the typed Frame class that is used as the interface
between the capture loop and the HTTP handlers.

Design Rules:
    - This is the ONLY frame format stored and served
    - Holds already-encoded JPEG bytes (never raw pixels)
    - Immutable, so a reader can never see a half-written frame
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Frame:
    """
    One encoded capture of the target window.

    Frozen to prevent accidental modification after publish; handing
    the same instance to many readers is therefore safe.

    Attributes:
        data: Encoded JPEG bytes
        width: Client-area width the frame was captured at
        height: Client-area height the frame was captured at
        timestamp: UNIX timestamp of the capture
        frame_id: Monotonically increasing capture counter (internal only)
    """

    data: bytes
    width: int
    height: int
    timestamp: float
    frame_id: int = 0

    @property
    def size(self) -> int:
        """Encoded length in bytes."""
        return len(self.data)

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the full image."""
        return (
            f"Frame(frame_id={self.frame_id}, "
            f"size={self.size}, "
            f"{self.width}x{self.height}, "
            f"timestamp={self.timestamp:.3f})"
        )
