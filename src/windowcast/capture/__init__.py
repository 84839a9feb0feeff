"""
Capture Module
==============

Window capture, JPEG encoding and tick pacing.

Components:
    - FrameCapturer: Capture thread, sole writer of the FrameStore
    - JpegEncoder: OpenCV JPEG encoder at a fixed quality
    - TickScheduler: Remainder-of-period pacing with overrun counting
"""

from windowcast.capture.capturer import CaptureStats, FrameCapturer, TickResult
from windowcast.capture.encoder import JpegEncoder
from windowcast.capture.scheduler import TickScheduler


__all__ = [
    "CaptureStats",
    "FrameCapturer",
    "JpegEncoder",
    "TickResult",
    "TickScheduler",
]
