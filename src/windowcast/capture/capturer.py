"""
Frame Capturer
==============

Periodic producer that grabs the target window and publishes frames.

This module provides the FrameCapturer class which:
    - Runs one dedicated capture thread at a fixed target rate
    - Grabs the client area, encodes it as JPEG and publishes it
    - Skips ticks while the window is minimised or has no area
    - Sets the shutdown token when the target window disappears
    - Logs periodic stats (published, skipped, failed, overruns, fps)

Design Rules:
    - Sole writer of the FrameStore
    - A failed tick never aborts the loop; the previous frame stays current
    - Window closure is terminal: the whole process shuts down
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from windowcast.capture.encoder import JpegEncoder
from windowcast.capture.scheduler import TickScheduler
from windowcast.errors import CaptureError
from windowcast.stream.frame import Frame
from windowcast.stream.store import FrameStore
from windowcast.window.base import WindowHandle, WindowSystem


logger = logging.getLogger(__name__)


class TickResult(str, Enum):
    """Outcome of a single capture tick."""

    PUBLISHED = "PUBLISHED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"
    WINDOW_CLOSED = "WINDOW_CLOSED"


class CaptureStats:
    """Counters for FrameCapturer observability."""

    __slots__ = (
        "ticks",
        "published",
        "skipped",
        "failed",
        "overruns",
    )

    def __init__(self) -> None:
        self.ticks: int = 0
        self.published: int = 0
        self.skipped: int = 0
        self.failed: int = 0
        self.overruns: int = 0

    def to_dict(self) -> dict:
        """Export stats as dict."""
        return {
            "ticks": self.ticks,
            "published": self.published,
            "skipped": self.skipped,
            "failed": self.failed,
            "overruns": self.overruns,
        }


class FrameCapturer:
    """
    Capture loop for one target window.

    Attributes:
        window: Target window, resolved once at startup
        store: FrameStore receiving every encoded frame
        stats: Operational counters

    Example:
        stop_event = threading.Event()
        capturer = FrameCapturer(
            window_system=system,
            window=window,
            store=store,
            stop_event=stop_event,
        )
        capturer.start()

        # Later
        stop_event.set()
        capturer.join()
    """

    def __init__(
        self,
        window_system: WindowSystem,
        window: WindowHandle,
        store: FrameStore,
        stop_event: threading.Event,
        encoder: Optional[JpegEncoder] = None,
        interval_ms: int = 33,
        error_backoff_ms: int = 100,
        stats_interval_s: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize frame capturer.

        Args:
            window_system: Backend used for liveness checks and grabs
            window: Target window
            store: FrameStore to publish into
            stop_event: Shutdown token shared with the rest of the process
            encoder: JPEG encoder (quality 70 if omitted)
            interval_ms: Target tick period
            error_backoff_ms: Extra pause after a failed tick
            stats_interval_s: Seconds between stats log lines (0 = never)
            clock: Monotonic clock, injectable for tests
        """
        self.window_system = window_system
        self.window = window
        self.store = store
        self.encoder = encoder or JpegEncoder()
        self.error_backoff = error_backoff_ms / 1000.0
        self.stats_interval = stats_interval_s

        self._stop_event = stop_event
        self._scheduler = TickScheduler(interval_ms / 1000.0, clock=clock)
        self._thread: Optional[threading.Thread] = None
        self._next_frame_id: int = 0

        self.stats = CaptureStats()

    @property
    def running(self) -> bool:
        """Whether the capture thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the capture thread."""
        if self.running:
            raise RuntimeError("FrameCapturer already running")

        self._thread = threading.Thread(
            target=self.run,
            name="frame-capture",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the capture thread to exit.

        Returns:
            True if the thread has stopped.
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def tick(self) -> TickResult:
        """
        Run one capture iteration.

        Returns:
            What happened this tick. WINDOW_CLOSED also sets the
            shutdown token.
        """
        self.stats.ticks += 1

        if not self.window_system.is_alive(self.window):
            logger.warning(f"Target window closed: {self.window.title!r}")
            self._stop_event.set()
            return TickResult.WINDOW_CLOSED

        if self.window_system.is_minimized(self.window):
            self.stats.skipped += 1
            return TickResult.SKIPPED

        width, height = self.window_system.client_size(self.window)
        if width <= 0 or height <= 0:
            self.stats.skipped += 1
            return TickResult.SKIPPED

        try:
            pixels = self.window_system.grab_client(self.window, width, height)
            data = self.encoder.encode(pixels)
        except CaptureError as e:
            self.stats.failed += 1
            logger.warning(f"Capture failed ({width}x{height}): {e}")
            return TickResult.FAILED

        frame = Frame(
            data=data,
            width=width,
            height=height,
            timestamp=time.time(),
            frame_id=self._next_frame_id,
        )
        self.store.publish(frame)
        self._next_frame_id += 1
        self.stats.published += 1

        return TickResult.PUBLISHED

    def run(self) -> None:
        """
        Capture until the shutdown token is set.

        Runs on the capture thread; can also be called directly.
        """
        logger.info(
            f"Capture loop started: window={self.window.title!r}, "
            f"interval={self._scheduler.interval * 1000:.0f}ms, "
            f"quality={self.encoder.quality}"
        )

        last_stats_at = self._scheduler.now()
        last_published = 0

        while not self._stop_event.is_set():
            tick_started = self._scheduler.now()

            try:
                result = self.tick()
            except Exception as e:
                self.stats.failed += 1
                logger.error(f"Capture tick error: {e}")
                result = TickResult.FAILED

            if result is TickResult.WINDOW_CLOSED:
                break

            if result is TickResult.FAILED and self.error_backoff > 0:
                # Backoff replaces the period wait; it is not an overrun
                keep_running = not self._stop_event.wait(self.error_backoff)
            else:
                keep_running = self._scheduler.wait_next(tick_started, self._stop_event)
                self.stats.overruns = self._scheduler.overruns
            if not keep_running:
                break

            if self.stats_interval > 0:
                now = self._scheduler.now()
                elapsed = now - last_stats_at
                if elapsed >= self.stats_interval:
                    fps = (self.stats.published - last_published) / elapsed
                    logger.info(f"Capture stats: {self.stats.to_dict()}, fps={fps:.1f}")
                    last_stats_at = now
                    last_published = self.stats.published

        logger.info(f"Capture loop stopped: {self.stats.to_dict()}")
