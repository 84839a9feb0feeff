"""
Stream Service
==============

Wires the capture thread, the frame store and the HTTP server together
and owns their start/stop ordering.

Shutdown sequence:
    1. Set the shutdown token (capture loop exits on its next wait)
    2. Ask the HTTP server to exit (listening socket closed)
    3. Join the capture and server threads
    4. Release window-system resources once the capture thread has stopped
"""

import logging
import threading
from typing import Optional

from windowcast.capture import FrameCapturer, JpegEncoder
from windowcast.config import Settings
from windowcast.errors import NetworkBindError
from windowcast.server import HttpServer, create_app, render_control_page
from windowcast.stream import FrameStore
from windowcast.window import WindowHandle, WindowSystem


logger = logging.getLogger(__name__)


class StreamService:
    """
    The running capture → store → HTTP pipeline.

    Attributes:
        store: Latest-frame store shared by capture and handlers
        stop_event: Process-wide shutdown token
        capturer: Capture thread owner
        http: HTTP server owner
    """

    def __init__(
        self,
        settings: Settings,
        window_system: WindowSystem,
        window: WindowHandle,
        store: Optional[FrameStore] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.settings = settings
        self.window_system = window_system
        self.window = window
        self.store = store or FrameStore()
        self.stop_event = stop_event or threading.Event()
        self._stopped = False

        self.capturer = FrameCapturer(
            window_system=window_system,
            window=window,
            store=self.store,
            stop_event=self.stop_event,
            encoder=JpegEncoder(quality=settings.capture.jpeg_quality),
            interval_ms=settings.capture.interval_ms,
            error_backoff_ms=settings.capture.error_backoff_ms,
            stats_interval_s=settings.capture.stats_interval_s,
        )

        server = settings.server
        app = create_app(
            self.store,
            image_path=server.image_path,
            page_html=render_control_page(
                image_path=server.image_path,
                refresh_ms=server.refresh_interval_ms,
                title=server.page_title,
            ),
        )
        self.http = HttpServer(
            app,
            host=server.host,
            port=server.port,
            backlog=server.backlog,
            max_connections=server.max_connections,
            max_header_bytes=server.max_header_bytes,
            graceful_timeout_s=settings.shutdown_timeout_s,
        )

    @property
    def http_available(self) -> bool:
        return self.http.started

    @property
    def url(self) -> str:
        host = self.settings.server.host
        if host in ("0.0.0.0", "::", ""):
            host = "localhost"
        port = self.http.bound_port or self.settings.server.port
        return f"http://{host}:{port}"

    def start(self) -> None:
        """
        Start capturing and serving.

        A bind failure is logged and leaves the capture thread running
        without consumers; it does not raise.
        """
        logger.info(f"Starting capture of {self.window.title!r}")
        self.capturer.start()
        self.http.start()

        try:
            self.http.wait_started(timeout=self.settings.shutdown_timeout_s)
        except NetworkBindError as e:
            logger.error(f"{e}. Capture keeps running with no HTTP consumers")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until shutdown is requested.

        Returns:
            True if the shutdown token is set.
        """
        return self.stop_event.wait(timeout)

    def stop(self) -> None:
        """Shut everything down. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True

        logger.info("Shutting down gracefully...")
        self.stop_event.set()
        self.http.stop()

        timeout = self.settings.shutdown_timeout_s
        capture_stopped = self.capturer.join(timeout)
        if not capture_stopped:
            logger.warning(f"Capture thread did not stop within {timeout}s")
        if not self.http.join(timeout):
            logger.warning(f"HTTP server did not stop within {timeout}s")

        if capture_stopped:
            self.window_system.close()
        else:
            logger.warning("Capture thread still running, window backend left open")
        logger.info(f"Shutdown complete: {self.store.metrics()}")
