"""
HTTP Server Runner
==================

Runs the FastAPI application under uvicorn on a dedicated thread.

This module provides the HttpServer class which:
    - Owns the listening endpoint for its whole lifetime
    - Bounds concurrent connections (503 beyond the limit)
    - Bounds request header size (incremental h11 parser)
    - Stops through uvicorn's exit flag rather than a forced socket close

Design Rules:
    - Bind/listen failure raises NetworkBindError from wait_started()
    - Never touches the FrameStore directly; handlers do that
"""

import logging
import threading
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI

from windowcast.errors import NetworkBindError


logger = logging.getLogger(__name__)


class HttpServer:
    """
    uvicorn server on a background thread.

    Attributes:
        host: Bind address
        port: Requested bind port (0 = ephemeral)

    Example:
        server = HttpServer(app, host="0.0.0.0", port=8080)
        server.start()
        server.wait_started()

        # Later
        server.stop()
        server.join()
    """

    def __init__(
        self,
        app: FastAPI,
        host: str = "0.0.0.0",
        port: int = 8080,
        backlog: int = 5,
        max_connections: int = 64,
        max_header_bytes: int = 16384,
        graceful_timeout_s: float = 5.0,
    ) -> None:
        """
        Initialize HTTP server.

        Args:
            app: Application to serve
            host: Bind address
            port: Bind port
            backlog: Listen backlog
            max_connections: Concurrent connection limit
            max_header_bytes: Maximum buffered request-head size
            graceful_timeout_s: Time in-flight responses get on shutdown
        """
        self.host = host
        self.port = port

        self._config = uvicorn.Config(
            app,
            host=host,
            port=port,
            backlog=backlog,
            limit_concurrency=max_connections,
            h11_max_incomplete_event_size=max_header_bytes,
            http="h11",
            loop="asyncio",
            lifespan="off",
            log_config=None,
            access_log=False,
            server_header=False,
            timeout_graceful_shutdown=max(1, int(graceful_timeout_s)),
        )
        self._server = uvicorn.Server(self._config)
        self._thread: Optional[threading.Thread] = None
        self._failed: bool = False

    @property
    def started(self) -> bool:
        """Whether the listening socket is open and accepting."""
        return self._server.started

    @property
    def bound_port(self) -> Optional[int]:
        """Actual listening port, useful when port=0."""
        if not self._server.started:
            return None
        for server in self._server.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return None

    def start(self) -> None:
        """Start serving on a background thread."""
        if self._thread is not None:
            raise RuntimeError("HttpServer already started")

        self._thread = threading.Thread(
            target=self._serve,
            name="http-server",
            daemon=True,
        )
        self._thread.start()

    def wait_started(self, timeout: float = 5.0) -> None:
        """
        Block until the server is accepting connections.

        Args:
            timeout: Maximum seconds to wait

        Raises:
            NetworkBindError: If the server failed to bind/listen or did
                not come up in time
        """
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self._server.started:
                logger.info(f"HTTP server listening on {self.host}:{self.bound_port}")
                return
            if self._failed or (self._thread is not None and not self._thread.is_alive()):
                break
            time.sleep(0.01)

        raise NetworkBindError(f"HTTP server failed to start on {self.host}:{self.port}")

    def stop(self) -> None:
        """Ask the server to stop accepting and close its listening socket."""
        logger.info("HTTP server stopping...")
        self._server.should_exit = True

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the server thread to exit.

        Returns:
            True if the thread has stopped.
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _serve(self) -> None:
        try:
            self._server.run()
        except SystemExit:
            # uvicorn exits the process on bind failure; here it only ends this thread
            self._failed = True
            logger.error(f"HTTP server could not bind {self.host}:{self.port}")
        except Exception as e:
            self._failed = True
            logger.error(f"HTTP server crashed: {e}")
        else:
            logger.info("HTTP server stopped")
