"""
WindowCast Main Entry Point
===========================

Command-line entry point.

Startup:
    1. Load config (YAML + environment, then CLI flags; exit 2 if invalid)
    2. Locate the target window (exit 1 if not found)
    3. Start capture and HTTP services
    4. Block until Enter, SIGINT/SIGTERM, or the target window closes
    5. Shut down and exit 0
"""

import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional

from pydantic import ValidationError

from windowcast import __version__
from windowcast.config import Settings, load_config, setup_logging
from windowcast.errors import InitializationError
from windowcast.service import StreamService
from windowcast.window import WindowSystem, create_window_system, locate_window


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="windowcast",
        description="Serve one desktop window as a live JPEG feed over HTTP",
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--port", type=int, help="HTTP port (default 8080)")
    parser.add_argument(
        "--title",
        action="append",
        dest="titles",
        help="Exact window title to try (repeatable, in priority order)",
    )
    parser.add_argument("--keyword", help="Case-insensitive title substring fallback")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """
    Apply command-line flags on top of file and environment config.

    Raises:
        ValidationError: If a flag value is out of range
    """
    config_data = settings.model_dump()
    if args.port is not None:
        config_data["server"]["port"] = args.port
    if args.titles:
        config_data["window"]["candidate_titles"] = args.titles
    if args.keyword:
        config_data["window"]["title_keyword"] = args.keyword
    if args.log_level:
        config_data["logging"]["level"] = args.log_level
    return Settings.model_validate(config_data)


def _wait_for_console(stop_event: threading.Event) -> None:
    """Set the shutdown token once a line (or EOF) arrives on stdin."""
    try:
        sys.stdin.readline()
    except (OSError, ValueError) as e:
        logger.debug(f"Console read ended: {e}")
        return
    stop_event.set()


def run(settings: Settings, window_system: Optional[WindowSystem] = None) -> int:
    """
    Run WindowCast until shutdown.

    Args:
        settings: Loaded configuration
        window_system: Window backend (platform default if omitted)

    Returns:
        Process exit code
    """
    try:
        if window_system is None:
            window_system = create_window_system()
        window = locate_window(
            window_system,
            settings.window.candidate_titles,
            settings.window.title_keyword,
        )
    except InitializationError as e:
        logger.error(f"Initialization failed: {e}")
        print("\nInitialization failed!")
        print("Check that:")
        print("  1. The target application is running")
        print("  2. Its window is visible (not minimised)")
        print(f"  3. Its title is one of {settings.window.candidate_titles}")
        print(f"     or contains {settings.window.title_keyword!r}")
        return 1

    print(f"Found window: {window.title}")

    service = StreamService(settings, window_system, window)

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        service.stop_event.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    service.start()
    if service.http_available:
        print(f"Open in a browser: {service.url}")
    print("Press Enter to stop...")

    threading.Thread(
        target=_wait_for_console,
        args=(service.stop_event,),
        name="console-stop",
        daemon=True,
    ).start()

    # Short waits keep the main thread responsive to signals on Windows
    while not service.wait(timeout=0.5):
        pass

    service.stop()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = apply_cli_overrides(load_config(args.config), args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}")
        return 2
    setup_logging(settings)

    print("=" * 60)
    print(f"WindowCast v{__version__}")
    print("=" * 60)

    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
