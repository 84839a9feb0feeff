"""
WindowCast
==========

Live browser view of a single desktop window.

This package captures the client area of one target window at ~30 Hz,
encodes each capture as JPEG, keeps only the latest frame, and serves it
to any number of polling HTTP clients.

Components:
    - window: Target-window lookup and pixel access (Win32 backend)
    - capture: Capture loop, JPEG encoder, tick pacing
    - stream: Frame model and the latest-frame store
    - server: FastAPI app and uvicorn runner
    - service: Start/stop sequencing of the whole pipeline

Example:
    from windowcast.config import load_config
    from windowcast.main import run

    raise SystemExit(run(load_config()))
"""

__version__ = "0.1.0"
__author__ = "WindowCast Project"

__all__ = [
    "__version__",
]
