"""
Error Kinds
===========

Exception hierarchy for WindowCast.

Failure classes:
    - InitializationError: fatal, raised before any service starts
    - CaptureError: per-tick, recovered inside the capture loop
    - NetworkBindError: the HTTP endpoint could not be opened

Per-connection failures never surface as exceptions here; the HTTP
server closes the connection and carries on.
"""


class WindowCastError(Exception):
    """Base class for all WindowCast errors."""
    pass


class InitializationError(WindowCastError):
    """Raised when a required subsystem cannot be set up at startup."""
    pass


class WindowNotFound(InitializationError):
    """Raised when no window matches the configured titles or keyword."""
    pass


class WindowSystemUnavailable(InitializationError):
    """Raised when no window backend exists for this platform."""
    pass


class CaptureError(WindowCastError):
    """Raised when a single capture tick fails."""
    pass


class FrameGrabError(CaptureError):
    """Raised when window pixels cannot be copied off-screen."""
    pass


class FrameEncodeError(CaptureError):
    """Raised when a captured buffer cannot be encoded."""
    pass


class NetworkBindError(WindowCastError):
    """Raised when the listening endpoint fails to bind or listen."""
    pass
