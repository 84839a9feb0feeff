"""
JPEG Encoder
============

Dedicated module for encoding captured BGR buffers into JPEG bytes.

Design Rules:
    - This is the ONLY place in the codebase that encodes images
    - Fixed quality per encoder instance
    - Fails fast: an empty or undecodable result is an error, never a frame
"""

import logging

import cv2
import numpy as np

from windowcast.errors import FrameEncodeError


logger = logging.getLogger(__name__)


DEFAULT_JPEG_QUALITY = 70


class JpegEncoder:
    """
    OpenCV-backed JPEG encoder.

    Attributes:
        quality: JPEG quality, 1-100
    """

    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY) -> None:
        if not 1 <= quality <= 100:
            raise ValueError(f"JPEG quality must be in [1, 100], got {quality}")
        self.quality = quality
        self._params = [int(cv2.IMWRITE_JPEG_QUALITY), quality]

    def encode(self, pixels: np.ndarray) -> bytes:
        """
        Encode a BGR image as JPEG.

        Args:
            pixels: BGR image as np.ndarray (H, W, 3), dtype=uint8

        Returns:
            Encoded JPEG bytes (never empty)

        Raises:
            FrameEncodeError: If the buffer is invalid or encoding fails
        """
        if pixels is None or pixels.size == 0:
            raise FrameEncodeError("Cannot encode an empty buffer")

        if pixels.dtype != np.uint8:
            raise FrameEncodeError(f"Invalid dtype for encoding: {pixels.dtype}")

        try:
            ok, buffer = cv2.imencode(".jpg", pixels, self._params)
        except cv2.error as e:
            raise FrameEncodeError(f"cv2.imencode failed: {e}")

        if not ok:
            raise FrameEncodeError("cv2.imencode reported failure")

        data = buffer.tobytes()
        if not data:
            raise FrameEncodeError("Encoder produced zero-length output")

        return data
