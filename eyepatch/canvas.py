# SPDX-License-Identifier: Apache-2.0
"""RGBA pixel buffer that mirrors the current video frame."""

from __future__ import annotations

from typing import Optional

import cv2
import numpy as np


class FrameCanvas:
    """Backing image buffer for the frame being tracked.

    The buffer is empty (zero width and height) until a frame is drawn.
    Reads behave like an HTML canvas ``getImageData``: pixels outside the
    buffer come back as transparent black.
    """

    def __init__(self, frame: Optional[np.ndarray] = None, color_order: str = "rgb"):
        self._pixels = np.zeros((0, 0, 4), dtype=np.uint8)
        if frame is not None:
            self.draw_frame(frame, color_order=color_order)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def draw_frame(self, frame: np.ndarray, color_order: str = "rgb") -> None:
        """Replace the buffer contents with ``frame`` converted to RGBA."""
        frame = np.asarray(frame)
        if frame.dtype != np.uint8:
            frame = np.clip(frame, 0, 255).astype(np.uint8)

        if frame.ndim == 2:
            rgba = cv2.cvtColor(frame, cv2.COLOR_GRAY2RGBA)
        elif color_order not in ("rgb", "bgr"):
            raise ValueError(f"Unsupported color order: {color_order}")
        elif frame.shape[2] == 4:
            if color_order == "bgr":
                rgba = cv2.cvtColor(frame, cv2.COLOR_BGRA2RGBA)
            else:
                rgba = frame.copy()
        elif color_order == "bgr":
            rgba = cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)
        else:
            rgba = cv2.cvtColor(frame, cv2.COLOR_RGB2RGBA)
        self._pixels = np.ascontiguousarray(rgba)

    def clear(self) -> None:
        self._pixels = np.zeros((0, 0, 4), dtype=np.uint8)

    def get_image_data(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """Return a ``height x width x 4`` RGBA copy of the region at ``(x, y)``."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Region must have positive size, got {width}x{height}")

        out = np.zeros((height, width, 4), dtype=np.uint8)
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + width, self.width), min(y + height, self.height)
        if x0 < x1 and y0 < y1:
            out[y0 - y:y1 - y, x0 - x:x1 - x] = self._pixels[y0:y1, x0:x1]
        return out

    def to_rgb(self) -> np.ndarray:
        """RGB view of the buffer, suitable as detector input."""
        return cv2.cvtColor(self._pixels, cv2.COLOR_RGBA2RGB)
