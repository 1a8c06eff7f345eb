"""Visualization helpers."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

FACE_OVERLAY_COLOR = (0x32, 0xEE, 0xDB)


def draw_face_overlay(
    image: np.ndarray,
    keypoints: Optional[Sequence[Sequence[float]]],
    color: Tuple[int, int, int] = FACE_OVERLAY_COLOR,
    radius: int = 1,
) -> np.ndarray:
    """Draw a small filled circle at every keypoint, in place.

    ``color`` is in the channel order of ``image``; an alpha channel, if
    present, is set opaque. Nothing is drawn when ``keypoints`` is empty.
    """
    if keypoints is None or len(keypoints) == 0:
        return image

    fill = tuple(int(c) for c in color)
    if image.ndim == 3 and image.shape[2] == 4:
        fill = fill + (255,)
    for point in keypoints:
        center = (int(round(point[0])), int(round(point[1])))
        cv2.circle(image, center, radius, fill, thickness=-1)
    return image
