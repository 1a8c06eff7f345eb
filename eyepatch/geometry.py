# SPDX-License-Identifier: Apache-2.0
"""Eye bounding boxes from eyelid arc landmarks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .indices import LEFT_EYE, RIGHT_EYE, EyeIndexSet
from .landmarks import LandmarkSequence, points_by_indices


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    Behaves like JavaScript's ``Math.round``. ``floor(value + 0.5)`` is
    avoided because the addition itself can round up, e.g. for
    ``0.49999999999999994``.
    """
    lower = math.floor(value)
    return int(lower + 1 if value - lower >= 0.5 else lower)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned integer pixel rectangle."""
    x: int
    y: int
    width: int
    height: int

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


def eye_bounding_box(landmarks: LandmarkSequence, eye: EyeIndexSet) -> BoundingBox:
    """Reduce one eye's arcs to a box.

    The near corner comes from the upper arc minimum and the far corner
    from the lower arc maximum; the two arcs are not pooled.
    """
    upper = points_by_indices(landmarks, eye.upper)
    lower = points_by_indices(landmarks, eye.lower)

    origin_x = round_half_up(upper[:, 0].min())
    origin_y = round_half_up(upper[:, 1].min())
    far_x = round_half_up(lower[:, 0].max())
    far_y = round_half_up(lower[:, 1].max())

    return BoundingBox(
        x=origin_x,
        y=origin_y,
        width=far_x - origin_x,
        height=far_y - origin_y,
    )


def eye_bounding_boxes(landmarks: LandmarkSequence) -> Tuple[BoundingBox, BoundingBox]:
    """Return ``(left, right)`` boxes, subject's perspective."""
    return eye_bounding_box(landmarks, LEFT_EYE), eye_bounding_box(landmarks, RIGHT_EYE)
