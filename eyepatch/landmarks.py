# SPDX-License-Identifier: Apache-2.0
"""Landmark records shared by the detector adapter and the geometry code."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Tuple

import numpy as np


class LandmarkPoint(NamedTuple):
    """A face landmark in frame pixel coordinates."""
    x: float
    y: float
    z: float = 0.0


LandmarkSequence = Tuple[LandmarkPoint, ...]


@dataclass
class Keypoint:
    """Raw keypoint as reported by a detector backend.

    ``z`` and ``name`` are optional; not every backend reports them.
    """
    x: float
    y: float
    z: Optional[float] = None
    name: Optional[str] = None

    def to_point(self) -> LandmarkPoint:
        return LandmarkPoint(float(self.x), float(self.y), float(self.z or 0.0))


@dataclass
class Face:
    """One detected face: its keypoints in topology order."""
    keypoints: List[Keypoint] = field(default_factory=list)


def as_keypoint(raw: Any) -> Keypoint:
    """Coerce a mapping or an object with ``x``/``y``/``z`` attributes."""
    if isinstance(raw, Keypoint):
        return raw
    if isinstance(raw, Mapping):
        return Keypoint(raw["x"], raw["y"], raw.get("z"), raw.get("name"))
    return Keypoint(raw.x, raw.y, getattr(raw, "z", None), getattr(raw, "name", None))


def to_landmark_sequence(keypoints: Iterable[Any]) -> LandmarkSequence:
    """Convert detector keypoints into an immutable landmark sequence."""
    return tuple(as_keypoint(kp).to_point() for kp in keypoints)


def points_by_indices(landmarks: LandmarkSequence, indices: Iterable[int]) -> np.ndarray:
    """Return an ``(N, 3)`` array of the landmarks at ``indices``."""
    return np.array([landmarks[i] for i in indices], dtype=float).reshape(-1, 3)
