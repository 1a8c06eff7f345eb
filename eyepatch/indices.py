# SPDX-License-Identifier: Apache-2.0
"""Eye landmark indices for the 468-point MediaPipe Face Mesh topology.

"Left" and "right" are from the subject's perspective. Each eye is split
into the upper arc and the lower arc of the eyelid contour; the order of
the indices follows the mesh map and is significant for box extraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

FACE_MESH_NUM_LANDMARKS = 468


@dataclass(frozen=True)
class EyeIndexSet:
    """Upper and lower eyelid arc indices of one eye."""
    name: str
    upper: Tuple[int, ...]
    lower: Tuple[int, ...]

    @property
    def all(self) -> Tuple[int, ...]:
        return self.upper + self.lower


LEFT_EYE = EyeIndexSet(
    name="left",
    upper=(466, 388, 387, 386, 385, 384, 398),
    lower=(263, 249, 390, 373, 374, 380, 381, 382, 362),
)

RIGHT_EYE = EyeIndexSet(
    name="right",
    upper=(246, 161, 160, 159, 158, 157, 173),
    lower=(33, 7, 163, 144, 145, 153, 154, 155, 133),
)

EYE_INDEX_SETS: Mapping[str, EyeIndexSet] = MappingProxyType({
    LEFT_EYE.name: LEFT_EYE,
    RIGHT_EYE.name: RIGHT_EYE,
})
