# SPDX-License-Identifier: Apache-2.0
"""Eye patch result types and pixel extraction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

import numpy as np

from .canvas import FrameCanvas
from .geometry import BoundingBox


@dataclass
class EyePatch:
    """Pixels of one eye region plus where it sits in the frame."""
    patch: np.ndarray
    imagex: int
    imagey: int
    width: int
    height: int

    @property
    def box(self) -> BoundingBox:
        return BoundingBox(self.imagex, self.imagey, self.width, self.height)


@dataclass
class EyePatches:
    left: EyePatch
    right: EyePatch

    def to_dict(self) -> Dict[str, EyePatch]:
        return {"left": self.left, "right": self.right}


class PatchStatus(str, Enum):
    NOT_READY = "not_ready"
    NO_FACE_DETECTED = "no_face_detected"
    DEGENERATE_BOX = "degenerate_box"
    SUCCESS = "success"


@dataclass
class EyePatchResult:
    """Outcome of one ``get_eye_patches`` call."""
    status: PatchStatus
    patches: Optional[EyePatches] = None

    @classmethod
    def not_ready(cls) -> "EyePatchResult":
        return cls(PatchStatus.NOT_READY)

    @classmethod
    def no_face(cls) -> "EyePatchResult":
        return cls(PatchStatus.NO_FACE_DETECTED)

    @classmethod
    def degenerate(cls) -> "EyePatchResult":
        return cls(PatchStatus.DEGENERATE_BOX)

    @classmethod
    def success(cls, patches: EyePatches) -> "EyePatchResult":
        return cls(PatchStatus.SUCCESS, patches)

    @property
    def ok(self) -> bool:
        return self.status is PatchStatus.SUCCESS

    def __bool__(self) -> bool:
        return self.ok

    def as_legacy(self) -> Union[None, bool, Dict[str, Any]]:
        """Historic return shape: ``None``, ``False`` or ``{"left", "right"}``.

        ``False`` only ever means no face was detected; both "not ready"
        and a degenerate box map to ``None``.
        """
        if self.status is PatchStatus.SUCCESS:
            return self.patches.to_dict()
        if self.status is PatchStatus.NO_FACE_DETECTED:
            return False
        return None


def extract_patch(canvas: FrameCanvas, box: BoundingBox) -> EyePatch:
    """Read the pixels under ``box`` from ``canvas``."""
    if box.is_degenerate:
        raise ValueError(f"Cannot extract a patch from degenerate box {box}")
    pixels = canvas.get_image_data(box.x, box.y, box.width, box.height)
    return EyePatch(
        patch=pixels,
        imagex=box.x,
        imagey=box.y,
        width=box.width,
        height=box.height,
    )
