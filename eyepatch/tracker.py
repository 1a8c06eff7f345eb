# SPDX-License-Identifier: Apache-2.0
"""Face mesh eye tracker: landmarks in, eye patches out."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .canvas import FrameCanvas
from .config import DetectorConfig, OverlayConfig
from .detector import FaceDetector, MediaPipeFaceDetector
from .errors import ResetUnsupportedError
from .geometry import eye_bounding_boxes
from .landmarks import LandmarkSequence
from .logging_utils import get_logger
from .patches import EyePatches, EyePatchResult, extract_patch
from .viz.overlays import draw_face_overlay

log = get_logger(__name__)


class FaceMeshEyeTracker:
    """Extracts left and right eye patches from video frames.

    The tracker owns the detector it is given and remembers the landmarks
    of the last frame in which a face was found. Calls are not serialized:
    overlapping ``get_eye_patches`` coroutines share the detector and the
    cached landmarks, and the last one to finish wins.
    """

    name = "FaceMesh"

    def __init__(
        self,
        detector: FaceDetector | None = None,
        overlay: OverlayConfig | None = None,
    ):
        self.detector = detector or MediaPipeFaceDetector(DetectorConfig())
        self.overlay = overlay or OverlayConfig()
        self.prediction_ready = False
        self._positions: Optional[LandmarkSequence] = None

    @classmethod
    def from_config(cls, config) -> "FaceMeshEyeTracker":
        return cls(MediaPipeFaceDetector(config.detector), overlay=config.overlay)

    async def initialize(self) -> Any:
        """Make sure the detector handle exists and return it."""
        return await self.detector.initialize()

    async def get_eye_patches(self, frame: np.ndarray, canvas: FrameCanvas) -> EyePatchResult:
        """Detect the face in ``frame`` and cut both eyes out of ``canvas``.

        ``canvas`` holds the pixels of ``frame``; nothing runs until it has
        been drawn into.
        """
        if canvas.width == 0:
            return EyePatchResult.not_ready()

        await self.initialize()

        positions = await self.detector.detect_landmarks(frame)
        if positions is None:
            log.debug("no_face_detected")
            return EyePatchResult.no_face()

        self._positions = positions

        left_box, right_box = eye_bounding_boxes(positions)

        if left_box.width <= 0 or right_box.width <= 0:
            log.info("degenerate_eye_box", axis="width", left=left_box.width, right=right_box.width)
            return EyePatchResult.degenerate()

        if left_box.height <= 0 or right_box.height <= 0:
            log.info("degenerate_eye_box", axis="height", left=left_box.height, right=right_box.height)
            return EyePatchResult.degenerate()

        patches = EyePatches(
            left=extract_patch(canvas, left_box),
            right=extract_patch(canvas, right_box),
        )
        self.prediction_ready = True
        return EyePatchResult.success(patches)

    def get_positions(self) -> Optional[LandmarkSequence]:
        """Landmarks behind the last detection, or ``None`` before any."""
        return self._positions

    def reset(self) -> None:
        log.warning("reset_unsupported", reason="face mesh detector has no reset primitive")
        raise ResetUnsupportedError("FaceMeshEyeTracker cannot be reset")

    def draw_face_overlay(self, image: np.ndarray, keypoints=None) -> np.ndarray:
        """Draw ``keypoints`` (default: the cached positions) onto ``image``."""
        if keypoints is None:
            keypoints = self._positions
        return draw_face_overlay(image, keypoints, color=self.overlay.color, radius=self.overlay.radius)
