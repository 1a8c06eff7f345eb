# SPDX-License-Identifier: Apache-2.0
"""Eye patch extraction from face mesh landmarks."""

from __future__ import annotations

import os

try:  # load environment variables from .env if present
    from dotenv import load_dotenv

    load_dotenv()
except Exception:  # pragma: no cover - optional dependency
    pass

# keep mediapipe/TFLite quiet unless the host asks otherwise
os.environ.setdefault("GLOG_minloglevel", "2")

from .canvas import FrameCanvas
from .detector import FaceDetector, MediaPipeFaceDetector
from .geometry import BoundingBox, eye_bounding_box, eye_bounding_boxes
from .indices import EYE_INDEX_SETS, LEFT_EYE, RIGHT_EYE, EyeIndexSet
from .landmarks import Keypoint, LandmarkPoint
from .patches import EyePatch, EyePatches, EyePatchResult, PatchStatus
from .tracker import FaceMeshEyeTracker

__all__: list[str] = [
    "BoundingBox",
    "EYE_INDEX_SETS",
    "EyeIndexSet",
    "EyePatch",
    "EyePatchResult",
    "EyePatches",
    "FaceDetector",
    "FaceMeshEyeTracker",
    "FrameCanvas",
    "Keypoint",
    "LEFT_EYE",
    "LandmarkPoint",
    "MediaPipeFaceDetector",
    "PatchStatus",
    "RIGHT_EYE",
    "eye_bounding_box",
    "eye_bounding_boxes",
]
__version__ = "0.1.0"
