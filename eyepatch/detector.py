# SPDX-License-Identifier: Apache-2.0
"""Face landmark detector adapters.

A detector owns one backend handle. The handle is created lazily by
:meth:`FaceDetector.initialize` and reused for every later call; the
detector exposes no way to rebuild it.
"""

from __future__ import annotations

import abc
import asyncio
import os
import threading
import time
from typing import Any, List, Optional

import numpy as np

from .config import DetectorConfig
from .errors import DetectorBackendError, DetectorNotInitializedError
from .landmarks import Face, Keypoint, LandmarkSequence, to_landmark_sequence
from .logging_utils import get_logger

try:
    import mediapipe as mp
    MEDIAPIPE_AVAILABLE = True
except ImportError:  # pragma: no cover - handled at runtime
    mp = None
    MEDIAPIPE_AVAILABLE = False

log = get_logger(__name__)


class FaceDetector(abc.ABC):
    """Base class for face landmark detectors."""

    def __init__(self) -> None:
        self._handle: Any = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def handle(self) -> Any:
        return self._handle

    async def initialize(self) -> Any:
        """Create the backend handle once and return it."""
        if self._initialized:
            return self._handle

        handle = await self._create_handle()
        self._handle = handle
        self._initialized = True
        log.info("detector_initialized", detector=type(self).__name__)
        return handle

    async def estimate_faces(self, frame: np.ndarray) -> List[Face]:
        """Run one inference on ``frame`` and return every detected face."""
        if not self._initialized:
            raise DetectorNotInitializedError(
                f"{type(self).__name__}.initialize() must be awaited before inference"
            )
        return await self._estimate(self._handle, frame)

    async def detect_landmarks(self, frame: np.ndarray) -> Optional[LandmarkSequence]:
        """Landmarks of the first detected face, or ``None`` when there is none."""
        faces = await self.estimate_faces(frame)
        if not faces:
            return None
        return to_landmark_sequence(faces[0].keypoints)

    @abc.abstractmethod
    async def _create_handle(self) -> Any:
        ...

    @abc.abstractmethod
    async def _estimate(self, handle: Any, frame: np.ndarray) -> List[Face]:
        ...


class MediaPipeFaceDetector(FaceDetector):
    """MediaPipe Face Mesh detector.

    Two backends are supported:

    * ``solutions`` - the classic ``mp.solutions.face_mesh.FaceMesh`` graph,
      which bundles its own model;
    * ``tasks`` - ``FaceLandmarker`` from ``mediapipe.tasks``, built from the
      model asset at ``config.solution_path``.

    Frames are RGB ``uint8`` arrays. Landmarks come back in pixels.
    """

    def __init__(self, config: DetectorConfig | None = None):
        super().__init__()
        self.config = config or DetectorConfig()
        self._last_timestamp_ms = 0
        # one inference at a time per graph
        self._lock = threading.Lock()

    async def _create_handle(self) -> Any:
        builders = {"solutions": self._build_solutions, "tasks": self._build_tasks}
        backend = self.config.backend
        if backend not in builders:
            raise ValueError(f"Unknown detector backend: {backend}")
        if mp is None:
            raise ImportError("mediapipe is required for face detection: pip install mediapipe")
        return await asyncio.to_thread(builders[backend])

    def _build_solutions(self) -> Any:
        if not hasattr(mp, "solutions"):
            raise DetectorBackendError(
                "This mediapipe build has no 'solutions' package; set detector.backend to 'tasks' "
                "(or EYEPATCH_DETECTOR_BACKEND=tasks) and point EYEPATCH_SOLUTION_PATH at a "
                "face_landmarker.task model"
            )
        return mp.solutions.face_mesh.FaceMesh(
            static_image_mode=self.config.static_image_mode,
            max_num_faces=self.config.max_num_faces,
            refine_landmarks=self.config.refine_landmarks,
            min_detection_confidence=self.config.min_detection_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )

    def _build_tasks(self) -> Any:
        model_path = self.config.solution_path
        if not model_path:
            raise DetectorBackendError(
                "The tasks backend needs a face landmarker model; set detector.solution_path "
                "or EYEPATCH_SOLUTION_PATH"
            )
        if not os.path.exists(model_path):
            raise FileNotFoundError(f"Face landmarker task model not found: {model_path}")

        BaseOptions, face_landmarker, VisionTaskRunningMode = self._tasks_api()
        running_mode = (
            VisionTaskRunningMode.IMAGE
            if self.config.static_image_mode
            else VisionTaskRunningMode.VIDEO
        )
        options = face_landmarker.FaceLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=model_path),
            running_mode=running_mode,
            num_faces=self.config.max_num_faces,
            min_face_detection_confidence=self.config.min_detection_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )
        return face_landmarker.FaceLandmarker.create_from_options(options)

    @staticmethod
    def _tasks_api():
        from mediapipe.tasks.python.core.base_options import BaseOptions
        from mediapipe.tasks.python.vision import face_landmarker
        from mediapipe.tasks.python.vision.core.vision_task_running_mode import (
            VisionTaskRunningMode,
        )

        return BaseOptions, face_landmarker, VisionTaskRunningMode

    async def _estimate(self, handle: Any, frame: np.ndarray) -> List[Face]:
        return await asyncio.to_thread(self._run, handle, frame)

    def _run(self, handle: Any, frame: np.ndarray) -> List[Face]:
        with self._lock:
            return self._run_locked(handle, frame)

    def _run_locked(self, handle: Any, frame: np.ndarray) -> List[Face]:
        frame = np.ascontiguousarray(frame)
        h, w = frame.shape[:2]

        if self.config.backend == "solutions":
            results = handle.process(frame)
            faces = results.multi_face_landmarks or []
            return [self._to_face(f.landmark, w, h) for f in faces]

        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame)
        if self.config.static_image_mode:
            results = handle.detect(mp_image)
        else:
            results = handle.detect_for_video(mp_image, self._next_timestamp_ms())
        return [self._to_face(f, w, h) for f in results.face_landmarks or []]

    def _next_timestamp_ms(self) -> int:
        # VIDEO mode rejects timestamps that do not increase
        now = int(time.monotonic() * 1000)
        self._last_timestamp_ms = max(now, self._last_timestamp_ms + 1)
        return self._last_timestamp_ms

    @staticmethod
    def _to_face(landmarks: Any, width: int, height: int) -> Face:
        return Face(
            keypoints=[
                Keypoint(lm.x * width, lm.y * height, lm.z * width)
                for lm in landmarks
            ]
        )

    def close(self) -> None:
        """Release the backend graph; the detector cannot be used afterwards."""
        if self._handle is not None and hasattr(self._handle, "close"):
            self._handle.close()
