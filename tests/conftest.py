from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
import pytest

from eyepatch.canvas import FrameCanvas
from eyepatch.detector import FaceDetector
from eyepatch.indices import FACE_MESH_NUM_LANDMARKS, LEFT_EYE, RIGHT_EYE
from eyepatch.landmarks import Face, Keypoint

FRAME_HEIGHT = 300
FRAME_WIDTH = 400

# Eyelid arc coordinates, in index-table order.
LEFT_UPPER = [(210.4, 150.6), (215.0, 148.0), (220.0, 146.5), (225.0, 147.0),
              (230.0, 148.0), (235.0, 149.0), (240.2, 151.0)]
LEFT_LOWER = [(250.5, 155.0), (246.0, 158.0), (240.0, 160.2), (235.0, 160.49),
              (230.0, 160.0), (225.0, 159.0), (220.0, 158.0), (215.0, 156.0), (212.0, 154.0)]
RIGHT_UPPER = [(100.2, 150.0), (105.0, 147.0), (110.0, 145.5), (115.0, 146.0),
               (120.0, 147.0), (125.0, 148.0), (130.0, 150.0)]
RIGHT_LOWER = [(101.0, 153.0), (104.0, 156.0), (110.0, 158.0), (115.0, 158.5),
               (120.0, 158.0), (125.0, 157.0), (130.0, 156.0), (135.0, 154.0), (139.7, 152.0)]

# Hand-computed boxes for the coordinates above: (x, y, width, height).
LEFT_BOX = (210, 147, 41, 13)
RIGHT_BOX = (100, 146, 40, 13)


def make_landmarks(overrides: Dict[int, Tuple[float, float]] | None = None) -> List[Tuple[float, float]]:
    """468 landmark (x, y) pairs with the eye arcs placed at known spots."""
    points = [(200.0, 200.0)] * FACE_MESH_NUM_LANDMARKS
    for indices, coords in (
        (LEFT_EYE.upper, LEFT_UPPER),
        (LEFT_EYE.lower, LEFT_LOWER),
        (RIGHT_EYE.upper, RIGHT_UPPER),
        (RIGHT_EYE.lower, RIGHT_LOWER),
    ):
        for idx, xy in zip(indices, coords):
            points[idx] = xy
    for idx, xy in (overrides or {}).items():
        points[idx] = xy
    return points


def make_face(points: Sequence[Tuple[float, float]]) -> Face:
    return Face(keypoints=[Keypoint(x, y) for x, y in points])


def make_frame(height: int = FRAME_HEIGHT, width: int = FRAME_WIDTH) -> np.ndarray:
    """RGB frame whose pixel at (y, x) is (x % 256, y % 256, 7)."""
    ys, xs = np.mgrid[0:height, 0:width]
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[..., 0] = xs % 256
    frame[..., 1] = ys % 256
    frame[..., 2] = 7
    return frame


class StubDetector(FaceDetector):
    """Detector that replays canned faces and counts calls."""

    def __init__(self, *responses: List[Face]):
        super().__init__()
        self.responses = list(responses) or [[]]
        self.create_calls = 0
        self.estimate_calls = 0

    async def _create_handle(self) -> Any:
        self.create_calls += 1
        return object()

    async def _estimate(self, handle: Any, frame: np.ndarray) -> List[Face]:
        self.estimate_calls += 1
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class CountingCanvas(FrameCanvas):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads: List[Tuple[int, int, int, int]] = []

    def get_image_data(self, x, y, width, height):
        self.reads.append((x, y, width, height))
        return super().get_image_data(x, y, width, height)


@pytest.fixture
def landmarks() -> List[Tuple[float, float]]:
    return make_landmarks()


@pytest.fixture
def frame() -> np.ndarray:
    return make_frame()


@pytest.fixture
def canvas(frame) -> CountingCanvas:
    return CountingCanvas(frame)
