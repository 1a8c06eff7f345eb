from __future__ import annotations

import numpy as np
import pytest

from eyepatch.canvas import FrameCanvas
from eyepatch.geometry import BoundingBox
from eyepatch.patches import EyePatch, EyePatches, EyePatchResult, PatchStatus, extract_patch


def _patch(x=0, y=0):
    return EyePatch(np.zeros((1, 1, 4), dtype=np.uint8), x, y, 1, 1)


def test_extract_patch_carries_box_metadata(frame):
    patch = extract_patch(FrameCanvas(frame), BoundingBox(30, 40, 6, 4))
    assert (patch.imagex, patch.imagey, patch.width, patch.height) == (30, 40, 6, 4)
    assert patch.patch.shape == (4, 6, 4)
    assert patch.patch[0, 0].tolist() == [30, 40, 7, 255]
    assert patch.box == BoundingBox(30, 40, 6, 4)


def test_extract_patch_rejects_degenerate_box(frame):
    with pytest.raises(ValueError):
        extract_patch(FrameCanvas(frame), BoundingBox(30, 40, 0, 4))


def test_legacy_signals_keep_null_false_distinction():
    assert EyePatchResult.not_ready().as_legacy() is None
    assert EyePatchResult.degenerate().as_legacy() is None
    assert EyePatchResult.no_face().as_legacy() is False

    patches = EyePatches(left=_patch(1), right=_patch(2))
    legacy = EyePatchResult.success(patches).as_legacy()
    assert set(legacy) == {"left", "right"}
    assert legacy["left"] is patches.left
    assert legacy["right"] is patches.right


def test_result_truthiness_follows_success():
    assert not EyePatchResult.not_ready()
    assert not EyePatchResult.no_face()
    assert not EyePatchResult.degenerate()
    result = EyePatchResult.success(EyePatches(left=_patch(), right=_patch()))
    assert result and result.ok
    assert result.status is PatchStatus.SUCCESS
