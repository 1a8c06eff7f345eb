"""Export utilities."""
from __future__ import annotations
from pathlib import Path

import numpy as np
from PIL import Image

from ..patches import EyePatch
from ..utils.io import ensure_dir


def save_image(img: Image.Image, path: Path):
    ensure_dir(path.parent)
    img.save(path)


def save_patch(patch: EyePatch, path: Path):
    save_image(Image.fromarray(np.ascontiguousarray(patch.patch)), path)
