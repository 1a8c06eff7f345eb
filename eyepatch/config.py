from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel


class DetectorConfig(BaseModel):
    backend: Literal["solutions", "tasks"] = "solutions"
    # model asset for the tasks backend (face_landmarker.task)
    solution_path: Optional[str] = None
    static_image_mode: bool = False
    max_num_faces: int = 1
    refine_landmarks: bool = False
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


class OverlayConfig(BaseModel):
    color: Tuple[int, int, int] = (0x32, 0xEE, 0xDB)
    radius: int = 1


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_format: bool = True


class Config(BaseModel):
    detector: DetectorConfig = DetectorConfig()
    overlay: OverlayConfig = OverlayConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: Path | None = None) -> Config:
    load_dotenv()
    path = path or Path(__file__).with_name("config.yaml")
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
        cfg = Config(**data)
    else:
        cfg = Config()

    # environment overrides
    backend = os.getenv("EYEPATCH_DETECTOR_BACKEND")
    if backend:
        cfg.detector.backend = backend
    solution_path = os.getenv("EYEPATCH_SOLUTION_PATH")
    if solution_path:
        cfg.detector.solution_path = solution_path
    level = os.getenv("EYEPATCH_LOG_LEVEL")
    if level:
        cfg.logging.level = level.upper()
    return cfg
