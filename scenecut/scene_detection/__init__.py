# scenecut/scene_detection/__init__.py
# interface must load before detector (scenecut.config imports it)
from .interface import (
    FrameSample, RejectionReason, SceneBoundary, Scene, SceneOptions,
    SmoothingConfig, SceneDetectionStats, DetectionResult,
)
from .boundaries import (
    identify_boundaries, filter_local_maxima, filter_by_prominence,
    filter_boundaries, enforce_minimum_scene_length,
)
from .grouping import group_into_scenes
from .thumbnails import generate_scene_thumbnails
from .detector import SceneDetector, detect_scenes, sampling_timestamps

__all__ = [
    "FrameSample", "RejectionReason", "SceneBoundary", "Scene", "SceneOptions",
    "SmoothingConfig", "SceneDetectionStats", "DetectionResult",
    "identify_boundaries", "filter_local_maxima", "filter_by_prominence",
    "filter_boundaries", "enforce_minimum_scene_length",
    "group_into_scenes", "generate_scene_thumbnails",
    "SceneDetector", "detect_scenes", "sampling_timestamps",
]
