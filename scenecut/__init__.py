# scenecut/__init__.py
from .errors import (
    ErrorCode, SceneDetectionError, InvalidInputError, VideoNotReadyError,
    FrameExtractionError, ProcessingError,
)
from .frame_difference import (
    DifferenceMethod, DifferenceOptions, FrameDifference,
    calculate_difference, are_frames_identical,
)
from .frame_source import VideoHandle, EncodeOptions, FrameSource, create_source, available_sources
# scene_detection before config: config imports scene_detection.interface
from .scene_detection import (
    Scene, SceneBoundary, SceneOptions, SmoothingConfig, SceneDetectionStats,
    DetectionResult, RejectionReason, SceneDetector, detect_scenes,
)
from .config import DetectionConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "ErrorCode", "SceneDetectionError", "InvalidInputError", "VideoNotReadyError",
    "FrameExtractionError", "ProcessingError",
    "DifferenceMethod", "DifferenceOptions", "FrameDifference",
    "calculate_difference", "are_frames_identical",
    "VideoHandle", "EncodeOptions", "FrameSource", "create_source", "available_sources",
    "Scene", "SceneBoundary", "SceneOptions", "SmoothingConfig", "SceneDetectionStats",
    "DetectionResult", "RejectionReason", "SceneDetector", "detect_scenes",
    "DetectionConfig", "load_config",
]
