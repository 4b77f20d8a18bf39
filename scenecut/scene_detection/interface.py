# scenecut/scene_detection/interface.py
from __future__ import annotations
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Union

import numpy as np

from ..errors import InvalidInputError, coerce_option


@dataclass(frozen=True)
class FrameSample:
    buffer: np.ndarray
    timestamp: float


class RejectionReason(str, Enum):
    NOT_LOCAL_MAXIMUM = "not_local_maximum"
    LOW_PROMINENCE = "low_prominence"
    TOO_CLOSE_TO_PREVIOUS = "too_close_to_previous"
    TOO_CLOSE_TO_START = "too_close_to_start"
    TOO_CLOSE_TO_END = "too_close_to_end"


@dataclass(frozen=True)
class SceneBoundary:
    """
    Candidate cut at `timestamp`. Confidence equals the triggering difference.
    Filter stages never mutate a boundary; a rejected one is a copy with
    is_valid_boundary=False and the reason set.
    """
    timestamp: float
    confidence: float
    difference: float
    is_valid_boundary: bool = True
    rejection_reason: Optional[RejectionReason] = None


@dataclass(frozen=True)
class Scene:
    """Half-open span [start, end) in seconds."""
    start: float
    end: float
    duration: float
    confidence: float
    thumbnail: Optional[bytes] = None


@dataclass
class SceneOptions:
    """Per-call options. Unspecified fields keep these defaults."""
    min_scene_length: float = 3.0
    threshold: float = 0.3
    include_thumbnails: bool = True

    @classmethod
    def from_mapping(cls, options: Union[None, "SceneOptions", Mapping[str, Any]]) -> "SceneOptions":
        if options is None:
            return cls()
        if isinstance(options, SceneOptions):
            return options
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidInputError(f"Unknown scene options: {unknown}", details={"allowed": sorted(known)})
        return cls(**dict(options))

    def validate(self) -> "SceneOptions":
        """Convert fields in place; raises InvalidInputError for anything unusable."""
        min_scene_length = coerce_option(self.min_scene_length, float, "min_scene_length")
        threshold = coerce_option(self.threshold, float, "threshold")
        if not min_scene_length >= 0:
            raise InvalidInputError(
                "Minimum scene length cannot be negative",
                details={"min_scene_length": self.min_scene_length},
            )
        if not 0.0 <= threshold <= 1.0:
            raise InvalidInputError(
                "Threshold must be between 0 and 1",
                details={"threshold": self.threshold},
            )
        self.min_scene_length = min_scene_length
        self.threshold = threshold
        self.include_thumbnails = bool(self.include_thumbnails)
        return self


@dataclass
class SmoothingConfig:
    """
    False-positive suppression.
      - window_size: candidates on each side inspected by the local-maximum test
      - prominence_threshold: 0.2 means a boundary must be 20% above its neighbours' mean
    """
    enabled: bool = True
    window_size: int = 3
    use_local_maxima: bool = True
    prominence_threshold: float = 0.2

    def validate(self) -> "SmoothingConfig":
        window_size = coerce_option(self.window_size, float, "window_size")
        prominence = coerce_option(self.prominence_threshold, float, "prominence_threshold")
        if not window_size.is_integer() or window_size < 1:
            raise InvalidInputError("Smoothing window size must be an integer >= 1",
                                    details={"window_size": self.window_size})
        if not 0.0 <= prominence <= 1.0:
            raise InvalidInputError("Prominence threshold must be between 0 and 1",
                                    details={"prominence_threshold": self.prominence_threshold})
        self.window_size = int(window_size)
        self.prominence_threshold = prominence
        self.enabled = bool(self.enabled)
        self.use_local_maxima = bool(self.use_local_maxima)
        return self


@dataclass(frozen=True)
class SceneDetectionStats:
    """Summary of one detection run. Lengths in seconds, times in milliseconds."""
    total_frames_analyzed: int
    scenes_detected: int
    average_scene_length: float
    median_scene_length: float
    shortest_scene: float
    longest_scene: float
    processing_time_ms: int
    average_confidence: float
    raw_boundaries_detected: int
    boundaries_rejected: int
    sampling_interval: float
    threshold: float
    rejections_by_reason: Dict[str, int] = field(default_factory=dict)
    stage_timings_ms: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DetectionResult(NamedTuple):
    scenes: List[Scene]
    stats: SceneDetectionStats
