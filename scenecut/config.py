# scenecut/config.py
# YAML-backed settings for the detection pipeline.

from __future__ import annotations
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import InvalidInputError, coerce_option
from .frame_difference import DifferenceMethod, DifferenceOptions
from .frame_source import EncodeOptions
from .scene_detection.interface import SceneOptions, SmoothingConfig


def _section(cls, data: Optional[Mapping[str, Any]], name: str):
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise InvalidInputError(f"Config section '{name}' must be a mapping", details={name: data})
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidInputError(f"Unknown keys in config section '{name}': {unknown}",
                                details={"allowed": sorted(known)})
    return cls(**dict(data))


@dataclass
class DetectionConfig:
    """
    Pipeline settings that are not per-call options.

    sampling_interval: seconds between sampled frames
    end_sample_offset: the last sample sits this far before the end of the video
    batch_size:        frames requested from the source per call; bounds peak memory
    guard_edges:       reject boundaries that would make the first/last scene too short
    """
    sampling_interval: float = 0.5
    end_sample_offset: float = 0.1
    batch_size: int = 16
    guard_edges: bool = True
    show_progress: bool = False
    difference: DifferenceOptions = field(default_factory=DifferenceOptions)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    thumbnail: EncodeOptions = field(default_factory=EncodeOptions)
    scene: SceneOptions = field(default_factory=SceneOptions)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DetectionConfig":
        data = dict(data or {})
        sections = {
            "difference": _section(DifferenceOptions, data.pop("difference", None), "difference"),
            "smoothing": _section(SmoothingConfig, data.pop("smoothing", None), "smoothing"),
            "thumbnail": _section(EncodeOptions, data.pop("thumbnail", None), "thumbnail"),
            "scene": _section(SceneOptions, data.pop("scene", None), "scene"),
        }
        known = {f.name for f in fields(cls)} - set(sections)
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInputError(f"Unknown config keys: {unknown}", details={"allowed": sorted(known)})
        return cls(**data, **sections).validate()

    def validate(self) -> "DetectionConfig":
        sampling_interval = coerce_option(self.sampling_interval, float, "sampling_interval")
        end_sample_offset = coerce_option(self.end_sample_offset, float, "end_sample_offset")
        batch_size = coerce_option(self.batch_size, int, "batch_size")
        if not sampling_interval > 0:
            raise InvalidInputError("Sampling interval must be greater than 0 seconds",
                                    details={"sampling_interval": self.sampling_interval})
        # the final sample must land strictly inside the video
        if not end_sample_offset > 0:
            raise InvalidInputError("End sample offset must be greater than 0 seconds",
                                    details={"end_sample_offset": self.end_sample_offset})
        if batch_size < 1:
            raise InvalidInputError("Batch size must be at least 1", details={"batch_size": self.batch_size})
        self.sampling_interval = sampling_interval
        self.end_sample_offset = end_sample_offset
        self.batch_size = batch_size
        self.guard_edges = bool(self.guard_edges)
        self.show_progress = bool(self.show_progress)
        self.difference = self.difference.validate()
        self.smoothing = self.smoothing.validate()
        self.thumbnail = self.thumbnail.validate()
        self.scene = self.scene.validate()
        return self

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["difference"]["method"] = DifferenceMethod.parse(self.difference.method).value
        return out


def load_config(path: str) -> DetectionConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, Mapping):
        raise InvalidInputError(f"Config file must contain a mapping: {path}")
    return DetectionConfig.from_dict(data)
