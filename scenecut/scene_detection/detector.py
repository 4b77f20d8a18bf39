# scenecut/scene_detection/detector.py
"""
Scene detection pipeline.

sample frames every `sampling_interval` seconds
  -> pairwise frame differences
  -> candidate boundaries (difference > threshold)
  -> local-maximum + prominence filtering
  -> minimum scene length
  -> contiguous scenes over [0, duration)
  -> optional midpoint thumbnails

Frames are requested from the FrameSource in chronological batches, one
await at a time. Each buffer is dropped as soon as it has been compared with
its successor, so at most `batch_size + 1` decoded frames are alive.
"""
from __future__ import annotations
import logging
import math
import time
from typing import Any, Dict, List, Mapping, Optional, Union

from tqdm import tqdm

from ..config import DetectionConfig
from ..errors import InvalidInputError, ProcessingError, SceneDetectionError, VideoNotReadyError
from ..frame_difference import FrameDifference, calculate_difference
from ..frame_source import FrameSource, VideoHandle
from .boundaries import enforce_minimum_scene_length, filter_boundaries, identify_boundaries
from .grouping import group_into_scenes
from .interface import DetectionResult, FrameSample, Scene, SceneDetectionStats, SceneOptions
from .stats import compute_stats
from .thumbnails import generate_scene_thumbnails

logger = logging.getLogger(__name__)

OptionsLike = Union[None, SceneOptions, Mapping[str, Any]]


def sampling_timestamps(duration: float, interval: float, end_offset: float = 0.1) -> List[float]:
    """
    0, interval, 2*interval, ... below `duration`, plus a final sample at
    `duration - end_offset` when the regular grid stops short of it. Every
    timestamp stays strictly below `duration`.
    """
    timestamps = []
    i = 0
    while i * interval < duration:
        timestamps.append(round(i * interval, 6))
        i += 1
    last = duration - end_offset
    if timestamps and timestamps[-1] < last < duration:
        timestamps.append(last)
    return timestamps


def validate_video(video: Optional[VideoHandle]) -> None:
    if video is None:
        raise InvalidInputError("Video is required for scene detection")
    if not getattr(video, "ready", True):
        raise VideoNotReadyError(
            "Video metadata not loaded. Ensure the video is decodable before detecting scenes.",
            details={"path": getattr(video, "path", None)},
        )
    raw_duration = getattr(video, "duration", None)
    try:
        duration = float(raw_duration)
    except (TypeError, ValueError):
        duration = math.nan
    if not math.isfinite(duration):
        raise VideoNotReadyError(
            "Video duration is unknown. Cannot detect scenes.",
            details={"duration": raw_duration},
        )
    if duration <= 0:
        raise InvalidInputError(
            "Video has invalid duration. Cannot detect scenes.",
            details={"duration": duration},
        )


async def compute_frame_differences(
    video: VideoHandle,
    frame_source: FrameSource,
    timestamps: List[float],
    config: DetectionConfig,
) -> List[FrameDifference]:
    """Compare every sampled frame with its predecessor, releasing buffers as we go."""
    differences: List[FrameDifference] = []
    previous: Optional[FrameSample] = None
    batch_size = int(config.batch_size)

    with tqdm(total=len(timestamps), desc="Sampling frames", disable=not config.show_progress) as bar:
        for start in range(0, len(timestamps), batch_size):
            batch = timestamps[start:start + batch_size]
            buffers = await frame_source.extract_frames(video, batch)
            if len(buffers) != len(batch):
                raise ProcessingError(
                    "Frame source returned the wrong number of frames",
                    details={"requested": len(batch), "returned": len(buffers)},
                )
            buffers = list(buffers)
            buffers.reverse()
            for ts in batch:
                current = FrameSample(buffer=buffers.pop(), timestamp=ts)
                if previous is not None:
                    differences.append(calculate_difference(
                        previous.buffer, current.buffer,
                        previous.timestamp, current.timestamp,
                        config.difference,
                    ))
                previous = current
            bar.update(len(batch))
    return differences


async def detect_scenes(
    video: VideoHandle,
    frame_source: FrameSource,
    options: OptionsLike = None,
    config: Optional[DetectionConfig] = None,
) -> DetectionResult:
    """
    Run the full pipeline and return (scenes, stats).

    Validation problems raise InvalidInputError / VideoNotReadyError before any
    frame is requested. Errors from scenecut itself propagate unchanged;
    anything else is wrapped in ProcessingError.
    """
    started = time.perf_counter()
    validate_video(video)
    opts = SceneOptions.from_mapping(options).validate()
    cfg = (config or DetectionConfig()).validate()
    duration = float(video.duration)
    timings: Dict[str, float] = {}

    def _lap(stage: str, t0: float) -> float:
        now = time.perf_counter()
        timings[stage] = (now - t0) * 1000.0
        return now

    try:
        t0 = time.perf_counter()
        timestamps = sampling_timestamps(duration, cfg.sampling_interval, cfg.end_sample_offset)
        logger.info(f"Sampling {len(timestamps)} frames from {video.path} ({duration:.2f}s)")
        differences = await compute_frame_differences(video, frame_source, timestamps, cfg)
        t0 = _lap("sampling", t0)

        raw = identify_boundaries(differences, opts.threshold)
        filtered, rejected = filter_boundaries(raw, cfg.smoothing)
        valid, too_close = enforce_minimum_scene_length(
            filtered,
            opts.min_scene_length,
            duration if cfg.guard_edges else None,
        )
        rejected = rejected + too_close
        logger.debug(f"Boundaries: {len(raw)} candidates, {len(valid)} kept, {len(rejected)} rejected")
        t0 = _lap("filtering", t0)

        scenes: List[Scene] = group_into_scenes(valid, duration)
        t0 = _lap("grouping", t0)

        if opts.include_thumbnails:
            scenes = await generate_scene_thumbnails(video, scenes, frame_source, cfg.thumbnail)
            _lap("thumbnails", t0)
    except SceneDetectionError:
        raise
    except Exception as e:
        raise ProcessingError(f"Scene detection failed: {e}", cause=e) from e

    stats = compute_stats(
        total_frames=len(timestamps),
        scenes=scenes,
        raw_boundaries=raw,
        rejected=rejected,
        processing_time_ms=(time.perf_counter() - started) * 1000.0,
        sampling_interval=cfg.sampling_interval,
        threshold=opts.threshold,
        stage_timings_ms=timings,
    )
    logger.info(f"Detected {len(scenes)} scenes in {stats.processing_time_ms} ms")
    return DetectionResult(scenes=scenes, stats=stats)


class SceneDetector:
    """
    Convenience wrapper binding a FrameSource and a DetectionConfig.

    detect() returns the scenes and remembers the stats of the latest
    successful call for get_last_stats(). Instances share no state.
    """

    def __init__(self, frame_source: FrameSource, config: Optional[DetectionConfig] = None) -> None:
        self.frame_source = frame_source
        self.config = (config or DetectionConfig()).validate()
        self._last_stats: Optional[SceneDetectionStats] = None

    async def detect_with_stats(self, video: VideoHandle, options: OptionsLike = None) -> DetectionResult:
        result = await detect_scenes(video, self.frame_source, options, self.config)
        self._last_stats = result.stats
        return result

    async def detect(self, video: VideoHandle, options: OptionsLike = None) -> List[Scene]:
        result = await self.detect_with_stats(video, options)
        return result.scenes

    def get_last_stats(self) -> Optional[SceneDetectionStats]:
        return self._last_stats
