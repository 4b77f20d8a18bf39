# scenecut/scene_detection/stats.py
from __future__ import annotations
from collections import Counter
from typing import Dict, Optional, Sequence

import numpy as np

from .interface import Scene, SceneBoundary, SceneDetectionStats


def compute_stats(
    total_frames: int,
    scenes: Sequence[Scene],
    raw_boundaries: Sequence[SceneBoundary],
    rejected: Sequence[SceneBoundary],
    processing_time_ms: float,
    sampling_interval: float,
    threshold: float,
    stage_timings_ms: Optional[Dict[str, float]] = None,
) -> SceneDetectionStats:
    lengths = np.array([s.duration for s in scenes], dtype=np.float64)
    confidences = np.array([s.confidence for s in scenes], dtype=np.float64)
    has_scenes = lengths.size > 0

    reasons = Counter(b.rejection_reason.value for b in rejected if b.rejection_reason is not None)

    return SceneDetectionStats(
        total_frames_analyzed=int(total_frames),
        scenes_detected=len(scenes),
        average_scene_length=round(float(lengths.mean()), 2) if has_scenes else 0.0,
        median_scene_length=round(float(np.median(lengths)), 2) if has_scenes else 0.0,
        shortest_scene=round(float(lengths.min()), 2) if has_scenes else 0.0,
        longest_scene=round(float(lengths.max()), 2) if has_scenes else 0.0,
        processing_time_ms=int(round(processing_time_ms)),
        average_confidence=round(float(confidences.mean()), 2) if has_scenes else 0.0,
        raw_boundaries_detected=len(raw_boundaries),
        boundaries_rejected=len(rejected),
        sampling_interval=sampling_interval,
        threshold=threshold,
        rejections_by_reason=dict(reasons),
        stage_timings_ms={k: round(v, 2) for k, v in (stage_timings_ms or {}).items()},
    )
