# scenecut/scene_detection/boundaries.py
# Candidate boundaries and the filter stages that prune them.
# Every stage is a pure function returning (kept, rejected).

from __future__ import annotations
import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.ndimage import maximum_filter1d

from ..frame_difference import FrameDifference
from .interface import RejectionReason, SceneBoundary, SmoothingConfig

logger = logging.getLogger(__name__)

BoundaryOutcome = Tuple[List[SceneBoundary], List[SceneBoundary]]


def reject(boundary: SceneBoundary, reason: RejectionReason) -> SceneBoundary:
    return replace(boundary, is_valid_boundary=False, rejection_reason=reason)


def identify_boundaries(differences: Sequence[FrameDifference], threshold: float) -> List[SceneBoundary]:
    """A candidate at timestamp2 of every difference strictly above `threshold`."""
    return [
        SceneBoundary(timestamp=d.timestamp2, confidence=d.difference, difference=d.difference)
        for d in differences
        if d.difference > threshold
    ]


def filter_local_maxima(boundaries: Sequence[SceneBoundary], window_size: int) -> BoundaryOutcome:
    """
    Keep a candidate only if no other candidate within `window_size` positions
    on either side has a strictly greater difference. Collapses clusters of
    detections around one transition into its peak.
    """
    if not boundaries:
        return [], []
    diffs = np.array([b.difference for b in boundaries], dtype=np.float64)
    # edge padding repeats values already inside the clipped window
    peaks = maximum_filter1d(diffs, size=2 * int(window_size) + 1, mode="nearest")

    kept, rejected = [], []
    for b, d, peak in zip(boundaries, diffs, peaks):
        if d >= peak:
            kept.append(b)
        else:
            rejected.append(reject(b, RejectionReason.NOT_LOCAL_MAXIMUM))
    return kept, rejected


def relative_prominence(boundaries: Sequence[SceneBoundary], index: int) -> float:
    """(difference - mean of immediate neighbours) / that mean; 1.0 when the mean is 0."""
    neighbours = []
    if index > 0:
        neighbours.append(boundaries[index - 1].difference)
    if index < len(boundaries) - 1:
        neighbours.append(boundaries[index + 1].difference)
    neighbour_avg = sum(neighbours) / len(neighbours) if neighbours else 0.0
    if neighbour_avg <= 0:
        return 1.0
    return (boundaries[index].difference - neighbour_avg) / neighbour_avg


def filter_by_prominence(boundaries: Sequence[SceneBoundary], prominence_threshold: float) -> BoundaryOutcome:
    """Keep candidates whose relative prominence is at least `prominence_threshold`."""
    if len(boundaries) <= 2:
        # too few candidates to compare against
        return list(boundaries), []

    kept, rejected = [], []
    for i, b in enumerate(boundaries):
        if relative_prominence(boundaries, i) >= prominence_threshold:
            kept.append(b)
        else:
            rejected.append(reject(b, RejectionReason.LOW_PROMINENCE))
    return kept, rejected


def filter_boundaries(boundaries: Sequence[SceneBoundary], config: SmoothingConfig) -> BoundaryOutcome:
    """Local-maximum filter first, then prominence on what survives."""
    if not config.enabled or len(boundaries) <= 2:
        return list(boundaries), []

    kept: List[SceneBoundary] = list(boundaries)
    rejected: List[SceneBoundary] = []
    if config.use_local_maxima:
        kept, dropped = filter_local_maxima(kept, config.window_size)
        rejected.extend(dropped)
        logger.debug(f"Local maxima: kept {len(kept)}, rejected {len(dropped)}")

    kept, dropped = filter_by_prominence(kept, config.prominence_threshold)
    rejected.extend(dropped)
    logger.debug(f"Prominence: kept {len(kept)}, rejected {len(dropped)}")
    return kept, rejected


def guard_video_edges(
    boundaries: Sequence[SceneBoundary],
    min_scene_length: float,
    video_duration: float,
) -> BoundaryOutcome:
    """Reject boundaries that would leave a first or last scene shorter than `min_scene_length`."""
    kept, rejected = [], []
    for b in boundaries:
        if b.timestamp < min_scene_length:
            rejected.append(reject(b, RejectionReason.TOO_CLOSE_TO_START))
        elif video_duration - b.timestamp < min_scene_length:
            rejected.append(reject(b, RejectionReason.TOO_CLOSE_TO_END))
        else:
            kept.append(b)
    return kept, rejected


def enforce_minimum_scene_length(
    boundaries: Sequence[SceneBoundary],
    min_scene_length: float,
    video_duration: Optional[float] = None,
) -> BoundaryOutcome:
    """
    Drop boundaries closer than `min_scene_length` to the last kept one.

    The earliest boundary is always kept; each later one is compared against
    the last *kept* boundary, never against a rejected one. When
    `video_duration` is given, boundaries too close to either end of the
    video are rejected first.
    """
    ordered = sorted(boundaries, key=lambda b: b.timestamp)
    rejected: List[SceneBoundary] = []
    if video_duration is not None:
        ordered, rejected = guard_video_edges(ordered, min_scene_length, video_duration)
    if not ordered:
        return [], rejected

    kept = [ordered[0]]
    for b in ordered[1:]:
        if b.timestamp - kept[-1].timestamp >= min_scene_length:
            kept.append(b)
        else:
            rejected.append(reject(b, RejectionReason.TOO_CLOSE_TO_PREVIOUS))
    return kept, rejected
