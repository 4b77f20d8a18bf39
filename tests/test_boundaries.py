"""Boundary identification, filtering, minimum length and grouping."""

import pytest

from scenecut.frame_difference import DifferenceMethod, FrameDifference
from scenecut.scene_detection import (
    RejectionReason,
    SmoothingConfig,
    enforce_minimum_scene_length,
    filter_boundaries,
    filter_by_prominence,
    filter_local_maxima,
    group_into_scenes,
    identify_boundaries,
)

from conftest import boundary


def diffs(values, step=0.5):
    return [
        FrameDifference(difference=v, timestamp1=i * step, timestamp2=(i + 1) * step, method=DifferenceMethod.PIXEL)
        for i, v in enumerate(values)
    ]


# --- identification ---
def test_identify_uses_strict_threshold():
    found = identify_boundaries(diffs([0.1, 0.3, 0.31, 0.9]), threshold=0.3)
    assert [b.timestamp for b in found] == [1.5, 2.0]
    assert [b.confidence for b in found] == [0.31, 0.9]
    assert all(b.is_valid_boundary and b.rejection_reason is None for b in found)


def test_identify_threshold_bounds():
    values = [0.0, 0.5, 1.0]
    assert len(identify_boundaries(diffs(values), 0.0)) == 2
    assert identify_boundaries(diffs(values), 1.0) == []


# --- local maxima ---
def test_spike_next_to_higher_spike_is_suppressed():
    candidates = [boundary(2.0, 0.95), boundary(2.5, 0.8), boundary(6.0, 0.85)]
    kept, rejected = filter_local_maxima(candidates, window_size=1)
    assert [b.timestamp for b in kept] == [2.0, 6.0]
    assert len(rejected) == 1
    assert rejected[0].timestamp == 2.5
    assert rejected[0].rejection_reason is RejectionReason.NOT_LOCAL_MAXIMUM
    assert rejected[0].is_valid_boundary is False
    # the input is left untouched
    assert candidates[1].is_valid_boundary is True


def test_local_maxima_single_neighbour_window():
    candidates = [boundary(1.0, 0.5), boundary(2.0, 0.6), boundary(3.0, 0.9), boundary(4.0, 0.7)]
    kept, _ = filter_local_maxima(candidates, window_size=1)
    assert [b.timestamp for b in kept] == [3.0]
    kept, _ = filter_local_maxima(candidates[:2] + [boundary(9.0, 0.4)], window_size=1)
    assert [b.timestamp for b in kept] == [2.0]


def test_local_maxima_keeps_ties():
    candidates = [boundary(1.0, 0.7), boundary(2.0, 0.7), boundary(3.0, 0.7)]
    kept, rejected = filter_local_maxima(candidates, window_size=3)
    assert len(kept) == 3 and rejected == []


# --- prominence ---
def test_prominence_filter():
    candidates = [boundary(1.0, 0.5), boundary(3.0, 0.9), boundary(5.0, 0.5), boundary(7.0, 0.55)]
    kept, rejected = filter_by_prominence(candidates, 0.2)
    assert [b.timestamp for b in kept] == [3.0]
    assert {b.timestamp for b in rejected} == {1.0, 5.0, 7.0}
    assert all(b.rejection_reason is RejectionReason.LOW_PROMINENCE for b in rejected)


def test_prominence_needs_more_than_two_candidates():
    candidates = [boundary(1.0, 0.5), boundary(3.0, 0.9)]
    kept, rejected = filter_by_prominence(candidates, 0.2)
    assert kept == candidates and rejected == []


def test_zero_neighbour_average_counts_as_prominent():
    candidates = [boundary(1.0, 0.0), boundary(3.0, 0.4), boundary(5.0, 0.0)]
    kept, _ = filter_by_prominence(candidates, 1.0)
    assert 3.0 in [b.timestamp for b in kept]


# --- combined filtering ---
def test_filtering_skipped_for_two_or_fewer_candidates():
    candidates = [boundary(1.0, 0.95), boundary(1.5, 0.4)]
    kept, rejected = filter_boundaries(candidates, SmoothingConfig())
    assert kept == candidates and rejected == []


def test_filtering_disabled():
    candidates = [boundary(1.0, 0.9), boundary(1.5, 0.4), boundary(2.0, 0.5)]
    kept, rejected = filter_boundaries(candidates, SmoothingConfig(enabled=False))
    assert kept == candidates and rejected == []


def test_local_maxima_runs_before_prominence():
    candidates = [
        boundary(1.0, 0.9), boundary(1.5, 0.3),
        boundary(6.0, 0.5), boundary(6.5, 0.35),
        boundary(9.0, 0.95),
    ]
    kept, rejected = filter_boundaries(candidates, SmoothingConfig(window_size=1, prominence_threshold=0.2))
    reasons = {b.timestamp: b.rejection_reason for b in rejected}
    assert reasons[1.5] is RejectionReason.NOT_LOCAL_MAXIMUM
    assert reasons[6.5] is RejectionReason.NOT_LOCAL_MAXIMUM
    # survivors [0.9, 0.5, 0.95]: 0.5 sits below its neighbours' mean
    assert reasons[6.0] is RejectionReason.LOW_PROMINENCE
    assert [b.timestamp for b in kept] == [1.0, 9.0]
    assert len(kept) + len(rejected) == len(candidates)


def test_prominence_without_local_maxima():
    candidates = [boundary(1.0, 0.5), boundary(3.0, 0.9), boundary(5.0, 0.5), boundary(7.0, 0.55)]
    kept, _ = filter_boundaries(candidates, SmoothingConfig(use_local_maxima=False))
    assert [b.timestamp for b in kept] == [3.0]


# --- minimum scene length ---
def test_second_cut_too_close_is_rejected():
    kept, rejected = enforce_minimum_scene_length([boundary(5.0, 0.5), boundary(4.0, 1.0)], 3.0)
    assert [b.timestamp for b in kept] == [4.0]
    assert rejected[0].timestamp == 5.0
    assert rejected[0].rejection_reason is RejectionReason.TOO_CLOSE_TO_PREVIOUS


def test_reference_point_is_last_kept_boundary():
    # 4.0 is rejected against 2.0, 5.5 is compared with 2.0 again (not with 4.0)
    candidates = [boundary(2.0, 0.9), boundary(4.0, 0.9), boundary(5.5, 0.9), boundary(7.0, 0.9)]
    kept, rejected = enforce_minimum_scene_length(candidates, 3.0)
    assert [b.timestamp for b in kept] == [2.0, 5.5]
    assert [b.timestamp for b in rejected] == [4.0, 7.0]


def test_first_boundary_always_kept_without_edge_guard():
    kept, _ = enforce_minimum_scene_length([boundary(0.5, 0.9)], 3.0)
    assert [b.timestamp for b in kept] == [0.5]


def test_edge_guard_rejects_short_first_and_last_scenes():
    candidates = [boundary(1.0, 0.9), boundary(5.0, 0.9), boundary(9.5, 0.9)]
    kept, rejected = enforce_minimum_scene_length(candidates, 3.0, video_duration=10.0)
    assert [b.timestamp for b in kept] == [5.0]
    reasons = {b.timestamp: b.rejection_reason for b in rejected}
    assert reasons == {1.0: RejectionReason.TOO_CLOSE_TO_START, 9.5: RejectionReason.TOO_CLOSE_TO_END}


def test_zero_minimum_keeps_everything():
    candidates = [boundary(0.5, 0.9), boundary(1.0, 0.9), boundary(1.5, 0.9)]
    kept, rejected = enforce_minimum_scene_length(candidates, 0.0, video_duration=2.0)
    assert len(kept) == 3 and rejected == []


def test_empty_input():
    assert enforce_minimum_scene_length([], 3.0) == ([], [])
    assert filter_local_maxima([], 3) == ([], [])


# --- grouping ---
def test_no_boundaries_is_one_scene():
    scenes = group_into_scenes([], 10.0)
    assert len(scenes) == 1
    assert (scenes[0].start, scenes[0].end, scenes[0].duration, scenes[0].confidence) == (0.0, 10.0, 10.0, 1.0)
    assert scenes[0].thumbnail is None


def test_grouping_spans_and_confidence():
    scenes = group_into_scenes([boundary(6.0, 0.7), boundary(3.0, 0.5)], 10.0)
    assert [(s.start, s.end) for s in scenes] == [(0.0, 3.0), (3.0, 6.0), (6.0, 10.0)]
    assert [s.duration for s in scenes] == [3.0, 3.0, 4.0]
    # first scene: its closing boundary; middle: the boundary that opens it; last: 1.0
    assert [s.confidence for s in scenes] == [0.5, 0.5, 1.0]


def test_grouping_is_contiguous():
    bounds = [boundary(t, 0.6) for t in (2.5, 4.0, 7.5, 9.0)]
    scenes = group_into_scenes(bounds, 12.3)
    assert scenes[0].start == 0.0 and scenes[-1].end == 12.3
    for a, b in zip(scenes, scenes[1:]):
        assert a.end == b.start
        assert a.start < a.end
    assert sum(s.duration for s in scenes) == pytest.approx(12.3)
