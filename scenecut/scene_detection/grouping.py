# scenecut/scene_detection/grouping.py
from __future__ import annotations
from typing import List, Sequence

from .interface import Scene, SceneBoundary


def group_into_scenes(boundaries: Sequence[SceneBoundary], video_duration: float) -> List[Scene]:
    """
    Turn kept boundaries into contiguous scenes covering [0, video_duration).

    - no boundaries: one scene over the whole video, confidence 1.0
    - first scene [0, b0) takes b0's confidence
    - middle scene [bi, bi+1) takes the confidence of bi, the boundary that starts it
    - last scene [b_last, duration) has confidence 1.0
    """
    if not boundaries:
        return [Scene(start=0.0, end=video_duration, duration=video_duration, confidence=1.0)]

    ordered = sorted(boundaries, key=lambda b: b.timestamp)
    first = ordered[0]
    scenes = [Scene(start=0.0, end=first.timestamp, duration=first.timestamp, confidence=first.confidence)]

    for cur, nxt in zip(ordered[:-1], ordered[1:]):
        scenes.append(Scene(
            start=cur.timestamp,
            end=nxt.timestamp,
            duration=nxt.timestamp - cur.timestamp,
            confidence=cur.confidence,
        ))

    last = ordered[-1]
    scenes.append(Scene(
        start=last.timestamp,
        end=video_duration,
        duration=video_duration - last.timestamp,
        confidence=1.0,
    ))
    return scenes
