# scenecut/scene_detection/thumbnails.py
from __future__ import annotations
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..frame_source import EncodeOptions, FrameSource, VideoHandle
from .interface import Scene

logger = logging.getLogger(__name__)


async def generate_scene_thumbnails(
    video: VideoHandle,
    scenes: Sequence[Scene],
    frame_source: FrameSource,
    options: Optional[EncodeOptions] = None,
) -> List[Scene]:
    """
    Attach an encoded frame taken at each scene's midpoint.
    A failure for one scene is logged and that scene is returned without a
    thumbnail; the remaining scenes are still processed.
    """
    opts = options or EncodeOptions()
    out: List[Scene] = []
    for scene in scenes:
        midpoint = (scene.start + scene.end) / 2
        try:
            thumbnail = await frame_source.extract_frame_as_encoded_image(video, midpoint, opts)
        except Exception as e:
            logger.warning(f"Failed to generate thumbnail for scene at {scene.start:.2f}s: {e}")
            out.append(scene)
            continue
        out.append(replace(scene, thumbnail=thumbnail))
    return out
