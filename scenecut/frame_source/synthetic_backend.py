# scenecut/frame_source/synthetic_backend.py
from __future__ import annotations
import math
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidInputError
from .interface import EncodeOptions, FrameSource, VideoHandle
from .registry import register_source
from .utils import encode_image, validate_timestamp

Segment = Tuple[float, Tuple[int, int, int]]


@register_source("synthetic")
class SyntheticFrameSource(FrameSource):
    """
    Renders solid-colour frames from a timeline, for tests and demos.
    Parameters:
      - segments: list of (start_seconds, (r, g, b)); a frame at t takes the colour of
        the last segment starting at or before t (default: one black segment)
      - duration: float = 10.0, reported by open_video
      - width, height: frame size (default 64x36)
      - fps: float = 25.0
      - noise: float = 0.0, std-dev of per-frame gaussian noise (deterministic per timestamp)
      - seed: int = 0
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        segments = kwargs.get("segments") or [(0.0, (0, 0, 0))]
        self.segments: List[Segment] = sorted(
            ((float(s), tuple(int(c) for c in rgb)) for s, rgb in segments), key=lambda seg: seg[0]
        )
        self.duration = float(kwargs.get("duration", 10.0))
        self.width = int(kwargs.get("width", 64))
        self.height = int(kwargs.get("height", 36))
        self.fps = float(kwargs.get("fps", 25.0))
        self.noise = float(kwargs.get("noise", 0.0))
        self.seed = int(kwargs.get("seed", 0))
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError("Synthetic frames need a positive size",
                                    details={"width": self.width, "height": self.height})
        self.requested: List[float] = []

    def video(self, path: str = "synthetic://timeline") -> VideoHandle:
        return self.open_video(path)

    def open_video(self, path: str) -> VideoHandle:
        return VideoHandle(path=path, duration=self.duration, width=self.width,
                           height=self.height, fps=self.fps, ready=True)

    def colour_at(self, timestamp: float) -> Tuple[int, int, int]:
        colour = self.segments[0][1]
        for start, rgb in self.segments:
            if start <= timestamp:
                colour = rgb
            else:
                break
        return colour

    def render(self, timestamp: float) -> np.ndarray:
        frame = np.empty((self.height, self.width, 3), dtype=np.uint8)
        frame[:, :] = self.colour_at(timestamp)
        if self.noise > 0:
            rng = np.random.default_rng((self.seed, int(round(timestamp * 1000))))
            jitter = rng.normal(0.0, self.noise, size=frame.shape)
            frame = np.clip(frame.astype(np.float64) + jitter, 0, 255).astype(np.uint8)
        return frame

    async def extract_frames(self, video: VideoHandle, timestamps: Sequence[float]) -> List[np.ndarray]:
        duration = video.duration if math.isfinite(video.duration) else self.duration
        for ts in timestamps:
            validate_timestamp(ts, duration)
        self.requested.extend(float(t) for t in timestamps)
        return [self.render(ts) for ts in timestamps]

    async def extract_frame_as_encoded_image(
        self,
        video: VideoHandle,
        timestamp: float,
        options: Optional[EncodeOptions] = None,
    ) -> bytes:
        frames = await self.extract_frames(video, [timestamp])
        return encode_image(frames[0], options)
