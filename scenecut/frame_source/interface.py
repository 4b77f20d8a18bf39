# scenecut/frame_source/interface.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..errors import InvalidInputError, coerce_option


@dataclass(frozen=True)
class VideoHandle:
    """An opened video. `duration` is nan while the container has not reported it."""
    path: str
    duration: float
    width: int = 0
    height: int = 0
    fps: float = 0.0
    ready: bool = True


@dataclass(frozen=True)
class EncodeOptions:
    """Compressed-image settings; quality is 0..1 and mapped to the encoder's 0..100 scale."""
    format: str = "jpeg"
    quality: float = 0.8

    def validate(self) -> "EncodeOptions":
        """Return a normalized copy: lower-case format, float quality."""
        fmt = str(self.format).lower()
        quality = coerce_option(self.quality, float, "quality")
        if fmt not in ("jpeg", "jpg", "png", "webp"):
            raise InvalidInputError(f"Unsupported image format: {self.format}", details={"format": self.format})
        if not (0.0 <= quality <= 1.0):
            raise InvalidInputError("Encode quality must be in [0, 1]", details={"quality": self.quality})
        return replace(self, format=fmt, quality=quality)


class FrameSource(ABC):
    """
    Decoder collaborator: turns a video and a list of timestamps into RGB pixel buffers.
    Backends receive free parameters through kwargs so the CLI can inject them.
    """
    name: str = "abstract"

    def __init__(self, **kwargs: Any) -> None:
        self.params: Dict[str, Any] = kwargs

    @abstractmethod
    def open_video(self, path: str) -> VideoHandle:
        raise NotImplementedError

    @abstractmethod
    async def extract_frames(self, video: VideoHandle, timestamps: Sequence[float]) -> List[np.ndarray]:
        """
        One buffer per timestamp, same length and order as `timestamps`.
        Raises FrameExtractionError if any timestamp is unreachable.
        """
        raise NotImplementedError

    @abstractmethod
    async def extract_frame_as_encoded_image(
        self,
        video: VideoHandle,
        timestamp: float,
        options: Optional[EncodeOptions] = None,
    ) -> bytes:
        raise NotImplementedError

    def close(self) -> None:
        """Override if the backend holds decoder handles."""
        pass
