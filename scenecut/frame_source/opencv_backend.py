# scenecut/frame_source/opencv_backend.py
from __future__ import annotations
import asyncio
import logging
import math
from typing import List, Optional, Sequence

import cv2
import numpy as np

from ..errors import ErrorCode, FrameExtractionError, VideoNotReadyError
from .interface import EncodeOptions, FrameSource, VideoHandle
from .registry import register_source
from .utils import encode_image, validate_timestamp

logger = logging.getLogger(__name__)


@register_source("opencv")
class OpenCVFrameSource(FrameSource):
    """
    Decode frames from a video file with cv2.VideoCapture.
    Parameters:
      - max_side: optional int, shrink decoded frames so the longest side fits (default: keep size)
    Seeks by frame index round(t * fps), clamped to the last frame. If a read fails
    the frame just before it is used instead.
    """

    def open_video(self, path: str) -> VideoHandle:
        cap = cv2.VideoCapture(path)
        try:
            if not cap.isOpened():
                return VideoHandle(path=path, duration=float("nan"), ready=False)
            fps = cap.get(cv2.CAP_PROP_FPS) or 0.0
            total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT)) or 0
            width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)) or 0
            height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)) or 0
        finally:
            cap.release()

        duration = total_frames / fps if fps > 1e-6 and total_frames > 0 else float("nan")
        ready = width > 0 and height > 0
        logger.debug(f"Opened {path}: {width}x{height} @ {fps:.2f} fps, {total_frames} frames")
        return VideoHandle(path=path, duration=duration, width=width, height=height, fps=fps, ready=ready)

    async def extract_frames(self, video: VideoHandle, timestamps: Sequence[float]) -> List[np.ndarray]:
        if not timestamps:
            return []
        return await asyncio.to_thread(self._read_frames, video, list(timestamps))

    async def extract_frame_as_encoded_image(
        self,
        video: VideoHandle,
        timestamp: float,
        options: Optional[EncodeOptions] = None,
    ) -> bytes:
        frames = await self.extract_frames(video, [timestamp])
        return encode_image(frames[0], options)

    # --- decoding ---
    def _read_frames(self, video: VideoHandle, timestamps: List[float]) -> List[np.ndarray]:
        if not video.ready or not math.isfinite(video.duration) or video.fps <= 0:
            raise VideoNotReadyError(
                "Video metadata not loaded. Cannot extract frames.",
                details={"path": video.path, "duration": video.duration, "fps": video.fps},
            )
        for ts in timestamps:
            validate_timestamp(ts, video.duration)

        cap = cv2.VideoCapture(video.path)
        if not cap.isOpened():
            raise VideoNotReadyError(f"Cannot open video: {video.path}")

        total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT)) or 1
        # Decode in chronological order, hand back in request order
        order = sorted(range(len(timestamps)), key=lambda i: timestamps[i])
        frames: List[Optional[np.ndarray]] = [None] * len(timestamps)
        try:
            for i in order:
                ts = timestamps[i]
                frame_idx = min(int(round(ts * video.fps)), total_frames - 1)
                frame = self._read_at(cap, frame_idx)
                if frame is None:
                    raise FrameExtractionError(
                        f"Failed to read frame at timestamp {ts}s",
                        ErrorCode.SEEK_FAILED,
                        {"timestamp": ts, "frame_index": frame_idx},
                    )
                frames[i] = self._postprocess(frame)
        finally:
            cap.release()
        return frames  # type: ignore[return-value]

    @staticmethod
    def _read_at(cap: cv2.VideoCapture, frame_idx: int) -> Optional[np.ndarray]:
        cap.set(cv2.CAP_PROP_POS_FRAMES, frame_idx)
        ok, frame = cap.read()
        if not ok or frame is None:
            # Try to go back 1 frame if failed
            cap.set(cv2.CAP_PROP_POS_FRAMES, max(0, frame_idx - 1))
            ok, frame = cap.read()
        if not ok or frame is None:
            return None
        return frame

    def _postprocess(self, bgr: np.ndarray) -> np.ndarray:
        max_side = self.params.get("max_side")
        if max_side:
            h, w = bgr.shape[:2]
            scale = int(max_side) / max(w, h)
            if scale < 1.0:
                bgr = cv2.resize(bgr, (max(1, int(w * scale)), max(1, int(h * scale))), interpolation=cv2.INTER_AREA)
        return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
