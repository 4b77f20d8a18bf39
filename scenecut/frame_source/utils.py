# scenecut/frame_source/utils.py
# Shared timestamp checks and image encoding for frame sources.

from __future__ import annotations
import math
from typing import Optional

import cv2
import numpy as np

from ..errors import ErrorCode, FrameExtractionError
from .interface import EncodeOptions

_EXTENSIONS = {"jpeg": ".jpg", "jpg": ".jpg", "png": ".png", "webp": ".webp"}


def validate_timestamp(timestamp: float, duration: float) -> None:
    if not math.isfinite(timestamp):
        raise FrameExtractionError(
            f"Timestamp must be a finite number. Received: {timestamp}",
            ErrorCode.INVALID_TIMESTAMP,
            {"timestamp": timestamp},
        )
    if timestamp < 0:
        raise FrameExtractionError(
            f"Timestamp cannot be negative. Received: {timestamp}s",
            ErrorCode.INVALID_TIMESTAMP,
            {"timestamp": timestamp},
        )
    if timestamp > duration:
        raise FrameExtractionError(
            f"Timestamp ({timestamp}s) exceeds video duration ({duration}s).",
            ErrorCode.INVALID_TIMESTAMP,
            {"timestamp": timestamp, "duration": duration},
        )


def encode_image(rgb: np.ndarray, options: Optional[EncodeOptions] = None) -> bytes:
    """Encode an RGB/RGBA/grayscale buffer with cv2.imencode."""
    opts = (options or EncodeOptions()).validate()
    fmt = opts.format.lower()
    quality = int(round(opts.quality * 100))

    if rgb.ndim == 2:
        bgr = rgb
    elif rgb.shape[2] == 4:
        bgr = cv2.cvtColor(rgb, cv2.COLOR_RGBA2BGR)
    else:
        bgr = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

    if fmt in ("jpeg", "jpg"):
        params = [int(cv2.IMWRITE_JPEG_QUALITY), quality]
    elif fmt == "webp":
        params = [int(cv2.IMWRITE_WEBP_QUALITY), max(1, quality)]
    else:
        params = []

    ok, buf = cv2.imencode(_EXTENSIONS[fmt], bgr, params)
    if not ok:
        raise FrameExtractionError(
            "Failed to encode frame",
            ErrorCode.ENCODING_ERROR,
            {"format": fmt, "quality": opts.quality},
        )
    return buf.tobytes()
