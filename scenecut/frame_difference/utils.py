# scenecut/frame_difference/utils.py
# Frame validation and preparation shared by all difference methods.

from __future__ import annotations
from typing import Tuple

import cv2
import numpy as np

from ..errors import InvalidInputError
from .interface import DifferenceOptions, PixelBuffer

MAX_ASPECT_MISMATCH = 0.01
EDGE_MARGIN = 0.05


def as_uint8(frame: PixelBuffer) -> np.ndarray:
    arr = np.asarray(frame)
    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)
    return arr


def frame_size(frame: PixelBuffer) -> Tuple[int, int]:
    """Return (width, height)."""
    return int(frame.shape[1]), int(frame.shape[0])


def validate_frames(frame1: PixelBuffer, frame2: PixelBuffer) -> None:
    if frame1 is None or frame2 is None:
        raise InvalidInputError(
            "Both frames must be provided for comparison",
            details={"frame1": frame1 is not None, "frame2": frame2 is not None},
        )

    for label, frame in (("Frame 1", frame1), ("Frame 2", frame2)):
        shape = getattr(frame, "shape", None)
        if shape is None or len(shape) not in (2, 3):
            raise InvalidInputError(f"{label} is not a pixel buffer", details={"shape": shape})
        if len(shape) == 3 and shape[2] not in (1, 3, 4):
            raise InvalidInputError(f"{label} has unsupported channel count", details={"channels": shape[2]})
        if shape[0] <= 0 or shape[1] <= 0:
            raise InvalidInputError(
                f"{label} has invalid dimensions",
                details={"width": shape[1], "height": shape[0]},
            )

    w1, h1 = frame_size(frame1)
    w2, h2 = frame_size(frame2)
    aspect1 = w1 / h1
    aspect2 = w2 / h2
    mismatch = abs(aspect1 - aspect2) / min(aspect1, aspect2)
    if mismatch > MAX_ASPECT_MISMATCH:
        raise InvalidInputError(
            "Frames have different aspect ratios. Ensure all frames are from the same video.",
            details={
                "frame1_aspect": round(aspect1, 3),
                "frame2_aspect": round(aspect2, 3),
                "difference": f"{mismatch * 100:.1f}%",
            },
        )


def target_size(frame1: PixelBuffer, frame2: PixelBuffer, downscale: float) -> Tuple[int, int]:
    """
    Comparison size: the smaller of the two frames scaled by `downscale`, at least 1x1.
    Picking the smaller frame keeps the result independent of argument order.
    """
    ref_w, ref_h = min(frame_size(frame1), frame_size(frame2), key=lambda wh: (wh[0] * wh[1], wh))
    return max(1, int(ref_w * downscale)), max(1, int(ref_h * downscale))


def to_rgb(frame: np.ndarray) -> np.ndarray:
    """Drop alpha / expand grayscale so the result is (H, W, 3)."""
    if frame.ndim == 2:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    if frame.shape[2] == 1:
        return cv2.cvtColor(np.ascontiguousarray(frame[:, :, 0]), cv2.COLOR_GRAY2RGB)
    return np.ascontiguousarray(frame[:, :, :3])


def to_luminance(frame: np.ndarray) -> np.ndarray:
    """Y = 0.299R + 0.587G + 0.114B, shape (H, W)."""
    if frame.ndim == 2:
        return frame
    if frame.shape[2] == 1:
        return np.ascontiguousarray(frame[:, :, 0])
    if frame.shape[2] == 4:
        return cv2.cvtColor(frame, cv2.COLOR_RGBA2GRAY)
    return cv2.cvtColor(frame, cv2.COLOR_RGB2GRAY)


def resize_frame(frame: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    if frame_size(frame) == size:
        return frame
    return cv2.resize(frame, size, interpolation=cv2.INTER_AREA)


def prepare_frames(
    frame1: PixelBuffer,
    frame2: PixelBuffer,
    options: DifferenceOptions,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Resample both frames to the comparison size, then reduce them to
    luminance (H, W) or RGB (H, W, 3) depending on `options.grayscale`.
    """
    size = target_size(frame1, frame2, options.downscale)
    reduce = to_luminance if options.grayscale else to_rgb
    data1 = reduce(resize_frame(as_uint8(frame1), size))
    data2 = reduce(resize_frame(as_uint8(frame2), size))
    return data1, data2


def crop_edges(frame: np.ndarray, margin: float = EDGE_MARGIN) -> np.ndarray:
    h, w = frame.shape[:2]
    mx = int(w * margin)
    my = int(h * margin)
    return np.ascontiguousarray(frame[my:h - my, mx:w - mx])


def channel_count(frame: np.ndarray) -> int:
    return 1 if frame.ndim == 2 else int(frame.shape[2])


def clamp01(value: float) -> float:
    return float(min(1.0, max(0.0, value)))
