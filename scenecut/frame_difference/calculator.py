# scenecut/frame_difference/calculator.py
# Stateless frame comparison. Safe to call from anywhere without synchronization.

from __future__ import annotations
from typing import Optional

import numpy as np

from ..errors import InvalidInputError
from .interface import DifferenceMethod, DifferenceOptions, FrameDifference, PixelBuffer
from .registry import get_method
from .utils import clamp01, prepare_frames, validate_frames

DEFAULT_DIFFERENCE_OPTIONS = DifferenceOptions()


def calculate_difference(
    frame1: PixelBuffer,
    frame2: PixelBuffer,
    timestamp1: float,
    timestamp2: float,
    options: Optional[DifferenceOptions] = None,
) -> FrameDifference:
    """
    Compare two frames and return their dissimilarity in [0, 1].

    Frames may differ in absolute size (both are resampled) but their aspect
    ratios must match within 1%. Raises InvalidInputError naming the failed check.
    """
    opts = (options or DEFAULT_DIFFERENCE_OPTIONS).validate()
    validate_frames(frame1, frame2)

    try:
        method_fn = get_method(opts.method)
    except KeyError as e:
        raise InvalidInputError(f"Unknown difference method: {opts.method}", details={"method": opts.method}) from e

    data1, data2 = prepare_frames(frame1, frame2, opts)
    difference = clamp01(method_fn(data1, data2, opts))

    return FrameDifference(
        difference=difference,
        timestamp1=float(timestamp1),
        timestamp2=float(timestamp2),
        method=DifferenceMethod.parse(opts.method),
    )


def are_frames_identical(frame1: PixelBuffer, frame2: PixelBuffer) -> bool:
    """Exact equality of two same-shaped buffers; False for missing or mismatched frames."""
    if frame1 is None or frame2 is None:
        return False
    a = np.asarray(frame1)
    b = np.asarray(frame2)
    if a.shape != b.shape:
        return False
    return bool(np.array_equal(a, b))
