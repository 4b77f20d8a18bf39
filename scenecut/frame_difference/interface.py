# scenecut/frame_difference/interface.py
# Value types shared by every difference method.

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Union

import numpy as np

from ..errors import InvalidInputError, coerce_option

# uint8 array, shape (H, W), (H, W, 3) RGB or (H, W, 4) RGBA
PixelBuffer = np.ndarray


class DifferenceMethod(str, Enum):
    PIXEL = "pixel"
    HISTOGRAM = "histogram"
    COMBINED = "combined"

    @classmethod
    def parse(cls, value: Union[str, "DifferenceMethod"]) -> "DifferenceMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(getattr(value, "value", value)).strip().lower())
        except ValueError:
            raise InvalidInputError(
                f"Unknown difference method: {value}",
                details={"method": value, "available": [m.value for m in cls]},
            ) from None


@dataclass(frozen=True)
class DifferenceOptions:
    """
    Per-comparison settings.

    downscale:    fraction of the original resolution used for comparison, in (0, 1].
                  0.25 compares 1/16 of the pixels.
    ignore_edges: skip the outer 5% on each side (pixel method only).
    grayscale:    compare luminance (0.299R + 0.587G + 0.114B) instead of RGB.
    """
    method: DifferenceMethod = DifferenceMethod.PIXEL
    downscale: float = 0.25
    ignore_edges: bool = False
    grayscale: bool = True

    def validate(self) -> "DifferenceOptions":
        """Return a normalized copy (method parsed, numbers converted)."""
        method = DifferenceMethod.parse(self.method)
        downscale = coerce_option(self.downscale, float, "downscale")
        if not (0.0 < downscale <= 1.0):
            raise InvalidInputError(
                "Downscale factor must be in (0, 1]",
                details={"downscale": self.downscale},
            )
        return replace(
            self,
            method=method,
            downscale=downscale,
            ignore_edges=bool(self.ignore_edges),
            grayscale=bool(self.grayscale),
        )


@dataclass(frozen=True)
class FrameDifference:
    """Normalized dissimilarity in [0, 1] between the frames sampled at timestamp1 and timestamp2."""
    difference: float
    timestamp1: float
    timestamp2: float
    method: DifferenceMethod


# (prepared_frame1, prepared_frame2, options) -> difference in [0, 1]
DifferenceFn = Callable[[np.ndarray, np.ndarray, DifferenceOptions], float]
