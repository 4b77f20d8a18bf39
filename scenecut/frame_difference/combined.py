# scenecut/frame_difference/combined.py
import numpy as np

from .interface import DifferenceOptions
from .registry import register_method
from .pixel import pixel_difference
from .histogram import histogram_difference

PIXEL_WEIGHT = 0.6
HISTOGRAM_WEIGHT = 0.4


@register_method("combined")
def combined_difference(data1: np.ndarray, data2: np.ndarray, options: DifferenceOptions) -> float:
    """Cut sensitivity of the pixel method blended with the transition robustness of histograms."""
    return (
        PIXEL_WEIGHT * pixel_difference(data1, data2, options)
        + HISTOGRAM_WEIGHT * histogram_difference(data1, data2, options)
    )
