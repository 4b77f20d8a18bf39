# scenecut/frame_difference/pixel.py
import cv2
import numpy as np

from .interface import DifferenceOptions
from .registry import register_method
from .utils import channel_count, clamp01, crop_edges


@register_method("pixel")
def pixel_difference(data1: np.ndarray, data2: np.ndarray, options: DifferenceOptions) -> float:
    """
    Mean absolute per-channel difference, normalized by pixel_count * 255 * channels.
    Fast and sensitive to hard cuts, but also to motion.
    """
    if options.ignore_edges:
        data1 = crop_edges(data1)
        data2 = crop_edges(data2)

    diff = cv2.absdiff(data1, data2)
    pixel_count = diff.shape[0] * diff.shape[1]
    if pixel_count == 0:
        return 0.0
    total = float(diff.sum(dtype=np.float64))
    return clamp01(total / (pixel_count * 255.0 * channel_count(diff)))
