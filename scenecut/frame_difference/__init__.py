# scenecut/frame_difference/__init__.py
from .interface import DifferenceMethod, DifferenceOptions, FrameDifference, PixelBuffer
from .registry import register_method, get_method, available_methods
from .calculator import calculate_difference, are_frames_identical

# Register built-in methods
from .pixel import pixel_difference              # noqa: F401
from .histogram import histogram_difference      # noqa: F401
from .combined import combined_difference        # noqa: F401

__all__ = [
    "DifferenceMethod", "DifferenceOptions", "FrameDifference", "PixelBuffer",
    "register_method", "get_method", "available_methods",
    "calculate_difference", "are_frames_identical",
]
