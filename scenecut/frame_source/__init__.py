# scenecut/frame_source/__init__.py
from .interface import VideoHandle, EncodeOptions, FrameSource
from .registry import register_source, create_source, available_sources
from .utils import encode_image

# Import default backends so they auto-register
from .opencv_backend import OpenCVFrameSource          # noqa: F401
from .synthetic_backend import SyntheticFrameSource    # noqa: F401

__all__ = [
    "VideoHandle", "EncodeOptions", "FrameSource",
    "register_source", "create_source", "available_sources",
    "encode_image", "OpenCVFrameSource", "SyntheticFrameSource",
]
