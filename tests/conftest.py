# tests/conftest.py
import numpy as np
import pytest

from scenecut.frame_source import SyntheticFrameSource
from scenecut.scene_detection import SceneBoundary

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (128, 128, 128)


def solid(colour, width=64, height=36, alpha=None):
    channels = 3 if alpha is None else 4
    frame = np.zeros((height, width, channels), dtype=np.uint8)
    frame[:, :, :3] = colour
    if alpha is not None:
        frame[:, :, 3] = alpha
    return frame


def boundary(timestamp, difference):
    return SceneBoundary(timestamp=timestamp, confidence=difference, difference=difference)


@pytest.fixture
def make_source():
    def _make(segments=None, duration=10.0, **kwargs):
        return SyntheticFrameSource(segments=segments or [(0.0, BLACK)], duration=duration, **kwargs)
    return _make


@pytest.fixture
def gradient_frame():
    x = np.linspace(0, 255, 80, dtype=np.float64)
    y = np.linspace(0, 255, 45, dtype=np.float64)
    r = np.tile(x, (45, 1))
    g = np.tile(y[:, None], (1, 80))
    b = 255 - r
    return np.stack([r, g, b], axis=-1).astype(np.uint8)
