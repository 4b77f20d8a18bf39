import os

import pytest
import yaml

from scenecut.config import DetectionConfig, load_config
from scenecut.errors import InvalidInputError
from scenecut.frame_difference import DifferenceMethod

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def test_defaults():
    cfg = DetectionConfig()
    assert cfg.sampling_interval == 0.5
    assert cfg.batch_size == 16
    assert cfg.difference.method is DifferenceMethod.PIXEL
    assert cfg.difference.downscale == 0.25
    assert cfg.smoothing.window_size == 3
    assert cfg.smoothing.prominence_threshold == 0.2
    assert cfg.scene.min_scene_length == 3.0
    assert cfg.scene.threshold == 0.3
    assert cfg.thumbnail.format == "jpeg"


def test_shipped_yaml_matches_defaults():
    cfg = load_config(os.path.join(ROOT, "configs", "scene_detection.yaml"))
    assert cfg.to_dict() == DetectionConfig().to_dict()


def test_partial_yaml_keeps_other_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({
        "sampling_interval": 0.25,
        "difference": {"method": "histogram"},
        "smoothing": {"enabled": False},
    }))
    cfg = load_config(str(path))
    assert cfg.sampling_interval == 0.25
    assert cfg.difference.method is DifferenceMethod.HISTOGRAM
    assert cfg.difference.downscale == 0.25
    assert cfg.smoothing.enabled is False
    assert cfg.smoothing.window_size == 3


def test_empty_yaml_is_default(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)).to_dict() == DetectionConfig().to_dict()


@pytest.mark.parametrize("data", [
    {"sampling_intervall": 1.0},
    {"smoothing": {"window": 2}},
    {"difference": "pixel"},
    {"sampling_interval": 0},
    {"batch_size": 0},
    {"difference": {"method": "ssim"}},
    {"difference": {"downscale": 2.0}},
    {"smoothing": {"window_size": 0}},
    {"smoothing": {"prominence_threshold": 1.5}},
    {"thumbnail": {"format": "gif"}},
    {"scene": {"threshold": 1.2}},
])
def test_invalid_config_raises(data):
    with pytest.raises(InvalidInputError):
        DetectionConfig.from_dict(data)


def test_non_mapping_file_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(InvalidInputError):
        load_config(str(path))


def test_to_dict_is_yaml_serializable():
    data = DetectionConfig().to_dict()
    assert data["difference"]["method"] == "pixel"
    assert yaml.safe_load(yaml.safe_dump(data)) == data


def test_numeric_strings_are_converted():
    cfg = DetectionConfig.from_dict({
        "sampling_interval": "0.25",
        "batch_size": "8",
        "smoothing": {"window_size": "2", "prominence_threshold": "0.1"},
        "thumbnail": {"format": "PNG", "quality": "0.5"},
    })
    assert cfg.sampling_interval == 0.25
    assert cfg.batch_size == 8
    assert cfg.smoothing.window_size == 2 and isinstance(cfg.smoothing.window_size, int)
    assert cfg.smoothing.prominence_threshold == 0.1
    assert (cfg.thumbnail.format, cfg.thumbnail.quality) == ("png", 0.5)


@pytest.mark.parametrize("data", [
    {"end_sample_offset": 0},
    {"end_sample_offset": -0.1},
    {"batch_size": "many"},
    {"sampling_interval": None},
    {"smoothing": {"window_size": 2.5}},
    {"smoothing": {"prominence_threshold": "high"}},
    {"thumbnail": {"quality": "best"}},
    {"scene": {"threshold": "abc"}},
])
def test_unusable_values_raise_invalid_input(data):
    with pytest.raises(InvalidInputError):
        DetectionConfig.from_dict(data)
