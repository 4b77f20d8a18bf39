import csv
import importlib.util
import json
import os

from scenecut.io import save_csv, save_json, scenes_to_rows, seconds_to_timecode, write_thumbnails
from scenecut.scene_detection import Scene

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def load_cli():
    path = os.path.join(ROOT, "scripts", "scene_detection_pipeline.py")
    module_spec = importlib.util.spec_from_file_location("scene_detection_pipeline", path)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


SCENES = [
    Scene(start=0.0, end=5.0, duration=5.0, confidence=0.87654, thumbnail=b"\xff\xd8abc"),
    Scene(start=5.0, end=3725.5, duration=3720.5, confidence=1.0),
]


def test_seconds_to_timecode():
    assert seconds_to_timecode(0) == "00:00:00.000"
    assert seconds_to_timecode(3725.5) == "01:02:05.500"
    assert seconds_to_timecode(-2) == "00:00:00.000"


def test_scenes_to_rows():
    rows = scenes_to_rows(SCENES)
    assert rows[0]["scene_id"] == 0
    assert rows[0]["confidence"] == 0.8765
    assert rows[0]["has_thumbnail"] is True
    assert rows[1]["start_time"] == "00:00:05.000"
    assert rows[1]["end_time"] == "01:02:05.500"
    assert rows[1]["has_thumbnail"] is False


def test_save_json_and_csv(tmp_path):
    rows = scenes_to_rows(SCENES)
    save_json(rows, str(tmp_path / "scenes.json"))
    save_csv(rows, str(tmp_path / "scenes.csv"))
    assert json.loads((tmp_path / "scenes.json").read_text()) == rows
    with open(tmp_path / "scenes.csv", newline="") as f:
        read = list(csv.DictReader(f))
    assert [r["scene_id"] for r in read] == ["0", "1"]
    assert read[1]["duration_seconds"] == "3720.5"

    save_csv([], str(tmp_path / "empty.csv"))
    assert (tmp_path / "empty.csv").read_text() == ""


def test_write_thumbnails_skips_scenes_without_one(tmp_path):
    paths = write_thumbnails(SCENES, str(tmp_path / "thumbs"))
    assert [os.path.basename(p) for p in paths] == ["scene_0000.jpg"]
    assert (tmp_path / "thumbs" / "scene_0000.jpg").read_bytes() == b"\xff\xd8abc"


def test_pipeline_cli_writes_outputs(tmp_path):
    cli = load_cli()
    out = tmp_path / "run"
    code = cli.main(["--video", "timeline", "--out_dir", str(out), "--source", "synthetic",
                     "--threshold", "0.4", "--min_scene_len", "2"])
    assert code == 0
    rows = json.loads((out / "scenes.json").read_text())
    # the default synthetic timeline is a single static scene
    assert len(rows) == 1 and rows[0]["end_seconds"] == 10.0
    stats = json.loads((out / "stats.json").read_text())
    assert stats["threshold"] == 0.4
    assert stats["scenes_detected"] == 1
    assert (out / "scenes.csv").exists()
    assert (out / "thumbnails" / "scene_0000.jpg").exists()


def test_pipeline_cli_reports_invalid_options(tmp_path):
    cli = load_cli()
    code = cli.main(["--video", "timeline", "--out_dir", str(tmp_path), "--source", "synthetic",
                     "--threshold", "3"])
    assert code == 1
