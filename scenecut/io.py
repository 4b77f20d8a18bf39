import os
import csv
import json
from typing import Any, Dict, List, Sequence

from tqdm import tqdm

from .scene_detection import Scene

_THUMBNAIL_EXTENSIONS = {"jpeg": "jpg", "jpg": "jpg", "png": "png", "webp": "webp"}

# ------------------------------
# Basic I/O helpers
# ------------------------------
def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def seconds_to_timecode(seconds: float) -> str:
    t = max(0.0, float(seconds))
    h = int(t // 3600)
    m = int((t % 3600) // 60)
    s = t % 60
    return f"{h:02d}:{m:02d}:{s:06.3f}"

def save_json(obj: Any, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)

def save_csv(rows: List[Dict[str, Any]], path: str) -> None:
    if not rows:
        with open(path, "w", encoding="utf-8") as f:
            f.write("")
        return
    fieldnames = list(rows[0].keys())
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in rows:
            w.writerow(r)

# ------------------------------
# Scene export
# ------------------------------
def scenes_to_rows(scenes: Sequence[Scene]) -> List[Dict[str, Any]]:
    """Flat, JSON/CSV friendly records (thumbnails are exported separately)."""
    rows = []
    for i, sc in enumerate(scenes):
        rows.append({
            "scene_id": i,
            "start_seconds": round(sc.start, 3),
            "end_seconds": round(sc.end, 3),
            "start_time": seconds_to_timecode(sc.start),
            "end_time": seconds_to_timecode(sc.end),
            "duration_seconds": round(sc.duration, 3),
            "confidence": round(sc.confidence, 4),
            "has_thumbnail": sc.thumbnail is not None,
        })
    return rows

def write_thumbnails(scenes: Sequence[Scene], out_dir: str, image_format: str = "jpeg") -> List[str]:
    """Write each scene's encoded thumbnail to out_dir/scene_XXXX.<ext>; scenes without one are skipped."""
    ensure_dir(out_dir)
    ext = _THUMBNAIL_EXTENSIONS.get(image_format.lower(), "jpg")
    paths = []
    for i, sc in enumerate(tqdm(scenes, desc="Export scene thumbnails")):
        if sc.thumbnail is None:
            continue
        path = os.path.join(out_dir, f"scene_{i:04d}.{ext}")
        with open(path, "wb") as f:
            f.write(sc.thumbnail)
        paths.append(path)
    return paths
