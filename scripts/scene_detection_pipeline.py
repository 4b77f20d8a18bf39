#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Scene Detection Pipeline (CLI)
- Uses registry to select the frame source: opencv / synthetic
- Exports scenes.json, scenes.csv and stats.json
- Optional export of one thumbnail per scene (mid-point frame)
"""

from __future__ import annotations
import os
import sys
import asyncio
import argparse
import logging
from typing import Any, Dict, Optional

# Requires running from project root (or an installed scenecut)
from scenecut.config import DetectionConfig, load_config
from scenecut.errors import SceneDetectionError
from scenecut.frame_difference import available_methods
from scenecut.frame_source import available_sources, create_source
from scenecut.io import ensure_dir, save_csv, save_json, scenes_to_rows, write_thumbnails
from scenecut.scene_detection import SceneDetector, SceneOptions

logger = logging.getLogger("scene_detection_pipeline")


# ------------------------------
# Main
# ------------------------------
def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Scene Detection Pipeline: frame differencing + boundary filtering."
    )
    ap.add_argument("--video", type=str, required=True, help="Input video path.")
    ap.add_argument("--out_dir", type=str, required=True, help="Output directory.")
    ap.add_argument("--config", type=str, default=None, help="YAML config (see configs/scene_detection.yaml).")
    ap.add_argument(
        "--source",
        type=str,
        default="opencv",
        choices=available_sources(),
        help="Frame source backend.",
    )
    ap.add_argument("--max_side", type=int, default=None,
                    help="[opencv] Shrink decoded frames so the longest side fits.")

    # Overrides for the config's scene options
    ap.add_argument("--threshold", type=float, default=None, help="Boundary threshold in [0, 1].")
    ap.add_argument("--min_scene_len", type=float, default=None, help="Minimum scene length in seconds.")
    ap.add_argument("--method", type=str, default=None, choices=available_methods(),
                    help="Frame difference method.")
    ap.add_argument("--no_thumbnails", action="store_true", help="Skip thumbnail generation.")

    ap.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds.")
    ap.add_argument("--log_level", type=str, default="INFO")
    return ap


def resolve_config(args: argparse.Namespace) -> DetectionConfig:
    cfg = load_config(args.config) if args.config else DetectionConfig()
    cfg.show_progress = True
    if args.method:
        data = cfg.to_dict()
        data["difference"]["method"] = args.method
        cfg = DetectionConfig.from_dict(data)
    return cfg


def resolve_options(args: argparse.Namespace, cfg: DetectionConfig) -> SceneOptions:
    overrides: Dict[str, Any] = {
        "threshold": args.threshold,
        "min_scene_length": args.min_scene_len,
    }
    opts = SceneOptions(
        min_scene_length=cfg.scene.min_scene_length,
        threshold=cfg.scene.threshold,
        include_thumbnails=cfg.scene.include_thumbnails and not args.no_thumbnails,
    )
    for k, v in overrides.items():
        if v is not None:
            setattr(opts, k, v)
    return opts


async def run(args: argparse.Namespace) -> int:
    cfg = resolve_config(args)
    opts = resolve_options(args, cfg)

    source_kwargs: Dict[str, Any] = {"max_side": args.max_side}
    source_kwargs = {k: v for k, v in source_kwargs.items() if v not in (None, "", [])}
    source = create_source(args.source, **source_kwargs)

    ensure_dir(args.out_dir)
    try:
        video = source.open_video(args.video)
        detector = SceneDetector(source, cfg)
        call = detector.detect_with_stats(video, opts)
        timeout: Optional[float] = args.timeout
        scenes, stats = await (asyncio.wait_for(call, timeout) if timeout else call)
    finally:
        source.close()

    rows = scenes_to_rows(scenes)
    save_json(rows, os.path.join(args.out_dir, "scenes.json"))
    save_csv(rows, os.path.join(args.out_dir, "scenes.csv"))
    save_json(stats.to_dict(), os.path.join(args.out_dir, "stats.json"))

    thumbs_dir = os.path.join(args.out_dir, "thumbnails")
    written = write_thumbnails(scenes, thumbs_dir, cfg.thumbnail.format) if opts.include_thumbnails else []

    logger.info(f"[DONE] Detected {len(scenes)} scenes ({stats.boundaries_rejected} boundaries rejected).")
    logger.info(f"  JSON : {os.path.join(args.out_dir, 'scenes.json')}")
    logger.info(f"  CSV  : {os.path.join(args.out_dir, 'scenes.csv')}")
    logger.info(f"  Stats: {os.path.join(args.out_dir, 'stats.json')}")
    if written:
        logger.info(f"  Thumbnails: {thumbs_dir} ({len(written)} files)")
    return 0


def main(argv=None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(run(args))
    except asyncio.TimeoutError:
        logger.error(f"Scene detection timed out after {args.timeout}s")
        return 2
    except SceneDetectionError as e:
        logger.error(f"Scene detection failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())


"""
Example usage:
python scripts/scene_detection_pipeline.py \
  --video samples/clip.mp4 \
  --out_dir outputs/run_pixel \
  --threshold 0.3 --min_scene_len 3

# Histogram differencing with a custom config, no thumbnails
python scripts/scene_detection_pipeline.py \
  --video samples/clip.mp4 \
  --config configs/scene_detection.yaml \
  --method histogram --no_thumbnails \
  --out_dir outputs/run_hist
"""
