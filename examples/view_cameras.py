#!/usr/bin/env python3
"""View camera poses from one or more transforms JSON files as frustums.

This script loads NeRF-style ``transforms.json`` files (``camera_angle_x`` plus
a ``frames`` list of 4x4 ``transform_matrix`` entries), composes them into one
scene with one color per file, prints a summary and the auto-fit view, and
either shows a Matplotlib preview or saves a 4:3 PNG of the view.

Usage:
    python -m examples.view_cameras [files ...] [options]

Options:
    --sample            Use the built-in train/val/test sample groups
    --invert            Treat matrices as world-to-camera and invert them
    --up {y,z}          Source vertical axis (default: z)
    --aspect ASPECT     Frustum width / height (default: 1.5)
    --near NEAR         Near distance before scaling (default: 0.1)
    --far FAR           Far distance before scaling (default: 2.0)
    --scale SCALE       Multiplier for near/far (default: 0.1)
    --labels            Draw camera labels
    --output PATH       Save a 4:3 PNG instead of opening a window
    --verbose           Enable debug logging

Example:
    python -m examples.view_cameras transforms_train.json transforms_val.json --output view.png
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from src.frustum_viewer.camera.convention import UpAxis  # noqa: E402
from src.frustum_viewer.core.config import ViewerConfig  # noqa: E402
from src.frustum_viewer.core.errors import InputShapeError  # noqa: E402
from src.frustum_viewer.scene.loader import (  # noqa: E402
    group_name_from_filename,
    validate_pose_record,
)
from src.frustum_viewer.scene.manager import SceneManager  # noqa: E402

logger = logging.getLogger("view_cameras")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="View camera poses as 3D frustums.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("files", nargs="*", type=Path, help="transforms JSON files")
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in sample groups",
    )
    parser.add_argument(
        "--invert",
        action="store_true",
        help="Invert matrices (world-to-camera input)",
    )
    parser.add_argument(
        "--up",
        choices=[axis.value for axis in UpAxis],
        default=UpAxis.Z.value,
        help="Source vertical axis (default: z)",
    )
    parser.add_argument("--aspect", type=float, default=1.5, help="Frustum aspect (default: 1.5)")
    parser.add_argument("--near", type=float, default=0.1, help="Near distance (default: 0.1)")
    parser.add_argument("--far", type=float, default=2.0, help="Far distance (default: 2.0)")
    parser.add_argument("--scale", type=float, default=0.1, help="Near/far scale (default: 0.1)")
    parser.add_argument("--labels", action="store_true", help="Draw camera labels")
    parser.add_argument("--output", type=str, default=None, help="Save a 4:3 PNG to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_files(scene: SceneManager, paths: list[Path]) -> int:
    """Load the files as one batch, one group per file.

    A file that cannot be read or validated is reported and left out; the
    others are added together so their colors are spread over the whole batch.

    Returns:
        Number of files that failed to load.
    """
    sources = []
    failures = 0
    for index, path in enumerate(paths):
        try:
            record = json.loads(path.read_text())
            validate_pose_record(record)
        except (OSError, json.JSONDecodeError, InputShapeError) as e:
            logger.error("Could not load %s: %s", path, e)
            failures += 1
            continue
        sources.append((group_name_from_filename(path.name, index), record))

    if sources:
        scene.load_sources(sources)
    return failures


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ViewerConfig(
        aspect=args.aspect,
        near=args.near,
        far=args.far,
        scale=args.scale,
        invert=args.invert,
        up_axis=UpAxis(args.up),
    )

    scene = SceneManager()
    if args.sample or not args.files:
        scene.load_samples()
    failures = load_files(scene, args.files)

    print(scene.summary().describe())
    composition = scene.compose(config)
    for skipped in composition.skipped:
        print(f"Skipped {skipped.label}: {skipped.reason}")

    fit = scene.fit_pose(config)
    if fit is not None:
        print(f"Fit view: eye={fit.eye} target={fit.target} near={fit.near:.4f} far={fit.far:.2f}")

    if args.output:
        from src.frustum_viewer.preview.display import render_to_array
        from src.frustum_viewer.preview.export import save_cropped_png

        image = render_to_array(scene, config, width=1280, height=720, show_labels=args.labels)
        rect = save_cropped_png(image, args.output, target_aspect=config.export_aspect)
        print(f"Saved {rect.width}x{rect.height} view to: {Path(args.output).absolute()}")
    else:
        from src.frustum_viewer.preview.display import show_frustums

        show_frustums(scene, config, show_labels=args.labels)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
