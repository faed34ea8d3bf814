"""
Batch-optimize a folder of photos into puzzle-ready JPEGs.

Settings come from the environment (a .env file is loaded first);
command-line flags override them.
"""

import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from ..models.device import DeviceDescriptor, Orientation
from ..models.errors import ImagePreparationError
from ..pipeline.image_optimizer import optimize
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "_optimized.jpg"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return float(value)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="puzzle-prep",
        description="Crop and resize photos for the puzzle board.",
    )
    ap.add_argument("--input-dir", default=os.getenv("INPUT_DIR_PATH", "data/input"))
    ap.add_argument("--output-dir", default=os.getenv("OUTPUT_DIR_PATH", "data/optimized"))
    ap.add_argument("--exts", default=os.getenv("VALID_IMAGE_EXTENSIONS", ".jpg,.jpeg,.png,.bmp,.webp"),
                    help="comma separated list of accepted suffixes")
    ap.add_argument("--recursive", action="store_true")
    ap.add_argument("--max-dimension", type=int, default=int(os.getenv("MAX_DIMENSION", "1024")))
    ap.add_argument("--quality", type=int, default=int(os.getenv("JPEG_QUALITY", "85")))
    ap.add_argument("--no-smart-crop", dest="smart_crop", action="store_false",
                    default=_env_bool("SMART_CROP_ENABLED", True))
    ap.add_argument("--screen-width", type=float, default=_env_float("SCREEN_WIDTH"))
    ap.add_argument("--screen-height", type=float, default=_env_float("SCREEN_HEIGHT"))
    ap.add_argument("--orientation", choices=[o.value for o in Orientation],
                    default=os.getenv("SCREEN_ORIENTATION") or None)
    ap.add_argument("--workers", type=int, default=int(os.getenv("BATCH_WORKERS", "1")))
    return ap


def device_from_args(args: argparse.Namespace) -> Optional[DeviceDescriptor]:
    if args.screen_width is None or args.screen_height is None:
        return None
    orientation = Orientation(args.orientation) if args.orientation else None
    return DeviceDescriptor(args.screen_width, args.screen_height, orientation)


def optimize_file(
    path: Path,
    output_dir: Path,
    device: Optional[DeviceDescriptor],
    args: argparse.Namespace,
    image_service: ImageService,
) -> bool:
    """
    Read, optimize and write a single photo. Only this file's bytes are held.
    Returns False when the photo could not be read or prepared.
    """
    try:
        raw = image_service.load_bytes(path)
    except OSError as err:
        logger.error(f"Skipping {path.name}: {err}")
        return False

    try:
        result = optimize(
            raw,
            device,
            max_dimension=args.max_dimension,
            quality=args.quality,
            enable_smart_crop=args.smart_crop,
            image_service=image_service,
        )
    except ImagePreparationError as err:
        logger.error(f"Couldn't prepare {path.name}: {err}")
        return False

    out_path = image_service.save_bytes(output_dir / f"{path.stem}{OUTPUT_SUFFIX}", result.image_bytes)
    logger.info(f"{path.name} → {out_path.name}: {result.optimization_info}")
    return True


def run(args: argparse.Namespace, image_service: ImageService = None) -> int:
    """
    Optimize every image in args.input_dir. Returns the number of failures.
    Files are streamed: each worker reads, optimizes and writes one photo.
    """
    image_service = image_service or ImageService()
    exts = [e.strip() for e in args.exts.split(",") if e.strip()]
    paths = image_service.stream_gallery(args.input_dir, recursive=args.recursive, exts=exts)
    device = device_from_args(args)
    output_dir = Path(args.output_dir)

    logger.info(f"Optimizing images from {args.input_dir} "
                f"(device={device}, max_dimension={args.max_dimension}, quality={args.quality})")

    processed = 0
    failures = 0
    with ThreadPoolExecutor(max_workers=max(1, args.workers)) as executor:
        outcomes = executor.map(
            lambda path: optimize_file(path, output_dir, device, args, image_service),
            paths,
        )
        for ok in outcomes:
            processed += 1
            if not ok:
                failures += 1

    if not processed:
        logger.warning(f"No images found in {args.input_dir}")
    else:
        logger.info(f"Done: {processed - failures} optimized, {failures} failed")
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    # Load environment variables first
    load_dotenv()

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    args = build_parser().parse_args(argv)
    if args.max_dimension <= 0 or not 0 <= args.quality <= 100:
        logger.error("max-dimension must be positive and quality within 0-100")
        return 2

    try:
        failures = run(args)
    except NotADirectoryError as err:
        logger.error(f"Input folder not found: {err}")
        return 2
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
