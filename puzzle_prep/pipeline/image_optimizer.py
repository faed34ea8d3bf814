"""
Puzzle Image Optimizer Pipeline
Turns an arbitrary user photo into a puzzle-ready JPEG:
decode → smart crop (device aware) → bounded resize → encode.
"""

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Union

from ..models.device import DeviceDescriptor
from ..models.errors import ImagePreparationError
from ..models.optimization_result import OptimizationResult
from ..services.image_service import ImageService
from ..services.cropping_service import CroppingService
from ..services.resizing_service import ResizingService, DEFAULT_MAX_DIMENSION
from ..services.ratio_config_service import RatioConfigService

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 85
STEP_SEPARATOR = " → "

_image_service = ImageService()
_cropping_service = CroppingService(_image_service)
_resizing_service = ResizingService(_image_service)
_ratio_config_service = RatioConfigService()


def _skip_crop_reason(device: DeviceDescriptor | None, enable_smart_crop: bool) -> str | None:
    if not enable_smart_crop:
        return "smart crop disabled"
    if device is None:
        return "no device context"
    if not device.is_valid():
        return "invalid device context"
    return None


def _validate_options(max_dimension: int, quality: int) -> None:
    if max_dimension <= 0:
        raise ValueError(f"max_dimension must be positive, got {max_dimension}")
    if not 0 <= quality <= 100:
        raise ValueError(f"JPEG quality must be within 0-100, got {quality}")


def optimize(
    raw: bytes,
    device: DeviceDescriptor | None = None,
    *,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    quality: int = DEFAULT_QUALITY,
    enable_smart_crop: bool = True,
    image_service: ImageService = _image_service,
    cropping_service: CroppingService = _cropping_service,
    resizing_service: ResizingService = _resizing_service,
    ratio_config_service: RatioConfigService = _ratio_config_service,
) -> OptimizationResult:
    """
    Prepare one photo for the puzzle board.

    1. Decodes and validates the bytes
    2. Crops towards the device ratio when a valid device is given
    3. Downscales so neither side exceeds max_dimension
    4. Encodes as JPEG at the requested quality

    A missing or invalid device never fails the call; cropping is skipped and
    the reason is written to the trace.

    Args:
        raw: Compressed image bytes (JPEG, PNG, ...)
        device: Screen descriptor from the UI layer, or None
        max_dimension: Bound for the longest side after resizing
        quality: JPEG quality, 0-100
        enable_smart_crop: Set False to only resize and encode

    Returns:
        OptimizationResult with the encoded bytes, geometry and trace

    Raises:
        EmptyInputError, DecodeError, InvalidDimensionsError, EncodeError
    """
    _validate_options(max_dimension, quality)

    img = image_service.decode(raw)
    original_height, original_width = image_service.get_image_dimensions(img)
    was_cropped = False
    steps: List[str] = []

    # Step 1: device-aware crop
    skip_reason = _skip_crop_reason(device, enable_smart_crop)
    if skip_reason is None:
        config = ratio_config_service.resolve_for(device)
        plan = cropping_service.plan(original_width, original_height, config)
        if plan.needs_cropping:
            img = cropping_service.apply_crop(img, plan)
            was_cropped = True
        steps.append(f"Crop: {plan.action}")
    else:
        steps.append(f"Crop: skipped ({skip_reason})")

    # Step 2: bounded resize
    was_resized = resizing_service.needs_resize(img, max_dimension)
    if was_resized:
        img = resizing_service.resize(img, max_dimension)
        steps.append(f"Resize: {img.width}x{img.height}")

    # Step 3: encode
    image_bytes = image_service.encode_jpeg(img, quality)

    result = OptimizationResult(
        image_bytes=image_bytes,
        original_width=original_width,
        original_height=original_height,
        final_width=img.width,
        final_height=img.height,
        was_cropped=was_cropped,
        was_resized=was_resized,
        optimization_info=STEP_SEPARATOR.join(steps),
    )
    logger.info(f"{result} | {result.optimization_info}")
    return result


def optimize_simple(
    raw: bytes,
    *,
    image_service: ImageService = _image_service,
    resizing_service: ResizingService = _resizing_service,
) -> bytes:
    """
    Legacy path without smart cropping: resize to 1024 and encode at 85.
    """
    img = image_service.decode(raw)
    img = resizing_service.resize(img, DEFAULT_MAX_DIMENSION)
    return image_service.encode_jpeg(img, DEFAULT_QUALITY)


def optimize_batch(
    payloads: Iterable[bytes],
    device: DeviceDescriptor | None = None,
    *,
    max_workers: int | None = None,
    **options,
) -> List[Union[OptimizationResult, ImagePreparationError]]:
    """
    Run independent optimizations on a thread pool, keeping input order.
    A preparation error for one item is returned in its slot instead of
    aborting the whole batch; any other exception propagates.
    """
    payloads = list(payloads)
    if not payloads:
        return []

    results: List[Union[OptimizationResult, ImagePreparationError]] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(optimize, raw, device, **options) for raw in payloads]
        for future in futures:
            try:
                results.append(future.result())
            except ImagePreparationError as err:
                results.append(err)
    return results
