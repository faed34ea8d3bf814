import logging
import math
from ..models.image import Image
from ..models.crop_plan import CropPlan
from ..models.device import DeviceRatioConfig
from ..models.errors import InvalidDimensionsError
from .image_service import ImageService

logger = logging.getLogger(__name__)

# Share of the removed height taken from the top when trimming vertically.
# 30 % top / 70 % bottom keeps the upper third (faces, sky, headroom).
TOP_CROP_SHARE = 0.30


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (unlike Python's banker's round)."""
    return int(math.floor(value + 0.5))


class CroppingService:
    """
    Trim-only cropping towards a device aspect ratio.
    Never pads: a plan only ever removes pixels.
    """
    def __init__(self, image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()

    def plan(self, original_width: int, original_height: int, config: DeviceRatioConfig) -> CropPlan:
        """
        Compute how to crop an image of the given size so its ratio falls in
        the config's window.

        Args:
            original_width (int): Width of the source image in pixels.
            original_height (int): Height of the source image in pixels.
            config (DeviceRatioConfig): Target window for the device.

        Returns:
            CropPlan: The rectangle to keep. `needs_cropping` is False when the
            ratio is already inside the (inclusive) window, or when the image
            is too small to lose a single pixel.
        """
        if original_width <= 0 or original_height <= 0:
            raise InvalidDimensionsError(
                f"Cannot plan a crop for a {original_width}x{original_height} image"
            )

        original_ratio = original_height / original_width

        if config.is_in_range(original_ratio):
            plan = self._keep_whole_image(original_width, original_height, original_ratio,
                                          config.target_ratio, "No cropping needed")
        elif original_ratio < config.min_ratio:
            # Too wide: trim the sides
            plan = self._plan_horizontal_crop(original_width, original_height, original_ratio, config.target_ratio)
        else:
            # Too tall: trim top and bottom
            plan = self._plan_vertical_crop(original_width, original_height, original_ratio, config.target_ratio)

        logger.debug(f"{original_width}x{original_height} against {config.description or config.target_ratio}: {plan}")
        return plan

    @staticmethod
    def _keep_whole_image(original_width, original_height, original_ratio, target_ratio, action) -> CropPlan:
        return CropPlan(
            new_width=original_width,
            new_height=original_height,
            offset_x=0,
            offset_y=0,
            original_ratio=original_ratio,
            target_ratio=target_ratio,
            final_ratio=original_ratio,
            needs_cropping=False,
            action=action,
        )

    @classmethod
    def _plan_horizontal_crop(cls, original_width, original_height, original_ratio, target_ratio) -> CropPlan:
        new_width = min(original_width, max(1, round_half_up(original_height / target_ratio)))
        crop_amount = original_width - new_width
        if crop_amount == 0:
            return cls._keep_whole_image(original_width, original_height, original_ratio,
                                         target_ratio, "No cropping possible")

        return CropPlan(
            new_width=new_width,
            new_height=original_height,
            offset_x=crop_amount // 2,
            offset_y=0,
            original_ratio=original_ratio,
            target_ratio=target_ratio,
            final_ratio=original_height / new_width,
            needs_cropping=True,
            action=f"Horizontal crop (-{crop_amount}px)",
        )

    @classmethod
    def _plan_vertical_crop(cls, original_width, original_height, original_ratio, target_ratio) -> CropPlan:
        new_height = min(original_height, max(1, round_half_up(original_width * target_ratio)))
        crop_amount = original_height - new_height
        if crop_amount == 0:
            return cls._keep_whole_image(original_width, original_height, original_ratio,
                                         target_ratio, "No cropping possible")

        return CropPlan(
            new_width=original_width,
            new_height=new_height,
            offset_x=0,
            offset_y=round_half_up(crop_amount * TOP_CROP_SHARE),
            original_ratio=original_ratio,
            target_ratio=target_ratio,
            final_ratio=new_height / original_width,
            needs_cropping=True,
            action=f"Vertical crop (-{crop_amount}px)",
        )

    def apply_crop(self, img: Image, plan: CropPlan) -> Image:
        """
        Cut the planned rectangle out of the image.
        Returns the same Image when the plan does not crop.
        """
        if not plan.needs_cropping:
            return img

        new_pixels = self.image_service.crop_pixels(
            img,
            bound_r=plan.offset_x + plan.new_width,
            bound_l=plan.offset_x,
            bound_t=plan.offset_y,
            bound_b=plan.offset_y + plan.new_height,
        )
        return self.image_service.create_image(new_pixels, img.path)

    def smart_crop(self, img: Image, config: DeviceRatioConfig) -> Image:
        height, width = self.image_service.get_image_dimensions(img)
        return self.apply_crop(img, self.plan(width, height, config))

    def smart_crop_bytes(self, raw: bytes, config: DeviceRatioConfig, quality: int = 85) -> bytes:
        """Decode, crop towards the config and re-encode as JPEG. No resizing."""
        img = self.image_service.decode(raw)
        cropped = self.smart_crop(img, config)
        return self.image_service.encode_jpeg(cropped, quality)

    def debug_crop_info(self, original_width: int, original_height: int, config: DeviceRatioConfig) -> str:
        plan = self.plan(original_width, original_height, config)
        return (
            "=== SMART CROP DEBUG ===\n"
            f"Original: {original_width}x{original_height} (ratio: {plan.original_ratio:.3f})\n"
            f"Target: {config.description} (ratio: {config.target_ratio:.3f})\n"
            f"Result: {plan.new_width}x{plan.new_height} (ratio: {plan.final_ratio:.3f})\n"
            f"Offset: ({plan.offset_x}, {plan.offset_y})\n"
            f"Action: {plan.action}\n"
            f"Needs Cropping: {plan.needs_cropping}\n"
        )
