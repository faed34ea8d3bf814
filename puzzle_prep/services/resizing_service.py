import logging
from typing import Tuple
from ..models.image import Image
from .image_service import ImageService
from .cropping_service import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 1024


class ResizingService:
    """
    Ratio-preserving downscale.  Never upsamples.
    """
    def __init__(self, image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()

    @staticmethod
    def target_size(width: int, height: int, max_dimension: int = DEFAULT_MAX_DIMENSION) -> Tuple[int, int]:
        """
        Args:
            width (int): Current width.
            height (int): Current height.
            max_dimension (int): Bound for the longest side.

        Returns:
            (width, height) after bounding. Unchanged when both sides already fit.
        """
        if max_dimension <= 0:
            raise ValueError(f"max_dimension must be positive, got {max_dimension}")
        if width <= max_dimension and height <= max_dimension:
            return width, height

        ratio = width / height
        if width > height:
            new_width = max_dimension
            new_height = round_half_up(max_dimension / ratio)
        else:
            new_height = max_dimension
            new_width = round_half_up(max_dimension * ratio)

        return max(1, new_width), max(1, new_height)

    def needs_resize(self, img: Image, max_dimension: int = DEFAULT_MAX_DIMENSION) -> bool:
        height, width = self.image_service.get_image_dimensions(img)
        return width > max_dimension or height > max_dimension

    def resize(self, img: Image, max_dimension: int = DEFAULT_MAX_DIMENSION) -> Image:
        height, width = self.image_service.get_image_dimensions(img)
        new_width, new_height = self.target_size(width, height, max_dimension)
        if (new_width, new_height) == (width, height):
            return img

        logger.debug(f"Resizing {width}x{height} → {new_width}x{new_height}")
        new_pixels = self.image_service.resize_pixels(img, new_width, new_height)
        return self.image_service.create_image(new_pixels, img.path)
