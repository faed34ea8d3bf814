from pathlib import Path
from typing import Iterable, Iterator, Union
import logging
import cv2
import numpy as np
from ..models.image import Image
from ..models.errors import EncodeError, InvalidDimensionsError
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """Codec and pixel helpers.  No cropping policy lives here."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def decode(self, raw: bytes, path: Union[str, Path] = None) -> Image:
        """
        Decode raw bytes and make sure the result has a usable size.

        Raises:
            EmptyInputError: zero-length input.
            DecodeError: the codec could not parse the bytes.
            InvalidDimensionsError: the decoded image has no area.
        """
        img = self.image_repository.decode(raw, path)
        self.validate_dimensions(img)
        return img

    def validate_dimensions(self, img: Image) -> None:
        height, width = self.get_image_dimensions(img)
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Invalid image dimensions after decoding: {width}x{height}")

    def encode_jpeg(self, img: Image, quality: int = 85) -> bytes:
        if not 0 <= quality <= 100:
            raise ValueError(f"JPEG quality must be within 0-100, got {quality}")

        data = self.image_repository.encode_jpeg(img, quality)
        if not data:
            raise EncodeError("JPEG encoding produced empty data")
        return data

    def load_bytes(self, path: Union[str, Path]) -> bytes:
        return self.image_repository.read_bytes(path)

    def save_bytes(self, path: Union[str, Path], data: bytes) -> Path:
        return self.image_repository.write_bytes(path, data)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image paths lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder,
                                              recursive=recursive,
                                              exts=exts)

    def crop_pixels(self, img: Image, bound_r, bound_l, bound_t, bound_b) -> np.ndarray:
        img_h, img_w = self.get_image_dimensions(img)
        if bound_l < 0 or bound_t < 0 or bound_r > img_w or bound_b > img_h:
            raise ValueError(
                f"Crop bounds ({bound_l},{bound_t},{bound_r},{bound_b}) "
                f"fall outside the {img_w}x{img_h} image"
            )
        if bound_l >= bound_r or bound_t >= bound_b:
            width = bound_r - bound_l
            height = bound_b - bound_t
            raise ValueError(f"Invalid crop bounds would create {width}x{height} image")

        return img.pixels[bound_t:bound_b, bound_l:bound_r].copy()

    def resize_pixels(self, img: Image, width: int, height: int) -> np.ndarray:
        # Bilinear keeps edges smooth; this runs once per puzzle load.
        return cv2.resize(img.pixels, (width, height), interpolation=cv2.INTER_LINEAR)

    def get_image_dimensions(self, img: Image):
        return self.image_repository.retrieve_image_dimensions(img)
