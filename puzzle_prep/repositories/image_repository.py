from pathlib import Path
from typing import Union, Iterable, Iterator
from io import BytesIO
import logging
import numpy as np
import cv2
from PIL import Image as PILImage
from ..models.image import Image
from ..models.errors import EmptyInputError, DecodeError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTS = (".jpg", ".jpeg", ".png", ".bmp", ".webp")


class ImageRepository:
    """
    Handles codec calls and file I/O for Image entities.
    """
    def __init__(self, valid_exts: Iterable[str] = DEFAULT_IMAGE_EXTS):
        self.VALID_EXTS = {ext.strip().lower() for ext in valid_exts if ext.strip()}

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def retrieve_image_dimensions(img: Image):
        return img.pixels.shape[:2]

    @staticmethod
    def decode(raw: bytes, path: Union[str, Path] = None) -> Image:
        """
        Decode compressed bytes (JPEG/PNG/...) into an RGB Image.
        EXIF orientation is applied by OpenCV.
        """
        if not raw:
            raise EmptyInputError("Image data to optimize is empty")

        buffer = np.frombuffer(raw, dtype=np.uint8)
        try:
            arr_bgr = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
        except cv2.error as exc:
            raise DecodeError(f"Unable to decode image - unsupported format or corrupt data: {exc}") from exc

        if arr_bgr is None:
            raise DecodeError("Unable to decode image - unsupported format or corrupt data")

        arr = cv2.cvtColor(arr_bgr, cv2.COLOR_BGR2RGB)
        return ImageRepository.create_image(arr, path)

    @staticmethod
    def encode_jpeg(image: Image, quality: int) -> bytes:
        pixels = image.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)

        buffer = BytesIO()
        PILImage.fromarray(pixels).save(buffer, format="JPEG", quality=quality)
        return buffer.getvalue()

    @staticmethod
    def read_bytes(path: Union[str, Path]) -> bytes:
        return Path(path).read_bytes()

    @staticmethod
    def write_bytes(path: Union[str, Path], data: bytes) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image file paths one at a time, sorted by name.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            if not p.is_file():
                logger.debug(f"Skipping because not file: {p}")
                continue
            yield p
