from __future__ import annotations

import io
from typing import Callable

import numpy as np
import pytest
from PIL import Image as PILImage

from puzzle_prep.models.image import Image


def gradient_pixels(width: int, height: int) -> np.ndarray:
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[..., 0] = xs % 256
    pixels[..., 1] = ys % 256
    pixels[..., 2] = (xs + ys) % 256
    return pixels


def encode(pixels: np.ndarray, fmt: str = "JPEG") -> bytes:
    buffer = io.BytesIO()
    PILImage.fromarray(pixels).save(buffer, format=fmt)
    return buffer.getvalue()


def decoded_size(data: bytes) -> tuple[int, int]:
    with PILImage.open(io.BytesIO(data)) as img:
        return img.size


@pytest.fixture
def make_image() -> Callable[[int, int], Image]:
    def _make(width: int, height: int) -> Image:
        return Image(gradient_pixels(width, height))

    return _make


@pytest.fixture
def make_photo() -> Callable[..., bytes]:
    def _make(width: int, height: int, fmt: str = "JPEG") -> bytes:
        return encode(gradient_pixels(width, height), fmt)

    return _make
