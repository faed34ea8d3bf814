from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class CropPlan:
    """
    How much, and where, to trim an image before resizing.
    The rectangle always lies inside the original image.
    """
    new_width: int
    new_height: int
    offset_x: int
    offset_y: int
    original_ratio: float  # height / width before cropping
    target_ratio: float
    final_ratio: float     # height / width after cropping
    needs_cropping: bool
    action: str            # human-readable description of the branch taken

    def __str__(self) -> str:
        return (f"CropPlan: {self.new_width}x{self.new_height} "
                f"@ ({self.offset_x},{self.offset_y}) - {self.action}")
