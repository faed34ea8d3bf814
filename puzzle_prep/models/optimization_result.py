from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class OptimizationResult:
    """
    Data object returned by the optimizer: encoded JPEG bytes plus
    the geometry and the trace of steps that produced them.
    """
    image_bytes: bytes
    original_width: int
    original_height: int
    final_width: int
    final_height: int
    was_cropped: bool
    was_resized: bool
    optimization_info: str  # steps joined with " → "

    @property
    def compression_ratio(self) -> float:
        return (self.original_width * self.original_height) / (self.final_width * self.final_height)

    def __str__(self) -> str:
        return (f"Optimization: {self.original_width}x{self.original_height} → "
                f"{self.final_width}x{self.final_height} "
                f"(cropped: {self.was_cropped}, resized: {self.was_resized})")
