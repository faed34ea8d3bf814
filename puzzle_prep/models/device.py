from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class DeviceClass(str, Enum):
    PHONE = "phone"
    TABLET = "tablet"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass(frozen=True)
class DeviceDescriptor:
    """
    Minimal display information supplied by the UI layer at call time.
    Dimensions are logical pixels; orientation is inferred when omitted.
    """
    screen_width: float
    screen_height: float
    orientation: Orientation | None = None

    def is_valid(self) -> bool:
        return self.screen_width > 0 and self.screen_height > 0

    @property
    def shortest_side(self) -> float:
        return min(self.screen_width, self.screen_height)

    @property
    def resolved_orientation(self) -> Orientation:
        if self.orientation is not None:
            return self.orientation
        if self.screen_height >= self.screen_width:
            return Orientation.PORTRAIT
        return Orientation.LANDSCAPE


@dataclass(frozen=True)
class DeviceRatioConfig:
    """
    Value-object holding the accepted height/width window for one
    device class + orientation pairing.
    """
    target_ratio: float   # height / width
    min_ratio:    float   # inclusive
    max_ratio:    float   # inclusive
    description:  str = ""

    def __post_init__(self):
        if self.target_ratio <= 0:
            raise ValueError(f"target_ratio must be positive, got {self.target_ratio}")
        if not self.min_ratio <= self.target_ratio <= self.max_ratio:
            raise ValueError(
                f"Expected min_ratio <= target_ratio <= max_ratio, got "
                f"{self.min_ratio} / {self.target_ratio} / {self.max_ratio}"
            )

    def is_in_range(self, ratio: float) -> bool:
        return self.min_ratio <= ratio <= self.max_ratio

    @classmethod
    def around(cls, target_ratio: float, tolerance: float, description: str = "") -> DeviceRatioConfig:
        """Build a config whose window is target ± tolerance (as a fraction of target)."""
        return cls(
            target_ratio=target_ratio,
            min_ratio=target_ratio * (1.0 - tolerance),
            max_ratio=target_ratio * (1.0 + tolerance),
            description=description,
        )
