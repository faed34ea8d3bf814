from types import MappingProxyType
from typing import Mapping, Tuple
from ..models.device import DeviceClass, Orientation, DeviceRatioConfig

# Accepted deviation around each target, as a fraction of the target.
RATIO_TOLERANCE = 0.15

# Height/width of the puzzle area measured on real devices.
_PRESET_TARGETS = {
    (DeviceClass.PHONE, Orientation.PORTRAIT): 1.90,
    (DeviceClass.PHONE, Orientation.LANDSCAPE): 0.37,
    (DeviceClass.TABLET, Orientation.PORTRAIT): 1.30,
    (DeviceClass.TABLET, Orientation.LANDSCAPE): 0.55,
}

DEFAULT_KEY = (DeviceClass.PHONE, Orientation.PORTRAIT)


def _build_presets() -> Mapping[Tuple[DeviceClass, Orientation], DeviceRatioConfig]:
    presets = {
        (device_class, orientation): DeviceRatioConfig.around(
            target,
            RATIO_TOLERANCE,
            description=f"{device_class.value.capitalize()} {orientation.value} ({target:.2f})",
        )
        for (device_class, orientation), target in _PRESET_TARGETS.items()
    }
    return MappingProxyType(presets)


class RatioConfigRepository:
    """
    Read-only lookup table of ratio presets, built once at import time.
    Safe to share between threads.
    """
    PRESETS = _build_presets()

    def get(self, device_class: DeviceClass, orientation: Orientation) -> DeviceRatioConfig:
        return self.PRESETS.get((device_class, orientation), self.PRESETS[DEFAULT_KEY])

    def default(self) -> DeviceRatioConfig:
        return self.PRESETS[DEFAULT_KEY]
