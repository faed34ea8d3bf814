from __future__ import annotations
from ..models.device import DeviceClass, DeviceDescriptor, DeviceRatioConfig, Orientation
from ..repositories.ratio_config_repository import RatioConfigRepository

# Shortest screen side (logical px) from which a device counts as a tablet.
TABLET_BREAKPOINT = 600


class RatioConfigService:
    """
    Picks the target aspect-ratio window for a device.
    Pure lookups, no I/O.
    """

    def __init__(self, ratio_config_repository: RatioConfigRepository | None = None):
        self.ratio_config_repository = ratio_config_repository or RatioConfigRepository()

    @staticmethod
    def get_device_class(device: DeviceDescriptor) -> DeviceClass:
        if device.shortest_side >= TABLET_BREAKPOINT:
            return DeviceClass.TABLET
        return DeviceClass.PHONE

    def resolve(self, device_class: DeviceClass, orientation: Orientation) -> DeviceRatioConfig:
        return self.ratio_config_repository.get(device_class, orientation)

    def resolve_for(self, device: DeviceDescriptor | None) -> DeviceRatioConfig:
        """
        Resolve a config from a device descriptor.
        Falls back to the default preset when the descriptor is missing or invalid.
        """
        if device is None or not device.is_valid():
            return self.ratio_config_repository.default()

        return self.resolve(self.get_device_class(device), device.resolved_orientation)
