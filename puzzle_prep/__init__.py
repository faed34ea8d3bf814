"""Adaptive crop-and-resize pipeline that prepares user photos for the puzzle board."""

from .models.device import DeviceClass, DeviceDescriptor, DeviceRatioConfig, Orientation
from .models.crop_plan import CropPlan
from .models.optimization_result import OptimizationResult
from .pipeline.image_optimizer import optimize, optimize_simple, optimize_batch

__version__ = "1.0.0"
