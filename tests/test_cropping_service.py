from __future__ import annotations

import numpy as np
import pytest

from conftest import decoded_size
from puzzle_prep.models.crop_plan import CropPlan
from puzzle_prep.models.device import DeviceClass, DeviceRatioConfig, Orientation
from puzzle_prep.models.errors import InvalidDimensionsError
from puzzle_prep.repositories.ratio_config_repository import RatioConfigRepository
from puzzle_prep.services.cropping_service import TOP_CROP_SHARE, CroppingService, round_half_up


PHONE_PORTRAIT = RatioConfigRepository().get(DeviceClass.PHONE, Orientation.PORTRAIT)

SIZES = [
    (1, 1),
    (1, 1000),
    (1000, 1),
    (7, 13),
    (640, 480),
    (480, 640),
    (1000, 3000),
    (3000, 1000),
    (1920, 1080),
    (4032, 3024),
    (3024, 4032),
]


@pytest.fixture
def service() -> CroppingService:
    return CroppingService()


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(526.3) == 526
    assert round_half_up(2.49) == 2


def test_too_wide_image_gets_centered_horizontal_crop(service: CroppingService) -> None:
    plan = service.plan(3000, 1000, PHONE_PORTRAIT)

    assert plan.needs_cropping
    assert (plan.new_width, plan.new_height) == (526, 1000)
    assert (plan.offset_x, plan.offset_y) == (1237, 0)
    assert plan.action == "Horizontal crop (-2474px)"
    assert plan.original_ratio == pytest.approx(1000 / 3000)
    assert plan.final_ratio == pytest.approx(1.90, abs=0.01)


def test_too_tall_image_gets_top_biased_vertical_crop(service: CroppingService) -> None:
    plan = service.plan(1000, 3000, PHONE_PORTRAIT)

    assert plan.needs_cropping
    assert (plan.new_width, plan.new_height) == (1000, 1900)
    assert (plan.offset_x, plan.offset_y) == (0, 330)
    assert plan.action == "Vertical crop (-1100px)"
    assert plan.final_ratio == pytest.approx(1.90)


def test_compliant_image_is_left_alone(service: CroppingService) -> None:
    plan = service.plan(1000, 1900, PHONE_PORTRAIT)

    assert not plan.needs_cropping
    assert (plan.new_width, plan.new_height, plan.offset_x, plan.offset_y) == (1000, 1900, 0, 0)
    assert plan.final_ratio == plan.original_ratio
    assert plan.action == "No cropping needed"


@pytest.mark.parametrize(("width", "height"), [(100, 150), (100, 250)])
def test_window_bounds_are_inclusive(service: CroppingService, width: int, height: int) -> None:
    config = DeviceRatioConfig(target_ratio=2.0, min_ratio=1.5, max_ratio=2.5)
    assert not service.plan(width, height, config).needs_cropping


@pytest.mark.parametrize(("width", "height"), [(0, 100), (100, 0), (-5, 10)])
def test_degenerate_sizes_are_rejected(service: CroppingService, width: int, height: int) -> None:
    with pytest.raises(InvalidDimensionsError):
        service.plan(width, height, PHONE_PORTRAIT)


@pytest.mark.parametrize("config", list(RatioConfigRepository.PRESETS.values()), ids=lambda c: c.description)
@pytest.mark.parametrize(("width", "height"), SIZES)
def test_plan_never_expands_and_moves_ratio_towards_target(
    service: CroppingService, config: DeviceRatioConfig, width: int, height: int
) -> None:
    plan = service.plan(width, height, config)

    assert 1 <= plan.new_width <= width
    assert 1 <= plan.new_height <= height
    assert 0 <= plan.offset_x and plan.offset_x + plan.new_width <= width
    assert 0 <= plan.offset_y and plan.offset_y + plan.new_height <= height

    if plan.needs_cropping:
        assert abs(plan.final_ratio - config.target_ratio) < abs(plan.original_ratio - config.target_ratio)
    else:
        assert config.is_in_range(plan.original_ratio) or plan.action == "No cropping possible"
        assert (plan.new_width, plan.new_height) == (width, height)
        assert plan.final_ratio == plan.original_ratio


@pytest.mark.parametrize("config", list(RatioConfigRepository.PRESETS.values()), ids=lambda c: c.description)
def test_single_pixel_image_is_never_reported_as_cropped(service: CroppingService, config: DeviceRatioConfig) -> None:
    plan = service.plan(1, 1, config)

    assert not plan.needs_cropping
    assert plan.action == "No cropping possible"
    assert (plan.new_width, plan.new_height, plan.offset_x, plan.offset_y) == (1, 1, 0, 0)


def test_vertical_bias_is_fixed_thirty_percent() -> None:
    assert TOP_CROP_SHARE == pytest.approx(0.30)


def test_apply_crop_extracts_exact_region(service: CroppingService, make_image) -> None:
    img = make_image(300, 100)
    plan = service.plan(300, 100, PHONE_PORTRAIT)

    cropped = service.apply_crop(img, plan)

    assert (plan.new_width, plan.offset_x) == (53, 123)
    assert (cropped.width, cropped.height) == (53, 100)
    assert np.array_equal(cropped.pixels, img.pixels[0:100, 123:176])
    assert cropped.pixels.flags["C_CONTIGUOUS"]


def test_apply_crop_without_cropping_returns_same_image(service: CroppingService, make_image) -> None:
    img = make_image(100, 190)
    plan = service.plan(100, 190, PHONE_PORTRAIT)
    assert service.apply_crop(img, plan) is img


def test_apply_crop_rejects_rectangle_outside_image(service: CroppingService, make_image) -> None:
    img = make_image(50, 50)
    plan = CropPlan(
        new_width=40, new_height=50, offset_x=20, offset_y=0,
        original_ratio=1.0, target_ratio=1.25, final_ratio=1.25,
        needs_cropping=True, action="bogus",
    )
    with pytest.raises(ValueError):
        service.apply_crop(img, plan)


def test_smart_crop_bytes_crops_without_resizing(service: CroppingService, make_photo) -> None:
    data = service.smart_crop_bytes(make_photo(1000, 3000), PHONE_PORTRAIT, quality=80)
    assert decoded_size(data) == (1000, 1900)


def test_debug_crop_info_reports_plan(service: CroppingService) -> None:
    report = service.debug_crop_info(3000, 1000, PHONE_PORTRAIT)

    assert report.startswith("=== SMART CROP DEBUG ===")
    assert "Original: 3000x1000 (ratio: 0.333)" in report
    assert "Result: 526x1000" in report
    assert "Offset: (1237, 0)" in report
    assert "Needs Cropping: True" in report
