"""Tests for the pan/zoom viewport model."""

import pytest

from cropimage.models import AspectRatio, CropConfig, CropMode, CropRect
from cropimage.viewport import (
    FrameRect,
    ViewportState,
    clamp_viewport,
    compute_frame_rect,
    compute_image_transform,
    crop_rect_to_viewport,
    effective_frame_ar,
    get_max_zoom,
    resolve_frame_ar,
    viewport_to_crop_rect,
    viewport_to_selection,
    zoom_toward,
)


def test_unit_zoom_shows_the_whole_image_in_a_matching_frame():
    assert viewport_to_crop_rect(ViewportState(), 1.0, 1.0) == CropRect(0.0, 0.0, 1.0, 1.0)


def test_double_zoom_shows_the_centre_quarter():
    rect = viewport_to_crop_rect(ViewportState(zoom=2.0), 1.0, 1.0)
    assert rect == CropRect(0.25, 0.25, 0.75, 0.75)


def test_wide_image_in_square_frame_is_height_constrained():
    rect = viewport_to_crop_rect(ViewportState(), 1.0, 2.0)
    assert rect.as_tuple() == pytest.approx((0.25, 0.0, 0.75, 1.0))


def test_tall_image_in_square_frame_is_width_constrained():
    rect = viewport_to_crop_rect(ViewportState(), 1.0, 0.5)
    assert rect.as_tuple() == pytest.approx((0.0, 0.25, 1.0, 0.75))


def test_pan_offsets_the_visible_centre():
    rect = viewport_to_crop_rect(ViewportState(zoom=2.0, pan_x=0.1, pan_y=-0.2), 1.0, 1.0)
    assert rect.center == pytest.approx((0.6, 0.3))


def test_crop_rect_to_viewport_inverts_a_matching_rect():
    vp = crop_rect_to_viewport(CropRect(0.25, 0.25, 0.75, 0.75), 1.0, 1.0)
    assert vp.zoom == pytest.approx(2.0)
    assert (vp.pan_x, vp.pan_y) == pytest.approx((0.0, 0.0))


@pytest.mark.parametrize(
    ("vp", "frame_ar", "image_ar"),
    [
        (ViewportState(zoom=2.0, pan_x=0.1, pan_y=-0.1), 1.0, 1.0),
        (ViewportState(zoom=3.0, pan_x=-0.2, pan_y=0.05), 16 / 9, 4 / 3),
        (ViewportState(zoom=1.5, pan_x=0.0, pan_y=0.1), 0.75, 1.5),
    ],
)
def test_viewport_round_trip_for_consistent_rects(vp, frame_ar, image_ar):
    back = crop_rect_to_viewport(viewport_to_crop_rect(vp, frame_ar, image_ar), frame_ar, image_ar)
    assert back.zoom == pytest.approx(vp.zoom, rel=1e-5)
    assert back.pan_x == pytest.approx(vp.pan_x, abs=1e-6)
    assert back.pan_y == pytest.approx(vp.pan_y, abs=1e-6)


def test_mismatched_rect_uses_the_larger_zoom():
    vp = crop_rect_to_viewport(CropRect(0.2, 0.2, 0.8, 0.5), 1.0, 1.0)
    assert vp.zoom == pytest.approx(1 / 0.3)
    visible = viewport_to_crop_rect(vp, 1.0, 1.0)
    assert visible.width == pytest.approx(0.3, abs=1e-6)
    assert visible.height == pytest.approx(0.3, abs=1e-6)


def test_crop_rect_to_viewport_never_zooms_out_past_one():
    assert crop_rect_to_viewport(CropRect(-0.5, -0.5, 1.5, 1.5), 1.0, 1.0).zoom == 1.0


class TestClampViewport:
    def test_crop_mode_limits_the_pan(self):
        vp = clamp_viewport(ViewportState(zoom=2.0, pan_x=0.4, pan_y=-0.4), 1.0, 1.0, CropMode.CROP, 10.0)
        assert vp == ViewportState(zoom=2.0, pan_x=0.25, pan_y=-0.25)

    def test_zoom_is_limited_to_the_allowed_range(self):
        assert clamp_viewport(ViewportState(zoom=0.5), 1.0, 1.0, CropMode.CROP, 10.0).zoom == 1.0
        assert clamp_viewport(ViewportState(zoom=20.0), 1.0, 1.0, CropMode.CROP, 10.0).zoom == 10.0

    def test_unit_zoom_recentres_in_crop_mode(self):
        vp = clamp_viewport(ViewportState(pan_x=0.2, pan_y=0.1), 1.0, 1.0, CropMode.CROP, 10.0)
        assert (vp.pan_x, vp.pan_y) == (0.0, 0.0)

    def test_crop_pad_mode_keeps_the_pan(self):
        vp = clamp_viewport(ViewportState(zoom=2.0, pan_x=0.4, pan_y=-0.4), 1.0, 1.0, CropMode.CROP_PAD, 10.0)
        assert (vp.pan_x, vp.pan_y) == (0.4, -0.4)

    def test_clamped_viewport_gives_an_in_bounds_rect(self):
        vp = clamp_viewport(ViewportState(zoom=1.3, pan_x=-0.6, pan_y=0.9), 1.0, 2.0, CropMode.CROP, 10.0)
        rect = viewport_to_crop_rect(vp, 1.0, 2.0)
        assert rect.x1 >= -1e-6
        assert rect.y2 <= 1.0 + 1e-6


class TestImageTransform:
    def test_unit_zoom_covers_the_frame(self):
        transform = compute_image_transform(ViewportState(), FrameRect(0, 0, 400, 400), 800, 800)
        assert transform.scale == pytest.approx(0.5)
        assert (transform.x, transform.y) == pytest.approx((0.0, 0.0))

    def test_zoom_scales_around_the_frame_centre(self):
        transform = compute_image_transform(ViewportState(zoom=2.0), FrameRect(0, 0, 400, 400), 800, 800)
        assert transform.scale == pytest.approx(1.0)
        assert (transform.x, transform.y) == pytest.approx((-200.0, -200.0))

    def test_wide_image_is_scaled_by_height(self):
        transform = compute_image_transform(ViewportState(), FrameRect(100, 50, 400, 400), 1600, 800)
        assert transform.scale == pytest.approx(0.5)
        assert transform.x == pytest.approx(300 - 400)
        assert transform.y == pytest.approx(50)

    def test_degenerate_image_has_zero_scale(self):
        assert compute_image_transform(ViewportState(), FrameRect(0, 0, 400, 400), 0, 800).scale == 0.0


@pytest.mark.parametrize(
    ("vp", "new_zoom", "point"),
    [
        (ViewportState(), 2.0, (100.0, 100.0)),
        (ViewportState(zoom=1.5, pan_x=0.05, pan_y=-0.02), 3.0, (120.0, 80.0)),
        (ViewportState(zoom=4.0, pan_x=-0.1, pan_y=0.1), 1.0, (390.0, 10.0)),
    ],
)
def test_zoom_toward_keeps_the_image_point_under_the_cursor(vp, new_zoom, point):
    frame = FrameRect(0, 0, 400, 300)
    img_w, img_h = 1000, 500
    old = compute_image_transform(vp, frame, img_w, img_h)
    frac_x = (point[0] - old.x) / (img_w * old.scale)
    frac_y = (point[1] - old.y) / (img_h * old.scale)

    zoomed = zoom_toward(vp, new_zoom, point[0], point[1], frame, img_w, img_h)
    new = compute_image_transform(zoomed, frame, img_w, img_h)
    assert zoomed.zoom == new_zoom
    assert new.x + frac_x * img_w * new.scale == pytest.approx(point[0])
    assert new.y + frac_y * img_h * new.scale == pytest.approx(point[1])


def test_zoom_toward_the_frame_centre_keeps_the_pan():
    vp = ViewportState(zoom=1.0, pan_x=0.1, pan_y=0.1)
    zoomed = zoom_toward(vp, 2.0, 200.0, 200.0, FrameRect(0, 0, 400, 400), 800, 800)
    assert (zoomed.pan_x, zoomed.pan_y) == pytest.approx((0.1, 0.1))


def test_zoom_toward_with_degenerate_frame_only_changes_zoom():
    vp = ViewportState(zoom=1.0, pan_x=0.1, pan_y=0.2)
    zoomed = zoom_toward(vp, 2.0, 10.0, 10.0, FrameRect(0, 0, 0, 0), 800, 800)
    assert zoomed == ViewportState(zoom=2.0, pan_x=0.1, pan_y=0.2)


@pytest.mark.parametrize(
    ("size", "expected"),
    [((1000, 500), 10.0), ((4000, 3000), 60.0), ((40, 40), 1.0), ((0, 100), 1.0)],
)
def test_get_max_zoom(size, expected):
    assert get_max_zoom(*size) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("container", "frame_ar", "expected"),
    [
        ((1000, 500), 1.0, FrameRect(300, 50, 400, 400)),
        ((500, 1000), 1.0, FrameRect(50, 300, 400, 400)),
        ((1000, 500), None, FrameRect(0, 0, 1000, 500)),
    ],
)
def test_compute_frame_rect(container, frame_ar, expected):
    rect = compute_frame_rect(container[0], container[1], frame_ar)
    assert (rect.x, rect.y, rect.w, rect.h) == pytest.approx((expected.x, expected.y, expected.w, expected.h))


def test_effective_frame_ar():
    assert effective_frame_ar(CropConfig()) is None
    assert effective_frame_ar(CropConfig(aspect_ratio=AspectRatio(16, 9))) == pytest.approx(16 / 9)
    assert effective_frame_ar(CropConfig(), shape="circle") == 1.0


def test_resolve_frame_ar_falls_back_to_the_container():
    assert resolve_frame_ar(None, 800, 400) == 2.0
    assert resolve_frame_ar(1.5, 800, 400) == 1.5
    assert resolve_frame_ar(None, 800, 0) == 1.0


def test_viewport_to_selection_constrains_the_visible_rect(square_config):
    selection = viewport_to_selection(ViewportState(pan_x=0.3), 1.0, 1.0, square_config)
    assert selection.crop == CropRect(0.0, 0.0, 1.0, 1.0)


def test_viewport_to_selection_in_crop_pad_mode_pads_overflow(pad_config):
    selection = viewport_to_selection(ViewportState(zoom=2.0, pan_x=-0.4), 1.0, 1.0, pad_config)
    assert selection.crop.x1 == 0.0
    assert selection.pad.left == pytest.approx(0.15, abs=1e-6)
