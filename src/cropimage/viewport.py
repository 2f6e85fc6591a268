"""Pan/zoom viewport model over the crop selection.

A :class:`ViewportState` describes the same selection as a crop rectangle but
in terms suited to pinch, wheel and drag-to-pan interaction.  At ``zoom == 1``
the image exactly covers the frame; the pan is the offset of the visible
centre from the image centre, in image fractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .config import FRAME_FILL_FRACTION, MIN_CROP_PX
from .constraints import clamp, constrain, f32
from .models import CropConfig, CropMode, CropRect, CropSelection


@dataclass(frozen=True)
class ViewportState:
    """Zoom and pan describing the visible part of the image."""

    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


@dataclass(frozen=True)
class FrameRect:
    """Rectangle in container pixel coordinates."""

    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)


@dataclass(frozen=True)
class ImageTransform:
    """Translate-then-scale transform placing the image in the container.

    The image's top-left corner lands at ``(x, y)`` and each natural image
    pixel spans ``scale`` container pixels.
    """

    x: float
    y: float
    scale: float


def _visible_size(zoom: float, frame_ar: float, image_ar: float) -> tuple[float, float]:
    """Return the visible ``(width, height)`` in image fractions at *zoom*."""
    z = zoom if zoom > 0 else 1.0
    if frame_ar <= 0 or image_ar <= 0:
        return (1.0 / z, 1.0 / z)
    if image_ar > frame_ar:
        # Image wider than the frame: height constrains at zoom 1.
        return ((frame_ar / image_ar) / z, 1.0 / z)
    return (1.0 / z, (image_ar / frame_ar) / z)


def viewport_to_crop_rect(vp: ViewportState, frame_ar: float, image_ar: float) -> CropRect:
    """Return the crop rectangle visible through the frame for *vp*.

    Parameters
    ----------
    vp:
        Viewport to convert.
    frame_ar, image_ar:
        Width/height ratios of the frame and the image, in pixel space.
    """
    vis_w, vis_h = _visible_size(vp.zoom, frame_ar, image_ar)
    cx = 0.5 + vp.pan_x
    cy = 0.5 + vp.pan_y
    return CropRect(
        f32(cx - vis_w / 2),
        f32(cy - vis_h / 2),
        f32(cx + vis_w / 2),
        f32(cy + vis_h / 2),
    )


def crop_rect_to_viewport(crop: CropRect, frame_ar: float, image_ar: float) -> ViewportState:
    """Return the viewport that shows *crop* through the frame.

    When the crop's proportions differ from the frame's, the larger of the
    zooms implied by the width and the height wins, so the visible area never
    exceeds the requested crop.  The round trip is then inexact.
    """
    crop_w = crop.x2 - crop.x1
    crop_h = crop.y2 - crop.y1
    cx, cy = crop.center
    unit_w, unit_h = _visible_size(1.0, frame_ar, image_ar)

    zoom_from_w = unit_w / crop_w if crop_w > 0 else float("inf")
    zoom_from_h = unit_h / crop_h if crop_h > 0 else float("inf")
    return ViewportState(
        zoom=max(1.0, zoom_from_w, zoom_from_h),
        pan_x=cx - 0.5,
        pan_y=cy - 0.5,
    )


def clamp_viewport(
    vp: ViewportState,
    frame_ar: float,
    image_ar: float,
    mode: CropMode,
    max_zoom: float,
) -> ViewportState:
    """Clamp *vp* so that the derived crop stays valid for *mode*.

    Zoom is limited to ``[1, max_zoom]``.  In crop mode the pan is limited so
    the visible rectangle stays inside the image; in crop-pad mode overflow
    becomes padding and the pan is left alone.
    """
    zoom = clamp(vp.zoom, 1.0, max(1.0, max_zoom))
    pan_x, pan_y = vp.pan_x, vp.pan_y

    if mode == CropMode.CROP:
        vis_w, vis_h = _visible_size(zoom, frame_ar, image_ar)
        max_pan_x = max(0.0, 0.5 - vis_w / 2)
        max_pan_y = max(0.0, 0.5 - vis_h / 2)
        pan_x = clamp(pan_x, -max_pan_x, max_pan_x)
        pan_y = clamp(pan_y, -max_pan_y, max_pan_y)

    return ViewportState(zoom=zoom, pan_x=pan_x, pan_y=pan_y)


def _cover_scale(frame_rect: FrameRect, img_w: float, img_h: float) -> float:
    """Return the scale at which the image just covers the frame."""
    if img_w <= 0 or img_h <= 0 or frame_rect.w <= 0 or frame_rect.h <= 0:
        return 0.0
    if img_w / img_h > frame_rect.w / frame_rect.h:
        return frame_rect.h / img_h
    return frame_rect.w / img_w


def compute_image_transform(
    vp: ViewportState,
    frame_rect: FrameRect,
    img_w: float,
    img_h: float,
) -> ImageTransform:
    """Return the transform that renders the image for *vp* inside *frame_rect*.

    The image point ``(0.5 + pan_x, 0.5 + pan_y)`` lands on the frame centre.
    A degenerate image or frame produces a zero scale.
    """
    scale = _cover_scale(frame_rect, img_w, img_h) * vp.zoom
    fcx, fcy = frame_rect.center
    cx = 0.5 + vp.pan_x
    cy = 0.5 + vp.pan_y
    return ImageTransform(x=fcx - cx * img_w * scale, y=fcy - cy * img_h * scale, scale=scale)


def compute_frame_rect(
    container_w: float,
    container_h: float,
    frame_ar: Optional[float],
) -> FrameRect:
    """Return the frame rectangle inside a container.

    Free mode (``frame_ar is None``) fills the container.  Otherwise the frame
    is centred and spans most of the constraining container dimension.
    """
    if frame_ar is None or frame_ar <= 0 or container_w <= 0 or container_h <= 0:
        return FrameRect(0.0, 0.0, container_w, container_h)

    if container_w / container_h > frame_ar:
        frame_h = container_h * FRAME_FILL_FRACTION
        frame_w = frame_h * frame_ar
    else:
        frame_w = container_w * FRAME_FILL_FRACTION
        frame_h = frame_w / frame_ar

    return FrameRect((container_w - frame_w) / 2, (container_h - frame_h) / 2, frame_w, frame_h)


def get_max_zoom(img_w: float, img_h: float, min_crop_px: float = MIN_CROP_PX) -> float:
    """Return the zoom at which the visible crop reaches *min_crop_px* pixels."""
    if img_w <= 0 or img_h <= 0 or min_crop_px <= 0:
        return 1.0
    return max(1.0, min(img_w, img_h) / min_crop_px)


def viewport_to_selection(
    vp: ViewportState,
    frame_ar: float,
    image_ar: float,
    config: CropConfig,
) -> CropSelection:
    """Return the fully constrained selection shown by *vp*."""
    return constrain(viewport_to_crop_rect(vp, frame_ar, image_ar), config)


def effective_frame_ar(
    config: CropConfig,
    shape: Literal["rect", "circle"] = "rect",
) -> Optional[float]:
    """Return the pixel-space frame ratio, or ``None`` for free mode.

    A circular mask always uses a square frame.
    """
    if shape == "circle":
        return 1.0
    ar = config.aspect_ratio
    if ar is not None and ar.height > 0:
        return ar.width / ar.height
    return None


def resolve_frame_ar(frame_ar: Optional[float], container_w: float, container_h: float) -> float:
    """Return *frame_ar*, falling back to the container ratio in free mode."""
    if frame_ar is not None:
        return frame_ar
    if container_h <= 0:
        return 1.0
    return container_w / container_h


def zoom_toward(
    vp: ViewportState,
    new_zoom: float,
    point_x: float,
    point_y: float,
    frame_rect: FrameRect,
    img_w: float,
    img_h: float,
) -> ViewportState:
    """Change the zoom while keeping the image under ``(point_x, point_y)`` fixed.

    The image fraction under the container point is captured with the current
    transform, then the pan is solved so the new transform maps that fraction
    back onto the same container point.
    """
    old = compute_image_transform(vp, frame_rect, img_w, img_h)
    new_scale = _cover_scale(frame_rect, img_w, img_h) * new_zoom
    if old.scale <= 0 or new_scale <= 0:
        return ViewportState(zoom=new_zoom, pan_x=vp.pan_x, pan_y=vp.pan_y)

    frac_x = (point_x - old.x) / (img_w * old.scale)
    frac_y = (point_y - old.y) / (img_h * old.scale)

    # point = fc - c_new * size * s_new + frac * size * s_new, solved for c_new.
    fcx, fcy = frame_rect.center
    new_cx = frac_x + (fcx - point_x) / (img_w * new_scale)
    new_cy = frac_y + (fcy - point_y) / (img_h * new_scale)
    return ViewportState(zoom=new_zoom, pan_x=new_cx - 0.5, pan_y=new_cy - 0.5)


__all__ = [
    "FrameRect",
    "ImageTransform",
    "ViewportState",
    "clamp_viewport",
    "compute_frame_rect",
    "compute_image_transform",
    "crop_rect_to_viewport",
    "effective_frame_ar",
    "get_max_zoom",
    "resolve_frame_ar",
    "viewport_to_crop_rect",
    "viewport_to_selection",
    "zoom_toward",
]
