"""Constraint pipeline turning a raw rectangle into a valid :class:`CropSelection`.

The stages run in a fixed order: aspect-ratio lock, bounds or padding
(depending on the mode), minimum/maximum size, edge snapping and finally
single-precision rounding.  Every function here is total; degenerate input is
absorbed by guard clauses instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional, Union

import numpy as np

from .config import ASPECT_RATIO_EPSILON, CANONICAL_DTYPE
from .handles import Anchor, DragHandle, LockAxis, geometry_for
from .models import (
    AspectRatio,
    CropConfig,
    CropMode,
    CropRect,
    CropSelection,
    PadRect,
    ZERO_PAD,
)

_LOGGER = logging.getLogger(__name__)

HandleLike = Union[DragHandle, str, None]


def f32(value: float) -> float:
    """Round *value* to IEEE-754 single precision."""
    return float(CANONICAL_DTYPE(value))


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp *value* into ``[minimum, maximum]``."""
    return max(minimum, min(maximum, value))


def ratio_value(ar: AspectRatio, source_width: float, source_height: float) -> float:
    """Return the crop-fraction ratio equivalent to the pixel ratio *ar*.

    Crop coordinates are fractions of the source, so a pixel ratio has to be
    scaled by the source proportions.  A 16:9 lock on a 1920x1080 source
    yields ``1.0``: equal fractional width and height.
    """
    return (ar.width / ar.height) * (source_height / source_width)


def _current_ratio(width: float, height: float) -> float:
    if height:
        return width / height
    return math.inf if width else math.nan


def apply_aspect_ratio(
    crop: CropRect,
    ar: Optional[AspectRatio],
    source_width: float,
    source_height: float,
    handle: HandleLike = None,
) -> CropRect:
    """Reshape *crop* to the locked ratio, keeping the dragged side anchored.

    Parameters
    ----------
    crop:
        Rectangle to correct.  Expected to be normalised.
    ar:
        Ratio lock in output-pixel terms, or ``None`` for free cropping.
    source_width, source_height:
        Source dimensions in pixels, used to translate the ratio.
    handle:
        Handle driving the change.  Edge handles keep the dragged dimension,
        corners and moves shrink to fit inside the current rectangle.
    """
    if ar is None:
        return crop
    if source_width <= 0 or source_height <= 0 or ar.width <= 0 or ar.height <= 0:
        _LOGGER.debug("Skipping aspect lock %r for source %sx%s", ar, source_width, source_height)
        return crop

    target = ratio_value(ar, source_width, source_height)
    width = crop.x2 - crop.x1
    height = crop.y2 - crop.y1
    current = _current_ratio(width, height)
    if abs(current - target) < ASPECT_RATIO_EPSILON:
        return crop

    geometry = geometry_for(handle)
    if geometry.lock_axis is LockAxis.HEIGHT:
        new_w, new_h = height * target, height
    elif geometry.lock_axis is LockAxis.WIDTH:
        new_w, new_h = width, width / target
    elif current > target:
        # Too wide: keep the height and narrow the width.
        new_w, new_h = height * target, height
    else:
        new_w, new_h = width, width / target

    cx, cy = crop.center
    anchor = geometry.anchor
    if anchor is Anchor.BOTTOM_RIGHT:
        return CropRect(crop.x2 - new_w, crop.y2 - new_h, crop.x2, crop.y2)
    if anchor is Anchor.BOTTOM_LEFT:
        return CropRect(crop.x1, crop.y2 - new_h, crop.x1 + new_w, crop.y2)
    if anchor is Anchor.TOP_RIGHT:
        return CropRect(crop.x2 - new_w, crop.y1, crop.x2, crop.y1 + new_h)
    if anchor is Anchor.TOP_LEFT:
        return CropRect(crop.x1, crop.y1, crop.x1 + new_w, crop.y1 + new_h)
    if anchor is Anchor.BOTTOM_EDGE:
        return CropRect(cx - new_w / 2, crop.y2 - new_h, cx + new_w / 2, crop.y2)
    if anchor is Anchor.TOP_EDGE:
        return CropRect(cx - new_w / 2, crop.y1, cx + new_w / 2, crop.y1 + new_h)
    if anchor is Anchor.LEFT_EDGE:
        return CropRect(crop.x1, cy - new_h / 2, crop.x1 + new_w, cy + new_h / 2)
    if anchor is Anchor.RIGHT_EDGE:
        return CropRect(crop.x2 - new_w, cy - new_h / 2, crop.x2, cy + new_h / 2)
    return CropRect(cx - new_w / 2, cy - new_h / 2, cx + new_w / 2, cy + new_h / 2)


def clamp_bounds(crop: CropRect) -> CropRect:
    """Keep *crop* inside the unit square, shifting before shrinking."""
    x1, y1, x2, y2 = crop.as_tuple()
    capped_w = min(x2 - x1, 1.0)
    capped_h = min(y2 - y1, 1.0)

    # Shift inward; the order matters when a rect overflows both sides.
    if x1 < 0:
        x1, x2 = 0.0, capped_w
    if y1 < 0:
        y1, y2 = 0.0, capped_h
    if x2 > 1:
        x1, x2 = 1.0 - capped_w, 1.0
    if y2 > 1:
        y1, y2 = 1.0 - capped_h, 1.0

    return CropRect(clamp(x1, 0.0, 1.0), clamp(y1, 0.0, 1.0), clamp(x2, 0.0, 1.0), clamp(y2, 0.0, 1.0))


def compute_padding(crop: CropRect, even_padding: bool) -> CropSelection:
    """Convert overflow beyond the unit square into padding (crop-pad mode)."""
    pad = PadRect(
        top=max(0.0, -crop.y1),
        right=max(0.0, crop.x2 - 1.0),
        bottom=max(0.0, crop.y2 - 1.0),
        left=max(0.0, -crop.x1),
    )
    clamped = CropRect(
        clamp(crop.x1, 0.0, 1.0),
        clamp(crop.y1, 0.0, 1.0),
        clamp(crop.x2, 0.0, 1.0),
        clamp(crop.y2, 0.0, 1.0),
    )
    if even_padding:
        vertical = max(pad.top, pad.bottom)
        horizontal = max(pad.left, pad.right)
        pad = PadRect(top=vertical, right=horizontal, bottom=vertical, left=horizontal)
    return CropSelection(crop=clamped, pad=pad)


def apply_min_max(crop: CropRect, config: CropConfig) -> CropRect:
    """Grow or shrink each axis independently to honour the pixel size limits.

    The minimum pass runs first and the maximum pass second, each recentring
    on the axis midpoint.  A config whose minimum exceeds its maximum is left
    to the maximum pass; the two are not reconciled.
    """
    if config.min_size is None and config.max_size is None:
        return crop
    if not config.has_source_dimensions:
        _LOGGER.debug(
            "Skipping size limits for source %sx%s", config.source_width, config.source_height
        )
        return crop

    x1, y1, x2, y2 = crop.as_tuple()
    width = x2 - x1
    height = y2 - y1

    if config.min_size is not None:
        min_w = config.min_size.width / config.source_width
        min_h = config.min_size.height / config.source_height
        if width < min_w:
            cx = (x1 + x2) / 2
            x1, x2, width = cx - min_w / 2, cx + min_w / 2, min_w
        if height < min_h:
            cy = (y1 + y2) / 2
            y1, y2, height = cy - min_h / 2, cy + min_h / 2, min_h

    if config.max_size is not None:
        max_w = config.max_size.width / config.source_width
        max_h = config.max_size.height / config.source_height
        if width > max_w:
            cx = (x1 + x2) / 2
            x1, x2 = cx - max_w / 2, cx + max_w / 2
        if height > max_h:
            cy = (y1 + y2) / 2
            y1, y2 = cy - max_h / 2, cy + max_h / 2

    return CropRect(x1, y1, x2, y2)


def apply_edge_snap(crop: CropRect, threshold: float) -> CropRect:
    """Snap coordinates lying within *threshold* of the image border onto it."""
    return CropRect(
        0.0 if crop.x1 < threshold else crop.x1,
        0.0 if crop.y1 < threshold else crop.y1,
        1.0 if crop.x2 > 1.0 - threshold else crop.x2,
        1.0 if crop.y2 > 1.0 - threshold else crop.y2,
    )


def round_selection(selection: CropSelection) -> CropSelection:
    """Round every field of *selection* to single precision."""
    crop = np.asarray(selection.crop.as_tuple(), dtype=CANONICAL_DTYPE).tolist()
    pad = np.asarray(selection.pad.as_tuple(), dtype=CANONICAL_DTYPE).tolist()
    return CropSelection(crop=CropRect(*crop), pad=PadRect(*pad))


def constrain(raw_crop: CropRect, config: CropConfig, handle: HandleLike = None) -> CropSelection:
    """Run the full constraint pipeline over *raw_crop*.

    Parameters
    ----------
    raw_crop:
        Normalised rectangle proposed by a gesture or by the caller.
    config:
        Constraint configuration for this call.
    handle:
        Handle driving the change, used to pick the aspect-ratio anchor.

    Returns
    -------
    CropSelection
        Selection whose crop and pad are valid for ``config.mode`` and whose
        fields are all single-precision values.
    """
    crop = apply_aspect_ratio(
        raw_crop, config.aspect_ratio, config.source_width, config.source_height, handle
    )

    if config.mode == CropMode.CROP_PAD:
        padded = compute_padding(crop, config.even_padding)
        crop, pad = padded.crop, padded.pad
    else:
        crop, pad = clamp_bounds(crop), ZERO_PAD

    crop = apply_min_max(crop, config)

    if config.mode == CropMode.CROP and config.edge_snap_threshold > 0:
        crop = apply_edge_snap(crop, config.edge_snap_threshold)

    return round_selection(CropSelection(crop=crop, pad=pad))


def move_crop(crop: CropRect, dx: float, dy: float) -> CropRect:
    """Translate *crop* by ``(dx, dy)`` without clamping."""
    return CropRect(crop.x1 + dx, crop.y1 + dy, crop.x2 + dx, crop.y2 + dy)


def resize_crop(crop: CropRect, handle: HandleLike, dx: float, dy: float) -> CropRect:
    """Move the edge(s) named by *handle* by ``(dx, dy)``.

    ``move``, ``new`` and unrecognised handles leave *crop* unchanged.
    """
    geometry = geometry_for(handle)
    if not geometry.resizes:
        return crop
    changes: dict[str, float] = {}
    if geometry.x_edge is not None:
        changes[geometry.x_edge] = getattr(crop, geometry.x_edge) + dx
    if geometry.y_edge is not None:
        changes[geometry.y_edge] = getattr(crop, geometry.y_edge) + dy
    return replace(crop, **changes)


def normalize_crop(crop: CropRect) -> CropRect:
    """Return *crop* with ``x1 <= x2`` and ``y1 <= y2``."""
    return CropRect(
        min(crop.x1, crop.x2),
        min(crop.y1, crop.y2),
        max(crop.x1, crop.x2),
        max(crop.y1, crop.y2),
    )


__all__ = [
    "apply_aspect_ratio",
    "apply_edge_snap",
    "apply_min_max",
    "clamp",
    "clamp_bounds",
    "compute_padding",
    "constrain",
    "f32",
    "move_crop",
    "normalize_crop",
    "ratio_value",
    "resize_crop",
    "round_selection",
]
