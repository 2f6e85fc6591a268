"""Value types shared by the constraint pipeline, viewport math and reducer.

All geometry is expressed in fractions of the source image: ``0`` is the left
or top edge and ``1`` the right or bottom edge.  Every type is a frozen
dataclass so a selection captured at drag start can never be mutated by a
later step.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .config import DEFAULT_CROP, DEFAULT_EDGE_SNAP_THRESHOLD
from .handles import DragHandle


class CropMode(str, Enum):
    """Overflow policy applied by the constraint pipeline."""

    CROP = "crop"
    CROP_PAD = "crop-pad"


@dataclass(frozen=True)
class Point:
    """A pointer position in crop-fraction coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """A width/height pair in source pixels."""

    width: float
    height: float


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle in fractions of the source dimensions.

    Ordering (``x1 <= x2`` and ``y1 <= y2``) is not enforced here; drags that
    cross the opposite edge produce inverted rects until they are passed
    through :func:`cropimage.constraints.normalize_crop`.
    """

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    @property
    def center(self) -> tuple[float, float]:
        return ((self.x1 + self.x2) * 0.5, (self.y1 + self.y2) * 0.5)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)


@dataclass(frozen=True)
class PadRect:
    """Canvas added outside the crop, in fractions of the source dimensions."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @property
    def is_zero(self) -> bool:
        return not (self.top > 0 or self.right > 0 or self.bottom > 0 or self.left > 0)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.top, self.right, self.bottom, self.left)


ZERO_PAD = PadRect()


@dataclass(frozen=True)
class CropSelection:
    """The canonical output unit: a visible crop plus optional padding."""

    crop: CropRect
    pad: PadRect = ZERO_PAD


@dataclass(frozen=True)
class AspectRatio:
    """Aspect-ratio lock given in output-pixel proportions."""

    width: float
    height: float
    label: Optional[str] = None


@dataclass(frozen=True)
class CropConfig:
    """Per-call configuration for the constraint engine.

    ``aspect_ratios`` is advisory (a list of presets for the UI); only
    ``aspect_ratio`` is enforced.  ``min_size`` and ``max_size`` are in source
    pixels and are ignored unless both source dimensions are positive.
    """

    mode: CropMode = CropMode.CROP
    aspect_ratio: Optional[AspectRatio] = None
    aspect_ratios: Optional[tuple[AspectRatio, ...]] = None
    min_size: Optional[Size] = None
    max_size: Optional[Size] = None
    edge_snap_threshold: float = DEFAULT_EDGE_SNAP_THRESHOLD
    even_padding: bool = False
    source_width: float = 0
    source_height: float = 0

    @property
    def has_source_dimensions(self) -> bool:
        return self.source_width > 0 and self.source_height > 0

    def with_changes(self, **changes) -> CropConfig:
        """Return a copy of the config with *changes* applied."""
        return replace(self, **changes)


@dataclass(frozen=True)
class CropState:
    """Interaction state threaded through :func:`cropimage.state.crop_reducer`.

    ``active_handle``, ``drag_start_selection`` and ``drag_start_point`` are
    set together on drag start and cleared together on drag end.
    """

    selection: CropSelection = field(default_factory=lambda: default_selection())
    active_handle: Optional[DragHandle] = None
    drag_start_selection: Optional[CropSelection] = None
    drag_start_point: Optional[Point] = None

    @property
    def is_dragging(self) -> bool:
        return (
            self.active_handle is not None
            and self.drag_start_selection is not None
            and self.drag_start_point is not None
        )


def default_config() -> CropConfig:
    """Return the configuration used when the caller supplies nothing."""
    return CropConfig()


def default_selection() -> CropSelection:
    return CropSelection(crop=CropRect(*DEFAULT_CROP), pad=ZERO_PAD)


def default_state() -> CropState:
    return CropState(selection=default_selection())


__all__ = [
    "AspectRatio",
    "CropConfig",
    "CropMode",
    "CropRect",
    "CropSelection",
    "CropState",
    "PadRect",
    "Point",
    "Size",
    "ZERO_PAD",
    "default_config",
    "default_selection",
    "default_state",
]
