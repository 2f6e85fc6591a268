"""Drag handles and the per-handle geometry table.

Each handle names the rectangle coordinates it moves during a resize, the
dimension an aspect-ratio lock keeps fixed, and the point that stays anchored
while the lock is re-applied.  The table is exhaustive over :class:`DragHandle`
so resizing and aspect correction never branch on raw strings.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union


class DragHandle(str, enum.Enum):
    """Enumeration of crop interaction handles."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"
    MOVE = "move"
    NEW = "new"

    @classmethod
    def coerce(cls, value: Union[DragHandle, str, None]) -> Optional[DragHandle]:
        """Return *value* as a handle, or ``None`` when it names no handle."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class LockAxis(enum.Enum):
    """Dimension held fixed while an aspect-ratio lock is enforced."""

    HEIGHT = "height"
    WIDTH = "width"
    FIT = "fit"


class Anchor(enum.Enum):
    """Point of the rectangle that stays put while the lock is re-applied."""

    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    TOP_EDGE = "top_edge"
    BOTTOM_EDGE = "bottom_edge"
    LEFT_EDGE = "left_edge"
    RIGHT_EDGE = "right_edge"
    CENTER = "center"


@dataclass(frozen=True)
class HandleGeometry:
    """Geometry behaviour attached to one handle."""

    x_edge: Optional[str]
    y_edge: Optional[str]
    lock_axis: LockAxis
    anchor: Anchor

    @property
    def resizes(self) -> bool:
        return self.x_edge is not None or self.y_edge is not None


HANDLE_GEOMETRY: dict[DragHandle, HandleGeometry] = {
    DragHandle.N: HandleGeometry(None, "y1", LockAxis.HEIGHT, Anchor.BOTTOM_EDGE),
    DragHandle.S: HandleGeometry(None, "y2", LockAxis.HEIGHT, Anchor.TOP_EDGE),
    DragHandle.E: HandleGeometry("x2", None, LockAxis.WIDTH, Anchor.LEFT_EDGE),
    DragHandle.W: HandleGeometry("x1", None, LockAxis.WIDTH, Anchor.RIGHT_EDGE),
    DragHandle.NE: HandleGeometry("x2", "y1", LockAxis.FIT, Anchor.BOTTOM_LEFT),
    DragHandle.NW: HandleGeometry("x1", "y1", LockAxis.FIT, Anchor.BOTTOM_RIGHT),
    DragHandle.SE: HandleGeometry("x2", "y2", LockAxis.FIT, Anchor.TOP_LEFT),
    DragHandle.SW: HandleGeometry("x1", "y2", LockAxis.FIT, Anchor.TOP_RIGHT),
    DragHandle.MOVE: HandleGeometry(None, None, LockAxis.FIT, Anchor.CENTER),
    # A new selection grows out of its first corner, like a south-east drag.
    DragHandle.NEW: HandleGeometry(None, None, LockAxis.FIT, Anchor.TOP_LEFT),
}

# Geometry used when no handle (or an unknown one) drives the constraint.
DEFAULT_GEOMETRY = HandleGeometry(None, None, LockAxis.FIT, Anchor.CENTER)


def geometry_for(handle: Union[DragHandle, str, None]) -> HandleGeometry:
    """Return the geometry entry for *handle*, falling back to a centred fit."""
    resolved = DragHandle.coerce(handle)
    if resolved is None:
        return DEFAULT_GEOMETRY
    return HANDLE_GEOMETRY[resolved]


__all__ = [
    "Anchor",
    "DEFAULT_GEOMETRY",
    "DragHandle",
    "HANDLE_GEOMETRY",
    "HandleGeometry",
    "LockAxis",
    "geometry_for",
]
