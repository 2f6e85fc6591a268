"""Pure reducer for crop drag, resize and create interactions.

The reducer never mutates its input.  Each call returns a new
:class:`CropState`, which makes the selection captured at drag start a safe
snapshot for the rest of the gesture.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from .constraints import constrain, move_crop, normalize_crop, resize_crop
from .handles import DragHandle
from .models import (
    CropConfig,
    CropRect,
    CropSelection,
    CropState,
    Point,
    ZERO_PAD,
    default_state,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetSelection:
    """Replace the selection verbatim; the caller constrains it beforehand."""

    selection: CropSelection


@dataclass(frozen=True)
class DragStart:
    handle: Union[DragHandle, str]
    point: Point
    selection: CropSelection


@dataclass(frozen=True)
class DragMove:
    point: Point


@dataclass(frozen=True)
class DragEnd:
    pass


@dataclass(frozen=True)
class NewSelectionStart:
    point: Point


@dataclass(frozen=True)
class Reset:
    pass


CropAction = Union[SetSelection, DragStart, DragMove, DragEnd, NewSelectionStart, Reset]


def _drag_rect(state: CropState, point: Point) -> CropRect:
    """Return the unconstrained rectangle for the active drag at *point*."""
    start_point = state.drag_start_point
    start_crop = state.drag_start_selection.crop
    handle = state.active_handle
    dx = point.x - start_point.x
    dy = point.y - start_point.y

    if handle is DragHandle.MOVE:
        return move_crop(start_crop, dx, dy)
    if handle is DragHandle.NEW:
        return normalize_crop(CropRect(start_point.x, start_point.y, point.x, point.y))
    return normalize_crop(resize_crop(start_crop, handle, dx, dy))


def crop_reducer(state: CropState, action: CropAction, config: CropConfig) -> CropState:
    """Return the state that results from applying *action* to *state*.

    Unknown actions, and drag actions that arrive without a matching drag
    start, return *state* unchanged.
    """
    if isinstance(action, SetSelection):
        return replace(state, selection=action.selection)

    if isinstance(action, DragStart):
        handle = DragHandle.coerce(action.handle)
        if handle is None:
            _LOGGER.debug("Ignoring drag start with unknown handle %r", action.handle)
            return state
        return replace(
            state,
            active_handle=handle,
            drag_start_selection=action.selection,
            drag_start_point=action.point,
        )

    if isinstance(action, DragMove):
        if not state.is_dragging:
            _LOGGER.debug("Ignoring drag move without an active drag")
            return state
        rect = _drag_rect(state, action.point)
        return replace(state, selection=constrain(rect, config, state.active_handle))

    if isinstance(action, DragEnd):
        if not state.is_dragging:
            _LOGGER.debug("Ignoring drag end without an active drag")
            return state
        return replace(
            state,
            active_handle=None,
            drag_start_selection=None,
            drag_start_point=None,
        )

    if isinstance(action, NewSelectionStart):
        point = action.point
        selection = CropSelection(crop=CropRect(point.x, point.y, point.x, point.y), pad=ZERO_PAD)
        return CropState(
            selection=selection,
            active_handle=DragHandle.NEW,
            drag_start_selection=selection,
            drag_start_point=point,
        )

    if isinstance(action, Reset):
        return default_state()

    return state


__all__ = [
    "CropAction",
    "DragEnd",
    "DragMove",
    "DragStart",
    "NewSelectionStart",
    "Reset",
    "SetSelection",
    "crop_reducer",
]
