"""Crop selection geometry: constraint pipeline, viewport model and reducer.

All geometry is expressed in fractions of the source image.  The public API is
re-exported here so callers can ``from cropimage import constrain``.
"""

from .adapters import (
    GenericRiapiAdapter,
    ImageResizerAdapter,
    ImageflowAdapter,
    RiapiAdapter,
    RiapiResult,
    build_querystring,
    get_adapter,
    parse_querystring,
)
from .constraints import constrain, f32, move_crop, normalize_crop, ratio_value, resize_crop
from .errors import AdapterError, ConfigError, CropImageError
from .handles import DragHandle
from .models import (
    AspectRatio,
    CropConfig,
    CropMode,
    CropRect,
    CropSelection,
    CropState,
    PadRect,
    Point,
    Size,
    ZERO_PAD,
    default_config,
    default_selection,
    default_state,
)
from .schema import config_from_mapping, config_to_mapping
from .state import (
    CropAction,
    DragEnd,
    DragMove,
    DragStart,
    NewSelectionStart,
    Reset,
    SetSelection,
    crop_reducer,
)
from .viewport import (
    FrameRect,
    ImageTransform,
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

__version__ = "0.1.0"

__all__ = [
    "AdapterError",
    "AspectRatio",
    "ConfigError",
    "CropAction",
    "CropConfig",
    "CropImageError",
    "CropMode",
    "CropRect",
    "CropSelection",
    "CropState",
    "DragEnd",
    "DragHandle",
    "DragMove",
    "DragStart",
    "FrameRect",
    "GenericRiapiAdapter",
    "ImageResizerAdapter",
    "ImageTransform",
    "ImageflowAdapter",
    "NewSelectionStart",
    "PadRect",
    "Point",
    "Reset",
    "RiapiAdapter",
    "RiapiResult",
    "SetSelection",
    "Size",
    "ViewportState",
    "ZERO_PAD",
    "build_querystring",
    "clamp_viewport",
    "compute_frame_rect",
    "compute_image_transform",
    "config_from_mapping",
    "config_to_mapping",
    "constrain",
    "crop_rect_to_viewport",
    "crop_reducer",
    "default_config",
    "default_selection",
    "default_state",
    "effective_frame_ar",
    "f32",
    "get_adapter",
    "get_max_zoom",
    "move_crop",
    "normalize_crop",
    "parse_querystring",
    "ratio_value",
    "resize_crop",
    "resolve_frame_ar",
    "viewport_to_crop_rect",
    "viewport_to_selection",
    "zoom_toward",
]
