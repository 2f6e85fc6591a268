"""Default configuration values for cropimage."""

from __future__ import annotations

from typing import Final

import numpy as np

# ``DEFAULT_CROP`` is the selection a fresh interaction starts from, expressed
# as ``(x1, y1, x2, y2)`` fractions of the source image.
DEFAULT_CROP: Final[tuple[float, float, float, float]] = (0.1, 0.1, 0.9, 0.9)
DEFAULT_EDGE_SNAP_THRESHOLD: Final[float] = 0.02

# Ratios closer than this are treated as already locked.
ASPECT_RATIO_EPSILON: Final[float] = 1e-6

# Canonical coordinates are stored at single precision.
CANONICAL_DTYPE: Final[type[np.floating]] = np.float32

# ---------------------------------------------------------------------------
# Viewport constants
# ---------------------------------------------------------------------------

# Smallest crop, in source pixels along the shorter axis, that zooming may
# reach.
MIN_CROP_PX: Final[int] = 50

# Fraction of the constraining container dimension occupied by a locked frame.
FRAME_FILL_FRACTION: Final[float] = 0.8

# ---------------------------------------------------------------------------
# Serialization constants
# ---------------------------------------------------------------------------

CROP_PARAM: Final[str] = "crop"
CROP_X_UNITS_PARAM: Final[str] = "cropxunits"
CROP_Y_UNITS_PARAM: Final[str] = "cropyunits"
IMAGEFLOW_PAD_PARAM: Final[str] = "s.pad"
IMAGERESIZER_PAD_PARAM: Final[str] = "margin"

# Characters ``encodeURIComponent`` leaves untouched besides alphanumerics.
QUERY_SAFE_CHARS: Final[str] = "-_.!~*'()"
