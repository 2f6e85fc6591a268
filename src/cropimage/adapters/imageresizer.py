"""
ImageResizer (v3/v4/v5) RIAPI adapter.

Crop: ``?crop=x1,y1,x2,y2&cropxunits=1&cropyunits=1``
Padding: ``&margin=top,right,bottom,left`` in source pixels.
"""

from __future__ import annotations

from ..config import IMAGERESIZER_PAD_PARAM
from .abstract import RiapiAdapter


class ImageResizerAdapter(RiapiAdapter):
    """Adapter emitting ImageResizer's ``margin`` padding parameter."""

    pad_param = IMAGERESIZER_PAD_PARAM

    @property
    def name(self) -> str:
        return "imageresizer"
