"""
Imageflow Server RIAPI adapter.

Crop: ``?crop=x1,y1,x2,y2&cropxunits=1&cropyunits=1``
Padding: ``&s.pad=top,right,bottom,left`` in source pixels.
"""

from __future__ import annotations

from ..config import IMAGEFLOW_PAD_PARAM
from .abstract import RiapiAdapter


class ImageflowAdapter(RiapiAdapter):
    """Adapter emitting Imageflow's ``s.pad`` padding parameter."""

    pad_param = IMAGEFLOW_PAD_PARAM

    @property
    def name(self) -> str:
        return "imageflow"
