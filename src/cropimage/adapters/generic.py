"""
Generic RIAPI adapter using fractional crop units.

Output: ``?crop=x1,y1,x2,y2&cropxunits=1&cropyunits=1``
"""

from __future__ import annotations

from .abstract import RiapiAdapter


class GenericRiapiAdapter(RiapiAdapter):
    """Crop-only adapter; padding is not representable and is dropped."""

    @property
    def name(self) -> str:
        return "generic"
