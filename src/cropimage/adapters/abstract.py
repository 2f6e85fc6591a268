"""
Abstract base class and query-string helpers for RIAPI adapters.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote, unquote

import numpy as np

from ..config import (
    CANONICAL_DTYPE,
    CROP_PARAM,
    CROP_X_UNITS_PARAM,
    CROP_Y_UNITS_PARAM,
    QUERY_SAFE_CHARS,
)
from ..constraints import f32
from ..models import CropRect, CropSelection, PadRect, ZERO_PAD


@dataclass(frozen=True)
class RiapiResult:
    """Ordered query parameters together with their encoded query string."""

    params: dict[str, str]
    querystring: str


def build_querystring(params: Mapping[str, str]) -> str:
    """Encode *params* in insertion order, omitting empty values."""
    entries = [(key, value) for key, value in params.items() if value != ""]
    if not entries:
        return ""
    return "?" + "&".join(
        f"{quote(key, safe=QUERY_SAFE_CHARS)}={quote(value, safe=QUERY_SAFE_CHARS)}"
        for key, value in entries
    )


def parse_querystring(qs: str) -> dict[str, str]:
    """Decode *qs* (with or without a leading ``?``) into a dict."""
    params: dict[str, str] = {}
    body = qs[1:] if qs.startswith("?") else qs
    if not body:
        return params
    for part in body.split("&"):
        key, _, value = part.partition("=")
        if key:
            params[unquote(key)] = unquote(value)
    return params


def format_number(value: float) -> str:
    """Return the shortest positional text that reads back as the same f32."""
    return np.format_float_positional(CANONICAL_DTYPE(value), trim="-")


def parse_numbers(text: Optional[str], count: int) -> Optional[list[float]]:
    """Parse *count* comma-separated finite numbers, or return ``None``."""
    if not text:
        return None
    parts = text.split(",")
    if len(parts) != count:
        return None
    values: list[float] = []
    for part in parts:
        # float() accepts digit separators; query values never carry them.
        if "_" in part:
            return None
        try:
            value = float(part)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        values.append(value)
    return values


def round_half_up(value: float) -> int:
    """Round like ``Math.round``: halves go towards positive infinity."""
    return int(math.floor(value + 0.5))


def _parse_units(text: Optional[str]) -> Optional[float]:
    if not text:
        return 1.0
    values = parse_numbers(text, 1)
    if values is None or values[0] <= 0:
        return None
    return values[0]


class RiapiAdapter(ABC):
    """Base class translating selections to and from RIAPI query parameters.

    Crops are written in fractional units (``cropxunits=1``).  When reading,
    the crop is divided by whatever units are present so legacy pixel-unit
    crops load correctly.  Subclasses that support padding set ``pad_param``
    and encode the pad in rounded source pixels.
    """

    #: Query key carrying ``top,right,bottom,left`` padding, if supported.
    pad_param: Optional[str] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of the adapter."""

    def to_params(self, selection: CropSelection, source_width: float, source_height: float) -> RiapiResult:
        """Convert *selection* to query parameters."""
        params = {
            CROP_PARAM: ",".join(format_number(v) for v in selection.crop.as_tuple()),
            CROP_X_UNITS_PARAM: "1",
            CROP_Y_UNITS_PARAM: "1",
        }
        if self.pad_param is not None and not selection.pad.is_zero:
            pad = selection.pad
            params[self.pad_param] = ",".join(
                str(round_half_up(v))
                for v in (
                    pad.top * source_height,
                    pad.right * source_width,
                    pad.bottom * source_height,
                    pad.left * source_width,
                )
            )
        return RiapiResult(params=params, querystring=build_querystring(params))

    def from_params(
        self,
        params: Mapping[str, str],
        source_width: float,
        source_height: float,
    ) -> Optional[CropSelection]:
        """Parse query parameters back into a selection.

        Returns ``None`` when the crop is missing or malformed.  A malformed
        pad falls back to zero padding.
        """
        values = parse_numbers(params.get(CROP_PARAM), 4)
        if values is None:
            return None
        x_units = _parse_units(params.get(CROP_X_UNITS_PARAM))
        y_units = _parse_units(params.get(CROP_Y_UNITS_PARAM))
        if x_units is None or y_units is None:
            return None

        x1, y1, x2, y2 = values
        crop = CropRect(f32(x1 / x_units), f32(y1 / y_units), f32(x2 / x_units), f32(y2 / y_units))
        return CropSelection(crop=crop, pad=self._parse_pad(params, source_width, source_height))

    def _parse_pad(self, params: Mapping[str, str], source_width: float, source_height: float) -> PadRect:
        if self.pad_param is None or source_width <= 0 or source_height <= 0:
            return ZERO_PAD
        values = parse_numbers(params.get(self.pad_param), 4)
        if values is None:
            return ZERO_PAD
        top, right, bottom, left = values
        return PadRect(
            top=f32(top / source_height),
            right=f32(right / source_width),
            bottom=f32(bottom / source_height),
            left=f32(left / source_width),
        )
