"""
RIAPI query-string adapters.

Each adapter converts a :class:`~cropimage.models.CropSelection` to the query
parameters understood by one image server, and back.
"""

from ..errors import AdapterError
from .abstract import RiapiAdapter, RiapiResult, build_querystring, parse_querystring
from .generic import GenericRiapiAdapter
from .imageflow import ImageflowAdapter
from .imageresizer import ImageResizerAdapter

ADAPTERS: dict[str, type[RiapiAdapter]] = {
    "generic": GenericRiapiAdapter,
    "imageflow": ImageflowAdapter,
    "imageresizer": ImageResizerAdapter,
}


def get_adapter(name: str) -> RiapiAdapter:
    """Return a new adapter registered under *name*."""
    try:
        return ADAPTERS[name.lower()]()
    except KeyError:
        known = ", ".join(sorted(ADAPTERS))
        raise AdapterError(f"Unknown adapter {name!r}; expected one of: {known}") from None


__all__ = [
    "ADAPTERS",
    "GenericRiapiAdapter",
    "ImageResizerAdapter",
    "ImageflowAdapter",
    "RiapiAdapter",
    "RiapiResult",
    "build_querystring",
    "get_adapter",
    "parse_querystring",
]
