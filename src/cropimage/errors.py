"""Custom exception hierarchy for cropimage.

The geometry core never raises; these errors are reserved for the boundaries
that parse caller-supplied data.
"""

from __future__ import annotations


class CropImageError(Exception):
    """Base class for all custom errors raised by cropimage."""


class ConfigError(CropImageError):
    """Raised when a configuration mapping fails schema validation."""


class AdapterError(CropImageError):
    """Raised when an unknown serialization adapter is requested."""


__all__ = ["AdapterError", "ConfigError", "CropImageError"]
