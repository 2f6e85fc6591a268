"""Schema helpers for building a :class:`CropConfig` from plain mappings."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .config import DEFAULT_EDGE_SNAP_THRESHOLD
from .errors import ConfigError
from .models import AspectRatio, CropConfig, CropMode, Size

_SIZE_SCHEMA: dict[str, Any] = {
    "type": ["object", "null"],
    "required": ["width", "height"],
    "properties": {
        "width": {"type": "number", "minimum": 0},
        "height": {"type": "number", "minimum": 0},
    },
    "additionalProperties": False,
}

_ASPECT_RATIO_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["width", "height"],
    "properties": {
        "width": {"type": "number", "exclusiveMinimum": 0},
        "height": {"type": "number", "exclusiveMinimum": 0},
        "label": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

CONFIG_SCHEMA: dict[str, Any] = {
    "$id": "cropimage/config.schema.json",
    "type": "object",
    "required": ["mode", "edge_snap_threshold", "even_padding", "source_width", "source_height"],
    "properties": {
        "mode": {"type": "string", "enum": [mode.value for mode in CropMode]},
        "aspect_ratio": {"oneOf": [{"type": "null"}, _ASPECT_RATIO_SCHEMA]},
        "aspect_ratios": {
            "oneOf": [{"type": "null"}, {"type": "array", "items": _ASPECT_RATIO_SCHEMA}],
        },
        "min_size": _SIZE_SCHEMA,
        "max_size": _SIZE_SCHEMA,
        "edge_snap_threshold": {"type": "number", "minimum": 0, "maximum": 0.5},
        "even_padding": {"type": "boolean"},
        "source_width": {"type": "number", "minimum": 0},
        "source_height": {"type": "number", "minimum": 0},
    },
    "additionalProperties": False,
}

DEFAULT_CONFIG: dict[str, Any] = {
    "mode": CropMode.CROP.value,
    "aspect_ratio": None,
    "aspect_ratios": None,
    "min_size": None,
    "max_size": None,
    "edge_snap_threshold": DEFAULT_EDGE_SNAP_THRESHOLD,
    "even_padding": False,
    "source_width": 0,
    "source_height": 0,
}

_validator = Draft202012Validator(CONFIG_SCHEMA)


def _error_message(error: ValidationError) -> str:
    location = ".".join(str(part) for part in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def validate_config(data: Mapping[str, Any]) -> None:
    """Validate *data* against the config schema, raising :class:`ConfigError`."""
    try:
        _validator.validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(_error_message(exc)) from exc


def merge_with_defaults(data: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_CONFIG` and validate the result."""
    merged = deepcopy(DEFAULT_CONFIG)
    if data:
        for key, value in data.items():
            if isinstance(value, CropMode):
                value = value.value
            merged[key] = value
    validate_config(merged)
    return merged


def _aspect_ratio(value: Optional[Mapping[str, Any]]) -> Optional[AspectRatio]:
    if value is None:
        return None
    return AspectRatio(width=value["width"], height=value["height"], label=value.get("label"))


def _size(value: Optional[Mapping[str, Any]]) -> Optional[Size]:
    if value is None:
        return None
    return Size(width=value["width"], height=value["height"])


def config_from_mapping(data: Optional[Mapping[str, Any]]) -> CropConfig:
    """Return a validated :class:`CropConfig` built from *data*.

    Missing keys take their defaults; unknown keys and out-of-range values
    raise :class:`ConfigError`.
    """
    merged = merge_with_defaults(data)
    ratios = merged["aspect_ratios"]
    return CropConfig(
        mode=CropMode(merged["mode"]),
        aspect_ratio=_aspect_ratio(merged["aspect_ratio"]),
        aspect_ratios=None if ratios is None else tuple(_aspect_ratio(r) for r in ratios),
        min_size=_size(merged["min_size"]),
        max_size=_size(merged["max_size"]),
        edge_snap_threshold=merged["edge_snap_threshold"],
        even_padding=merged["even_padding"],
        source_width=merged["source_width"],
        source_height=merged["source_height"],
    )


def _aspect_ratio_mapping(ar: Optional[AspectRatio]) -> Optional[dict[str, Any]]:
    if ar is None:
        return None
    mapping: dict[str, Any] = {"width": ar.width, "height": ar.height}
    if ar.label is not None:
        mapping["label"] = ar.label
    return mapping


def config_to_mapping(config: CropConfig) -> dict[str, Any]:
    """Return the mapping form of *config*, suitable for JSON."""
    return {
        "mode": CropMode(config.mode).value,
        "aspect_ratio": _aspect_ratio_mapping(config.aspect_ratio),
        "aspect_ratios": (
            None
            if config.aspect_ratios is None
            else [_aspect_ratio_mapping(ar) for ar in config.aspect_ratios]
        ),
        "min_size": (
            None
            if config.min_size is None
            else {"width": config.min_size.width, "height": config.min_size.height}
        ),
        "max_size": (
            None
            if config.max_size is None
            else {"width": config.max_size.width, "height": config.max_size.height}
        ),
        "edge_snap_threshold": config.edge_snap_threshold,
        "even_padding": config.even_padding,
        "source_width": config.source_width,
        "source_height": config.source_height,
    }


__all__ = [
    "CONFIG_SCHEMA",
    "DEFAULT_CONFIG",
    "config_from_mapping",
    "config_to_mapping",
    "merge_with_defaults",
    "validate_config",
]
