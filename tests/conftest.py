import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make ``cropimage`` importable from a source checkout without installing it.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cropimage.models import CropConfig, CropMode, CropRect, CropSelection, ZERO_PAD  # noqa: E402


@pytest.fixture
def square_config() -> CropConfig:
    """Crop-mode config over a 1000x1000 source with the default edge snap."""
    return CropConfig(source_width=1000, source_height=1000)


@pytest.fixture
def pad_config() -> CropConfig:
    """Crop-pad config over a 1000x1000 source."""
    return CropConfig(mode=CropMode.CROP_PAD, source_width=1000, source_height=1000)


@pytest.fixture
def centre_selection() -> CropSelection:
    return CropSelection(crop=CropRect(0.2, 0.2, 0.8, 0.8), pad=ZERO_PAD)
