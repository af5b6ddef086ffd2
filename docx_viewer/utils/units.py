"""Unit conversion helpers for DrawingML measurements."""
from __future__ import annotations

from typing import Optional

EMU_PER_INCH = 914400
PIXELS_PER_INCH = 96


def emu_to_pixels(value: Optional[int]) -> Optional[int]:
    """Convert English Metric Units to CSS pixels at 96 dpi."""
    if value is None:
        return None
    return int(round(value * PIXELS_PER_INCH / EMU_PER_INCH))
