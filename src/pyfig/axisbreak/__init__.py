"""
Toolkit-independent axis-break transform for pyfig.

This package contains the coordinate remapping and tick relabelling used to
cut an unused interval out of an x axis. It works on plain arrays and does
not depend on matplotlib.
"""

from pyfig.axisbreak.errors import AxisBreakError, EmptyGapError, InvalidRangeError
from pyfig.axisbreak.series import Series
from pyfig.axisbreak.ticks import Tick, TickSet, format_tick_value
from pyfig.axisbreak.transform import (
    DEFAULT_GAP_FRACTION,
    AxisBreakTransform,
    BreakResult,
    break_series,
)

__all__ = [
    "AxisBreakTransform",
    "BreakResult",
    "break_series",
    "DEFAULT_GAP_FRACTION",
    "Series",
    "Tick",
    "TickSet",
    "format_tick_value",
    "AxisBreakError",
    "InvalidRangeError",
    "EmptyGapError",
]
