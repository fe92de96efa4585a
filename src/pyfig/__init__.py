"""
PyFig: matplotlib figure utilities

Axis breaks, popout insets, correlation matrices and related helpers for
publication figures.
"""

# Import from axisbreak subpackage
from pyfig.axisbreak import (
    AxisBreakError,
    AxisBreakTransform,
    BreakResult,
    EmptyGapError,
    InvalidRangeError,
    Series,
    Tick,
    TickSet,
    break_series,
)

# Import from figplot subpackage
from pyfig.figplot import (
    AxesConfig,
    CoordinateManager,
    break_x_axis,
    circle,
    circle_points,
    corr_matrix,
    popout,
)
from pyfig.log import configure_logging
from pyfig.stats import bootstrap_distribution, bootstrap_p_value

__all__ = [
    # Axis-break core
    "AxisBreakTransform",
    "BreakResult",
    "break_series",
    "Series",
    "Tick",
    "TickSet",
    "AxisBreakError",
    "InvalidRangeError",
    "EmptyGapError",
    # matplotlib helpers
    "AxesConfig",
    "CoordinateManager",
    "break_x_axis",
    "popout",
    "corr_matrix",
    "circle",
    "circle_points",
    # Statistics
    "bootstrap_distribution",
    "bootstrap_p_value",
    "configure_logging",
]
