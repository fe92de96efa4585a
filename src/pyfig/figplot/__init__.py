"""
matplotlib-facing plotting helpers for pyfig.

This package applies the axis-break transform to matplotlib axes and
contains the other figure utilities: popout insets, correlation matrices
and circles.
"""

from pyfig.figplot.axes_config import AxesConfig
from pyfig.figplot.break_axis import BrokenAxis, break_x_axis
from pyfig.figplot.circle import circle, circle_points
from pyfig.figplot.coordinate_manager import CoordinateManager
from pyfig.figplot.corrmatrix import compute_correlations, corr_matrix
from pyfig.figplot.popout import popout

__all__ = [
    "AxesConfig",
    "CoordinateManager",
    "BrokenAxis",
    "break_x_axis",
    "popout",
    "corr_matrix",
    "compute_correlations",
    "circle",
    "circle_points",
]
