from typing import Tuple

import numpy as np
from loguru import logger


class CoordinateManager:
    """
    Handles coordinate transformations between data and figure coordinates.

    Figure coordinates are normalised to the figure (0-1 on both axes), the
    space annotations such as popout connector lines are drawn in.
    """

    def __init__(self, ax):
        """
        Initialise the coordinate manager.

        Parameters
        ----------
        ax : matplotlib.axes.Axes
            Axes whose data coordinates are being converted.
        """
        self.ax = ax

    def _finite_limits(
        self, lim: Tuple[float, float], axis_name: str
    ) -> Tuple[float, float]:
        if not np.isfinite(lim[0]) or not np.isfinite(lim[1]) or lim[0] == lim[1]:
            logger.warning(f"Invalid {axis_name} limits: {lim}, using (0, 1)")
            return (0.0, 1.0)
        return (float(lim[0]), float(lim[1]))

    def get_limits(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Current (xlim, ylim) of the axes, with invalid limits replaced by (0, 1)."""
        xlim = self._finite_limits(self.ax.get_xlim(), "x")
        ylim = self._finite_limits(self.ax.get_ylim(), "y")
        return xlim, ylim

    def get_position(self) -> Tuple[float, float, float, float]:
        """Axes position as (left, bottom, width, height) in figure coordinates."""
        bbox = self.ax.get_position()
        return (bbox.x0, bbox.y0, bbox.width, bbox.height)

    def data_to_figure(self, x, y) -> Tuple[np.ndarray, np.ndarray]:
        """Convert data coordinates to normalised figure coordinates."""
        (x0, x1), (y0, y1) = self.get_limits()
        left, bottom, width, height = self.get_position()

        xf = (np.asarray(x, dtype=np.float64) - x0) * width / (x1 - x0) + left
        yf = (np.asarray(y, dtype=np.float64) - y0) * height / (y1 - y0) + bottom

        # Only log for scalar values to avoid excessive output
        if np.ndim(xf) == 0:
            logger.debug(f"Converted data ({x}, {y}) to figure ({xf:.4f}, {yf:.4f})")
        return xf, yf

    def figure_to_data(self, xf, yf) -> Tuple[np.ndarray, np.ndarray]:
        """Convert normalised figure coordinates to data coordinates."""
        (x0, x1), (y0, y1) = self.get_limits()
        left, bottom, width, height = self.get_position()

        x = (np.asarray(xf, dtype=np.float64) - left) * (x1 - x0) / width + x0
        y = (np.asarray(yf, dtype=np.float64) - bottom) * (y1 - y0) / height + y0
        return x, y
