from typing import Sequence, Tuple

import numpy as np
from loguru import logger

DEFAULT_N_POINTS = 1000


def circle_points(
    center: Sequence[float], radius: float, n_points: int = DEFAULT_N_POINTS
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Points evenly spaced around a circle, first and last coinciding.

    Parameters
    ----------
    center : Sequence[float]
        (x, y) of the centre.
    radius : float
        Circle radius, non-negative.
    n_points : int, default=1000
        Number of points, at least 2.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        X and Y coordinates.
    """
    if len(center) != 2:
        raise ValueError(f"center must be (x, y), got {center}")
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}")

    theta = np.linspace(0, 2 * np.pi, n_points)
    x = radius * np.cos(theta) + center[0]
    y = radius * np.sin(theta) + center[1]
    return x, y


def circle(
    ax,
    center: Sequence[float],
    radius: float,
    style: str = "b-",
    n_points: int = DEFAULT_N_POINTS,
):
    """
    Draw a circle on ``ax`` and give the axes an equal aspect ratio.

    ``style`` is a matplotlib format string, as passed to ``Axes.plot``.
    Returns the Line2D and the X and Y coordinates.
    """
    x, y = circle_points(center, radius, n_points)
    (line,) = ax.plot(x, y, style)
    ax.set_aspect("equal")
    logger.debug(f"Drew circle at {tuple(center)} with radius {radius}")
    return line, x, y
