from typing import Any, Dict, List, Optional

import numpy as np

from pyfig.axisbreak.series import Series


def line_style(line) -> Dict[str, Any]:
    """Style keyword arguments that reproduce ``line`` when passed to ``Axes.plot``."""
    return {
        "color": line.get_color(),
        "linestyle": line.get_linestyle(),
        "linewidth": line.get_linewidth(),
        "marker": line.get_marker(),
        "markersize": line.get_markersize(),
        "markerfacecolor": line.get_markerfacecolor(),
        "markeredgecolor": line.get_markeredgecolor(),
        "alpha": line.get_alpha(),
        "zorder": line.get_zorder(),
    }


def replicate_line(
    ax, line, x: Optional[np.ndarray] = None, y: Optional[np.ndarray] = None, label: Optional[str] = None
):
    """
    Plot a copy of ``line`` on ``ax``, optionally with new data.

    Returns the new Line2D.
    """
    if x is None:
        x = np.asarray(line.get_xdata(), dtype=np.float64)
    if y is None:
        y = np.asarray(line.get_ydata(), dtype=np.float64)
    if label is None:
        label = line.get_label()
    (new_line,) = ax.plot(x, y, label=label, **line_style(line))
    return new_line


def series_from_lines(lines: List) -> List[Series]:
    """Read each Line2D's data into a Series named after its label."""
    return [
        Series(
            np.asarray(line.get_xdata(), dtype=np.float64),
            np.asarray(line.get_ydata(), dtype=np.float64),
            name=line.get_label(),
        )
        for line in lines
    ]
