from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger
from matplotlib.axes import Axes
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle

from pyfig.axisbreak.errors import InvalidRangeError
from pyfig.axisbreak.series import Series
from pyfig.figplot.axes_config import AxesConfig
from pyfig.figplot.coordinate_manager import CoordinateManager
from pyfig.figplot.lines import replicate_line, series_from_lines

# Default layout: main axes across the top, inset below and to the right
DEFAULT_MAIN_POSITION = (0.1, 0.55, 0.65, 0.35)
DEFAULT_INSET_POSITION = (0.3, 0.1, 0.6, 0.55)

# Percentage of the main axes' y span added above and below
DEFAULT_PADDING = 10.0

# Options the inset sets itself rather than inheriting from the main axes
WINDOW_OPTIONS = (
    "position",
    "xlim",
    "ylim",
    "xticks",
    "xticklabels",
    "yticks",
    "yticklabels",
    "title",
)

WINDOW_LINEWIDTH = 2.0


def resolve_axes(target: Union[Axes, int], fig=None) -> Axes:
    """
    Return the axes referred to by ``target``.

    ``target`` is either an Axes or a zero-based subplot number counted in
    the order the axes were added to ``fig``.
    """
    if isinstance(target, Axes):
        return target
    if isinstance(target, (int, np.integer)) and not isinstance(target, bool):
        if fig is None:
            raise ValueError("A figure is required when the target is a subplot number")
        axes = fig.get_axes()
        if not 0 <= target < len(axes):
            raise ValueError(
                f"Invalid subplot number: {target}. Must be between 0 and {len(axes) - 1}."
            )
        return axes[target]
    raise TypeError("Specified axis must be a subplot number or an Axes instance")


def window_y_extent(
    series: Sequence[Series], xmin: float, xmax: float
) -> Optional[Tuple[float, float]]:
    """
    Y range of all points with ``xmin <= x <= xmax``.

    Returns None if no finite point falls in the window.
    """
    ys = []
    for s in series:
        mask = (s.x >= xmin) & (s.x <= xmax) & np.isfinite(s.y)
        ys.append(s.y[mask])
    ys = np.concatenate(ys) if ys else np.array([])
    if ys.size == 0:
        return None
    return float(ys.min()), float(ys.max())


def padded_limits(
    lim: Tuple[float, float], padding: float, log: bool = False
) -> Tuple[float, float]:
    """
    Widen ``lim`` by ``padding`` percent of its span at both ends.

    With ``log=True`` the span is measured in decades, so positive limits
    stay positive.
    """
    if log:
        if min(lim) <= 0:
            raise ValueError(f"Log-scale limits must be positive, got {lim}")
        lo, hi = padded_limits((np.log10(lim[0]), np.log10(lim[1])), padding)
        return (float(10**lo), float(10**hi))
    margin = (lim[1] - lim[0]) * padding / 100.0
    return (lim[0] - margin, lim[1] + margin)


def _connect(fig, ax_main: Axes, ax_inset: Axes, x: float, y: float) -> Line2D:
    xf1, yf1 = CoordinateManager(ax_main).data_to_figure(x, y)
    xf2, yf2 = CoordinateManager(ax_inset).data_to_figure(x, y)
    line = Line2D(
        [float(xf1), float(xf2)],
        [float(yf1), float(yf2)],
        transform=fig.transFigure,
        color="black",
        linewidth=1.0,
    )
    fig.add_artist(line)
    return line


def popout(
    target: Union[Axes, int],
    xmin: float,
    xmax: float,
    fig=None,
    main_config: Optional[AxesConfig] = None,
    inset_config: Optional[AxesConfig] = None,
    draw_lines: bool = True,
    padding: float = DEFAULT_PADDING,
) -> Tuple[Axes, Axes]:
    """
    Create a popout plot magnifying ``[xmin, xmax]`` of an existing axes.

    The inset replicates every line of the main axes (data and style) and
    inherits the main axes' scales, spine width, font sizes and axis
    labels; ``main_config`` and ``inset_config`` override the defaults for
    either axes. The window is outlined on the main axes
    and, optionally, joined to the inset by connector lines.

    Parameters
    ----------
    target : Union[Axes, int]
        Axes to pop out from, or its zero-based subplot number in ``fig``
        (the order in which the axes were added).
    xmin, xmax : float
        X window to magnify.
    fig : Optional[matplotlib.figure.Figure], default=None
        Figure holding the axes. Only needed when ``target`` is a number.
    main_config : Optional[AxesConfig], default=None
        Options applied to the main axes after the default position.
    inset_config : Optional[AxesConfig], default=None
        Options applied to the inset after the default position.
    draw_lines : bool, default=True
        Whether to draw connector lines between the window and the inset.
    padding : float, default=10.0
        Percentage of the main axes' y span added above and below, in
        decades on a log-scaled axis.

    Returns
    -------
    Tuple[Axes, Axes]
        The main axes and the new inset axes.

    Raises
    ------
    InvalidRangeError
        If ``xmin >= xmax``.
    TypeError
        If ``target`` is neither an Axes nor a subplot number.
    """
    ax_main = resolve_axes(target, fig)
    fig = ax_main.figure

    if not xmin < xmax:
        logger.error(f"Cannot pop out window [{xmin}, {xmax}]")
        raise InvalidRangeError(xmin, xmax)

    main_cfg = AxesConfig(position=DEFAULT_MAIN_POSITION).merged(main_config)

    inherited = AxesConfig.from_axes(ax_main).without(*WINDOW_OPTIONS)
    if (
        inset_config is not None
        and inset_config.fontsize is not None
        and inset_config.labelsize is None
    ):
        inherited = inherited.without("labelsize")

    lines = list(ax_main.get_lines())
    main_ylim = ax_main.get_ylim()

    extent = window_y_extent(series_from_lines(lines), xmin, xmax)
    if extent is None:
        logger.warning(
            f"No data in window [{xmin}, {xmax}], using main axes y limits {main_ylim}"
        )
        extent = (min(main_ylim), max(main_ylim))
    ymin, ymax = extent
    if ymin == ymax:
        half = abs(ymin) * 0.05 if ymin != 0 else 0.5
        ymin, ymax = ymin - half, ymax + half

    inset_cfg = (
        inherited.merged(
            AxesConfig(
                position=DEFAULT_INSET_POSITION,
                xlim=(xmin, xmax),
                ylim=(ymin, ymax),
                title="",
            )
        )
        .merged(inset_config)
    )

    ax_inset = fig.add_axes(inset_cfg.position)
    inset_lines: List[Line2D] = [replicate_line(ax_inset, line) for line in lines]

    ax_main.set_ylim(
        padded_limits(main_ylim, padding, log=ax_main.get_yscale() == "log")
    )
    ax_main.add_patch(
        Rectangle(
            (xmin, ymin),
            xmax - xmin,
            ymax - ymin,
            fill=False,
            linewidth=WINDOW_LINEWIDTH,
        )
    )

    main_cfg.apply(ax_main)
    inset_cfg.apply(ax_inset)

    if draw_lines:
        # Bottom-left and top-right corners only; the other two cross the inset
        _connect(fig, ax_main, ax_inset, xmin, ymin)
        _connect(fig, ax_main, ax_inset, xmax, ymax)

    logger.info(
        f"Popped out [{xmin}, {xmax}] x [{ymin:.4g}, {ymax:.4g}] with {len(inset_lines)} line(s)"
    )
    return ax_main, ax_inset
