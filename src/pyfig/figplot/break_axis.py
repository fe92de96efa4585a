from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from pyfig.axisbreak.ticks import TickSet
from pyfig.axisbreak.transform import (
    DEFAULT_GAP_FRACTION,
    AxisBreakTransform,
    BreakResult,
)
from pyfig.figplot.lines import replicate_line, series_from_lines

# Break glyph defaults
BREAK_MARKER_TEXT = "//"
BREAK_MARKER_FONTSIZE = 15


class BrokenAxis(NamedTuple):
    lines: List  # new Line2D objects carrying the right-hand segments
    bottom_marker: Optional[object]
    top_marker: Optional[object]
    result: BreakResult


def visible_ticks(positions: Sequence[float], lim: Tuple[float, float]) -> np.ndarray:
    """Tick positions that fall within the axis limits (either orientation)."""
    positions = np.asarray(positions, dtype=np.float64)
    lo, hi = min(lim), max(lim)
    tol = 1e-9 * max(abs(hi - lo), 1.0)
    return positions[(positions >= lo - tol) & (positions <= hi + tol)]


def break_x_axis(
    ax,
    start: float,
    stop: float,
    epsilon: float = DEFAULT_GAP_FRACTION,
    gap_width: Optional[float] = None,
    add_ticks: bool = True,
    marker_text: str = BREAK_MARKER_TEXT,
    marker_fontsize: float = BREAK_MARKER_FONTSIZE,
) -> BrokenAxis:
    """
    Insert a notch into the x axis of ``ax``.

    Useful when a large part of the x range holds no data of interest. Every
    line on the axes is split at the break: the original line keeps the
    left-hand points and a copy with the same style carries the right-hand
    points, shifted left to close up the excised interval.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Axes to modify.
    start : float
        Last x value before the break.
    stop : float
        First x value after the break.
    epsilon : float, default=DEFAULT_GAP_FRACTION
        Proportion of the current x range given over to the gap. Ignored if
        ``gap_width`` is given.
    gap_width : Optional[float], default=None
        Width of the gap in x-axis units.
    add_ticks : bool, default=True
        Whether to bound the gap with ticks labelled ``start`` and ``stop``.
    marker_text : str, default="//"
        Text drawn over the axis at the break.
    marker_fontsize : float, default=15
        Font size of the break text.

    Returns
    -------
    BrokenAxis
        New line handles, the bottom and top break markers and the
        underlying :class:`BreakResult`.

    Raises
    ------
    InvalidRangeError
        If ``start >= stop``.
    EmptyGapError
        If the gap width is negative.
    """
    transform = AxisBreakTransform(
        start, stop, gap_width=gap_width, add_boundary_ticks=add_ticks, epsilon=epsilon
    )

    xlim = ax.get_xlim()
    ylim = ax.get_ylim()

    lines = list(ax.get_lines())
    if not lines:
        logger.warning("No lines found on axes, only the ticks will be remapped")

    xtick_positions = visible_ticks(ax.get_xticks(), xlim)
    formatter = ax.xaxis.get_major_formatter()
    xtick_labels = formatter.format_ticks(xtick_positions)
    if formatter.get_offset():
        # Labels are relative to an offset that a fixed formatter would not show
        logger.debug(
            f"X tick labels use offset '{formatter.get_offset()}', formatting absolute positions"
        )
        xtick_labels = None
    ticks = TickSet.from_positions(xtick_positions, xtick_labels)

    ytick_positions = visible_ticks(ax.get_yticks(), ylim)
    if ytick_positions.size == 0:
        logger.debug(f"No visible y ticks, placing break markers at y limits {ylim}")
        ytick_positions = np.array(sorted(ylim))

    result = transform.apply(
        series_from_lines(lines), ticks=ticks, y_ticks=ytick_positions, axis_range=xlim
    )

    new_lines = []
    for line, left, right in zip(lines, result.left, result.right_shifted):
        line.set_data(left.x, left.y)
        new_lines.append(
            replicate_line(ax, line, right.x, right.y, label=f"_{line.get_label()}_break")
        )

    ax.set_xticks(result.ticks.positions)
    ax.set_xticklabels(result.ticks.labels)

    lower, upper = xlim
    if upper >= transform.stop and upper + result.offset > lower:
        upper = upper + result.offset
    ax.set_xlim(lower, upper)
    ax.set_ylim(ylim)

    markers = [
        ax.text(
            x,
            y,
            marker_text,
            fontsize=marker_fontsize,
            horizontalalignment="center",
            verticalalignment="center",
            bbox={"facecolor": "white", "edgecolor": "none", "pad": 1},
            clip_on=False,
        )
        for x, y in result.anchors
    ]
    bottom_marker, top_marker = (markers + [None, None])[:2]

    logger.info(
        f"Inserted x-axis break over [{start}, {stop}]: {len(new_lines)} line(s) split, "
        f"{len(result.ticks)} tick(s)"
    )
    return BrokenAxis(new_lines, bottom_marker, top_marker, result)
