from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger
from numba import njit

from pyfig.axisbreak.errors import EmptyGapError, InvalidRangeError
from pyfig.axisbreak.series import Series
from pyfig.axisbreak.ticks import Tick, TickSet, format_tick_value

# Fraction of the visible axis range given over to the gap by default
DEFAULT_GAP_FRACTION = 0.2


@njit
def _partition_masks_numba(
    x: np.ndarray, start: float, stop: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the keep masks for the two sides of an excised interval.

    Parameters
    ----------
    x : np.ndarray
        X coordinates.
    start : float
        Last x value kept on the left of the break.
    stop : float
        First x value kept on the right of the break.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (left, right) boolean masks. NaN coordinates are in neither.
    """
    left = np.zeros(len(x), dtype=np.bool_)
    right = np.zeros(len(x), dtype=np.bool_)

    for i in range(len(x)):
        if x[i] <= start:
            left[i] = True
        elif x[i] >= stop:
            right[i] = True

    return left, right


class BreakResult:
    """
    Output of :meth:`AxisBreakTransform.apply`.

    ``left[i]`` and ``right_shifted[i]`` are the two segments produced from
    the i-th input series. ``ticks`` is None when no tick set was supplied.
    ``anchors`` holds the (x, y) positions for the break glyphs.
    """

    def __init__(
        self,
        left: List[Series],
        right_shifted: List[Series],
        ticks: Optional[TickSet],
        anchors: List[Tuple[float, float]],
        gap_width: float,
        offset: float,
    ):
        self.left = left
        self.right_shifted = right_shifted
        self.ticks = ticks
        self.anchors = anchors
        self.gap_width = gap_width
        self.offset = offset

    def segments(self) -> Iterable[Tuple[Series, Series]]:
        """Iterate over (left, right_shifted) pairs, one per input series."""
        return zip(self.left, self.right_shifted)

    def __repr__(self) -> str:
        return (
            f"BreakResult(n_series={len(self.left)}, gap_width={self.gap_width}, "
            f"offset={self.offset}, n_ticks={None if self.ticks is None else len(self.ticks)})"
        )


class AxisBreakTransform:
    """
    Excises an x interval from a set of series and closes it up.

    Points with ``start < x < stop`` are dropped. Points at or beyond
    ``stop`` are shifted left so that the interval is replaced by a gap
    ``gap_width`` wide. Tick marks are remapped the same way so that the
    axis still reads correctly on both sides of the break.
    """

    def __init__(
        self,
        start: float,
        stop: float,
        gap_width: Optional[float] = None,
        add_boundary_ticks: bool = True,
        epsilon: float = DEFAULT_GAP_FRACTION,
    ):
        """
        Initialise the transform.

        Parameters
        ----------
        start : float
            Last x value before the break.
        stop : float
            First x value after the break.
        gap_width : Optional[float], default=None
            Width of the gap in x-axis units. If None, it is derived as
            ``epsilon`` times the visible axis range when the transform is
            applied.
        add_boundary_ticks : bool, default=True
            Whether to bound the gap with ticks labelled ``start`` and ``stop``.
        epsilon : float, default=DEFAULT_GAP_FRACTION
            Fraction of the axis range used for the gap when ``gap_width``
            is not given.

        Raises
        ------
        InvalidRangeError
            If ``start >= stop``.
        EmptyGapError
            If ``gap_width`` or ``epsilon`` is negative.
        """
        if not start < stop:
            logger.error(f"Cannot break axis over [{start}, {stop}]")
            raise InvalidRangeError(start, stop)
        if gap_width is not None and gap_width < 0:
            logger.error(f"Negative gap width requested: {gap_width}")
            raise EmptyGapError(gap_width)
        if epsilon < 0:
            logger.error(f"Negative gap fraction requested: {epsilon}")
            raise EmptyGapError(epsilon)

        self.start = float(start)
        self.stop = float(stop)
        self.gap_width = None if gap_width is None else float(gap_width)
        self.add_boundary_ticks = add_boundary_ticks
        self.epsilon = float(epsilon)

    @property
    def interval_width(self) -> float:
        return self.stop - self.start

    def resolve_gap_width(
        self,
        axis_range: Optional[Tuple[float, float]] = None,
        series: Sequence[Series] = (),
    ) -> float:
        """
        Return the gap width to use.

        An explicit ``gap_width`` wins. Otherwise the gap is ``epsilon`` times
        the span of ``axis_range``, or of the joint x extent of ``series``
        when no axis range is known.
        """
        if self.gap_width is not None:
            return self.gap_width

        if axis_range is None:
            extents = [ext for ext in (s.x_extent() for s in series) if ext]
            if not extents:
                logger.warning("No axis range or data available, using zero gap width")
                return 0.0
            axis_range = (
                min(lo for lo, _ in extents),
                max(hi for _, hi in extents),
            )
            logger.debug(f"Axis range taken from data extent: {axis_range}")

        span = abs(float(axis_range[1]) - float(axis_range[0]))
        if not np.isfinite(span):
            logger.warning(f"Non-finite axis range {axis_range}, using zero gap width")
            return 0.0
        return span * self.epsilon

    def offset(self, gap_width: float) -> float:
        """Shift applied to every x at or beyond ``stop``."""
        return -self.interval_width + gap_width

    def map_x(self, x: np.ndarray, gap_width: float) -> np.ndarray:
        """
        Map x coordinates onto the broken axis.

        Values inside the excised interval have no position on the broken
        axis and map to NaN.
        """
        x = np.asarray(x, dtype=np.float64)
        mapped = np.where(x >= self.stop, x + self.offset(gap_width), x)
        inside = (x > self.start) & (x < self.stop)
        return np.where(inside, np.nan, mapped)

    def split_series(self, series: Series, gap_width: float) -> Tuple[Series, Series]:
        """
        Split one series into its left segment and its shifted right segment.

        Either segment may be empty.
        """
        left_mask, right_mask = _partition_masks_numba(series.x, self.start, self.stop)
        left = series.select(left_mask)
        right = series.select(right_mask)
        right_shifted = Series(right.x + self.offset(gap_width), right.y, name=series.name)

        n_dropped = len(series) - len(left) - len(right)
        if n_dropped:
            logger.debug(
                f"Series {series.label}: dropped {n_dropped} point(s) inside ({self.start}, {self.stop})"
            )
        return left, right_shifted

    def remap_ticks(self, ticks: TickSet, gap_width: float) -> TickSet:
        """
        Remap a tick set onto the broken axis.

        Ticks below ``start`` are kept, ticks above ``stop`` are shifted and
        ticks in ``[start, stop]`` are dropped. Boundary ticks labelled with
        the literal ``start`` and ``stop`` values are added if requested.
        """
        offset = self.offset(gap_width)
        below = [t for t in ticks if t.position < self.start]
        above = [Tick(t.position + offset, t.label) for t in ticks if t.position > self.stop]

        boundary: List[Tick] = []
        if self.add_boundary_ticks:
            start_label = format_tick_value(self.start)
            stop_label = format_tick_value(self.stop)
            stop_position = self.stop + offset
            if stop_position > self.start:
                boundary = [Tick(self.start, start_label), Tick(stop_position, stop_label)]
            else:
                # Zero-width gap: both boundaries land on the same position
                boundary = [Tick(self.start, f"{start_label}/{stop_label}")]

        n_dropped = len(ticks) - len(below) - len(above)
        if n_dropped:
            logger.debug(f"Dropped {n_dropped} tick(s) inside [{self.start}, {self.stop}]")
        return TickSet(below + boundary + above)

    def break_anchors(
        self, y_ticks: Sequence[float], gap_width: float
    ) -> List[Tuple[float, float]]:
        """
        Positions for the break glyphs: the middle of the gap, at the first
        and last y tick. Empty if there are no y ticks.
        """
        y_ticks = np.asarray(y_ticks, dtype=np.float64).ravel()
        if y_ticks.size == 0:
            return []
        x_pos = self.start + gap_width / 2
        return [(x_pos, float(y_ticks[0])), (x_pos, float(y_ticks[-1]))]

    def apply(
        self,
        series: Sequence[Series],
        ticks: Optional[TickSet] = None,
        y_ticks: Optional[Sequence[float]] = None,
        axis_range: Optional[Tuple[float, float]] = None,
    ) -> BreakResult:
        """
        Apply the break to a set of series, and optionally to the axis ticks.

        Parameters
        ----------
        series : Sequence[Series]
            Series sharing the axis being broken.
        ticks : Optional[TickSet], default=None
            X-axis ticks to remap.
        y_ticks : Optional[Sequence[float]], default=None
            Y-axis tick positions used to place the break glyphs.
        axis_range : Optional[Tuple[float, float]], default=None
            Visible x range, used to derive the gap width when none was given.

        Returns
        -------
        BreakResult
            The split series, remapped ticks and glyph anchors.
        """
        if isinstance(series, Series):
            series = [series]
        gap_width = self.resolve_gap_width(axis_range, series)

        left: List[Series] = []
        right_shifted: List[Series] = []
        for s in series:
            lo, hi = self.split_series(s, gap_width)
            left.append(lo)
            right_shifted.append(hi)

        new_ticks = None if ticks is None else self.remap_ticks(ticks, gap_width)
        anchors = self.break_anchors(y_ticks if y_ticks is not None else [], gap_width)

        logger.info(
            f"Broke x axis over [{self.start}, {self.stop}] with gap width {gap_width:.4g} "
            f"({len(series)} series)"
        )
        return BreakResult(
            left=left,
            right_shifted=right_shifted,
            ticks=new_ticks,
            anchors=anchors,
            gap_width=gap_width,
            offset=self.offset(gap_width),
        )


def break_series(
    series: Sequence[Series],
    start: float,
    stop: float,
    gap_width: Optional[float] = None,
    ticks: Optional[TickSet] = None,
    add_boundary_ticks: bool = True,
    y_ticks: Optional[Sequence[float]] = None,
    axis_range: Optional[Tuple[float, float]] = None,
    epsilon: float = DEFAULT_GAP_FRACTION,
) -> BreakResult:
    """Shortcut for ``AxisBreakTransform(...).apply(...)``."""
    transform = AxisBreakTransform(
        start,
        stop,
        gap_width=gap_width,
        add_boundary_ticks=add_boundary_ticks,
        epsilon=epsilon,
    )
    return transform.apply(series, ticks=ticks, y_ticks=y_ticks, axis_range=axis_range)
