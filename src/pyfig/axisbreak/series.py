from typing import Iterator, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

ArrayLike = Union[np.ndarray, Sequence[float]]


class Series:
    """
    An ordered sequence of (x, y) points making up one plotted line.

    Coordinates are held as two equal-length float arrays. Several series
    may share one axis; the order of points is preserved by every operation.
    """

    def __init__(self, x: ArrayLike, y: ArrayLike, name: Optional[str] = None):
        """
        Initialise the series.

        Parameters
        ----------
        x : ArrayLike
            X coordinates.
        y : ArrayLike
            Y coordinates, same length as ``x``.
        name : Optional[str], default=None
            Optional name used in log messages.

        Raises
        ------
        ValueError
            If ``x`` and ``y`` differ in length or are not one-dimensional.
        """
        self.x = np.atleast_1d(np.asarray(x, dtype=np.float64))
        self.y = np.atleast_1d(np.asarray(y, dtype=np.float64))
        self.name = name

        if self.x.ndim != 1 or self.y.ndim != 1:
            raise ValueError(
                f"Series coordinates must be one-dimensional. Got x.ndim={self.x.ndim}, y.ndim={self.y.ndim}"
            )
        if len(self.x) != len(self.y):
            raise ValueError(
                f"X and Y arrays must have the same length. Got x={len(self.x)}, y={len(self.y)}"
            )
        if len(self.x) == 0:
            logger.debug(f"Series {self.label} initialised with empty arrays.")

    @classmethod
    def from_points(
        cls, points: Sequence[Tuple[float, float]], name: Optional[str] = None
    ) -> "Series":
        """
        Build a series from a sequence of (x, y) pairs.

        Raises
        ------
        ValueError
            If ``points`` is not a sequence of pairs.
        """
        pts = np.asarray(points, dtype=np.float64)
        if pts.size == 0:
            return cls.empty(name=name)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"Points must have shape (n, 2). Got shape {pts.shape}")
        return cls(pts[:, 0], pts[:, 1], name=name)

    @classmethod
    def empty(cls, name: Optional[str] = None) -> "Series":
        return cls(np.array([]), np.array([]), name=name)

    @property
    def label(self) -> str:
        return self.name if self.name is not None else "<unnamed>"

    @property
    def points(self) -> np.ndarray:
        """(n, 2) array of the series' points."""
        return np.column_stack((self.x, self.y))

    def x_extent(self) -> Optional[Tuple[float, float]]:
        """Finite min/max of the x coordinates, or None if there are none."""
        finite = self.x[np.isfinite(self.x)]
        if finite.size == 0:
            return None
        return float(finite.min()), float(finite.max())

    def select(self, mask: np.ndarray) -> "Series":
        return Series(self.x[mask], self.y[mask], name=self.name)

    def __len__(self) -> int:
        return len(self.x)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return zip(self.x.tolist(), self.y.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return np.array_equal(self.x, other.x) and np.array_equal(self.y, other.y)

    def __repr__(self) -> str:
        return f"Series(name={self.name!r}, n={len(self)})"
