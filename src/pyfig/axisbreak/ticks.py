from typing import Iterator, List, NamedTuple, Optional, Sequence

import numpy as np
from loguru import logger


def format_tick_value(value: float) -> str:
    """
    Format a tick position for use as a label.

    Integral values print without a decimal point, everything else uses the
    shortest ``%g`` representation.
    """
    value = float(value)
    if value.is_integer():
        return f"{int(value)}"
    return f"{value:g}"


class Tick(NamedTuple):
    position: float
    label: str


class TickSet:
    """
    An ordered collection of axis ticks.

    Ticks are kept sorted by position. Labels are free text; when a tick set
    is built from positions alone the labels are the formatted positions.
    """

    def __init__(self, ticks: Optional[Sequence[Tick]] = None):
        ticks = [Tick(float(t[0]), str(t[1])) for t in (ticks or [])]
        self._ticks: List[Tick] = sorted(ticks, key=lambda t: t.position)

    @classmethod
    def from_positions(
        cls, positions: Sequence[float], labels: Optional[Sequence[str]] = None
    ) -> "TickSet":
        """
        Build a tick set from positions and optional labels.

        Parameters
        ----------
        positions : Sequence[float]
            Tick positions.
        labels : Optional[Sequence[str]], default=None
            One label per position. If None (or all labels are empty, as
            matplotlib reports before a figure is drawn) the positions are
            formatted with :func:`format_tick_value`.

        Raises
        ------
        ValueError
            If the number of labels does not match the number of positions.
        """
        positions = np.asarray(positions, dtype=np.float64).ravel()
        if labels is not None:
            labels = [str(lbl) for lbl in labels]
            if len(labels) != len(positions):
                raise ValueError(
                    f"Number of tick labels ({len(labels)}) must match number of tick positions ({len(positions)})"
                )
            if positions.size > 0 and not any(labels):
                logger.debug("All tick labels empty, formatting positions instead")
                labels = None
        if labels is None:
            labels = [format_tick_value(p) for p in positions]
        return cls([Tick(p, lbl) for p, lbl in zip(positions.tolist(), labels)])

    @property
    def positions(self) -> np.ndarray:
        return np.array([t.position for t in self._ticks], dtype=np.float64)

    @property
    def labels(self) -> List[str]:
        return [t.label for t in self._ticks]

    def is_strictly_increasing(self) -> bool:
        return bool(np.all(np.diff(self.positions) > 0))

    def __len__(self) -> int:
        return len(self._ticks)

    def __iter__(self) -> Iterator[Tick]:
        return iter(self._ticks)

    def __getitem__(self, idx: int) -> Tick:
        return self._ticks[idx]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TickSet):
            return NotImplemented
        return self._ticks == other._ticks

    def __repr__(self) -> str:
        return f"TickSet({self._ticks!r})"
