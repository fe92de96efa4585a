class AxisBreakError(ValueError):
    """Base class for errors raised while breaking an axis."""


class InvalidRangeError(AxisBreakError):
    """Raised when the excised interval has ``start >= stop``."""

    def __init__(self, start: float, stop: float):
        self.start = start
        self.stop = stop
        super().__init__(
            f"Invalid break interval: start ({start}) must be less than stop ({stop})"
        )


class EmptyGapError(AxisBreakError):
    """Raised when the gap width (or the fraction used to derive it) is negative."""

    def __init__(self, gap_width: float):
        self.gap_width = gap_width
        super().__init__(f"Gap width must be non-negative, got {gap_width}")
