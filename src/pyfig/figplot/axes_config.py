from typing import Any, Dict, Optional, Sequence

from loguru import logger

_FIELDS = (
    "position",
    "xlim",
    "ylim",
    "xticks",
    "xticklabels",
    "yticks",
    "yticklabels",
    "linewidth",
    "xlabel",
    "ylabel",
    "title",
    "fontsize",
    "labelsize",
    "xscale",
    "yscale",
)


def _tick_labelsize(ax) -> Optional[float]:
    ticks = ax.xaxis.get_major_ticks()
    return ticks[0].label1.get_fontsize() if ticks else None


class AxesConfig:
    """
    Typed set of axes options understood by the pyfig helpers.

    Every field defaults to None, meaning "leave the axes as they are".
    """

    def __init__(
        self,
        position: Optional[Sequence[float]] = None,
        xlim: Optional[Sequence[float]] = None,
        ylim: Optional[Sequence[float]] = None,
        xticks: Optional[Sequence[float]] = None,
        xticklabels: Optional[Sequence[str]] = None,
        yticks: Optional[Sequence[float]] = None,
        yticklabels: Optional[Sequence[str]] = None,
        linewidth: Optional[float] = None,
        xlabel: Optional[str] = None,
        ylabel: Optional[str] = None,
        title: Optional[str] = None,
        fontsize: Optional[float] = None,
        labelsize: Optional[float] = None,
        xscale: Optional[str] = None,
        yscale: Optional[str] = None,
    ):
        """
        Initialise the configuration.

        Parameters
        ----------
        position : Optional[Sequence[float]]
            Axes position as [left, bottom, width, height] in figure coordinates.
        xlim, ylim : Optional[Sequence[float]]
            Axis limits as [min, max].
        xticks, yticks : Optional[Sequence[float]]
            Tick positions.
        xticklabels, yticklabels : Optional[Sequence[str]]
            Tick labels, one per tick. Require the matching tick positions.
        linewidth : Optional[float]
            Line width of the axes spines and tick marks.
        xlabel, ylabel, title : Optional[str]
            Axis labels and title.
        fontsize : Optional[float]
            Font size for tick labels, axis labels and title.
        labelsize : Optional[float]
            Font size for tick labels only. Takes precedence over ``fontsize``.
        xscale, yscale : Optional[str]
            Axis scale names such as "linear" or "log". Set before the limits.

        Raises
        ------
        ValueError
            If a sequence has the wrong length, or tick labels are given
            without tick positions.
        """
        if position is not None and len(position) != 4:
            raise ValueError(
                f"position must be [left, bottom, width, height], got {position}"
            )
        for name, lim in (("xlim", xlim), ("ylim", ylim)):
            if lim is not None and len(lim) != 2:
                raise ValueError(f"{name} must be [min, max], got {lim}")
        for axis, ticks, labels in (
            ("x", xticks, xticklabels),
            ("y", yticks, yticklabels),
        ):
            if labels is None:
                continue
            if ticks is None:
                raise ValueError(f"{axis}ticklabels requires {axis}ticks")
            if len(labels) != len(ticks):
                raise ValueError(
                    f"Number of {axis} tick labels ({len(labels)}) must match number of ticks ({len(ticks)})"
                )

        self.position = None if position is None else [float(v) for v in position]
        self.xlim = None if xlim is None else tuple(float(v) for v in xlim)
        self.ylim = None if ylim is None else tuple(float(v) for v in ylim)
        self.xticks = None if xticks is None else [float(v) for v in xticks]
        self.xticklabels = None if xticklabels is None else [str(v) for v in xticklabels]
        self.yticks = None if yticks is None else [float(v) for v in yticks]
        self.yticklabels = None if yticklabels is None else [str(v) for v in yticklabels]
        self.linewidth = linewidth
        self.xlabel = xlabel
        self.ylabel = ylabel
        self.title = title
        self.fontsize = fontsize
        self.labelsize = labelsize
        self.xscale = xscale
        self.yscale = yscale

    @classmethod
    def from_axes(cls, ax) -> "AxesConfig":
        """Capture the current options of an axes."""
        return cls(
            position=list(ax.get_position().bounds),
            xlim=ax.get_xlim(),
            ylim=ax.get_ylim(),
            xticks=list(ax.get_xticks()),
            yticks=list(ax.get_yticks()),
            linewidth=ax.spines["bottom"].get_linewidth(),
            xlabel=ax.get_xlabel(),
            ylabel=ax.get_ylabel(),
            title=ax.get_title(),
            fontsize=ax.xaxis.label.get_fontsize(),
            labelsize=_tick_labelsize(ax),
            xscale=ax.get_xscale(),
            yscale=ax.get_yscale(),
        )

    def without(self, *names: str) -> "AxesConfig":
        """Return a copy with the named fields reset to None."""
        unknown = set(names) - set(_FIELDS)
        if unknown:
            raise ValueError(f"Unknown axes options: {sorted(unknown)}")
        values = {k: v for k, v in self.to_dict().items() if k not in names}
        return AxesConfig(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Non-None fields as a dictionary."""
        values = {name: getattr(self, name) for name in _FIELDS}
        return {k: v for k, v in values.items() if v is not None}

    def merged(self, other: Optional["AxesConfig"]) -> "AxesConfig":
        """Return a new config with ``other``'s set fields overriding this one's."""
        values = self.to_dict()
        if other is not None:
            values.update(other.to_dict())
        return AxesConfig(**values)

    def apply(self, ax) -> None:
        """Write every set field to ``ax``."""
        if self.position is not None:
            ax.set_position(self.position)
        if self.xscale is not None:
            ax.set_xscale(self.xscale)
        if self.yscale is not None:
            ax.set_yscale(self.yscale)
        if self.xlim is not None:
            ax.set_xlim(self.xlim)
        if self.ylim is not None:
            ax.set_ylim(self.ylim)
        if self.xticks is not None:
            ax.set_xticks(self.xticks)
            if self.xticklabels is not None:
                ax.set_xticklabels(self.xticklabels)
        if self.yticks is not None:
            ax.set_yticks(self.yticks)
            if self.yticklabels is not None:
                ax.set_yticklabels(self.yticklabels)
        if self.xlabel is not None:
            ax.set_xlabel(self.xlabel)
        if self.ylabel is not None:
            ax.set_ylabel(self.ylabel)
        if self.title is not None:
            ax.set_title(self.title)
        if self.linewidth is not None:
            for spine in ax.spines.values():
                spine.set_linewidth(self.linewidth)
            ax.tick_params(width=self.linewidth)
        if self.fontsize is not None:
            ax.tick_params(labelsize=self.fontsize)
            ax.xaxis.label.set_fontsize(self.fontsize)
            ax.yaxis.label.set_fontsize(self.fontsize)
            ax.title.set_fontsize(self.fontsize)
        if self.labelsize is not None:
            ax.tick_params(labelsize=self.labelsize)

        logger.debug(f"Applied axes config: {sorted(self.to_dict())}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, AxesConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"AxesConfig({fields})"
