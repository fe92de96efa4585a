from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from loguru import logger
from scipy import stats

# Margin added around the data range for default limits (fraction of range)
LIMIT_MARGIN = 0.25
# Headroom above the tallest histogram bar (fraction of its height)
HIST_HEADROOM = 0.25
# Lower limit used for log-scaled scatter axes
LOG_LIMIT_FLOOR = 0.01

DEFAULT_N_BINS = 11
SCATTER_MARKERSIZE = 4
PANEL_SIZE_INCHES = 2.5

# Text anchor (x, y, ha, va) in axes coordinates for each location name
TEXT_LOCATIONS = {
    "upper right": (0.95, 0.95, "right", "top"),
    "upper left": (0.05, 0.95, "left", "top"),
    "lower left": (0.05, 0.05, "left", "bottom"),
    "lower right": (0.95, 0.05, "right", "bottom"),
    "upper center": (0.5, 0.95, "center", "top"),
    "lower center": (0.5, 0.05, "center", "bottom"),
    "center left": (0.05, 0.5, "left", "center"),
    "center right": (0.95, 0.5, "right", "center"),
    "center": (0.5, 0.5, "center", "center"),
}
_COMPASS_ALIASES = {
    "northeast": "upper right",
    "northwest": "upper left",
    "southwest": "lower left",
    "southeast": "lower right",
    "north": "upper center",
    "south": "lower center",
    "west": "center left",
    "east": "center right",
}


def text_location(loc: str) -> Tuple[float, float, str, str]:
    """Resolve a location name (matplotlib or compass style) to a text anchor."""
    key = loc.lower()
    key = _COMPASS_ALIASES.get(key, key)
    if key not in TEXT_LOCATIONS:
        raise ValueError(
            f"Unknown text location '{loc}'. Valid options: {sorted(TEXT_LOCATIONS)}"
        )
    return TEXT_LOCATIONS[key]


def default_var_names(n_vars: int) -> List[str]:
    return [f"var{i + 1}" for i in range(n_vars)]


def default_limits(X: np.ndarray) -> Tuple[float, float]:
    """Data range widened by 25% of itself at both ends."""
    dat_min = float(np.nanmin(X))
    dat_max = float(np.nanmax(X))
    margin = (dat_max - dat_min) * LIMIT_MARGIN
    return dat_min - margin, dat_max + margin


def compute_correlations(X: np.ndarray, rho_type: str = "pearson") -> np.ndarray:
    """
    Pairwise correlation matrix between the columns of ``X``.

    Parameters
    ----------
    X : np.ndarray
        Data, one column per variable.
    rho_type : str, default="pearson"
        "pearson" or "spearman".

    Returns
    -------
    np.ndarray
        (n_vars, n_vars) correlation matrix.
    """
    rho_type = rho_type.lower()
    if rho_type == "pearson":
        return np.atleast_2d(np.corrcoef(X, rowvar=False))
    if rho_type == "spearman":
        rho, _ = stats.spearmanr(X)
        if np.ndim(rho) == 0:
            # spearmanr returns a scalar for exactly two variables
            return np.array([[1.0, float(rho)], [float(rho), 1.0]])
        return np.asarray(rho)
    raise ValueError(f"Invalid rho_type '{rho_type}'. Valid options: ['pearson', 'spearman']")


def format_rho(rho: float, dof: int) -> str:
    """Format a correlation as ``r_{dof} = .xx`` without the leading zero."""
    value = f"{rho:.2f}".replace("0.", ".", 1)
    return f"$r_{{{dof}}} = {value}$"


def panel_layout(n_vars: int, do_hist: bool) -> List[Tuple[int, int, int, int]]:
    """
    Grid placement of the scatter panels.

    Returns (i, j, row, col) for every variable pair with i > j, where
    variable j is plotted on x and variable i on y.
    """
    offset = 1 if do_hist else 0
    return [
        (i, j, i - 1 + offset, j)
        for j in range(n_vars - 1)
        for i in range(j + 1, n_vars)
    ]


def histogram_counts(
    X: np.ndarray, lims: Tuple[float, float], n_bins: int, log_scale: bool = False
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-variable histograms over shared bins spanning ``lims``.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Bin edges (n_bins + 1,) and counts (n_vars, n_bins).
    """
    if log_scale:
        with np.errstate(divide="ignore", invalid="ignore"):
            X = np.log10(X)
        lims = (np.log10(lims[0]), np.log10(lims[1]))
    edges = np.linspace(lims[0], lims[1], n_bins + 1)
    counts = []
    for col in X.T:
        col = col[np.isfinite(col)]
        counts.append(np.histogram(col, bins=edges)[0])
    return edges, np.array(counts)


def corr_matrix(
    X,
    var_names: Optional[Sequence[str]] = None,
    do_hist: bool = False,
    show_rho: bool = True,
    ticks: Optional[Sequence[float]] = None,
    tick_labels: Optional[Sequence[str]] = None,
    lims: Optional[Tuple[float, float]] = None,
    rho: Optional[np.ndarray] = None,
    n_bins: int = DEFAULT_N_BINS,
    log_scatter: bool = False,
    key_text: Optional[Sequence[str]] = None,
    rho_loc: str = "upper right",
    proportion_plot_scatter: float = 1.0,
    add_ls_line: bool = False,
    rho_type: str = "pearson",
    fig=None,
):
    """
    Plot a lower-triangular matrix of scatter plots between variables.

    Each panel shows one pair of variables, optionally annotated with their
    correlation coefficient. Histograms of each variable can be shown on the
    diagonal.

    Parameters
    ----------
    X : array_like
        Data of shape (observations, variables). A 30x4 matrix gives 6
        scatter panels.
    var_names : Optional[Sequence[str]], default=None
        Name of each variable, used for the marginal axis labels. Defaults
        to "var1", "var2", ...
    do_hist : bool, default=False
        Whether to plot histograms on the diagonal.
    show_rho : bool, default=True
        Whether to annotate each panel with its correlation coefficient.
    ticks : Optional[Sequence[float]], default=None
        Tick positions, shared by x and y axes. None leaves matplotlib's.
    tick_labels : Optional[Sequence[str]], default=None
        Labels for ``ticks``.
    lims : Optional[Tuple[float, float]], default=None
        Axis limits, shared by x and y. Defaults to the data range +/- 25%.
    rho : Optional[np.ndarray], default=None
        Correlation matrix to display. Computed with ``rho_type`` if None.
    n_bins : int, default=11
        Number of histogram bins.
    log_scatter : bool, default=False
        Use log-scaled axes.
    key_text : Optional[Sequence[str]], default=None
        Description of each variable, shown as a key at the top right.
    rho_loc : str, default="upper right"
        Where in each panel to place the coefficient.
    proportion_plot_scatter : float, default=1.0
        Fraction of observations (the first rows) drawn in the scatters.
        Least-squares fits always use every row.
    add_ls_line : bool, default=False
        Whether to draw a least-squares line in each panel.
    rho_type : str, default="pearson"
        "pearson" or "spearman".
    fig : Optional[matplotlib.figure.Figure], default=None
        Figure to draw in. A new one sized to the grid is created if None.

    Returns
    -------
    Tuple[Figure, Dict[Tuple[int, int], Axes], Optional[str]]
        The figure, the scatter axes keyed by (i, j) variable pair, and the
        key text (None when no key was requested).
    """
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2 or X.shape[1] < 2:
        raise ValueError(
            f"X must be a 2D array with at least two variables (columns). Got shape {X.shape}"
        )
    if not 0.0 <= proportion_plot_scatter <= 1.0:
        raise ValueError(
            f"proportion_plot_scatter must be between 0 and 1, got {proportion_plot_scatter}"
        )
    n_obs, n_vars = X.shape

    if var_names is None:
        var_names = default_var_names(n_vars)
    elif len(var_names) != n_vars:
        raise ValueError(
            f"Number of variable names ({len(var_names)}) must match number of variables ({n_vars})"
        )
    if lims is None:
        lims = default_limits(X)
    if log_scatter:
        lims = (max(lims[0], LOG_LIMIT_FLOOR), lims[1])
    if rho is None:
        rho = compute_correlations(X, rho_type)
    if key_text is not None and len(key_text) != n_vars:
        raise ValueError(
            f"Number of key entries ({len(key_text)}) must match number of variables ({n_vars})"
        )
    rho = np.asarray(rho, dtype=np.float64)
    if rho.shape != (n_vars, n_vars):
        raise ValueError(f"rho must have shape ({n_vars}, {n_vars}), got {rho.shape}")

    anchor_x, anchor_y, ha, va = text_location(rho_loc)
    n_grid = n_vars if do_hist else n_vars - 1

    if fig is None:
        size = PANEL_SIZE_INCHES * n_grid
        fig, axes = plt.subplots(n_grid, n_grid, squeeze=False, figsize=(size, size))
    else:
        axes = fig.subplots(n_grid, n_grid, squeeze=False)

    n_plot = int(round(proportion_plot_scatter * n_obs))
    logger.debug(f"Plotting {n_plot} of {n_obs} observations per scatter panel")

    scatter_axes: Dict[Tuple[int, int], object] = {}
    for i, j, row, col in panel_layout(n_vars, do_hist):
        ax = axes[row, col]
        ax.plot(X[:n_plot, j], X[:n_plot, i], "o", markersize=SCATTER_MARKERSIZE)
        if log_scatter:
            ax.set_xscale("log")
            ax.set_yscale("log")
        ax.set_xlim(lims)
        ax.set_ylim(lims)
        if ticks is not None:
            ax.set_xticks(ticks)
            ax.set_yticks(ticks)
            if tick_labels is not None:
                ax.set_xticklabels(tick_labels)
                ax.set_yticklabels(tick_labels)

        # Axis titles on the marginal column and row only
        if col == 0:
            ax.set_ylabel(var_names[i])
        if i == n_vars - 1:
            ax.set_xlabel(var_names[j])

        if add_ls_line:
            rows = ~np.isnan(X[:, [i, j]]).any(axis=1)
            if rows.sum() >= 2:
                p = np.polyfit(X[rows, j], X[rows, i], 1)
                ax.plot(lims, np.polyval(p, lims), "r", linewidth=1.5)
            else:
                logger.warning(f"Not enough complete rows to fit {var_names[i]} vs {var_names[j]}")

        ax.plot(lims, lims, "k:")

        if show_rho:
            ax.text(
                anchor_x,
                anchor_y,
                format_rho(rho[i, j], n_obs - 2),
                transform=ax.transAxes,
                horizontalalignment=ha,
                verticalalignment=va,
            )
        scatter_axes[(i, j)] = ax

    if do_hist:
        edges, counts = histogram_counts(X, lims, n_bins, log_scale=log_scatter)
        centers = (edges[:-1] + edges[1:]) / 2
        hist_ylim = (0.0, max(float(counts.max()), 1.0) * (1 + HIST_HEADROOM))
        for k in range(n_vars):
            ax = axes[k, k]
            ax.bar(centers, counts[k], width=np.diff(edges))
            ax.set_xlim(edges[0], edges[-1])
            ax.set_ylim(hist_ylim)
            ax.set_xticks([])
            # Only the first panel carries a y tick
            if k == 0:
                ax.set_yticks([np.floor(hist_ylim[1])])
                ax.set_ylabel(var_names[k])
            else:
                ax.set_yticks([])
            if k == n_vars - 1:
                ax.set_xlabel(var_names[k])

    for row in range(n_grid):
        for col in range(row + 1, n_grid):
            axes[row, col].set_visible(False)

    legend_text = None
    if key_text is not None:
        legend_text = "\n".join(f"{name}: {txt}" for name, txt in zip(var_names, key_text))
        bbox = axes[0, n_grid - 1].get_position()
        fig.text(
            bbox.x0,
            bbox.y0 + bbox.height / 2,
            legend_text,
            horizontalalignment="left",
            verticalalignment="center",
        )

    logger.info(
        f"Plotted correlation matrix of {n_vars} variables ({len(scatter_axes)} panels, hist={do_hist})"
    )
    return fig, scatter_axes, legend_text
