"""
Tests for popout inset plots.
"""

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle

from pyfig.axisbreak import InvalidRangeError, Series
from pyfig.figplot import AxesConfig, CoordinateManager, popout
from pyfig.figplot.popout import (
    DEFAULT_INSET_POSITION,
    DEFAULT_MAIN_POSITION,
    padded_limits,
    resolve_axes,
    window_y_extent,
)


@pytest.fixture
def figure_and_axes():
    fig, ax = plt.subplots()
    ax.plot([0, 5, 10, 15, 20, 30], [0, 1, 2, 3, 4, 10], linewidth=2)
    ax.set_xlim(0, 30)
    ax.set_ylim(0, 10)
    ax.set_xlabel("time")
    ax.set_title("signal")
    return fig, ax


class TestPopout:
    def test_inset_limits_follow_window(self, figure_and_axes):
        _, ax = figure_and_axes
        ax_main, ax_inset = popout(ax, 5, 15)

        assert ax_main is ax
        assert ax_inset.get_xlim() == pytest.approx((5, 15))
        assert ax_inset.get_ylim() == pytest.approx((1, 3))

    def test_inset_replicates_lines(self, figure_and_axes):
        _, ax = figure_and_axes
        _, ax_inset = popout(ax, 5, 15)

        assert len(ax_inset.get_lines()) == 1
        line = ax_inset.get_lines()[0]
        np.testing.assert_array_equal(line.get_xdata(), [0, 5, 10, 15, 20, 30])
        assert line.get_linewidth() == 2
        assert ax_inset.get_xlabel() == "time"
        assert ax_inset.get_title() == ""

    def test_main_axes_padded_and_outlined(self, figure_and_axes):
        _, ax = figure_and_axes
        popout(ax, 5, 15)

        assert ax.get_ylim() == pytest.approx((-1, 11))
        rects = [p for p in ax.patches if isinstance(p, Rectangle)]
        assert len(rects) == 1
        assert rects[0].get_xy() == pytest.approx((5, 1))
        assert rects[0].get_width() == pytest.approx(10)
        assert rects[0].get_height() == pytest.approx(2)

    def test_default_positions(self, figure_and_axes):
        _, ax = figure_and_axes
        ax_main, ax_inset = popout(ax, 5, 15)

        assert ax_main.get_position().bounds == pytest.approx(DEFAULT_MAIN_POSITION)
        assert ax_inset.get_position().bounds == pytest.approx(DEFAULT_INSET_POSITION)

    def test_configs_override_defaults(self, figure_and_axes):
        _, ax = figure_and_axes
        _, ax_inset = popout(
            ax,
            5,
            15,
            inset_config=AxesConfig(position=[0.5, 0.1, 0.4, 0.3], xlabel="zoom"),
        )

        assert ax_inset.get_position().bounds == pytest.approx((0.5, 0.1, 0.4, 0.3))
        assert ax_inset.get_xlabel() == "zoom"

    def test_connector_lines(self, figure_and_axes):
        fig, ax = figure_and_axes
        ax_main, ax_inset = popout(ax, 5, 15)

        connectors = [a for a in fig.artists if isinstance(a, Line2D)]
        assert len(connectors) == 2

        xf1, yf1 = CoordinateManager(ax_main).data_to_figure(5, 1)
        xf2, yf2 = CoordinateManager(ax_inset).data_to_figure(5, 1)
        np.testing.assert_allclose(connectors[0].get_xdata(), [xf1, xf2])
        np.testing.assert_allclose(connectors[0].get_ydata(), [yf1, yf2])

    def test_no_connector_lines(self, figure_and_axes):
        fig, ax = figure_and_axes
        popout(ax, 5, 15, draw_lines=False)

        assert not [a for a in fig.artists if isinstance(a, Line2D)]

    def test_empty_window_uses_main_limits(self, figure_and_axes):
        _, ax = figure_and_axes
        _, ax_inset = popout(ax, 100, 200)

        assert ax_inset.get_ylim() == pytest.approx((0, 10))

    def test_invalid_window_raises(self, figure_and_axes):
        _, ax = figure_and_axes
        with pytest.raises(InvalidRangeError):
            popout(ax, 15, 5)

    def test_subplot_number_target(self, figure_and_axes):
        fig, ax = figure_and_axes
        ax_main, _ = popout(0, 5, 15, fig=fig)
        assert ax_main is ax


class TestHelpers:
    def test_resolve_axes(self, figure_and_axes):
        fig, ax = figure_and_axes
        assert resolve_axes(ax) is ax
        assert resolve_axes(0, fig) is ax

    def test_resolve_axes_errors(self, figure_and_axes):
        fig, _ = figure_and_axes
        with pytest.raises(TypeError):
            resolve_axes("gca", fig)
        with pytest.raises(ValueError):
            resolve_axes(0)
        with pytest.raises(ValueError):
            resolve_axes(3, fig)

    def test_window_y_extent(self):
        a = Series([0, 1, 2, 3], [5, -1, 7, 100])
        b = Series([1.5, 10], [-3, 50])
        assert window_y_extent([a, b], 1, 2) == (-3.0, 7.0)
        assert window_y_extent([a, b], 20, 30) is None

    def test_padded_limits(self):
        assert padded_limits((0, 10), 10) == pytest.approx((-1, 11))
        assert padded_limits((-5, 5), 0) == pytest.approx((-5, 5))


class TestInheritedStyle:
    """The inset takes its scales and styling from the main axes."""

    @pytest.fixture
    def log_axes(self):
        fig, ax = plt.subplots()
        ax.plot([1, 5, 10, 15, 20, 30], [1, 2, 5, 10, 50, 100])
        ax.set_yscale("log")
        ax.set_ylim(1, 100)
        for spine in ax.spines.values():
            spine.set_linewidth(3)
        ax.tick_params(labelsize=18)
        ax.set_ylabel("power")
        return fig, ax

    def test_inset_copies_scales(self, log_axes):
        _, ax = log_axes
        _, ax_inset = popout(ax, 5, 15)

        assert ax_inset.get_yscale() == "log"
        assert ax_inset.get_xscale() == "linear"
        assert ax_inset.get_ylim() == pytest.approx((2, 10))

    def test_inset_copies_linewidth_and_fonts(self, log_axes):
        _, ax = log_axes
        _, ax_inset = popout(ax, 5, 15)

        assert ax_inset.spines["left"].get_linewidth() == 3
        assert ax_inset.xaxis.get_major_ticks()[0].label1.get_fontsize() == 18
        assert ax_inset.get_ylabel() == "power"

    def test_log_axis_padding_stays_positive(self, log_axes):
        _, ax = log_axes
        popout(ax, 5, 15)

        assert ax.get_ylim() == pytest.approx((10**-0.2, 10**2.2))

    def test_inset_config_overrides_inherited(self, log_axes):
        _, ax = log_axes
        _, ax_inset = popout(
            ax, 5, 15, inset_config=AxesConfig(yscale="linear", fontsize=8, linewidth=1)
        )

        assert ax_inset.get_yscale() == "linear"
        assert ax_inset.spines["left"].get_linewidth() == 1
        assert ax_inset.xaxis.get_major_ticks()[0].label1.get_fontsize() == 8

    def test_subplot_number_counts_in_creation_order(self):
        fig, (first, second) = plt.subplots(1, 2)
        first.plot([0, 10], [0, 1])
        second.plot([0, 3, 6, 10], [5, 6, 8, 9])

        ax_main, ax_inset = popout(1, 2, 8, fig=fig)
        assert ax_main is second
        assert ax_inset.get_ylim() == pytest.approx((6, 8))

    def test_padded_limits_log(self):
        assert padded_limits((1, 100), 10, log=True) == pytest.approx(
            (10**-0.2, 10**2.2)
        )
        with pytest.raises(ValueError):
            padded_limits((0, 100), 10, log=True)
