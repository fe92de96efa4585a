"""
Tests for applying an axis break to matplotlib axes.
"""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from pyfig.axisbreak import InvalidRangeError
from pyfig.figplot import break_x_axis
from pyfig.figplot.break_axis import visible_ticks


@pytest.fixture
def example_axes():
    fig, ax = plt.subplots()
    ax.plot([5, 12, 18, 25], [1, 2, 3, 4], "o-", color="red", linewidth=3)
    ax.set_xlim(0, 30)
    ax.set_xticks([0, 5, 10, 15, 20, 25, 30])
    ax.set_ylim(0, 5)
    ax.set_yticks([0, 1, 2, 3, 4, 5])
    return ax


class TestBreakXAxis:
    def test_lines_are_split(self, example_axes):
        original = example_axes.get_lines()[0]
        broken = break_x_axis(example_axes, 10, 20, gap_width=2)

        assert len(example_axes.get_lines()) == 2
        np.testing.assert_array_equal(original.get_xdata(), [5])
        np.testing.assert_array_equal(original.get_ydata(), [1])
        np.testing.assert_array_equal(broken.lines[0].get_xdata(), [17])
        np.testing.assert_array_equal(broken.lines[0].get_ydata(), [4])

    def test_new_line_copies_style(self, example_axes):
        original = example_axes.get_lines()[0]
        broken = break_x_axis(example_axes, 10, 20, gap_width=2)
        new_line = broken.lines[0]

        assert new_line.get_color() == original.get_color()
        assert new_line.get_linewidth() == original.get_linewidth()
        assert new_line.get_marker() == original.get_marker()
        assert new_line.get_label().startswith("_")

    def test_ticks_remapped(self, example_axes):
        break_x_axis(example_axes, 10, 20, gap_width=2)

        np.testing.assert_allclose(example_axes.get_xticks(), [0, 5, 10, 12, 17, 22])
        labels = [t.get_text() for t in example_axes.get_xticklabels()]
        assert labels == ["0", "5", "10", "20", "25", "30"]

    def test_limits_updated(self, example_axes):
        break_x_axis(example_axes, 10, 20, gap_width=2)

        assert example_axes.get_xlim() == pytest.approx((0, 22))
        assert example_axes.get_ylim() == pytest.approx((0, 5))

    def test_markers_at_first_and_last_y_tick(self, example_axes):
        broken = break_x_axis(example_axes, 10, 20, gap_width=2)

        assert broken.bottom_marker.get_position() == pytest.approx((11, 0))
        assert broken.top_marker.get_position() == pytest.approx((11, 5))
        assert broken.bottom_marker.get_text() == "//"

    def test_default_gap_uses_epsilon(self, example_axes):
        broken = break_x_axis(example_axes, 10, 20)
        assert broken.result.gap_width == pytest.approx(6)

        broken_again = break_x_axis(plt.subplots()[1], 10, 20, epsilon=0.5)
        assert broken_again.result.gap_width > 0

    def test_without_ticks(self, example_axes):
        break_x_axis(example_axes, 10, 20, gap_width=2, add_ticks=False)
        np.testing.assert_allclose(example_axes.get_xticks(), [0, 5, 17, 22])

    def test_invalid_range_leaves_axes_untouched(self, example_axes):
        with pytest.raises(InvalidRangeError):
            break_x_axis(example_axes, 20, 10)

        assert len(example_axes.get_lines()) == 1
        np.testing.assert_array_equal(
            example_axes.get_lines()[0].get_xdata(), [5, 12, 18, 25]
        )

    def test_axes_without_lines(self):
        _, ax = plt.subplots()
        ax.set_xlim(0, 30)
        broken = break_x_axis(ax, 10, 20, gap_width=2)

        assert broken.lines == []
        assert len(ax.get_lines()) == 0

    def test_offset_formatted_ticks_keep_absolute_labels(self):
        _, ax = plt.subplots()
        x = np.arange(1000000, 1000031)
        ax.plot(x, np.ones_like(x))
        ax.set_xlim(1000000, 1000030)
        ax.set_xticks(np.arange(1000000, 1000031, 5))
        break_x_axis(ax, 1000010, 1000020, gap_width=2)

        np.testing.assert_allclose(
            ax.get_xticks(),
            [1000000, 1000005, 1000010, 1000012, 1000017, 1000022],
        )
        labels = [t.get_text() for t in ax.get_xticklabels()]
        assert labels == [
            "1000000",
            "1000005",
            "1000010",
            "1000020",
            "1000025",
            "1000030",
        ]


def test_visible_ticks():
    ticks = visible_ticks([-5, 0, 5, 10, 15], (0, 10))
    np.testing.assert_array_equal(ticks, [0, 5, 10])

    inverted = visible_ticks([-5, 0, 5, 10, 15], (10, 0))
    np.testing.assert_array_equal(inverted, [0, 5, 10])
