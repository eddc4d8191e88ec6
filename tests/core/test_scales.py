"""Tests for linear, time and colour scales."""

from datetime import datetime

import pytest
from matplotlib import colormaps
from matplotlib.colors import to_hex

from temp_heatmap.core.scales import (
    Y_DOMAIN,
    LinearScale,
    SequentialColorScale,
    TimeScale,
    nice_step,
    x_domain,
    year_origin,
)


class TestLinearScale:
    """Tests for LinearScale."""

    def test_maps_domain_onto_range(self) -> None:
        scale = LinearScale((0, 10), (100, 200))

        assert scale(0) == 100
        assert scale(5) == 150
        assert scale(10) == 200

    def test_inverted_domain(self) -> None:
        """Test the y-axis scale keeps the literal domain order."""
        scale = LinearScale(Y_DOMAIN, (525, 100))

        assert scale(12.5) == pytest.approx(525)
        assert scale(0.52) == pytest.approx(100)
        assert scale(1) < scale(12)

    def test_degenerate_domain_maps_to_midpoint(self) -> None:
        scale = LinearScale((3, 3), (0, 100))
        assert scale(3) == 50

    def test_month_ticks(self) -> None:
        """Test default ticks over the month domain are 1 through 12."""
        scale = LinearScale(Y_DOMAIN, (525, 100))
        assert scale.ticks() == [float(m) for m in range(1, 13)]

    def test_fractional_ticks(self) -> None:
        scale = LinearScale((0, 1), (0, 100))
        assert scale.ticks(5) == [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]


@pytest.mark.parametrize(
    ("start", "stop", "count", "expected"),
    [
        (0, 10, 10, 1),
        (0, 1, 5, 0.2),
        (0, 100, 4, 20),
        (1753, 2015, 20, 10),
        (0, 0, 10, 0),
    ],
)
def test_nice_step(start: float, stop: float, count: int, expected: float) -> None:
    assert nice_step(start, stop, count) == pytest.approx(expected)


def test_year_origin_is_day_zero_of_january() -> None:
    assert year_origin(1900) == datetime(1899, 12, 31)


def test_x_domain_spans_whole_years() -> None:
    """Test the x domain runs from (minYear, Jan 0) to (maxYear, Dec 0)."""
    assert x_domain(1753, 2015) == (datetime(1752, 12, 31), datetime(2015, 12, 31))


class TestTimeScale:
    """Tests for TimeScale."""

    def test_maps_domain_ends_onto_range(self) -> None:
        scale = TimeScale(x_domain(1753, 2015), (100, 1400))

        assert scale(datetime(1752, 12, 31)) == pytest.approx(100)
        assert scale(datetime(2015, 12, 31)) == pytest.approx(1400)

    def test_time_of_day_is_fractional(self) -> None:
        """Test noon sits halfway between two midnights."""
        scale = TimeScale((datetime(2000, 1, 1), datetime(2000, 1, 3)), (0, 100))
        assert scale(datetime(2000, 1, 1, 12)) == pytest.approx(25)
        assert scale(datetime(2000, 1, 2)) == pytest.approx(50)

    def test_monotonic(self) -> None:
        scale = TimeScale(x_domain(1900, 1910), (0, 1000))
        positions = [scale(year_origin(y)) for y in range(1900, 1911)]
        assert positions == sorted(positions)

    def test_year_ticks(self) -> None:
        """Test twenty requested ticks over 1753-2015 land on decades."""
        scale = TimeScale(x_domain(1753, 2015), (100, 1400))
        ticks = scale.year_ticks(20)

        assert ticks[0] == datetime(1760, 1, 1)
        assert ticks[-1] == datetime(2010, 1, 1)
        assert len(ticks) == 26

    def test_year_ticks_short_span(self) -> None:
        scale = TimeScale(x_domain(1900, 1902), (0, 100))
        ticks = scale.year_ticks(20)
        assert [t.year for t in ticks] == [1900, 1901, 1902]


class TestSequentialColorScale:
    """Tests for SequentialColorScale."""

    def test_domain_ends_use_colormap_ends(self) -> None:
        scale = SequentialColorScale((-1.0, 2.5))
        inferno = colormaps["inferno"]

        assert scale(-1.0) == to_hex(inferno(0.0))
        assert scale(2.5) == to_hex(inferno(1.0))

    def test_clamps_outside_domain(self) -> None:
        scale = SequentialColorScale((-1.0, 2.5))

        assert scale(-10) == scale(-1.0)
        assert scale(10) == scale(2.5)

    def test_returns_hex(self) -> None:
        color = SequentialColorScale((0, 1), colormap="viridis")(0.5)
        assert color.startswith("#")
        assert len(color) == 7

    def test_degenerate_domain(self) -> None:
        scale = SequentialColorScale((0.3, 0.3))
        assert scale(0.3) == to_hex(colormaps["inferno"](0.5))

    def test_colors(self) -> None:
        scale = SequentialColorScale((0, 1))
        assert scale.colors([0, 1]) == [scale(0), scale(1)]
