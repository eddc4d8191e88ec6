"""Tests for legend buckets and ticks."""

import pytest

from temp_heatmap.core.legend import legend_buckets, legend_ticks


def test_nine_buckets_from_minimum() -> None:
    buckets = legend_buckets(-1.0, 2.5)

    assert len(buckets) == 9
    assert buckets[0] == -1.0
    assert buckets[1] == pytest.approx(-1.0 + 3.5 / 9)
    assert buckets[-1] == pytest.approx(-1.0 + 8 * 3.5 / 9)


@pytest.mark.parametrize(
    ("vmin", "vmax"),
    [(-6.976, 5.228), (0.0, 1e-9), (-1.0, -0.5), (2.0, 2.0)],
)
def test_bucket_count_is_fixed(vmin: float, vmax: float) -> None:
    """Test the bucket count does not depend on the value range."""
    assert len(legend_buckets(vmin, vmax)) == 9


def test_buckets_are_evenly_spaced() -> None:
    buckets = legend_buckets(-6.976, 5.228)
    gaps = [b - a for a, b in zip(buckets, buckets[1:])]
    assert gaps == pytest.approx([(5.228 + 6.976) / 9] * 8)


def test_custom_bucket_count() -> None:
    assert len(legend_buckets(0, 1, count=4)) == 4


def test_invalid_bucket_count() -> None:
    with pytest.raises(ValueError):
        legend_buckets(0, 1, count=0)


def test_legend_ticks_span_absolute_range() -> None:
    """Test ticks run from min to max absolute temperature."""
    ticks = legend_ticks(-1.0, 2.5, 8.66)

    assert len(ticks) == 10
    assert ticks[0] == pytest.approx(7.66)
    assert ticks[-1] == pytest.approx(11.16)
