"""Colour legend buckets and tick values."""

import numpy as np


def legend_buckets(vmin: float, vmax: float, count: int = 9) -> list[float]:
    """Start values of ``count`` equal-width variance buckets.

    The first bucket starts at ``vmin`` and each following one is one step of
    ``(vmax - vmin) / count`` further, so the result always has ``count``
    entries whatever the size of the dataset.
    """
    if count < 1:
        raise ValueError(f"Legend needs at least one bucket, got {count}")
    step = (vmax - vmin) / count
    return [vmin + i * step for i in range(count)]


def legend_ticks(
    vmin: float, vmax: float, base_temperature: float, count: int = 9
) -> list[float]:
    """Absolute temperatures labelled on the legend axis.

    ``count + 1`` evenly spaced values from ``vmin + base_temperature`` to
    ``vmax + base_temperature``, i.e. every bucket boundary including both ends.
    """
    if count < 1:
        raise ValueError(f"Legend needs at least one bucket, got {count}")
    ticks = np.linspace(vmin, vmax, count + 1) + base_temperature
    return ticks.tolist()
