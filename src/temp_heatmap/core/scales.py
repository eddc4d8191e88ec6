"""Scales mapping data values to canvas pixels and colours.

Four scales drive the chart:

- a sequential colour scale over the variance range (inferno colormap),
- a linear legend scale over the absolute temperature range,
- a time scale over years for the x axis,
- a linear scale over month numbers for the y axis, with the fixed domain
  ``Y_DOMAIN``.

Tick generation follows the usual "nice step" rule: the raw step
``span / count`` is rounded to 1, 2 or 5 times a power of ten.
"""

import math
from datetime import datetime, timedelta

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import Normalize, to_hex
from matplotlib.dates import date2num


# Literal order kept: month 12.5 sits at the bottom edge, 0.52 at the top.
Y_DOMAIN = (12.5, 0.52)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def nice_step(start: float, stop: float, count: int) -> float:
    """Tick spacing of roughly ``count`` ticks over ``[start, stop]``."""
    span = abs(stop - start)
    if count <= 0 or span == 0:
        return 0.0

    raw = span / count
    power = math.floor(math.log10(raw))
    error = raw / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    return factor * 10**power


def x_domain(min_year: int, max_year: int) -> tuple[datetime, datetime]:
    """Time domain covering whole years ``min_year`` through ``max_year``.

    Both ends sit on "day 0" of a month: the day before January 1st of
    ``min_year`` and the day before January 1st of ``max_year + 1``.
    """
    return year_origin(min_year), year_origin(max_year + 1)


def year_origin(year: int) -> datetime:
    """December 31st of the previous year, where a year's cells start."""
    return datetime(year, 1, 1) - timedelta(days=1)


class LinearScale:
    """Affine map from a numeric domain onto a numeric range."""

    def __init__(
        self, domain: tuple[float, float], range_: tuple[float, float]
    ) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = 10) -> list[float]:
        """Nicely spaced values inside the domain, in ascending order."""
        lo, hi = sorted(self.domain)
        step = nice_step(lo, hi, count)
        if step == 0:
            return [lo]

        first = math.ceil(lo / step)
        last = math.floor(hi / step)
        # Round away float noise such as 0.30000000000000004.
        decimals = max(0, -math.floor(math.log10(step)))
        return [round(i * step, decimals) for i in range(first, last + 1)]


class TimeScale:
    """Linear map from a ``datetime`` domain onto a numeric range."""

    def __init__(
        self, domain: tuple[datetime, datetime], range_: tuple[float, float]
    ) -> None:
        self.domain = domain
        self._linear = LinearScale((date2num(domain[0]), date2num(domain[1])), range_)

    @property
    def range(self) -> tuple[float, float]:
        return self._linear.range

    def __call__(self, value: datetime) -> float:
        return self._linear(float(date2num(value)))

    def year_ticks(self, count: int = 10) -> list[datetime]:
        """January 1st of evenly spaced years inside the domain."""
        start, stop = sorted(self.domain)
        first_year = start.year
        if start != datetime(start.year, 1, 1):
            first_year += 1
        last_year = stop.year

        step = max(1, int(nice_step(first_year, last_year, count)))
        first = math.ceil(first_year / step) * step
        return [datetime(year, 1, 1) for year in range(first, last_year + 1, step)]


class SequentialColorScale:
    """Map values onto a matplotlib colormap, clamped to the domain."""

    def __init__(
        self, domain: tuple[float, float], colormap: str = "inferno"
    ) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.cmap = colormaps[colormap]
        self.norm = Normalize(vmin=self.domain[0], vmax=self.domain[1], clip=True)

    def __call__(self, value: float) -> str:
        """Hex colour of ``value``."""
        if self.domain[0] == self.domain[1]:
            return to_hex(self.cmap(0.5))
        return to_hex(self.cmap(float(self.norm(value))))

    def colors(self, values: list[float] | np.ndarray) -> list[str]:
        return [self(v) for v in np.asarray(values, dtype=float)]
