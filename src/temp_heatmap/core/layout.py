"""Chart geometry in canvas pixel coordinates.

``compute_layout`` turns a dataset and the canvas configuration into plain
geometry: one rectangle per record, tick positions and labels for both axes,
and the legend inset (swatches plus its own axis). Coordinates follow the SVG
convention, origin at the top-left corner with y growing downwards. The
plotting module only draws what this module computes.
"""

from dataclasses import dataclass
from typing import Any

from temp_heatmap.core.config import DEFAULT_CONFIG, to_namespace
from temp_heatmap.core.dataset import Dataset, MonthlyVarianceRecord
from temp_heatmap.core.formatting import (
    format_legend_tick,
    format_month_tick,
    generate_tooltip_html,
)
from temp_heatmap.core.legend import legend_buckets, legend_ticks
from temp_heatmap.core.scales import (
    Y_DOMAIN,
    LinearScale,
    SequentialColorScale,
    TimeScale,
    x_domain,
    year_origin,
)


# Vertical nudge applied to every cell so it straddles its month tick.
CELL_Y_OFFSET = 17
LEGEND_AXIS_OFFSET = 33


@dataclass(frozen=True)
class Cell:
    """One heat map rectangle and the data attached to it."""

    x: float
    y: float
    width: float
    height: float
    fill: str
    record: MonthlyVarianceRecord
    temperature: float
    tooltip_html: str

    @property
    def data_month(self) -> int:
        """Zero-based month index."""
        return self.record.month - 1

    @property
    def data_year(self) -> int:
        return self.record.year


@dataclass(frozen=True)
class Tick:
    position: float
    label: str


@dataclass(frozen=True)
class Swatch:
    x: float
    y: float
    width: float
    height: float
    fill: str
    value: float


@dataclass(frozen=True)
class Axis:
    """Axis line from ``start`` to ``end`` along one direction at ``offset``.

    ``orient`` is ``"bottom"`` (horizontal line, ticks below) or ``"left"``
    (vertical line, ticks to the left).
    """

    orient: str
    offset: float
    start: float
    end: float
    ticks: list[Tick]


@dataclass(frozen=True)
class Legend:
    x: float
    y: float
    width: float
    height: float
    swatches: list[Swatch]
    axis: Axis


@dataclass
class HeatmapLayout:
    """Everything needed to draw the chart."""

    width: int
    height: int
    padding: int
    cells: list[Cell]
    x_axis: Axis
    y_axis: Axis
    legend: Legend
    x_title: tuple[float, float] = (0.0, 0.0)
    y_title: tuple[float, float] = (0.0, 0.0)
    base_temperature: float = 0.0
    variance_range: tuple[float, float] = (0.0, 0.0)
    year_range: tuple[int, int] = (0, 0)


def _legend(
    dataset: Dataset,
    color_scale: SequentialColorScale,
    width: int,
    height: int,
    cfg: Any,
) -> Legend:
    vmin, vmax = dataset.variance_range()
    base = dataset.base_temperature
    count = cfg.legend.buckets

    legend_width = width / 4
    inner_padding = cfg.legend.padding
    origin_x = width / 16.5
    origin_y = height * 0.92

    legend_scale = LinearScale(
        (vmin + base, vmax + base), (inner_padding, legend_width - inner_padding)
    )

    swatch_width = (legend_width - inner_padding - 9.5) / count
    swatch_height = (legend_width - inner_padding) / 11
    swatches = [
        Swatch(
            x=origin_x + legend_scale(value + base),
            y=origin_y,
            width=swatch_width,
            height=swatch_height,
            fill=color_scale(value),
            value=value,
        )
        for value in legend_buckets(vmin, vmax, count)
    ]

    ticks = [
        Tick(position=origin_x + legend_scale(t), label=format_legend_tick(t))
        for t in legend_ticks(vmin, vmax, base, count)
    ]
    axis = Axis(
        orient="bottom",
        offset=origin_y + LEGEND_AXIS_OFFSET,
        start=origin_x + legend_scale.range[0],
        end=origin_x + legend_scale.range[1],
        ticks=ticks,
    )

    return Legend(
        x=origin_x,
        y=origin_y,
        width=legend_width,
        height=cfg.legend.height,
        swatches=swatches,
        axis=axis,
    )


def compute_layout(
    dataset: Dataset, config: dict[str, Any] | None = None
) -> HeatmapLayout:
    """Compute the heat map geometry for ``dataset``.

    Parameters
    ----------
    dataset : Dataset
        Validated monthly variance dataset.
    config : dict, optional
        Merged configuration (see ``load_config``). Defaults are used when
        omitted.

    Returns
    -------
    HeatmapLayout
        Pixel geometry for cells, axes, legend and axis titles.
    """
    cfg = to_namespace(config or DEFAULT_CONFIG)
    width = cfg.canvas.width
    height = cfg.canvas.height
    padding = cfg.canvas.padding

    base = dataset.base_temperature
    vmin, vmax = dataset.variance_range()
    min_year, max_year = dataset.year_range()

    color_scale = SequentialColorScale((vmin, vmax), cfg.legend.colormap)
    x_scale = TimeScale(x_domain(min_year, max_year), (padding, width - padding))
    y_scale = LinearScale(Y_DOMAIN, (height - padding, padding))

    cell_height = (height - 2 * padding) / 12
    cell_width = (width - 2 * padding) / (len(dataset) / 12)

    cells = [
        Cell(
            x=x_scale(year_origin(record.year)),
            y=y_scale(record.month) - CELL_Y_OFFSET,
            width=cell_width,
            height=cell_height,
            fill=color_scale(record.variance),
            record=record,
            temperature=record.temperature(base),
            tooltip_html=generate_tooltip_html(record, base),
        )
        for record in dataset.monthly_variance
    ]

    x_axis = Axis(
        orient="bottom",
        offset=height - padding,
        start=x_scale.range[0],
        end=x_scale.range[1],
        ticks=[
            Tick(position=x_scale(t), label=str(t.year))
            for t in x_scale.year_ticks(cfg.x_axis.ticks)
        ],
    )
    y_axis = Axis(
        orient="left",
        offset=padding,
        start=y_scale.range[1],
        end=y_scale.range[0],
        ticks=[
            Tick(position=y_scale(t), label=format_month_tick(t))
            for t in y_scale.ticks()
        ],
    )

    return HeatmapLayout(
        width=width,
        height=height,
        padding=padding,
        cells=cells,
        x_axis=x_axis,
        y_axis=y_axis,
        legend=_legend(dataset, color_scale, width, height, cfg),
        x_title=(width / 2, height - 50),
        y_title=(padding - 75, height / 2),
        base_temperature=base,
        variance_range=(vmin, vmax),
        year_range=(min_year, max_year),
    )
