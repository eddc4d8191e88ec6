"""Drawing and export of the heat map.

The chart is drawn with matplotlib on an axes that fills the whole figure and
whose data coordinates are canvas pixels (y pointing down), so the geometry
from :mod:`temp_heatmap.core.layout` is used unchanged. At 72 dpi one SVG user
unit equals one pixel, which keeps the exported SVG in the same coordinate
system as the layout.

Functions
---------
plot_heatmap
    Draw cells, axes, legend and axis titles onto a new figure.
figure_to_svg
    Export a figure as SVG text annotated for the interactive page.
save_svg
    Write the annotated SVG to disk.
save_png
    Write a static raster export.

Notes
-----
Every artist that the page needs to address gets a matplotlib ``gid``; the SVG
backend writes it as the ``id`` of the artist's ``<g>`` element. After export
the SVG tree is post-processed: cells receive ``class="cell"`` and ``data-*``
attributes, and axis/legend artists are gathered under ``#x-axis``,
``#y-axis``, ``#legend`` and ``#legend-axis`` groups.
"""

import io
import xml.etree.ElementTree as ET
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from temp_heatmap.core.layout import Axis, Cell, HeatmapLayout, Legend
from temp_heatmap.core.logger import logger


SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

CANVAS_DPI = 72
TICK_SIZE = 6
TICK_PADDING = 3
FONT_SIZE = 10
AXIS_COLOR = "black"

SVG_RC = {
    "svg.fonttype": "none",
    "svg.hashsalt": "temp-heatmap",
    "font.family": "sans-serif",
}


def _draw_axis(ax: Axes, axis: Axis, gid: str) -> None:
    if axis.orient == "bottom":
        ax.plot(
            [axis.start, axis.end],
            [axis.offset, axis.offset],
            color=AXIS_COLOR,
            linewidth=1,
            gid=f"{gid}-domain",
        )
        for i, tick in enumerate(axis.ticks):
            ax.plot(
                [tick.position, tick.position],
                [axis.offset, axis.offset + TICK_SIZE],
                color=AXIS_COLOR,
                linewidth=1,
                gid=f"{gid}-tick-{i}",
            )
            ax.text(
                tick.position,
                axis.offset + TICK_SIZE + TICK_PADDING,
                tick.label,
                ha="center",
                va="top",
                fontsize=FONT_SIZE,
                gid=f"{gid}-label-{i}",
            )
    elif axis.orient == "left":
        ax.plot(
            [axis.offset, axis.offset],
            [axis.start, axis.end],
            color=AXIS_COLOR,
            linewidth=1,
            gid=f"{gid}-domain",
        )
        for i, tick in enumerate(axis.ticks):
            ax.plot(
                [axis.offset - TICK_SIZE, axis.offset],
                [tick.position, tick.position],
                color=AXIS_COLOR,
                linewidth=1,
                gid=f"{gid}-tick-{i}",
            )
            ax.text(
                axis.offset - TICK_SIZE - TICK_PADDING,
                tick.position,
                tick.label,
                ha="right",
                va="center",
                fontsize=FONT_SIZE,
                gid=f"{gid}-label-{i}",
            )
    else:
        raise ValueError(f"Unsupported axis orientation: {axis.orient}")


def _draw_legend(ax: Axes, legend: Legend) -> None:
    for i, swatch in enumerate(legend.swatches):
        ax.add_patch(
            Rectangle(
                (swatch.x, swatch.y),
                swatch.width,
                swatch.height,
                facecolor=swatch.fill,
                edgecolor="black",
                linewidth=1,
                gid=f"legend-swatch-{i}",
            )
        )
    _draw_axis(ax, legend.axis, "legend-axis")


def plot_heatmap(layout: HeatmapLayout) -> Figure:
    """Draw the heat map described by ``layout``.

    Parameters
    ----------
    layout : HeatmapLayout
        Pixel geometry from ``compute_layout``.

    Returns
    -------
    Figure
        The drawn figure. The caller owns it and should close it with
        ``plt.close(fig)`` once exported.
    """
    fig = plt.figure(
        figsize=(layout.width / CANVAS_DPI, layout.height / CANVAS_DPI),
        dpi=CANVAS_DPI,
        facecolor="white",
    )
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)
    ax.set_axis_off()

    for i, cell in enumerate(layout.cells):
        ax.add_patch(
            Rectangle(
                (cell.x, cell.y),
                cell.width,
                cell.height,
                facecolor=cell.fill,
                edgecolor="none",
                linewidth=0,
                gid=f"cell-{i}",
            )
        )

    _draw_axis(ax, layout.x_axis, "x-axis")
    _draw_axis(ax, layout.y_axis, "y-axis")
    _draw_legend(ax, layout.legend)

    ax.text(
        *layout.x_title,
        "Years",
        ha="center",
        va="baseline",
        fontsize=FONT_SIZE + 2,
        gid="x-title",
    )
    ax.text(
        *layout.y_title,
        "Months",
        ha="center",
        va="center",
        rotation=90,
        fontsize=FONT_SIZE + 2,
        gid="y-title",
    )

    logger.debug(f"drew {len(layout.cells):,} cells")
    return fig


def _annotate_cells(root: ET.Element, cells: list[Cell]) -> int:
    annotated = 0
    for element in root.iter(f"{{{SVG_NS}}}g"):
        element_id = element.get("id", "")
        if not element_id.startswith("cell-"):
            continue
        cell = cells[int(element_id.removeprefix("cell-"))]
        element.set("class", "cell")
        element.set("data-month", str(cell.data_month))
        element.set("data-year", str(cell.data_year))
        element.set("data-temp", repr(cell.temperature))
        element.set("data-tooltip", cell.tooltip_html)
        annotated += 1
    return annotated


def _group_by_prefix(root: ET.Element, prefix: str) -> ET.Element | None:
    """Move sibling groups whose id starts with ``prefix-`` into ``<g id=prefix>``.

    Only siblings of the first match are gathered; descendants of an already
    built group stay where they are.
    """
    parents = {child: parent for parent in root.iter() for child in parent}

    def matches(element: ET.Element) -> bool:
        return element.tag == f"{{{SVG_NS}}}g" and element.get("id", "").startswith(
            f"{prefix}-"
        )

    first = next((el for el in root.iter() if matches(el)), None)
    if first is None:
        return None

    parent = parents[first]
    members = [el for el in parent if matches(el)]
    index = list(parent).index(first)

    group = ET.Element(f"{{{SVG_NS}}}g", {"id": prefix})
    for element in members:
        parent.remove(element)
        group.append(element)
    parent.insert(index, group)
    return group


def figure_to_svg(fig: Figure, layout: HeatmapLayout) -> str:
    """Export ``fig`` as annotated SVG markup.

    Parameters
    ----------
    fig : Figure
        Figure returned by ``plot_heatmap`` for the same ``layout``.
    layout : HeatmapLayout
        Layout the figure was drawn from; supplies the cell data attributes.

    Returns
    -------
    str
        ``<svg>`` element serialised as text, without an XML declaration, so
        it can be inlined into HTML.
    """
    buffer = io.BytesIO()
    with plt.rc_context(SVG_RC):
        fig.savefig(buffer, format="svg", metadata={"Date": None})

    root = ET.fromstring(buffer.getvalue())
    for metadata in root.findall(f"{{{SVG_NS}}}metadata"):
        root.remove(metadata)
    root.set("id", "heatmap")
    root.set("width", str(layout.width))
    root.set("height", str(layout.height))

    annotated = _annotate_cells(root, layout.cells)
    if annotated != len(layout.cells):
        logger.warning(
            f"annotated {annotated} of {len(layout.cells)} cells in the SVG export"
        )

    # legend-axis first so it ends up nested inside #legend
    for prefix in ("x-axis", "y-axis", "legend-axis", "legend"):
        _group_by_prefix(root, prefix)

    return ET.tostring(root, encoding="unicode")


def save_svg(fig: Figure, layout: HeatmapLayout, path: str | Path) -> Path:
    """Write the annotated SVG of ``fig`` to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(figure_to_svg(fig, layout), encoding="utf-8")
    logger.info(f"📌 saved heat map svg → {path}")
    return path


def save_png(fig: Figure, path: str | Path, dpi: int = 150) -> Path:
    """Write a static PNG of ``fig`` to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, facecolor="white")
    logger.info(f"📌 saved heat map png → {path}")
    return path
