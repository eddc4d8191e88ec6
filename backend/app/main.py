"""FastAPI application serving the temperature heat map.

The dataset is fetched once at startup and the same read-only snapshot backs
every request. If the fetch fails the server still starts: the page endpoint
answers with the error page and the data endpoints with 503.

Environment
-----------
HEATMAP_CONFIG
    Optional path to a YAML configuration file.
HEATMAP_SOURCE
    Optional local JSON file to load instead of fetching the dataset URL.
"""

import asyncio
import logging
import os
from typing import Any

import matplotlib
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from temp_heatmap import __version__
from temp_heatmap.core.exceptions import HeatmapError
from temp_heatmap.core.logger import get_logger
from temp_heatmap.core.renderer import HeatmapRenderer


matplotlib.use("Agg")

app = FastAPI(
    title="Global Temperature Heat Map API",
    description="Monthly global land-surface temperature variance heat map",
    version=__version__,
)


class MonthSummary(BaseModel):
    """One notable month of the dataset."""

    year: int
    month: str
    temperature: float
    variance: float


class DatasetInfo(BaseModel):
    """Dataset summary response."""

    num_records: int
    year_range: list[int]
    base_temperature: float
    variance_range: list[float]
    warmest: MonthSummary
    coldest: MonthSummary


class LegendEntry(BaseModel):
    """One legend bucket: its lower variance bound and colour."""

    variance: float
    temperature: float
    color: str


def _renderer() -> HeatmapRenderer:
    renderer = getattr(app.state, "renderer", None)
    if renderer is None or renderer.dataset is None:
        raise HTTPException(status_code=503, detail="Dataset not loaded")
    return renderer


@app.on_event("startup")
async def startup_event() -> None:
    """Fetch the dataset once and keep the rendered snapshot on the app state."""
    logger = get_logger()
    logger.setLevel(logging.INFO)

    app.state.renderer = None
    app.state.chart_svg = None
    app.state.page_html = None
    app.state.load_error = None

    try:
        app.state.renderer = HeatmapRenderer(os.getenv("HEATMAP_CONFIG"))

        # Fetch and plot in a thread to avoid blocking the event loop
        await asyncio.to_thread(
            app.state.renderer.fetch_data, source=os.getenv("HEATMAP_SOURCE")
        )
        app.state.chart_svg = await asyncio.to_thread(app.state.renderer.render_svg)
        app.state.page_html = app.state.renderer.render_html(svg=app.state.chart_svg)
        logger.info("Heat map rendered and ready to serve")
    except HeatmapError as e:
        logger.error(f"Failed to load temperature data: {e}")
        app.state.load_error = str(e)


@app.get("/", response_class=HTMLResponse)
async def root() -> HTMLResponse:
    """Interactive heat map page, or the error page with status 503."""
    page_html = getattr(app.state, "page_html", None)
    if page_html is not None:
        return HTMLResponse(page_html)

    renderer = getattr(app.state, "renderer", None) or HeatmapRenderer()
    error = getattr(app.state, "load_error", None) or "Dataset not loaded"
    return HTMLResponse(renderer.render_error_html(error), status_code=503)


@app.get("/health")
async def health() -> dict[str, str | bool]:
    """Health check endpoint."""
    renderer = getattr(app.state, "renderer", None)
    return {
        "status": "healthy",
        "data_loaded": renderer is not None and renderer.dataset is not None,
    }


@app.get("/dataset/info", response_model=DatasetInfo)
async def get_dataset_info() -> DatasetInfo:
    """Summary of the loaded dataset."""
    return DatasetInfo(**_renderer().get_dataset_info())


@app.get("/chart.svg")
async def get_chart_svg() -> Response:
    """Standalone annotated SVG of the heat map, rendered once at startup."""
    chart_svg = getattr(app.state, "chart_svg", None)
    if chart_svg is None:
        raise HTTPException(status_code=503, detail="Dataset not loaded")
    return Response(content=chart_svg, media_type="image/svg+xml")


@app.get("/legend", response_model=list[LegendEntry])
async def get_legend() -> list[dict[str, Any]]:
    """Legend buckets with their colours."""
    renderer = _renderer()
    legend = renderer.compute_layout().legend
    base = renderer.dataset.base_temperature
    return [
        {
            "variance": swatch.value,
            "temperature": swatch.value + base,
            "color": swatch.fill,
        }
        for swatch in legend.swatches
    ]
