"""Heat map rendering pipeline shared by the CLI and the API backend.

``HeatmapRenderer`` owns the configuration and the dataset snapshot and exposes
each pipeline step (fetch, layout, SVG, HTML, exports) separately so callers
can report progress between them.
"""

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt

from temp_heatmap.core.config import load_config
from temp_heatmap.core.data_extraction import fetch_dataset
from temp_heatmap.core.dataset import Dataset
from temp_heatmap.core.formatting import month_name
from temp_heatmap.core.layout import HeatmapLayout, compute_layout
from temp_heatmap.core.logger import logger
from temp_heatmap.core.page import render_error_page, render_page
from temp_heatmap.core.plotting import (
    figure_to_svg,
    plot_heatmap,
    save_png,
    save_svg,
)


class HeatmapRenderer:
    """Fetches the dataset once and renders it in the requested formats."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        config_path : str | Path, optional
            YAML configuration file. Ignored when ``config`` is given.
        config : dict, optional
            Already merged configuration.
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self.config = config if config is not None else load_config(config_path)

        self.dataset: Dataset | None = None
        self._layout: HeatmapLayout | None = None

    @property
    def title(self) -> str:
        return self.config["title"]

    def fetch_data(
        self, source: str | Path | None = None, url: str | None = None
    ) -> Dataset:
        """Fetch and validate the dataset, replacing any previous snapshot.

        Parameters
        ----------
        source : str | Path, optional
            Local JSON file to read instead of the configured URL.
        url : str, optional
            Remote URL overriding ``data.url`` from the configuration.

        Returns
        -------
        Dataset
            The loaded dataset.
        """
        self.dataset = fetch_dataset(
            url=url or self.config["data"]["url"],
            timeout=self.config["data"]["timeout"],
            source=source,
        )
        self._layout = None
        return self.dataset

    def _require_dataset(self) -> Dataset:
        if self.dataset is None:
            raise RuntimeError("Dataset not loaded. Call fetch_data() first.")
        return self.dataset

    def compute_layout(self) -> HeatmapLayout:
        """Chart geometry for the loaded dataset (computed once)."""
        dataset = self._require_dataset()
        if self._layout is None:
            self._layout = compute_layout(dataset, self.config)
        return self._layout

    def description(self) -> str:
        dataset = self._require_dataset()
        min_year, max_year = dataset.year_range()
        return (
            f"{min_year} - {max_year}: base temperature "
            f"{dataset.base_temperature}℃"
        )

    def render_svg(self) -> str:
        """Annotated SVG markup of the heat map."""
        layout = self.compute_layout()
        fig = plot_heatmap(layout)
        try:
            return figure_to_svg(fig, layout)
        finally:
            plt.close(fig)

    def render_html(self, svg: str | None = None) -> str:
        """Complete interactive HTML page, around ``svg`` when already rendered."""
        return render_page(
            svg=svg if svg is not None else self.render_svg(),
            title=self.title,
            description=self.description(),
        )

    def render_error_html(self, error: BaseException | str) -> str:
        """Error page describing why the chart could not be produced."""
        return render_error_page(title=self.title, message=str(error))

    def save_html(self, output_path: str | Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_html(), encoding="utf-8")
        logger.info(f"📌 saved heat map page → {output_path}")
        return output_path

    def save_error_html(
        self, error: BaseException | str, output_path: str | Path
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_error_html(error), encoding="utf-8")
        logger.info(f"📌 saved error page → {output_path}")
        return output_path

    def save_svg(self, output_path: str | Path) -> Path:
        layout = self.compute_layout()
        fig = plot_heatmap(layout)
        try:
            return save_svg(fig, layout, output_path)
        finally:
            plt.close(fig)

    def save_png(self, output_path: str | Path) -> Path:
        fig = plot_heatmap(self.compute_layout())
        try:
            return save_png(fig, output_path, dpi=self.config["png_dpi"])
        finally:
            plt.close(fig)

    def save_csv(self, output_path: str | Path) -> Path:
        """Write the records, with absolute temperatures, to CSV."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self._require_dataset().to_frame().to_csv(output_path, index=False)
        logger.info(f"📌 saved monthly variance csv → {output_path}")
        return output_path

    def get_dataset_info(self) -> dict[str, Any]:
        """Summary of the loaded dataset.

        Returns
        -------
        dict[str, Any]
            Record count, year span, base temperature, variance range and the
            warmest and coldest months.
        """
        dataset = self._require_dataset()
        df = dataset.to_frame()
        vmin, vmax = dataset.variance_range()
        min_year, max_year = dataset.year_range()

        def describe(idx: Any) -> dict[str, Any]:
            row = df.loc[idx]
            return {
                "year": int(row["year"]),
                "month": month_name(int(row["month"])),
                "temperature": round(float(row["temperature"]), 2),
                "variance": round(float(row["variance"]), 2),
            }

        return {
            "num_records": len(dataset),
            "year_range": [min_year, max_year],
            "base_temperature": dataset.base_temperature,
            "variance_range": [vmin, vmax],
            "warmest": describe(df["variance"].idxmax()),
            "coldest": describe(df["variance"].idxmin()),
        }
