"""Core pipeline: data retrieval, scales, layout, drawing and page rendering."""

from temp_heatmap.core.config import DATA_URL, DEFAULT_CONFIG, load_config
from temp_heatmap.core.data_extraction import fetch_dataset
from temp_heatmap.core.dataset import Dataset, MonthlyVarianceRecord, parse_dataset
from temp_heatmap.core.exceptions import (
    ConfigError,
    DataFetchError,
    DatasetError,
    HeatmapError,
)
from temp_heatmap.core.formatting import MONTH_NAMES, generate_tooltip_html
from temp_heatmap.core.layout import HeatmapLayout, compute_layout
from temp_heatmap.core.legend import legend_buckets, legend_ticks
from temp_heatmap.core.logger import (
    get_file_handler,
    get_logger,
    get_rich_handler,
    logger,
    setup_console_logging,
    setup_file_logging,
)
from temp_heatmap.core.plotting import figure_to_svg, plot_heatmap
from temp_heatmap.core.renderer import HeatmapRenderer


__all__ = [
    "DATA_URL",
    "DEFAULT_CONFIG",
    "load_config",
    "fetch_dataset",
    "Dataset",
    "MonthlyVarianceRecord",
    "parse_dataset",
    "HeatmapError",
    "DataFetchError",
    "DatasetError",
    "ConfigError",
    "MONTH_NAMES",
    "generate_tooltip_html",
    "HeatmapLayout",
    "compute_layout",
    "legend_buckets",
    "legend_ticks",
    "logger",
    "get_logger",
    "get_rich_handler",
    "get_file_handler",
    "setup_console_logging",
    "setup_file_logging",
    "plot_heatmap",
    "figure_to_svg",
    "HeatmapRenderer",
]
