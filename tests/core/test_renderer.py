"""Tests for the HeatmapRenderer pipeline object."""

from pathlib import Path
from unittest.mock import patch

import pandas as pd
import pytest

from temp_heatmap.core.renderer import HeatmapRenderer


@pytest.fixture
def renderer(payload_file: Path) -> HeatmapRenderer:
    renderer = HeatmapRenderer()
    renderer.fetch_data(source=payload_file)
    return renderer


def test_requires_data_before_rendering() -> None:
    renderer = HeatmapRenderer()
    with pytest.raises(RuntimeError, match="fetch_data"):
        renderer.render_svg()
    with pytest.raises(RuntimeError):
        renderer.get_dataset_info()


def test_config_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("title: Custom\n")

    renderer = HeatmapRenderer(path)

    assert renderer.config_path == path
    assert renderer.title == "Custom"


def test_layout_is_cached_until_refetch(
    renderer: HeatmapRenderer, payload_file: Path
) -> None:
    layout = renderer.compute_layout()
    assert renderer.compute_layout() is layout

    renderer.fetch_data(source=payload_file)
    assert renderer.compute_layout() is not layout


def test_description(renderer: HeatmapRenderer) -> None:
    assert renderer.description() == "1900 - 1902: base temperature 8.66℃"


def test_render_html(renderer: HeatmapRenderer) -> None:
    html = renderer.render_html()

    assert '<h1 id="title">Monthly Global Land-Surface Temperature</h1>' in html
    assert 'id="heatmap"' in html
    assert html.count('class="cell"') == 36



def test_render_html_reuses_svg(renderer: HeatmapRenderer) -> None:
    svg = renderer.render_svg()
    with patch("temp_heatmap.core.renderer.plot_heatmap") as mock_plot:
        html = renderer.render_html(svg=svg)

    mock_plot.assert_not_called()
    assert svg in html


def test_render_error_html(renderer: HeatmapRenderer) -> None:
    html = renderer.render_error_html(RuntimeError("boom"))
    assert "boom" in html


def test_save_outputs(renderer: HeatmapRenderer, tmp_path: Path) -> None:
    """Test every export lands on disk."""
    renderer.config["png_dpi"] = 36

    html = renderer.save_html(tmp_path / "site" / "heatmap.html")
    svg = renderer.save_svg(tmp_path / "site" / "heatmap.svg")
    png = renderer.save_png(tmp_path / "site" / "heatmap.png")
    csv = renderer.save_csv(tmp_path / "site" / "monthly_variance.csv")

    assert "<!DOCTYPE html>" in html.read_text(encoding="utf-8")
    assert svg.read_text(encoding="utf-8").startswith("<svg")
    assert png.stat().st_size > 0

    df = pd.read_csv(csv)
    assert list(df.columns) == ["year", "month", "variance", "temperature"]
    assert len(df) == 36


def test_save_error_html(tmp_path: Path) -> None:
    renderer = HeatmapRenderer()
    path = renderer.save_error_html("no data", tmp_path / "heatmap.html")
    assert "no data" in path.read_text(encoding="utf-8")


def test_get_dataset_info(renderer: HeatmapRenderer) -> None:
    info = renderer.get_dataset_info()

    assert info["num_records"] == 36
    assert info["year_range"] == [1900, 1902]
    assert info["base_temperature"] == 8.66
    assert info["variance_range"] == [-1.0, 2.5]
    assert info["warmest"] == {
        "year": 1902,
        "month": "December",
        "temperature": 11.16,
        "variance": 2.5,
    }
    assert info["coldest"]["year"] == 1900
    assert info["coldest"]["month"] == "January"
