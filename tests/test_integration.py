"""Integration tests against the live dataset URL."""

import pytest

from temp_heatmap.core.config import DATA_URL
from temp_heatmap.core.data_extraction import fetch_dataset
from temp_heatmap.core.renderer import HeatmapRenderer


@pytest.mark.integration_test
def test_live_dataset() -> None:
    """Test the published document parses into a full monthly dataset."""
    dataset = fetch_dataset(DATA_URL)

    min_year, max_year = dataset.year_range()
    assert min_year == 1753
    assert max_year >= 2015
    assert dataset.base_temperature == pytest.approx(8.66)
    assert len(dataset) > 3000


@pytest.mark.integration_test
def test_live_render() -> None:
    renderer = HeatmapRenderer()
    dataset = renderer.fetch_data()

    html = renderer.render_html()

    assert html.count('class="cell"') == len(dataset)
