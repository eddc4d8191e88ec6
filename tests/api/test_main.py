"""Tests for the FastAPI backend."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app


@pytest.fixture
def client(
    payload_file: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[TestClient]:
    """Client whose startup loads the local sample document."""
    monkeypatch.setenv("HEATMAP_SOURCE", str(payload_file))
    monkeypatch.delenv("HEATMAP_CONFIG", raising=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_client(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[TestClient]:
    """Client whose startup cannot load any data."""
    monkeypatch.setenv("HEATMAP_SOURCE", str(tmp_path / "missing.json"))
    monkeypatch.delenv("HEATMAP_CONFIG", raising=False)
    with TestClient(app) as test_client:
        yield test_client


class TestLoadedApp:
    """Endpoints with the dataset loaded."""

    def test_page(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text.count('class="cell"') == 36
        assert 'id="tooltip"' in response.text

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "data_loaded": True}

    def test_dataset_info(self, client: TestClient) -> None:
        response = client.get("/dataset/info")

        assert response.status_code == 200
        body = response.json()
        assert body["num_records"] == 36
        assert body["year_range"] == [1900, 1902]
        assert body["warmest"]["month"] == "December"

    def test_chart_svg(self, client: TestClient) -> None:
        response = client.get("/chart.svg")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/svg+xml"
        assert response.text.startswith("<svg")

    def test_chart_svg_is_rendered_once(self, client: TestClient) -> None:
        """Test the chart is served from the startup snapshot, not re-plotted."""
        with patch("temp_heatmap.core.renderer.plot_heatmap") as mock_plot:
            first = client.get("/chart.svg")
            second = client.get("/chart.svg")

        mock_plot.assert_not_called()
        assert first.text == second.text
        assert first.text.count('class="cell"') == 36

    def test_legend(self, client: TestClient) -> None:
        response = client.get("/legend")

        assert response.status_code == 200
        entries = response.json()
        assert len(entries) == 9
        assert entries[0]["variance"] == pytest.approx(-1.0)
        assert entries[0]["temperature"] == pytest.approx(7.66)
        assert entries[0]["color"] == "#000004"


class TestFailedLoad:
    """Endpoints when the dataset could not be loaded at startup."""

    def test_page_shows_error(self, failing_client: TestClient) -> None:
        response = failing_client.get("/")

        assert response.status_code == 503
        assert 'id="error"' in response.text
        assert "missing.json" in response.text

    def test_health_reports_missing_data(self, failing_client: TestClient) -> None:
        response = failing_client.get("/health")
        assert response.json()["data_loaded"] is False

    @pytest.mark.parametrize("path", ["/dataset/info", "/chart.svg", "/legend"])
    def test_data_endpoints_unavailable(
        self, failing_client: TestClient, path: str
    ) -> None:
        assert failing_client.get(path).status_code == 503


class TestBadConfig:
    """Startup with a configuration file that is not a mapping."""

    @pytest.fixture
    def bad_config_client(
        self, tmp_path: Path, payload_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> Iterator[TestClient]:
        config = tmp_path / "config.yaml"
        config.write_text("- just\n- a list\n")
        monkeypatch.setenv("HEATMAP_SOURCE", str(payload_file))
        monkeypatch.setenv("HEATMAP_CONFIG", str(config))
        with TestClient(app) as test_client:
            yield test_client

    def test_page_shows_error(self, bad_config_client: TestClient) -> None:
        response = bad_config_client.get("/")

        assert response.status_code == 503
        assert 'id="error"' in response.text
        assert "must contain a mapping" in response.text

    def test_health_reports_missing_data(self, bad_config_client: TestClient) -> None:
        response = bad_config_client.get("/health")

        assert response.status_code == 200
        assert response.json()["data_loaded"] is False

    def test_chart_unavailable(self, bad_config_client: TestClient) -> None:
        assert bad_config_client.get("/chart.svg").status_code == 503
