"""Shared fixtures: a small, deterministic temperature variance document."""

import json
from pathlib import Path
from typing import Any

import matplotlib
import pytest

from temp_heatmap.core.dataset import Dataset, parse_dataset


matplotlib.use("Agg")


BASE_TEMPERATURE = 8.66


def make_payload(
    years: range = range(1900, 1903), base_temperature: float = BASE_TEMPERATURE
) -> dict[str, Any]:
    """Every month of ``years``, variance stepping by 0.1 from -1.0."""
    records = []
    for i, (year, month) in enumerate(
        (y, m) for y in years for m in range(1, 13)
    ):
        records.append(
            {"year": year, "month": month, "variance": round(-1.0 + 0.1 * i, 3)}
        )
    return {"baseTemperature": base_temperature, "monthlyVariance": records}


@pytest.fixture
def payload() -> dict[str, Any]:
    """36 records covering 1900-1902; variance from -1.0 to 2.5."""
    return make_payload()


@pytest.fixture
def dataset(payload: dict[str, Any]) -> Dataset:
    return parse_dataset(payload)


@pytest.fixture
def payload_file(tmp_path: Path, payload: dict[str, Any]) -> Path:
    path = tmp_path / "global-temperature.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def payload_factory() -> Any:
    """Build payloads for other year spans or base temperatures."""
    return make_payload
