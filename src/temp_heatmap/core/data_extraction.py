"""Retrieval of the global temperature variance document.

The document is a single JSON file served over plain HTTPS with no
authentication. For offline runs and tests the same document can be read from
a local file instead.

Functions
---------
fetch_payload
    GET the JSON document from a URL.
load_payload
    Read the JSON document from disk.
fetch_dataset
    Fetch (or load) and validate the document into a ``Dataset``.
"""

import json
from pathlib import Path
from typing import Any

import requests

from temp_heatmap.core.config import DATA_URL
from temp_heatmap.core.dataset import Dataset, parse_dataset
from temp_heatmap.core.exceptions import DataFetchError
from temp_heatmap.core.logger import logger


def fetch_payload(url: str = DATA_URL, timeout: float = 30) -> Any:
    """Download and decode the JSON document at ``url``.

    Parameters
    ----------
    url : str
        Location of the document.
    timeout : float, default=30
        Seconds to wait for the server before giving up.

    Returns
    -------
    Any
        Decoded JSON.

    Raises
    ------
    DataFetchError
        On connection errors, timeouts, non-2xx responses or a body that is
        not valid JSON.
    """
    logger.info(f"Fetching temperature data from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise DataFetchError(f"Failed to fetch {url}: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise DataFetchError(f"Response from {url} is not valid JSON: {e}") from e

    logger.info(f"Received {len(response.content):,} bytes")
    return payload


def load_payload(path: str | Path) -> Any:
    """Read and decode a JSON document from ``path``.

    Raises
    ------
    DataFetchError
        If the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    logger.info(f"Loading temperature data from {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise DataFetchError(f"Failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataFetchError(f"{path} is not valid JSON: {e}") from e


def fetch_dataset(
    url: str = DATA_URL,
    timeout: float = 30,
    source: str | Path | None = None,
) -> Dataset:
    """Fetch the document and validate it.

    Parameters
    ----------
    url : str
        Remote location, used when ``source`` is None.
    timeout : float, default=30
        HTTP timeout in seconds.
    source : str | Path, optional
        Local JSON file to read instead of the network.

    Returns
    -------
    Dataset
        Validated dataset.

    Raises
    ------
    DataFetchError
        If the document cannot be retrieved or decoded.
    DatasetError
        If the document does not describe a non-empty monthly variance dataset.
    """
    payload = load_payload(source) if source is not None else fetch_payload(url, timeout)
    dataset = parse_dataset(payload)

    min_year, max_year = dataset.year_range()
    logger.info(
        f"Loaded {len(dataset):,} monthly records ({min_year}-{max_year}), "
        f"base temperature {dataset.base_temperature}℃"
    )
    return dataset
