"""Configuration loading for the heat map pipeline.

Configuration lives in a YAML file whose values are merged over the built-in
defaults below, so a config file only needs the keys it changes. Nested
mappings are merged key by key; any other value in the file replaces the
default outright.

Functions
---------
load_config
    Load a YAML file (optional) and merge it over ``DEFAULT_CONFIG``.
to_namespace
    Convert a nested config mapping into dotted-access namespaces.
"""

import copy
from argparse import Namespace
from pathlib import Path
from typing import Any

import yaml

from temp_heatmap.core.exceptions import ConfigError


DATA_URL = (
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/"
    "master/global-temperature.json"
)

DEFAULT_CONFIG: dict[str, Any] = {
    "title": "Monthly Global Land-Surface Temperature",
    "output_dir": "output",
    "png_dpi": 150,
    "data": {
        "url": DATA_URL,
        "timeout": 30,
    },
    "canvas": {
        "width": 1500,
        "height": 625,
        "padding": 100,
    },
    "legend": {
        "buckets": 9,
        "height": 80,
        "padding": 10,
        "colormap": "inferno",
    },
    "x_axis": {
        "ticks": 20,
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, falling back to defaults for missing keys.

    Parameters
    ----------
    config_path : str | Path, optional
        YAML file to read. When None, the defaults are returned as-is.

    Returns
    -------
    dict[str, Any]
        Merged configuration. The defaults are never mutated.

    Raises
    ------
    ConfigError
        If ``config_path`` cannot be read, is not valid YAML or does not
        hold a mapping.
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {config_path} is not valid YAML: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    return _deep_merge(DEFAULT_CONFIG, loaded)


def to_namespace(obj: Any) -> Any:
    """Recursively convert dicts to ``Namespace`` for dotted access."""
    if isinstance(obj, dict):
        ns = Namespace()
        for key, value in obj.items():
            setattr(ns, key, to_namespace(value))
        return ns
    return obj
