"""Exception types raised by the heat map pipeline."""


class HeatmapError(Exception):
    """Base class for pipeline failures that should be reported to the user."""


class DataFetchError(HeatmapError):
    """The dataset could not be retrieved or decoded."""


class DatasetError(HeatmapError, ValueError):
    """The retrieved document is not a usable monthly variance dataset."""


class ConfigError(HeatmapError, ValueError):
    """The configuration file cannot be read as a YAML mapping."""
