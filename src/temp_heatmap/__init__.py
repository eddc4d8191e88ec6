"""Global temperature variance heat map.

This package fetches the monthly global land-surface temperature variance
dataset, lays it out as a year-by-month heat map and renders it to an
interactive HTML page, a standalone SVG or a static PNG.
"""

__version__ = "0.1.0"
