"""Label and tooltip formatting.

Month numbers in the dataset are 1-based; ``MONTH_NAMES`` is indexed from 0,
so month ``m`` is ``MONTH_NAMES[m - 1]`` everywhere a label is produced.
"""

from html import escape

from temp_heatmap.core.dataset import MonthlyVarianceRecord


MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DEGREE_SIGN = "℃"


def month_name(month: int) -> str:
    """Name of a 1-based month number."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    return MONTH_NAMES[month - 1]


def format_celsius(value: float) -> str:
    return f"{value:.2f}{DEGREE_SIGN}"


def tooltip_lines(
    record: MonthlyVarianceRecord, base_temperature: float
) -> tuple[str, str, str]:
    """Tooltip text for one cell: date, absolute temperature, variance.

    Examples
    --------
    >>> rec = MonthlyVarianceRecord(year=1900, month=1, variance=-0.5)
    >>> tooltip_lines(rec, 8.66)
    ('1900 - January', '8.16℃', '-0.50℃')
    """
    return (
        f"{record.year} - {month_name(record.month)}",
        format_celsius(record.temperature(base_temperature)),
        format_celsius(record.variance),
    )


def generate_tooltip_html(
    record: MonthlyVarianceRecord, base_temperature: float
) -> str:
    """Tooltip lines wrapped in one ``<div>`` each."""
    return "".join(
        f"<div>{escape(line)}</div>"
        for line in tooltip_lines(record, base_temperature)
    )


def format_legend_tick(value: float) -> str:
    """Legend axis label, one decimal place."""
    return f"{value:.1f}"


def format_month_tick(value: float) -> str:
    """Month name for integral ticks in 1..12, empty string otherwise."""
    if float(value).is_integer() and 1 <= value <= 12:
        return MONTH_NAMES[int(value) - 1]
    return ""
