"""Monthly temperature variance dataset.

The remote document has the shape::

    {
        "baseTemperature": 8.66,
        "monthlyVariance": [{"year": 1753, "month": 1, "variance": -1.366}, ...]
    }

It is validated once into an immutable :class:`Dataset` and read from there on.
"""

from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from temp_heatmap.core.exceptions import DatasetError


class MonthlyVarianceRecord(BaseModel):
    """Temperature variance for one calendar month of one year.

    Fields are strict: strings and booleans are rejected rather than coerced,
    and the variance must be finite.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    year: int = Field(strict=True)
    month: int = Field(ge=1, le=12, strict=True)
    variance: float = Field(strict=True)

    def temperature(self, base_temperature: float) -> float:
        """Absolute temperature in °C for the given baseline."""
        return self.variance + base_temperature


class Dataset(BaseModel):
    """Base temperature plus the sequence of monthly variance records."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, allow_inf_nan=False
    )

    base_temperature: float = Field(alias="baseTemperature", strict=True)
    monthly_variance: tuple[MonthlyVarianceRecord, ...] = Field(
        alias="monthlyVariance"
    )

    @field_validator("monthly_variance")
    @classmethod
    def _not_empty(
        cls, value: tuple[MonthlyVarianceRecord, ...]
    ) -> tuple[MonthlyVarianceRecord, ...]:
        if not value:
            raise ValueError("monthlyVariance must contain at least one record")
        return value

    def __len__(self) -> int:
        return len(self.monthly_variance)

    def variance_range(self) -> tuple[float, float]:
        """Smallest and largest variance across all records."""
        variances = [r.variance for r in self.monthly_variance]
        return min(variances), max(variances)

    def year_range(self) -> tuple[int, int]:
        """First and last year present in the records."""
        years = [r.year for r in self.monthly_variance]
        return min(years), max(years)

    def to_frame(self) -> pd.DataFrame:
        """Records as a DataFrame with an absolute ``temperature`` column."""
        df = pd.DataFrame(
            [r.model_dump() for r in self.monthly_variance],
            columns=["year", "month", "variance"],
        )
        df["temperature"] = df["variance"] + self.base_temperature
        return df


def parse_dataset(payload: Any) -> Dataset:
    """Validate a decoded JSON document into a :class:`Dataset`.

    Parameters
    ----------
    payload : Any
        Decoded JSON, expected to be a mapping with ``baseTemperature`` and
        ``monthlyVariance`` keys.

    Returns
    -------
    Dataset
        The validated, read-only dataset.

    Raises
    ------
    DatasetError
        If the document is not a mapping, misses keys, carries values of the
        wrong type, has a month outside 1-12 or holds no records.
    """
    if not isinstance(payload, dict):
        raise DatasetError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    try:
        return Dataset.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()[:5]
        )
        raise DatasetError(f"Invalid temperature dataset ({problems})") from e
