"""Exchange-rate response models.

The rate API returns ``{amount, base, date, rates: {CODE: rate}}`` for latest
and historical lookups, and ``{amount, base, start_date, end_date,
rates: {date: {CODE: rate}}}`` for a date range. Unknown payload fields are
ignored so that additive API changes do not break parsing.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _upper_code(value: str) -> str:
    code = value.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"Invalid currency code: {value!r}")
    return code


class _RateSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: float = Field(..., gt=0)
    base: str
    date: dt.date
    rates: dict[str, float]

    @field_validator("base")
    @classmethod
    def _check_base(cls, v: str) -> str:
        return _upper_code(v)

    def rate_for(self, code: str) -> float | None:
        """Quoted value of `amount` units of base in `code`, if present."""
        return self.rates.get(code.upper())


class LatestRates(_RateSnapshot):
    """Most recent published rates for one base currency."""


class HistoricalRates(_RateSnapshot):
    """Rates published on a given past date."""


class RateTrend(BaseModel):
    """Daily rates for a base currency over a closed date range."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: float = Field(..., gt=0)
    base: str
    start_date: dt.date
    end_date: dt.date
    rates: dict[dt.date, dict[str, float]]

    @field_validator("base")
    @classmethod
    def _check_base(cls, v: str) -> str:
        return _upper_code(v)

    def series(self, code: str) -> list[tuple[dt.date, float]]:
        """Chronological (date, rate) points for one target currency."""
        code = code.upper()
        return [
            (day, day_rates[code])
            for day, day_rates in sorted(self.rates.items())
            if code in day_rates
        ]


class ConversionQuote(BaseModel):
    """Result of converting an amount between two currencies."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    amount: float
    base: str
    target: str
    rate: float = Field(..., description="Units of target per one unit of base")
    converted: float
    date: dt.date | None = None
