"""
Rate conversion utilities for cash flow calculations.

This module provides standardized functions for converting between the rate
formats used throughout the analysis.

Conventions:
- All user inputs are annual nominal rates as percentages (e.g., 3.0 = 3%)
- All calculations use decimal rates (e.g., 0.03 = 3%)
- Periodic rates are derived from nominal annual rates: annual_decimal / periods_per_year
- Variable naming: *_rate_annual_pct, *_rate_periodic_decimal, etc.
"""

from typing import Union

from redcf.core.constants import PERIODS_PER_YEAR
from redcf.utils.error_utils import error_handler

MONTHS_PER_YEAR = 12
PERCENTAGE_TO_DECIMAL = 100.0


@error_handler
def annual_pct_to_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert annual percentage rate to decimal format.

    Examples:
        >>> annual_pct_to_decimal(5.0)
        0.05
        >>> annual_pct_to_decimal("7.5")
        0.075
    """
    return float(rate_pct) / PERCENTAGE_TO_DECIMAL


@error_handler
def periods_per_year(frequency: str) -> int:
    """Number of payment periods in a year for a frequency name."""
    if frequency not in PERIODS_PER_YEAR:
        raise ValueError(f"Unknown frequency '{frequency}'. Expected one of: {', '.join(PERIODS_PER_YEAR)}")
    return PERIODS_PER_YEAR[frequency]


@error_handler
def annual_pct_to_periodic_decimal(rate_pct: Union[float, str], frequency: str) -> float:
    """
    Convert a nominal annual percentage rate to the decimal rate per period.

    Examples:
        >>> round(annual_pct_to_periodic_decimal(6.0, "monthly"), 6)
        0.005
        >>> annual_pct_to_periodic_decimal(4.0, "semi_annual")
        0.02
    """
    return annual_pct_to_decimal(rate_pct) / periods_per_year(frequency)


@error_handler
def annual_pct_to_monthly_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert annual percentage rate directly to monthly decimal rate.

    Examples:
        >>> round(annual_pct_to_monthly_decimal(3.0), 6)
        0.0025
    """
    return annual_pct_to_periodic_decimal(rate_pct, "monthly")


@error_handler
def periodic_decimal_to_effective_annual(rate_periodic_decimal: float, n_periods_per_year: int) -> float:
    """
    Annualize a periodic rate by compounding it over a year.

    Examples:
        >>> periodic_decimal_to_effective_annual(0.1, 1)
        0.1
        >>> round(periodic_decimal_to_effective_annual(0.01, 12), 6)
        0.126825
    """
    return (1.0 + rate_periodic_decimal) ** n_periods_per_year - 1.0


@error_handler
def convert_duration_years_to_periods(years: Union[float, int], frequency: str) -> int:
    """
    Convert a duration in years to a whole number of payment periods.

    Raises:
        InputValidationError: If the duration is not a whole number of periods

    Examples:
        >>> convert_duration_years_to_periods(30, "monthly")
        360
        >>> convert_duration_years_to_periods(2.5, "semi_annual")
        5
    """
    exact = float(years) * periods_per_year(frequency)
    n_periods = round(exact)
    if abs(exact - n_periods) > 1e-9:
        raise ValueError(f"Duration of {years} years is not a whole number of {frequency} periods")
    return n_periods


@error_handler
def validate_rate_range(rate_pct: float, min_pct: float = -50.0, max_pct: float = 100.0) -> bool:
    """
    Validate that a percentage rate is within reasonable bounds.

    Examples:
        >>> validate_rate_range(5.0)
        True
        >>> validate_rate_range(150.0)
        False
    """
    return min_pct <= rate_pct <= max_pct


@error_handler
def normalize_rate_input(rate_input: Union[str, float, int]) -> float:
    """
    Normalize rate input from various formats to a standard float percentage.

    Handles string inputs, removes percentage signs, and validates ranges.

    Raises:
        InputValidationError: If rate cannot be converted or is out of range

    Examples:
        >>> normalize_rate_input("5.5%")
        5.5
        >>> normalize_rate_input(7.25)
        7.25
    """
    if isinstance(rate_input, str):
        cleaned = rate_input.strip().rstrip('%')
        try:
            rate_float = float(cleaned)
        except ValueError:
            raise ValueError(f"Cannot convert rate input '{rate_input}' to number")
    else:
        rate_float = float(rate_input)

    if not validate_rate_range(rate_float):
        raise ValueError(f"Rate {rate_float}% is outside valid range (-50% to 100%)")

    return rate_float

