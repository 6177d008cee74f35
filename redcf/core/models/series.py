"""
Cash flow series builders for REDCF.

A cash flow series is a pandas Series of signed amounts indexed by a sorted
DatetimeIndex named ``date``; the series name is its category. Negative
amounts are outflows, positive amounts are inflows.

Functions:
    build_series: Periodic series with optional compounding growth
    series_from_events: Series from irregular (date, amount) events
    single_event: One-entry series
    periods_in_horizon: Number of complete periods between two dates
"""

from typing import Iterable, Optional, Tuple, Union
from datetime import datetime, date
import numpy as np
import pandas as pd

from redcf.core.constants import DATE, FREQUENCY_STEPS
from redcf.utils.date_utils import parse_date, validate_date_range
from redcf.utils.rate_utils import annual_pct_to_periodic_decimal
from redcf.utils.error_utils import error_handler

DateLike = Union[str, datetime, date, pd.Timestamp]


def empty_series(name: str) -> pd.Series:
    """Empty float series with a date index."""
    return pd.Series([], index=pd.DatetimeIndex([], name=DATE), dtype=float, name=name)


@error_handler
def periods_in_horizon(start_date: DateLike, end_date: DateLike, frequency: str) -> int:
    """
    Count the complete periods between start_date and end_date.

    A period starting on ``start + k * step`` is complete when its end,
    ``start + (k + 1) * step``, is on or before ``end_date``. A horizon that
    is not a multiple of the step is truncated to the last complete period.

    Examples:
        >>> periods_in_horizon("2024-01-01", "2025-01-01", "monthly")
        12
        >>> periods_in_horizon("2024-01-01", "2024-11-01", "semi_annual")
        1
    """
    if frequency not in FREQUENCY_STEPS:
        raise ValueError(f"Unknown frequency '{frequency}'. Expected one of: {', '.join(FREQUENCY_STEPS)}")
    start = parse_date(start_date)
    end = parse_date(end_date)
    validate_date_range(start, end)

    step = FREQUENCY_STEPS[frequency]
    n_periods = 0
    while start + (n_periods + 1) * step <= end:
        n_periods += 1
    return n_periods


@error_handler
def build_series(
    name: str,
    start_date: DateLike,
    amount: float,
    frequency: str,
    periods: Optional[int] = None,
    end_date: Optional[DateLike] = None,
    growth_rate_annual_pct: float = 0.0,
) -> pd.Series:
    """
    Build a periodic cash flow series.

    Exactly one of ``periods`` and ``end_date`` must be given. Entries are
    dated ``start + k * step`` for ``k = 0..n-1``. With a growth rate the
    amount compounds once per period at the nominal annual rate divided by
    the periods per year, so a monthly series grows by ``(1 + g/12) ** k``.

    Args:
        name: Category name of the series
        start_date: Date of the first payment
        amount: Amount of the first payment (signed)
        frequency: One of the EFrequency values
        periods: Number of payments
        end_date: Horizon end; only complete periods are kept
        growth_rate_annual_pct: Annual nominal growth rate as percentage

    Returns:
        pd.Series of amounts indexed by date

    Raises:
        InputValidationError: On negative counts, unknown frequencies or bad dates
    """
    if frequency not in FREQUENCY_STEPS:
        raise ValueError(f"Unknown frequency '{frequency}'. Expected one of: {', '.join(FREQUENCY_STEPS)}")
    if (periods is None) == (end_date is None):
        raise ValueError("Exactly one of 'periods' and 'end_date' must be provided")

    start = parse_date(start_date)
    if periods is None:
        periods = periods_in_horizon(start, end_date, frequency)
    if int(periods) != periods or periods < 0:
        raise ValueError(f"Number of periods must be a non-negative integer, got {periods}")
    periods = int(periods)

    if periods == 0:
        return empty_series(name)

    step = FREQUENCY_STEPS[frequency]
    date_list = [start + k * step for k in range(periods)]

    growth_rate_decimal = annual_pct_to_periodic_decimal(growth_rate_annual_pct, frequency)
    amounts = float(amount) * (1 + growth_rate_decimal) ** np.arange(periods)

    return pd.Series(amounts, index=pd.DatetimeIndex(date_list, name=DATE), name=name)


@error_handler
def series_from_events(name: str, events: Iterable[Tuple[DateLike, float]]) -> pd.Series:
    """
    Build a series from irregular (date, amount) events.

    Events on the same date are summed and the result is sorted by date.
    """
    events = list(events)
    if not events:
        return empty_series(name)

    dates = [parse_date(d) for d, _ in events]
    amounts = [float(a) for _, a in events]
    series = pd.Series(amounts, index=pd.DatetimeIndex(dates, name=DATE), name=name)
    series = series.groupby(level=0).sum().sort_index()
    series.index.name = DATE
    series.name = name
    return series


@error_handler
def single_event(name: str, event_date: DateLike, amount: float) -> pd.Series:
    """One-off cash flow, e.g. the purchase price on the closing date."""
    return series_from_events(name, [(event_date, amount)])
