"""
Series combination and annual aggregation.

Category series are combined on the sorted union of their dates, with missing
entries treated as zero, and the resulting table is collapsed to one row per
calendar year. Flow quantities (rent, payments) are summed within a year;
stock quantities (balances, values) take the last observation of the year.
The two policies are separate functions so a balance can never be summed by
accident.
"""

from typing import Iterable, Mapping, Optional, Union

import pandas as pd

from redcf.core.constants import DATE, TOTAL, YEAR
from redcf.utils.error_utils import error_handler, logger

SeriesCollection = Union[Mapping[str, pd.Series], Iterable[pd.Series]]


def _named_series(series: SeriesCollection) -> list:
    if isinstance(series, Mapping):
        items = list(series.items())
    else:
        items = []
        for s in series:
            if not isinstance(s, pd.Series):
                raise TypeError(f"Expected pandas Series, got {type(s).__name__}")
            if s.name is None:
                raise ValueError("Series passed without a mapping must be named")
            items.append((s.name, s))

    names = [name for name, _ in items]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate categories: {', '.join(map(str, duplicates))}")
    return items


@error_handler
def combine_series(series: SeriesCollection, total_name: str = TOTAL) -> pd.DataFrame:
    """
    Combine named category series into one table.

    Args:
        series: Mapping of category name to series, or named series
        total_name: Name of the appended row-wise total column

    Returns:
        DataFrame indexed by the sorted union of all dates, one column per
        category (absent entries are zero) plus the total column
    """
    items = _named_series(series)
    if total_name in [name for name, _ in items]:
        raise ValueError(f"Category name '{total_name}' collides with the total column")

    columns = {}
    for name, s in items:
        s = s.astype(float)
        s.index = pd.DatetimeIndex(s.index)
        # Events sharing a date within one category add up
        columns[name] = s.groupby(level=0).sum()

    index = pd.DatetimeIndex([], name=DATE)
    for s in columns.values():
        index = index.union(s.index)
    index = index.sort_values()
    index.name = DATE

    table = pd.DataFrame(
        {name: s.reindex(index, fill_value=0.0) for name, s in columns.items()},
        index=index,
        dtype=float,
    )
    table[total_name] = table.sum(axis=1) if len(columns) else 0.0
    logger.debug(f"Combined {len(columns)} categories over {len(index)} dates")
    return table


def _year_range(table: pd.DataFrame) -> pd.Index:
    years = table.index.year
    return pd.Index(range(years.min(), years.max() + 1), name=YEAR)


def _truncate(annual: pd.DataFrame, max_years: Optional[int]) -> pd.DataFrame:
    if max_years is None:
        return annual
    if int(max_years) != max_years or max_years < 0:
        raise ValueError(f"max_years must be a non-negative integer, got {max_years}")
    return annual.iloc[: int(max_years)]


@error_handler
def aggregate_flow(table: pd.DataFrame, max_years: Optional[int] = None) -> pd.DataFrame:
    """
    Collapse a dated table of flow quantities to calendar years by summation.

    Every calendar year spanned by the input gets a row; years without any
    entries are zero. Column identity and order are preserved.
    """
    if table.empty:
        return pd.DataFrame(columns=table.columns, index=pd.Index([], name=YEAR), dtype=float)

    annual = table.groupby(table.index.year).sum()
    annual.index = annual.index.astype(int)
    annual = annual.reindex(_year_range(table), fill_value=0.0)
    annual.index.name = YEAR
    return _truncate(annual, max_years)


@error_handler
def aggregate_stock(table: pd.DataFrame, max_years: Optional[int] = None) -> pd.DataFrame:
    """
    Collapse a dated table of stock quantities to calendar years.

    Each year takes the row with the latest date within that year. Years
    spanned without entries carry the previous year-end values forward.
    """
    if table.empty:
        return pd.DataFrame(columns=table.columns, index=pd.Index([], name=YEAR), dtype=float)

    ordered = table.sort_index()
    annual = ordered.groupby(ordered.index.year).tail(1)
    annual.index = pd.Index(annual.index.year.astype(int), name=YEAR)
    annual = annual.reindex(_year_range(table)).ffill()
    annual.index.name = YEAR
    return _truncate(annual, max_years)
