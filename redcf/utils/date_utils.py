"""
Central date utilities for REDCF.

This module provides unified date handling for the cash flow models. Dates are
accepted as ISO strings (YYYY-MM-DD), day-first strings (DD/MM/YYYY), Python
dates or pandas Timestamps, and are always returned as pandas Timestamps.

Key Features:
- Universal date parsing with format detection
- Optional month-start normalization
- Period stepping by payment frequency
"""

from datetime import datetime, date
import pandas as pd
from typing import Union

from redcf.core.constants import FREQUENCY_STEPS
from redcf.utils.error_utils import error_handler


@error_handler
def parse_date(
    date_input: Union[str, datetime, date, pd.Timestamp],
    normalize_to_month_start: bool = False,
    default_format: str = "iso",
) -> pd.Timestamp:
    """
    Universal date parser.

    Accepts multiple date formats and normalizes to a pandas Timestamp without
    a time component.

    Args:
        date_input: Date in various formats (str, datetime, date, pd.Timestamp)
        normalize_to_month_start: If True, sets day to 1
        default_format: Default format assumption for ambiguous strings ("iso" or "day_first")

    Returns:
        pd.Timestamp: Parsed timestamp

    Raises:
        InputValidationError: If the input is missing, of an unsupported type
            or cannot be parsed

    Examples:
        >>> parse_date("2024-01-15")
        Timestamp('2024-01-15 00:00:00')

        >>> parse_date("15/01/2024", normalize_to_month_start=True)
        Timestamp('2024-01-01 00:00:00')
    """
    if date_input is None:
        raise ValueError("Date input cannot be None")

    if isinstance(date_input, pd.Timestamp):
        result = date_input

    elif isinstance(date_input, (datetime, date)):
        result = pd.Timestamp(date_input)

    elif isinstance(date_input, str):
        result = _parse_date_string(date_input.strip(), default_format)

    else:
        raise TypeError(f"Unsupported date input type: {type(date_input)}")

    if pd.isna(result):
        raise ValueError("Date input cannot be NaT")

    result = result.normalize()
    if normalize_to_month_start:
        result = result.replace(day=1)

    return result


def _parse_date_string(date_str: str, default_format: str = "iso") -> pd.Timestamp:
    """
    Parse date string with automatic format detection.

    Supports:
    - ISO format: YYYY-MM-DD, YYYY/MM/DD
    - Day-first format: DD/MM/YYYY, DD-MM-YYYY
    - US format: MM/DD/YYYY

    Raises:
        ValueError: If no format can successfully parse the string
    """
    if not date_str:
        raise ValueError("Date string cannot be empty")

    format_patterns = [
        "%Y-%m-%d",
        "%Y/%m/%d",
        "%d/%m/%Y",
        "%d-%m-%Y",
        "%m/%d/%Y",
    ]

    for format_str in format_patterns:
        try:
            return pd.Timestamp(datetime.strptime(date_str, format_str))
        except ValueError:
            continue

    # Try pandas intelligent parsing as fallback
    try:
        return pd.to_datetime(date_str, dayfirst=(default_format == "day_first"))
    except (ValueError, TypeError):
        pass

    raise ValueError(
        f"Unable to parse date string '{date_str}'. " f"Supported formats include: YYYY-MM-DD, DD/MM/YYYY, MM/DD/YYYY"
    )


@error_handler
def format_date_for_storage(date_input: Union[str, datetime, date, pd.Timestamp]) -> str:
    """Format date as an ISO string (YYYY-MM-DD) for JSON output."""
    return parse_date(date_input).strftime("%Y-%m-%d")


@error_handler
def validate_date_range(start_date, end_date, allow_equal=True) -> bool:
    """
    Validate that start_date is before or equal to end_date.

    Raises:
        InputValidationError: If date range is invalid
    """
    start = parse_date(start_date)
    end = parse_date(end_date)

    if allow_equal:
        is_valid = start <= end
    else:
        is_valid = start < end

    if not is_valid:
        raise ValueError(f"Invalid date range: start ({start}) must be before end ({end})")

    return True


@error_handler
def add_periods(start_date: Union[str, datetime, date, pd.Timestamp], periods: int, frequency: str) -> pd.Timestamp:
    """
    Step a date forward by a number of payment periods.

    Month-based frequencies keep the day of month where possible (Jan 31 plus
    one month is Feb 28/29), following ``relativedelta`` semantics.
    """
    if frequency not in FREQUENCY_STEPS:
        raise ValueError(f"Unknown frequency '{frequency}'. Expected one of: {', '.join(FREQUENCY_STEPS)}")
    return parse_date(start_date) + periods * FREQUENCY_STEPS[frequency]

