"""
Utility modules for REDCF.

This package contains reusable utility functions for date handling,
rate conversions, and error handling throughout the analysis.
"""

from redcf.utils.date_utils import (
    parse_date,
    format_date_for_storage,
    validate_date_range,
    add_periods,
)

from redcf.utils.rate_utils import (
    annual_pct_to_decimal,
    periods_per_year,
    annual_pct_to_periodic_decimal,
    annual_pct_to_monthly_decimal,
    periodic_decimal_to_effective_annual,
    convert_duration_years_to_periods,
    validate_rate_range,
    normalize_rate_input,
    MONTHS_PER_YEAR,
    PERCENTAGE_TO_DECIMAL,
)

from redcf.utils.error_utils import (
    DCFAnalysisError,
    InputValidationError,
    DegenerateCashFlowError,
    ConvergenceError,
    error_handler,
    logger,
)

__all__ = [
    # Date utilities
    "parse_date",
    "format_date_for_storage",
    "validate_date_range",
    "add_periods",
    # Rate utilities
    "annual_pct_to_decimal",
    "periods_per_year",
    "annual_pct_to_periodic_decimal",
    "annual_pct_to_monthly_decimal",
    "periodic_decimal_to_effective_annual",
    "convert_duration_years_to_periods",
    "validate_rate_range",
    "normalize_rate_input",
    "MONTHS_PER_YEAR",
    "PERCENTAGE_TO_DECIMAL",
    # Error handling
    "DCFAnalysisError",
    "InputValidationError",
    "DegenerateCashFlowError",
    "ConvergenceError",
    "error_handler",
    "logger",
]
