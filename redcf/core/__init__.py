"""
Core modules for REDCF.

This package contains the core domain models, constants, and the cash flow
aggregation and IRR engines.
"""

from redcf.core.constants import (
    EFrequency,
    ECategory,
    EStatement,
    CASH_FLOW,
    DATE,
    YEAR,
    TOTAL,
    DAYS_PER_YEAR,
    DEFAULT_SUMMARY_YEARS,
)

__all__ = [
    "EFrequency",
    "ECategory",
    "EStatement",
    "CASH_FLOW",
    "DATE",
    "YEAR",
    "TOTAL",
    "DAYS_PER_YEAR",
    "DEFAULT_SUMMARY_YEARS",
]
