"""
REDCF Core Models Package.

This package contains the building blocks of the rental house model: cash flow
series builders, the amortizing loan, the property and its income and expense
streams.

Modules:
    series: Cash flow series builders (build_series, series_from_events, ...)
    loan: Fixed-rate amortizing loan (LoanFixed)
    asset: Property value and depreciation (RealEstateAsset)
    revenue_stream: Rent and recurring expenses (RentRevenueStream, ExpenseStream)
"""

from redcf.core.models.series import (
    build_series,
    series_from_events,
    single_event,
    periods_in_horizon,
    empty_series,
)

from redcf.core.models.loan import LoanFixed

from redcf.core.models.asset import RealEstateAsset

from redcf.core.models.revenue_stream import (
    RevenueStream,
    RentRevenueStream,
    ExpenseStream,
)

__all__ = [
    # Series builders
    "build_series",
    "series_from_events",
    "single_event",
    "periods_in_horizon",
    "empty_series",
    # Loan classes
    "LoanFixed",
    # Asset classes
    "RealEstateAsset",
    # Revenue stream classes
    "RevenueStream",
    "RentRevenueStream",
    "ExpenseStream",
]
