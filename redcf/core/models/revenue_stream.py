"""
Revenue and expense stream models for REDCF.

Classes:
    RevenueStream: Base class for recurring cash flow streams
    RentRevenueStream: Rental income quoted per year, paid per period, with growth
    ExpenseStream: Recurring operating expense (maintenance, insurance, tax, ...)
"""

from typing import Dict, Any, Optional, Union
from datetime import datetime, date
import pandas as pd

from redcf.core.constants import EFrequency
from redcf.core.models.series import build_series, empty_series
from redcf.utils.date_utils import format_date_for_storage, parse_date
from redcf.utils.rate_utils import normalize_rate_input, periods_per_year
from redcf.utils.error_utils import error_handler


class RevenueStream:
    """
    Base class for recurring cash flow streams.

    Attributes:
        id: Category name of the stream
        start_date: Date of the first payment
    """

    sign = 1.0

    def __init__(self, id: str, start_date: Union[str, datetime, date, pd.Timestamp]):
        self.id = id
        self.start_date = parse_date(start_date)

    def get_cash_flow(self, end_date: Union[str, datetime, date, pd.Timestamp]) -> pd.Series:
        """
        Get the cash flow series up to ``end_date``.

        The base stream has no payments and returns an empty series.
        Subclasses override this with their payment schedule.
        """
        return empty_series(self.id)

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "base",
            "start_date": format_date_for_storage(self.start_date),
        }


class RentRevenueStream(RevenueStream):
    """
    Rental income stream.

    Rent is quoted per year and collected once per period of ``period``. The
    payment compounds once per period at the nominal annual growth rate, so
    monthly rent of a 4% stream grows by ``(1 + 0.04/12)`` each month.

    Attributes:
        annual_amount: Rent per year at the start date
        period: Collection frequency
        growth_rate: Nominal annual growth rate as percentage
        end_date: Optional last day of the lease
    """

    def __init__(
        self,
        id: str,
        start_date: Union[str, datetime, date, pd.Timestamp],
        annual_amount: float,
        period: str = EFrequency.monthly,
        growth_rate: float = 0,
        end_date: Optional[Union[str, datetime, date, pd.Timestamp]] = None,
    ):
        super().__init__(id, start_date)
        self.annual_amount = float(annual_amount)
        self.period = period
        self.growth_rate = normalize_rate_input(growth_rate)
        self.end_date = parse_date(end_date) if end_date else None

    @error_handler
    def get_cash_flow(self, end_date: Union[str, datetime, date, pd.Timestamp]) -> pd.Series:
        """Calculate rental income with periodic payments and growth."""
        horizon = parse_date(end_date)
        if self.end_date is not None:
            horizon = min(horizon, self.end_date)
        if horizon <= self.start_date:
            return empty_series(self.id)

        return build_series(
            self.id,
            self.start_date,
            self.sign * self.annual_amount / periods_per_year(self.period),
            self.period,
            end_date=horizon,
            growth_rate_annual_pct=self.growth_rate,
        )

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "rent",
            "start_date": format_date_for_storage(self.start_date),
            "annual_amount": self.annual_amount,
            "period": self.period,
            "growth_rate": self.growth_rate,
            "end_date": format_date_for_storage(self.end_date) if self.end_date else None,
        }


class ExpenseStream(RevenueStream):
    """
    Recurring operating expense.

    Unlike rent, the amount is quoted per payment: a semi-annual insurance
    premium of 600 pays 600 twice a year. Amounts are reported as outflows.

    Attributes:
        amount: Payment per period at the start date (positive)
        period: Payment frequency
        growth_rate: Nominal annual growth rate as percentage
    """

    sign = -1.0

    @error_handler
    def __init__(
        self,
        id: str,
        start_date: Union[str, datetime, date, pd.Timestamp],
        amount: float,
        period: str = EFrequency.monthly,
        growth_rate: float = 0,
    ):
        super().__init__(id, start_date)
        if float(amount) < 0:
            raise ValueError(f"Expense amount for '{id}' must be quoted as a positive number, got {amount}")
        self.amount = float(amount)
        self.period = period
        self.growth_rate = normalize_rate_input(growth_rate)

    @error_handler
    def get_cash_flow(self, end_date: Union[str, datetime, date, pd.Timestamp]) -> pd.Series:
        """Calculate the expense payments that fall in complete periods before ``end_date``."""
        horizon = parse_date(end_date)
        if horizon <= self.start_date:
            return empty_series(self.id)

        return build_series(
            self.id,
            self.start_date,
            self.sign * self.amount,
            self.period,
            end_date=horizon,
            growth_rate_annual_pct=self.growth_rate,
        )

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "expense",
            "start_date": format_date_for_storage(self.start_date),
            "amount": self.amount,
            "period": self.period,
            "growth_rate": self.growth_rate,
        }
