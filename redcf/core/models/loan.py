"""
Loan models for REDCF.

Classes:
    LoanFixed: Fixed-rate, level-payment amortizing mortgage
"""

from typing import Dict, Any, Union
from datetime import datetime, date
import numpy as np
import numpy_financial as npf
import pandas as pd

from redcf.core.constants import DATE, ECategory, EFrequency, FREQUENCY_STEPS
from redcf.core.models.series import single_event
from redcf.utils.date_utils import format_date_for_storage, parse_date
from redcf.utils.rate_utils import (
    annual_pct_to_periodic_decimal,
    convert_duration_years_to_periods,
    normalize_rate_input,
)
from redcf.utils.error_utils import error_handler, logger


class LoanFixed:
    """
    Fixed-rate loan with a constant payment per period.

    Each period's interest is the opening balance times the periodic rate, the
    remainder of the level payment reduces principal, and the balance reaches
    zero (up to rounding) with the final payment.

    Attributes:
        id: Unique loan identifier
        value: Loan principal
        interest_rate_annual_pct: Nominal annual interest rate as percentage
        term_years: Loan term in years
        frequency: Payment frequency
        start_date: Date the principal is drawn; first payment is one period later
        n_periods: Number of payments
    """

    @error_handler
    def __init__(
        self,
        id: str,
        value: float,
        interest_rate_annual_pct: float,
        term_years: float,
        start_date: Union[str, datetime, date, pd.Timestamp],
        frequency: str = EFrequency.monthly,
    ):
        if float(value) <= 0:
            raise ValueError(f"Loan principal must be positive, got {value}")
        if float(term_years) <= 0:
            raise ValueError(f"Loan term must be positive, got {term_years} years")

        self.id = id
        self.value = float(value)
        self.interest_rate_annual_pct = normalize_rate_input(interest_rate_annual_pct)
        self.term_years = float(term_years)
        self.frequency = frequency
        self.start_date = parse_date(start_date)

        self.n_periods = convert_duration_years_to_periods(self.term_years, frequency)
        if self.n_periods <= 0:
            raise ValueError(f"Loan term of {term_years} years has no {frequency} payments")

        self.periodic_rate = annual_pct_to_periodic_decimal(self.interest_rate_annual_pct, frequency)
        if self.periodic_rate <= -1:
            raise ValueError(f"Periodic rate {self.periodic_rate} must be greater than -100%")

        payment = self.get_payment()
        first_principal = payment - self.value * self.periodic_rate
        if payment <= 0 or first_principal <= 0:
            raise ValueError(
                f"Payment {payment:.2f} cannot amortize principal {self.value:.2f} "
                f"at {self.interest_rate_annual_pct}% over {self.n_periods} periods"
            )

    @error_handler
    def get_payment(self) -> float:
        """Level payment per period (positive)."""
        return float(npf.pmt(self.periodic_rate, self.n_periods, -self.value))

    @error_handler
    def get_interest_payments(self) -> np.ndarray:
        """Interest paid in each period."""
        periods = np.arange(1, self.n_periods + 1)
        return npf.ipmt(self.periodic_rate, periods, self.n_periods, -self.value)

    @error_handler
    def get_principal_payments(self) -> np.ndarray:
        """Principal repaid in each period."""
        periods = np.arange(1, self.n_periods + 1)
        return npf.ppmt(self.periodic_rate, periods, self.n_periods, -self.value)

    @error_handler
    def get_projection(self) -> pd.DataFrame:
        """
        Calculate the loan amortization schedule.

        Returns:
            DataFrame with columns: date, payment, interest_payment,
            principal_payment, balance (outstanding after the payment)
        """
        step = FREQUENCY_STEPS[self.frequency]
        date_list = [self.start_date + k * step for k in range(1, self.n_periods + 1)]

        principal_payments = self.get_principal_payments()
        df = pd.DataFrame(
            {
                DATE: pd.to_datetime(date_list),
                "payment": np.full(self.n_periods, self.get_payment()),
                "interest_payment": self.get_interest_payments(),
                "principal_payment": principal_payments,
            }
        )
        df["balance"] = self.value - np.cumsum(principal_payments)
        logger.debug(f"Loan {self.id}: {self.n_periods} payments, final balance {df['balance'].iloc[-1]:.6f}")
        return df

    @error_handler
    def get_cash_flow(self) -> pd.Series:
        """Mortgage payments as outflows."""
        df = self.get_projection()
        return pd.Series(-df["payment"].values, index=pd.DatetimeIndex(df[DATE], name=DATE),
                         name=ECategory.MORTGAGE_PAYMENT)

    @error_handler
    def get_interest(self) -> pd.Series:
        """Interest portion of the payments as expenses."""
        df = self.get_projection()
        return pd.Series(-df["interest_payment"].values, index=pd.DatetimeIndex(df[DATE], name=DATE),
                         name=ECategory.MORTGAGE_INTEREST)

    @error_handler
    def get_draw(self) -> pd.Series:
        """Principal received on the start date."""
        return single_event(ECategory.MORTGAGE_DRAW, self.start_date, self.value)

    @error_handler
    def get_balance(self) -> pd.Series:
        """Outstanding balance, starting with the full principal on the start date."""
        df = self.get_projection()
        dates = pd.DatetimeIndex([self.start_date]).append(pd.DatetimeIndex(df[DATE]))
        dates.name = DATE
        values = np.concatenate([[self.value], df["balance"].values])
        return pd.Series(values, index=dates, name=ECategory.LOAN_BALANCE)

    @error_handler
    def balance_on_date(self, on_date: Union[str, datetime, date, pd.Timestamp]) -> float:
        """
        Outstanding balance on a date.

        Returns the balance after the last payment on or before the date, the
        full principal before the start date, and zero after maturity.
        """
        target = parse_date(on_date)
        balance = self.get_balance()
        subset = balance[balance.index <= target]
        if subset.empty:
            return self.value
        return float(subset.iloc[-1])

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        """Serialize loan terms to a dictionary."""
        return {
            "id": self.id,
            "type": "fixed",
            "value": self.value,
            "interest_rate_annual_pct": self.interest_rate_annual_pct,
            "term_years": self.term_years,
            "frequency": self.frequency,
            "start_date": format_date_for_storage(self.start_date),
            "payment": self.get_payment(),
        }

    @classmethod
    @error_handler
    def from_dict(cls, data: Dict[str, Any]) -> 'LoanFixed':
        """Deserialize loan from dictionary."""
        return cls(
            id=data["id"],
            value=data["value"],
            interest_rate_annual_pct=data["interest_rate_annual_pct"],
            term_years=data["term_years"],
            start_date=data["start_date"],
            frequency=data.get("frequency", EFrequency.monthly),
        )
