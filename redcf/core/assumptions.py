"""
Scalar assumptions of a rental house investment.

The defaults reproduce the worked example: a 300,000 house bought with a
250,000 mortgage at 3% over 30 years, renovated for 20,000 over six months,
then let for 20,000 a year growing 4% a year.
"""

import json
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from redcf.core.constants import DEFAULT_SUMMARY_YEARS, ECategory, EFrequency, EStatement
from redcf.utils.date_utils import add_periods
from redcf.utils.error_utils import error_handler


class Frequency(str, Enum):
    """Payment frequency enumeration."""

    DAILY = EFrequency.daily
    WEEKLY = EFrequency.weekly
    MONTHLY = EFrequency.monthly
    QUARTERLY = EFrequency.quarterly
    SEMI_ANNUAL = EFrequency.semi_annual
    ANNUAL = EFrequency.annual


class AssumptionsBase(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True,
        validate_default=True,
        frozen=True,
    )


class ExpenseAssumption(AssumptionsBase):
    """A recurring operating expense, quoted per payment."""

    name: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., ge=0, description="Payment per period at the start date")
    frequency: Frequency = Frequency.MONTHLY
    growth_rate_annual_pct: float = Field(default=0, ge=-50, le=100)
    start_offset_months: int = Field(default=0, ge=0, description="Months after purchase of the first payment")


def default_expenses() -> List[ExpenseAssumption]:
    return [
        ExpenseAssumption(name="Maintenance", amount=150, frequency=Frequency.MONTHLY,
                          growth_rate_annual_pct=2.0, start_offset_months=6),
        ExpenseAssumption(name="Insurance", amount=600, frequency=Frequency.SEMI_ANNUAL,
                          growth_rate_annual_pct=2.0),
        ExpenseAssumption(name="Property Tax", amount=3000, frequency=Frequency.ANNUAL,
                          growth_rate_annual_pct=2.0),
        ExpenseAssumption(name="Yard Care", amount=25, frequency=Frequency.WEEKLY,
                          start_offset_months=6),
    ]


class ProjectAssumptions(AssumptionsBase):
    """Everything the analysis needs; the analysis is a pure function of it."""

    name: str = Field(default="Rental House", max_length=255)

    # Acquisition
    purchase_date: date = date(2020, 1, 1)
    purchase_price: float = Field(default=300000, gt=0)

    # Financing
    loan_amount: float = Field(default=250000, ge=0, description="0 for an all-cash purchase")
    loan_rate_annual_pct: float = Field(default=3.0, ge=-50, le=100)
    loan_term_years: float = Field(default=30, gt=0)
    loan_frequency: Frequency = Frequency.MONTHLY

    # Renovation, paid in equal monthly installments from the purchase date
    renovation_cost: float = Field(default=20000, ge=0)
    renovation_months: int = Field(default=6, ge=0)

    # Leasing, starting when the renovation is complete
    annual_rent: float = Field(default=20000, ge=0)
    rent_growth_annual_pct: float = Field(default=4.0, ge=-50, le=100)
    rent_frequency: Frequency = Frequency.MONTHLY

    expenses: List[ExpenseAssumption] = Field(default_factory=default_expenses)

    # Valuation and tax
    appreciation_rate_annual_pct: float = Field(default=3.0, ge=-50, le=100)
    building_share_pct: float = Field(default=80, ge=0, le=100)
    depreciation_years: float = Field(default=27.5, gt=0)
    selling_cost_pct: float = Field(default=6.0, ge=0, le=100)

    # Reporting
    holding_period_years: int = Field(default=10, gt=0)
    summary_years: int = Field(default=DEFAULT_SUMMARY_YEARS, gt=0)

    @field_validator("expenses")
    @classmethod
    def expense_names_valid(cls, v: List[ExpenseAssumption]) -> List[ExpenseAssumption]:
        names = [e.name for e in v]
        if len(names) != len(set(names)):
            raise ValueError("Expense names must be unique")
        reserved = {name for attr, name in vars(ECategory).items() if attr.isupper()} | set(EStatement.TOTALS.values())
        clashes = sorted(set(names) & reserved)
        if clashes:
            raise ValueError(f"Expense names clash with reserved categories: {', '.join(clashes)}")
        return v

    @property
    def purchase_timestamp(self) -> pd.Timestamp:
        return pd.Timestamp(self.purchase_date)

    @property
    def rent_start_date(self) -> pd.Timestamp:
        return add_periods(self.purchase_timestamp, self.renovation_months, EFrequency.monthly)

    @property
    def down_payment(self) -> float:
        return self.purchase_price - self.loan_amount

    @classmethod
    @error_handler
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectAssumptions':
        """Validate a configuration dictionary."""
        return cls.model_validate(data)

    @classmethod
    @error_handler
    def from_json_file(cls, path: Union[str, Path]) -> 'ProjectAssumptions':
        """Load assumptions from a JSON file; missing keys take the defaults."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.model_validate(data)

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
