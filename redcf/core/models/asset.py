"""
Asset models for REDCF.

Classes:
    RealEstateAsset: Rental house with monthly appreciation and straight-line
        depreciation of its building basis
"""

from typing import Dict, Any, Union
from datetime import datetime, date
import pandas as pd

from redcf.core.constants import ECategory, EFrequency
from redcf.core.models.series import build_series, empty_series, periods_in_horizon
from redcf.utils.date_utils import format_date_for_storage, parse_date
from redcf.utils.rate_utils import annual_pct_to_monthly_decimal, normalize_rate_input, MONTHS_PER_YEAR
from redcf.utils.error_utils import error_handler


class RealEstateAsset:
    """
    Real estate property held for rent.

    The market value starts at the purchase price and compounds monthly at the
    nominal appreciation rate. Depreciation is straight-line and monthly on the
    building share of the price plus capitalized improvements, starting when
    the property is placed in service.

    Attributes:
        id: Unique identifier for the asset
        purchase_date: Closing date
        purchase_price: Price paid
        appreciation_rate_annual_pct: Nominal annual appreciation rate as percentage
        building_share_pct: Depreciable share of the purchase price as percentage
        depreciation_years: Recovery period of the building
        improvements: Capitalized improvements added to the depreciable basis
    """

    @error_handler
    def __init__(
        self,
        id: str,
        purchase_date: Union[str, datetime, date, pd.Timestamp],
        purchase_price: float,
        appreciation_rate_annual_pct: float = 0.0,
        building_share_pct: float = 100.0,
        depreciation_years: float = 27.5,
        improvements: float = 0.0,
    ):
        if float(purchase_price) <= 0:
            raise ValueError(f"Purchase price must be positive, got {purchase_price}")
        if not 0 <= float(building_share_pct) <= 100:
            raise ValueError(f"Building share must be between 0 and 100 percent, got {building_share_pct}")
        if float(depreciation_years) <= 0:
            raise ValueError(f"Depreciation period must be positive, got {depreciation_years}")
        if float(improvements) < 0:
            raise ValueError(f"Improvements cannot be negative, got {improvements}")

        self.id = id
        self.purchase_date = parse_date(purchase_date)
        self.purchase_price = float(purchase_price)
        self.appreciation_rate_annual_pct = normalize_rate_input(appreciation_rate_annual_pct)
        self.building_share_pct = float(building_share_pct)
        self.depreciation_years = float(depreciation_years)
        self.improvements = float(improvements)

    @property
    def depreciable_basis(self) -> float:
        return self.purchase_price * self.building_share_pct / 100.0 + self.improvements

    @error_handler
    def get_value(self, months_to_project: int) -> pd.Series:
        """
        Market value on the purchase date and each following month.

        Returns ``months_to_project + 1`` values; value k is
        ``price * (1 + rate/12) ** k``.
        """
        return build_series(
            ECategory.HOUSE_VALUE,
            self.purchase_date,
            self.purchase_price,
            EFrequency.monthly,
            periods=months_to_project + 1,
            growth_rate_annual_pct=self.appreciation_rate_annual_pct,
        )

    @error_handler
    def value_on_date(self, on_date: Union[str, datetime, date, pd.Timestamp]) -> float:
        """Market value compounded over the whole months elapsed since purchase."""
        target = parse_date(on_date)
        if target < self.purchase_date:
            raise ValueError(f"Date {target.date()} precedes purchase on {self.purchase_date.date()}")
        months = periods_in_horizon(self.purchase_date, target, EFrequency.monthly)
        monthly_rate_decimal = annual_pct_to_monthly_decimal(self.appreciation_rate_annual_pct)
        return self.purchase_price * (1 + monthly_rate_decimal) ** months

    @error_handler
    def get_depreciation(
        self,
        in_service_date: Union[str, datetime, date, pd.Timestamp],
        end_date: Union[str, datetime, date, pd.Timestamp],
    ) -> pd.Series:
        """
        Monthly straight-line depreciation as negative amounts.

        Runs from ``in_service_date`` for the recovery period, truncated to the
        months that complete on or before ``end_date``.
        """
        start = parse_date(in_service_date)
        end = parse_date(end_date)
        if end <= start or self.depreciable_basis == 0:
            return empty_series(ECategory.DEPRECIATION)

        total_months = int(round(self.depreciation_years * MONTHS_PER_YEAR))
        monthly_amount = self.depreciable_basis / total_months
        schedule = build_series(
            ECategory.DEPRECIATION,
            start,
            -monthly_amount,
            EFrequency.monthly,
            end_date=end,
        )
        return schedule.iloc[:total_months]

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        """Serialize asset to dictionary."""
        return {
            "id": self.id,
            "type": "real_estate",
            "purchase_date": format_date_for_storage(self.purchase_date),
            "purchase_price": self.purchase_price,
            "appreciation_rate_annual_pct": self.appreciation_rate_annual_pct,
            "building_share_pct": self.building_share_pct,
            "depreciation_years": self.depreciation_years,
            "improvements": self.improvements,
        }

    @classmethod
    @error_handler
    def from_dict(cls, data: Dict[str, Any]) -> 'RealEstateAsset':
        """Deserialize asset from dictionary."""
        return cls(
            id=data["id"],
            purchase_date=data["purchase_date"],
            purchase_price=data["purchase_price"],
            appreciation_rate_annual_pct=data.get("appreciation_rate_annual_pct", 0),
            building_share_pct=data.get("building_share_pct", 100),
            depreciation_years=data.get("depreciation_years", 27.5),
            improvements=data.get("improvements", 0),
        )
