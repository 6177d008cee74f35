"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Input validation for API requests
- Response serialization
- OpenAPI documentation generation
"""

import datetime as dt
from typing import Optional, Dict, List

import pandas as pd
from pydantic import BaseModel, Field, ConfigDict

from redcf.core.assumptions import ProjectAssumptions


# ======================
# Base Schemas
# ======================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True,
    )


# ======================
# Analysis Schemas
# ======================


class AnalysisRequest(BaseSchema):
    """Assumptions plus reporting options for a full analysis."""

    assumptions: ProjectAssumptions = Field(default_factory=ProjectAssumptions)
    years: Optional[int] = Field(None, gt=0, le=100, description="Calendar-year rows per table")
    holding_period_years: Optional[int] = Field(None, gt=0, le=100, description="Holding period of the IRR")


class AnnualRow(BaseSchema):
    """One calendar year of a summary table."""

    year: int
    values: Dict[str, float]


class AnnualTable(BaseSchema):
    """Annual summary table with its total column."""

    name: str
    columns: List[str]
    total_column: str
    rows: List[AnnualRow]

    @classmethod
    def from_frame(cls, name: str, frame: pd.DataFrame) -> "AnnualTable":
        rows = [
            AnnualRow(year=int(year), values={str(k): float(v) for k, v in row.items()})
            for year, row in frame.iterrows()
        ]
        return cls(name=name, columns=[str(c) for c in frame.columns], total_column=str(frame.columns[-1]), rows=rows)


class AnalysisResponse(BaseSchema):
    """Four annual tables and the IRR of the holding period."""

    name: str
    operating_cash_flow: AnnualTable
    total_cash_flow: AnnualTable
    taxable_income: AnnualTable
    balance_sheet: AnnualTable
    irr: float = Field(..., description="Effective annual IRR as a decimal")
    holding_period_years: int
    terminal_value: float


class CashFlowPoint(BaseSchema):
    """Dated, signed cash flow."""

    date: dt.date
    amount: float


class IRRRequest(BaseSchema):
    """Dated cash flows for a standalone IRR calculation."""

    cash_flows: List[CashFlowPoint] = Field(..., min_length=1)
    periods_per_year: int = Field(default=1, gt=0, le=365)


class IRRResponse(BaseSchema):
    irr: float
    npv_at_irr: float


class HoldingPeriodRequest(BaseSchema):
    """IRR sensitivity to the holding period."""

    assumptions: ProjectAssumptions = Field(default_factory=ProjectAssumptions)
    holding_periods: List[int] = Field(..., min_length=1, max_length=50)


class HoldingPeriodIRR(BaseSchema):
    holding_period_years: int
    irr: float


class HoldingPeriodResponse(BaseSchema):
    results: List[HoldingPeriodIRR]


# ======================
# Error Schemas
# ======================


class ErrorResponse(BaseSchema):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    type: Optional[str] = Field(None, description="Error type/class")
