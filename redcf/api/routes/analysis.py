"""
Analysis API endpoints.

Runs the rental house analysis and standalone IRR calculations. Analysis
errors propagate to the exception handlers registered in ``redcf.api.main``.
"""

import pandas as pd
from fastapi import APIRouter

from redcf.api.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AnnualTable,
    ErrorResponse,
    HoldingPeriodIRR,
    HoldingPeriodRequest,
    HoldingPeriodResponse,
    IRRRequest,
    IRRResponse,
)
from redcf.core.constants import DATE, EStatement
from redcf.core.engine.analysis import irr_by_holding_period, run_analysis
from redcf.core.engine.irr import irr, npv


router = APIRouter()

_error_responses = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    422: {"model": ErrorResponse, "description": "No rate of return could be determined"},
}


@router.post("/", response_model=AnalysisResponse, responses=_error_responses)
def analyze(request: AnalysisRequest):
    """Annual operating cash flow, total cash flow, taxable income and balance sheet, plus the IRR."""
    result = run_analysis(
        request.assumptions,
        years=request.years,
        holding_period_years=request.holding_period_years,
    )
    tables = {name: AnnualTable.from_frame(name, frame) for name, frame in result.tables().items()}
    return AnalysisResponse(
        name=request.assumptions.name,
        operating_cash_flow=tables[EStatement.OPERATING_CASH_FLOW],
        total_cash_flow=tables[EStatement.TOTAL_CASH_FLOW],
        taxable_income=tables[EStatement.TAXABLE_INCOME],
        balance_sheet=tables[EStatement.BALANCE_SHEET],
        irr=result.irr,
        holding_period_years=result.holding_period_years,
        terminal_value=result.terminal_value,
    )


@router.post("/irr", response_model=IRRResponse, responses=_error_responses)
def calculate_irr(request: IRRRequest):
    """IRR of arbitrary dated cash flows."""
    cash_flows = pd.Series(
        [cf.amount for cf in request.cash_flows],
        index=pd.DatetimeIndex([pd.Timestamp(cf.date) for cf in request.cash_flows], name=DATE),
    )
    rate = irr(cash_flows, periods_per_year=request.periods_per_year)
    periodic_rate = (1 + rate) ** (1 / request.periods_per_year) - 1
    return IRRResponse(irr=rate, npv_at_irr=npv(periodic_rate, cash_flows, request.periods_per_year))


@router.post("/holding-periods", response_model=HoldingPeriodResponse, responses=_error_responses)
def holding_period_sensitivity(request: HoldingPeriodRequest):
    """IRR for each requested holding period."""
    rates = irr_by_holding_period(request.assumptions, request.holding_periods)
    return HoldingPeriodResponse(
        results=[HoldingPeriodIRR(holding_period_years=int(y), irr=float(r)) for y, r in rates.items()]
    )
