"""
REDCF Core Engine Package.

This package contains the calculation engines that turn category series into
annual summaries and rates of return.

Modules:
    aggregation: Series combination and annual flow/stock aggregation
    irr: Net present value and internal rate of return of dated cash flows
    analysis: Rental house analysis from scalar assumptions
"""

from redcf.core.engine.aggregation import combine_series, aggregate_flow, aggregate_stock
from redcf.core.engine.irr import npv, irr
from redcf.core.engine.analysis import (
    AnalysisResult,
    build_cash_flows,
    build_statements,
    terminal_value,
    holding_period_irr,
    irr_by_holding_period,
    run_analysis,
)

__all__ = [
    "combine_series",
    "aggregate_flow",
    "aggregate_stock",
    "npv",
    "irr",
    "AnalysisResult",
    "build_cash_flows",
    "build_statements",
    "terminal_value",
    "holding_period_irr",
    "irr_by_holding_period",
    "run_analysis",
]
