"""
Rental house cash flow analysis.

Turns a set of scalar assumptions into the category cash flow series of the
investment, the four annual summary tables (operating cash flow, total cash
flow, taxable income, balance sheet) and the IRR over a holding period.

Functions:
    build_cash_flows: Category series over a horizon
    build_statements: Dated (not yet annualized) tables
    terminal_value: Net sale proceeds after paying off the loan
    holding_period_irr: IRR of a purchase held for a number of years
    irr_by_holding_period: IRR for several holding periods
    run_analysis: Annual tables and IRR in one call
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import pandas as pd

from redcf.core.assumptions import ProjectAssumptions
from redcf.core.constants import DATE, ECategory, EFrequency, EStatement
from redcf.core.engine.aggregation import aggregate_flow, aggregate_stock, combine_series
from redcf.core.engine.irr import irr
from redcf.core.models.asset import RealEstateAsset
from redcf.core.models.loan import LoanFixed
from redcf.core.models.revenue_stream import ExpenseStream, RentRevenueStream
from redcf.core.models.series import build_series, empty_series, single_event
from redcf.utils.date_utils import add_periods
from redcf.utils.error_utils import error_handler, logger

AssumptionsInput = Union[ProjectAssumptions, Mapping[str, Any]]


@dataclass(frozen=True)
class AnalysisResult:
    """Annual summary tables and IRR of one analysis run."""

    operating_cash_flow: pd.DataFrame
    total_cash_flow: pd.DataFrame
    taxable_income: pd.DataFrame
    balance_sheet: pd.DataFrame
    irr: float
    holding_period_years: int
    terminal_value: float
    assumptions: ProjectAssumptions = field(repr=False)

    def tables(self) -> Dict[str, pd.DataFrame]:
        return {
            EStatement.OPERATING_CASH_FLOW: self.operating_cash_flow,
            EStatement.TOTAL_CASH_FLOW: self.total_cash_flow,
            EStatement.TAXABLE_INCOME: self.taxable_income,
            EStatement.BALANCE_SHEET: self.balance_sheet,
        }


def _coerce_assumptions(assumptions: AssumptionsInput) -> ProjectAssumptions:
    if isinstance(assumptions, ProjectAssumptions):
        return assumptions
    return ProjectAssumptions.from_dict(dict(assumptions))


def _positive_years(value: Any, label: str) -> int:
    if isinstance(value, bool) or int(value) != value or value <= 0:
        raise ValueError(f"{label} must be a positive whole number of years, got {value}")
    return int(value)


def _build_loan(a: ProjectAssumptions) -> Optional[LoanFixed]:
    if a.loan_amount == 0:
        return None
    return LoanFixed(
        id="mortgage",
        value=a.loan_amount,
        interest_rate_annual_pct=a.loan_rate_annual_pct,
        term_years=a.loan_term_years,
        start_date=a.purchase_timestamp,
        frequency=a.loan_frequency,
    )


def _build_asset(a: ProjectAssumptions) -> RealEstateAsset:
    return RealEstateAsset(
        id=a.name,
        purchase_date=a.purchase_timestamp,
        purchase_price=a.purchase_price,
        appreciation_rate_annual_pct=a.appreciation_rate_annual_pct,
        building_share_pct=a.building_share_pct,
        depreciation_years=a.depreciation_years,
        improvements=a.renovation_cost,
    )


def _renovation(a: ProjectAssumptions) -> pd.Series:
    if a.renovation_cost == 0:
        return empty_series(ECategory.RENOVATION)
    if a.renovation_months == 0:
        return single_event(ECategory.RENOVATION, a.purchase_timestamp, -a.renovation_cost)
    return build_series(
        ECategory.RENOVATION,
        a.purchase_timestamp,
        -a.renovation_cost / a.renovation_months,
        EFrequency.monthly,
        periods=a.renovation_months,
    )


def _on_or_before(series: pd.Series, end: pd.Timestamp) -> pd.Series:
    return series[series.index <= end]


@error_handler
def build_cash_flows(assumptions: AssumptionsInput, horizon_years: int) -> Dict[str, pd.Series]:
    """
    Build every category series of the investment over a horizon.

    Rent, expenses and depreciation keep the periods that complete within the
    horizon; mortgage payments (paid in arrears) and the stock series keep
    every date on or before the horizon end.

    Returns:
        Dict mapping category name to series. Expense categories use the
        expense names.
    """
    a = _coerce_assumptions(assumptions)
    horizon_years = _positive_years(horizon_years, "Horizon")
    start = a.purchase_timestamp
    horizon_end = add_periods(start, horizon_years, EFrequency.annual)
    loan = _build_loan(a)
    asset = _build_asset(a)

    flows: Dict[str, pd.Series] = {
        ECategory.PURCHASE: single_event(ECategory.PURCHASE, start, -a.purchase_price),
        ECategory.RENOVATION: _on_or_before(_renovation(a), horizon_end),
        ECategory.RENT: RentRevenueStream(
            ECategory.RENT,
            a.rent_start_date,
            a.annual_rent,
            period=a.rent_frequency,
            growth_rate=a.rent_growth_annual_pct,
        ).get_cash_flow(horizon_end),
    }

    for expense in a.expenses:
        flows[expense.name] = ExpenseStream(
            expense.name,
            add_periods(start, expense.start_offset_months, EFrequency.monthly),
            expense.amount,
            period=expense.frequency,
            growth_rate=expense.growth_rate_annual_pct,
        ).get_cash_flow(horizon_end)

    house_value = asset.get_value(months_to_project=horizon_years * 12)
    if loan is not None:
        flows[ECategory.MORTGAGE_DRAW] = loan.get_draw()
        flows[ECategory.MORTGAGE_PAYMENT] = _on_or_before(loan.get_cash_flow(), horizon_end)
        flows[ECategory.MORTGAGE_INTEREST] = _on_or_before(loan.get_interest(), horizon_end)
        # Sample the loan balance on the house value dates so the balance sheet rows line up
        balance = loan.get_balance().reindex(house_value.index, method="ffill")
    else:
        flows[ECategory.MORTGAGE_DRAW] = empty_series(ECategory.MORTGAGE_DRAW)
        flows[ECategory.MORTGAGE_PAYMENT] = empty_series(ECategory.MORTGAGE_PAYMENT)
        flows[ECategory.MORTGAGE_INTEREST] = empty_series(ECategory.MORTGAGE_INTEREST)
        balance = pd.Series(0.0, index=house_value.index)

    flows[ECategory.DEPRECIATION] = asset.get_depreciation(a.rent_start_date, horizon_end)
    flows[ECategory.HOUSE_VALUE] = house_value
    loan_balance = -balance
    loan_balance.name = ECategory.LOAN_BALANCE
    loan_balance.index.name = DATE
    flows[ECategory.LOAN_BALANCE] = loan_balance
    return flows


def _statement_categories(a: ProjectAssumptions) -> Dict[str, list]:
    expenses = [e.name for e in a.expenses]
    return {
        EStatement.OPERATING_CASH_FLOW: [ECategory.RENT] + expenses,
        EStatement.TOTAL_CASH_FLOW: [
            ECategory.PURCHASE,
            ECategory.MORTGAGE_DRAW,
            ECategory.RENOVATION,
            ECategory.RENT,
        ] + expenses + [ECategory.MORTGAGE_PAYMENT],
        EStatement.TAXABLE_INCOME: [ECategory.RENT] + expenses + [
            ECategory.MORTGAGE_INTEREST,
            ECategory.DEPRECIATION,
        ],
        EStatement.BALANCE_SHEET: [ECategory.HOUSE_VALUE, ECategory.LOAN_BALANCE],
    }


@error_handler
def build_statements(assumptions: AssumptionsInput, horizon_years: int) -> Dict[str, pd.DataFrame]:
    """Dated tables of each statement, before annual aggregation."""
    a = _coerce_assumptions(assumptions)
    flows = build_cash_flows(a, horizon_years)
    return {
        statement: combine_series(
            {name: flows[name] for name in categories},
            total_name=EStatement.TOTALS[statement],
        )
        for statement, categories in _statement_categories(a).items()
    }


@error_handler
def terminal_value(assumptions: AssumptionsInput, evaluation_date) -> float:
    """House value net of selling costs, less the loan balance outstanding on the date."""
    a = _coerce_assumptions(assumptions)
    asset = _build_asset(a)
    loan = _build_loan(a)
    sale_proceeds = asset.value_on_date(evaluation_date) * (1 - a.selling_cost_pct / 100.0)
    payoff = loan.balance_on_date(evaluation_date) if loan is not None else 0.0
    return sale_proceeds - payoff


@error_handler
def holding_period_irr(assumptions: AssumptionsInput, holding_period_years: Optional[int] = None) -> float:
    """
    IRR of buying the house and selling it after ``holding_period_years``.

    The total cash flow up to the sale date is combined with the terminal
    value on that date.
    """
    a = _coerce_assumptions(assumptions)
    years = _positive_years(
        holding_period_years if holding_period_years is not None else a.holding_period_years,
        "Holding period",
    )
    evaluation_date = add_periods(a.purchase_timestamp, years, EFrequency.annual)

    table = build_statements(a, years)[EStatement.TOTAL_CASH_FLOW]
    total = table[EStatement.TOTALS[EStatement.TOTAL_CASH_FLOW]]
    sale = single_event("Sale", evaluation_date, terminal_value(a, evaluation_date))
    cash_flows = pd.concat([total, sale])
    return irr(cash_flows)


@error_handler
def irr_by_holding_period(assumptions: AssumptionsInput, holding_periods: Iterable[int]) -> pd.Series:
    """IRR for each holding period, indexed by years held."""
    a = _coerce_assumptions(assumptions)
    periods = [_positive_years(p, "Holding period") for p in holding_periods]
    values = [holding_period_irr(a, p) for p in periods]
    return pd.Series(values, index=pd.Index(periods, name="holding_period_years"), name="irr", dtype=float)


@error_handler
def run_analysis(
    assumptions: AssumptionsInput,
    years: Optional[int] = None,
    holding_period_years: Optional[int] = None,
) -> AnalysisResult:
    """
    Run the full analysis.

    Args:
        assumptions: ProjectAssumptions or an equivalent dictionary
        years: Number of calendar-year rows in each table (defaults to
            ``assumptions.summary_years``)
        holding_period_years: Holding period of the IRR (defaults to
            ``assumptions.holding_period_years``)

    Returns:
        AnalysisResult with the four annual tables and the IRR
    """
    a = _coerce_assumptions(assumptions)
    years = _positive_years(years if years is not None else a.summary_years, "Summary years")
    holding = _positive_years(
        holding_period_years if holding_period_years is not None else a.holding_period_years,
        "Holding period",
    )
    logger.info(f"Running analysis of '{a.name}' for {years} years, holding period {holding} years")

    statements = build_statements(a, years)
    evaluation_date = add_periods(a.purchase_timestamp, holding, EFrequency.annual)

    return AnalysisResult(
        operating_cash_flow=aggregate_flow(statements[EStatement.OPERATING_CASH_FLOW], max_years=years),
        total_cash_flow=aggregate_flow(statements[EStatement.TOTAL_CASH_FLOW], max_years=years),
        taxable_income=aggregate_flow(statements[EStatement.TAXABLE_INCOME], max_years=years),
        balance_sheet=aggregate_stock(statements[EStatement.BALANCE_SHEET], max_years=years),
        irr=holding_period_irr(a, holding),
        holding_period_years=holding,
        terminal_value=terminal_value(a, evaluation_date),
        assumptions=a,
    )
