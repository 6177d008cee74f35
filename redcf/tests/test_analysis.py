"""
Tests for the rental house analysis.

The worked example: a 300,000 house bought on 2020-01-01 with a 250,000
mortgage at 3% over 30 years, renovated for 20,000 over six months and let
from July 2020 for 20,000 a year growing 4% a year.
"""

import pytest
import numpy as np
import pandas as pd

from redcf.core.assumptions import ProjectAssumptions
from redcf.core.constants import EStatement
from redcf.core.engine.analysis import (
    build_cash_flows,
    build_statements,
    holding_period_irr,
    irr_by_holding_period,
    run_analysis,
    terminal_value,
)
from redcf.core.engine.irr import npv
from redcf.core.models.series import series_from_events
from redcf.utils.error_utils import InputValidationError

MONTHLY_LOAN_RATE = 0.03 / 12
MONTHLY_APPRECIATION = 0.03 / 12


def level_payment(principal, rate, n):
    return principal * rate / (1 - (1 + rate) ** -n)


def balance_after(principal, rate, n, k):
    payment = level_payment(principal, rate, n)
    return principal * (1 + rate) ** k - payment * ((1 + rate) ** k - 1) / rate


@pytest.fixture(scope="module")
def assumptions():
    return ProjectAssumptions()


@pytest.fixture(scope="module")
def result(assumptions):
    return run_analysis(assumptions)


class TestTables:
    """Shape of the annual tables."""

    def test_four_tables_with_ten_years(self, result):
        tables = result.tables()

        assert set(tables) == {
            EStatement.OPERATING_CASH_FLOW,
            EStatement.TOTAL_CASH_FLOW,
            EStatement.TAXABLE_INCOME,
            EStatement.BALANCE_SHEET,
        }
        for name, table in tables.items():
            assert list(table.index) == list(range(2020, 2030)), name
            assert table.index.name == "year"
            assert table.columns[-1] == EStatement.TOTALS[name]
            assert not table.isna().any().any()

    def test_total_column_is_row_sum(self, result):
        for table in result.tables().values():
            assert np.allclose(table.iloc[:, -1], table.iloc[:, :-1].sum(axis=1))

    def test_expense_columns(self, result):
        columns = list(result.operating_cash_flow.columns)

        assert columns == ["Rent", "Maintenance", "Insurance", "Property Tax", "Yard Care", "Net Operating Income"]

    def test_summary_years(self, assumptions):
        short = run_analysis(assumptions, years=3)

        for table in short.tables().values():
            assert list(table.index) == [2020, 2021, 2022]


class TestWorkedExample:
    """First-year figures computed independently of the engine."""

    def test_balance_sheet_owner_equity(self, result):
        row = result.balance_sheet.loc[2020]
        house_value = 300000.0 * (1 + MONTHLY_APPRECIATION) ** 11
        loan_balance = balance_after(250000.0, MONTHLY_LOAN_RATE, 360, 11)

        assert row["House Value"] == pytest.approx(house_value)
        assert row["Loan Balance"] == pytest.approx(-loan_balance)
        assert row["Owner Equity"] == pytest.approx(house_value - loan_balance)

    def test_balance_sheet_is_stock(self, result):
        value = result.balance_sheet["House Value"]

        # Year-end values, not sums of twelve monthly values
        assert value.loc[2021] == pytest.approx(300000.0 * (1 + MONTHLY_APPRECIATION) ** 23)
        assert value.is_monotonic_increasing

    def test_first_year_rent(self, result):
        monthly = 20000.0 / 12
        expected = sum(monthly * (1 + 0.04 / 12) ** k for k in range(6))

        assert result.operating_cash_flow.loc[2020, "Rent"] == pytest.approx(expected)

    def test_first_year_expenses(self, result):
        row = result.operating_cash_flow.loc[2020]

        assert row["Insurance"] == pytest.approx(-600.0 - 606.0)
        assert row["Property Tax"] == pytest.approx(-3000.0)
        assert row["Maintenance"] == pytest.approx(sum(-150.0 * (1 + 0.02 / 12) ** k for k in range(6)))
        assert row["Yard Care"] == pytest.approx(-25.0 * 27)

    def test_first_year_total_cash_flow(self, result):
        row = result.total_cash_flow.loc[2020]
        payment = level_payment(250000.0, MONTHLY_LOAN_RATE, 360)

        assert row["Purchase"] == pytest.approx(-300000.0)
        assert row["Mortgage Draw"] == pytest.approx(250000.0)
        assert row["Renovation"] == pytest.approx(-20000.0)
        assert row["Mortgage Payment"] == pytest.approx(-11 * payment)

    def test_first_year_taxable_income(self, result):
        row = result.taxable_income.loc[2020]
        interest = 250000.0 - balance_after(250000.0, MONTHLY_LOAN_RATE, 360, 11) \
            - 11 * level_payment(250000.0, MONTHLY_LOAN_RATE, 360)

        assert row["Depreciation"] == pytest.approx(-6 * (0.8 * 300000.0 + 20000.0) / 330)
        assert row["Mortgage Interest"] == pytest.approx(interest)
        assert "Mortgage Payment" not in row.index

    def test_terminal_value(self, assumptions, result):
        house_value = 300000.0 * (1 + MONTHLY_APPRECIATION) ** 120
        payoff = balance_after(250000.0, MONTHLY_LOAN_RATE, 360, 120)

        assert result.holding_period_years == 10
        assert result.terminal_value == pytest.approx(house_value * 0.94 - payoff)
        assert terminal_value(assumptions, "2030-01-01") == pytest.approx(result.terminal_value)

    def test_terminal_value_matches_balance_sheet_for_leap_day_purchase(self):
        leap_day = ProjectAssumptions(purchase_date="2020-02-29")
        flows = build_cash_flows(leap_day, 10)
        sale_date = pd.Timestamp("2030-02-28")

        house_value = flows["House Value"][sale_date]
        loan_balance = flows["Loan Balance"][sale_date]

        assert house_value == pytest.approx(300000.0 * (1 + MONTHLY_APPRECIATION) ** 120)
        assert terminal_value(leap_day, sale_date) == pytest.approx(house_value * 0.94 + loan_balance)


class TestIRR:

    def test_irr_is_plausible(self, result):
        assert 0.0 < result.irr < 0.5

    def test_irr_zeroes_npv_of_holding_period_cash_flows(self, assumptions, result):
        table = build_statements(assumptions, 10)[EStatement.TOTAL_CASH_FLOW]
        flows = pd.concat([
            table["Total Cash Flow"],
            series_from_events("Sale", [("2030-01-01", result.terminal_value)]),
        ])

        assert npv(result.irr, flows) == pytest.approx(0.0, abs=1e-4)

    def test_holding_period_irr_matches_run(self, assumptions, result):
        assert holding_period_irr(assumptions) == pytest.approx(result.irr)
        assert holding_period_irr(assumptions, 10) == pytest.approx(result.irr)

    def test_irr_by_holding_period(self, assumptions, result):
        rates = irr_by_holding_period(assumptions, [5, 10, 15])

        assert list(rates.index) == [5, 10, 15]
        assert rates.index.name == "holding_period_years"
        assert rates.name == "irr"
        assert rates.loc[10] == pytest.approx(result.irr)

    def test_higher_appreciation_raises_irr(self, assumptions, result):
        richer = assumptions.model_copy(update={"appreciation_rate_annual_pct": 5.0})

        assert run_analysis(richer).irr > result.irr


class TestCashFlows:

    def test_categories(self, assumptions):
        flows = build_cash_flows(assumptions, 10)

        for name in ["Purchase", "Mortgage Draw", "Mortgage Payment", "Mortgage Interest", "Renovation",
                     "Rent", "Depreciation", "House Value", "Loan Balance",
                     "Maintenance", "Insurance", "Property Tax", "Yard Care"]:
            assert name in flows
            assert flows[name].index.name == "date"

    def test_flows_stay_within_horizon(self, assumptions):
        flows = build_cash_flows(assumptions, 5)

        for name, series in flows.items():
            assert series.index.max() <= pd.Timestamp("2025-01-01"), name

    def test_rent_starts_after_renovation(self, assumptions):
        rent = build_cash_flows(assumptions, 2)["Rent"]

        assert rent.index[0] == pd.Timestamp("2020-07-01")
        assert len(rent) == 18

    def test_loan_balance_on_house_value_dates(self, assumptions):
        flows = build_cash_flows(assumptions, 2)

        assert flows["Loan Balance"].index.equals(flows["House Value"].index)
        assert flows["Loan Balance"].iloc[0] == -250000.0


class TestAllCashPurchase:

    @pytest.fixture(scope="class")
    def cash_result(self):
        return run_analysis(ProjectAssumptions(loan_amount=0))

    def test_no_mortgage(self, cash_result):
        assert (cash_result.total_cash_flow["Mortgage Payment"] == 0.0).all()
        assert (cash_result.total_cash_flow["Mortgage Draw"] == 0.0).all()
        assert (cash_result.balance_sheet["Loan Balance"] == 0.0).all()

    def test_equity_equals_house_value(self, cash_result):
        sheet = cash_result.balance_sheet

        assert np.allclose(sheet["Owner Equity"], sheet["House Value"])

    def test_unlevered_irr_is_lower(self, cash_result, result):
        assert 0.0 < cash_result.irr < result.irr


class TestInvalidInput:

    def test_accepts_dictionary(self):
        result = run_analysis({"annual_rent": 24000}, years=2)

        assert result.assumptions.annual_rent == 24000

    @pytest.mark.parametrize("kwargs", [{"years": 0}, {"years": 2.5}, {"holding_period_years": -1}])
    def test_invalid_years(self, assumptions, kwargs):
        with pytest.raises(InputValidationError):
            run_analysis(assumptions, **kwargs)

    def test_loan_term_not_whole_periods(self):
        with pytest.raises(InputValidationError):
            run_analysis(ProjectAssumptions(loan_term_years=30.01))

    def test_invalid_dictionary(self):
        with pytest.raises(InputValidationError):
            run_analysis({"purchase_price": -1})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
