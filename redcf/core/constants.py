"""
Core constants and enumerations for REDCF.

This module defines column names, cash flow categories, payment frequencies
and day-count conventions used throughout the cash flow analysis.
"""

from dateutil.relativedelta import relativedelta

# Projection constants
CASH_FLOW = "cash_flow"
DATE = "date"
YEAR = "year"
TOTAL = "Total"
DAYS_PER_YEAR = 365.25
DEFAULT_SUMMARY_YEARS = 10


class EFrequency:
    """Payment frequencies for cash flow series"""
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    quarterly = "quarterly"
    semi_annual = "semi_annual"
    annual = "annual"


# Step between consecutive payments for each frequency
FREQUENCY_STEPS = {
    EFrequency.daily: relativedelta(days=1),
    EFrequency.weekly: relativedelta(weeks=1),
    EFrequency.monthly: relativedelta(months=1),
    EFrequency.quarterly: relativedelta(months=3),
    EFrequency.semi_annual: relativedelta(months=6),
    EFrequency.annual: relativedelta(years=1),
}

PERIODS_PER_YEAR = {
    EFrequency.daily: 365,
    EFrequency.weekly: 52,
    EFrequency.monthly: 12,
    EFrequency.quarterly: 4,
    EFrequency.semi_annual: 2,
    EFrequency.annual: 1,
}


class ECategory:
    """Cash flow and balance categories of the rental house model"""
    PURCHASE = "Purchase"
    MORTGAGE_DRAW = "Mortgage Draw"
    MORTGAGE_PAYMENT = "Mortgage Payment"
    MORTGAGE_INTEREST = "Mortgage Interest"
    RENOVATION = "Renovation"
    RENT = "Rent"
    DEPRECIATION = "Depreciation"
    HOUSE_VALUE = "House Value"
    LOAN_BALANCE = "Loan Balance"


class EStatement:
    """Annual summary tables produced by the analysis, with their total columns"""
    OPERATING_CASH_FLOW = "operating_cash_flow"
    TOTAL_CASH_FLOW = "total_cash_flow"
    TAXABLE_INCOME = "taxable_income"
    BALANCE_SHEET = "balance_sheet"

    TOTALS = {
        OPERATING_CASH_FLOW: "Net Operating Income",
        TOTAL_CASH_FLOW: "Total Cash Flow",
        TAXABLE_INCOME: "Taxable Income",
        BALANCE_SHEET: "Owner Equity",
    }
