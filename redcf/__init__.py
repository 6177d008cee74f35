"""
REDCF - Real Estate Discounted Cash Flow analysis

Time-series cash flow modelling of a rental house investment:
- Dated cash flow series built from scalar assumptions
- Loan amortization schedules
- Annual flow and stock summaries
- Internal rate of return over a holding period
"""

__version__ = "1.0.0"
__author__ = "REDCF Contributors"
