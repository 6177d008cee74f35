"""
Net present value and internal rate of return of dated cash flows.

Cash flows are discounted from the first date. Elapsed time is measured in
years (actual days / 365.25) and converted to compounding periods with
``periods_per_year``. The IRR is returned as an effective annual rate.

Root policy: NPV is evaluated on a fixed grid of periodic rates, every sign
change is refined with Brent's method, and the smallest non-negative root is
returned. If every root is negative, the root closest to zero is returned.
"""

from typing import Iterable, Tuple, Union

import numpy as np
import pandas as pd
from scipy.optimize import brentq

from redcf.core.constants import CASH_FLOW, DAYS_PER_YEAR
from redcf.core.models.series import series_from_events
from redcf.utils.rate_utils import periodic_decimal_to_effective_annual
from redcf.utils.error_utils import (
    error_handler,
    logger,
    ConvergenceError,
    DegenerateCashFlowError,
)

CashFlows = Union[pd.Series, Iterable[Tuple[object, float]]]

# Periodic rates scanned for sign changes of the NPV
RATE_GRID = np.unique(
    np.concatenate(
        [
            np.linspace(-0.99, -0.1, 90),
            np.linspace(-0.1, 1.0, 221),
            np.geomspace(1.0, 100.0, 101),
        ]
    )
)
MAX_ITERATIONS = 200
TOLERANCE = 1e-12


def _as_series(cash_flows: CashFlows) -> pd.Series:
    if isinstance(cash_flows, pd.Series):
        series = cash_flows.astype(float)
        series.index = pd.DatetimeIndex(series.index)
        return series.groupby(level=0).sum().sort_index()
    return series_from_events(CASH_FLOW, cash_flows)


def _elapsed_periods(series: pd.Series, periods_per_year: int) -> np.ndarray:
    days = (series.index - series.index[0]).days.to_numpy(dtype=float)
    return days / DAYS_PER_YEAR * periods_per_year


def _npv(rate: float, amounts: np.ndarray, periods: np.ndarray) -> float:
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(np.sum(amounts * (1.0 + rate) ** (-periods)))


@error_handler
def npv(rate: float, cash_flows: CashFlows, periods_per_year: int = 1) -> float:
    """
    Net present value at the first date of a dated cash flow series.

    Args:
        rate: Discount rate per compounding period (decimal)
        cash_flows: Dated series, or iterable of (date, amount) pairs
        periods_per_year: Compounding periods per year (1 = annual)

    Returns:
        ``sum(cf_i * (1 + rate) ** -t_i)`` with ``t_i`` in periods
    """
    if rate <= -1:
        raise ValueError(f"Discount rate must be greater than -100%, got {rate}")
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be positive, got {periods_per_year}")
    series = _as_series(cash_flows)
    if series.empty:
        return 0.0
    return _npv(rate, series.to_numpy(), _elapsed_periods(series, periods_per_year))


@error_handler
def irr(cash_flows: CashFlows, periods_per_year: int = 1) -> float:
    """
    Internal rate of return of a dated cash flow series, annualized.

    Args:
        cash_flows: Dated series (outflows negative, inflows positive), or
            iterable of (date, amount) pairs
        periods_per_year: Compounding periods per year used while solving

    Returns:
        Effective annual rate (decimal)

    Raises:
        DegenerateCashFlowError: If the cash flows have no sign change
        ConvergenceError: If no root is bracketed or Brent's method does not converge
    """
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be positive, got {periods_per_year}")

    series = _as_series(cash_flows)
    amounts = series.to_numpy()
    if not ((amounts < 0).any() and (amounts > 0).any()):
        raise DegenerateCashFlowError(
            "Cash flows need at least one negative and one positive amount to have an IRR",
            {"n_cash_flows": int(len(amounts))},
        )

    periods = _elapsed_periods(series, periods_per_year)
    values = np.array([_npv(r, amounts, periods) for r in RATE_GRID])

    roots = []
    for i in range(len(RATE_GRID) - 1):
        lo, hi = RATE_GRID[i], RATE_GRID[i + 1]
        f_lo, f_hi = values[i], values[i + 1]
        if not (np.isfinite(f_lo) and np.isfinite(f_hi)):
            continue
        if f_lo == 0.0:
            roots.append(lo)
            continue
        if f_hi == 0.0 or np.sign(f_lo) == np.sign(f_hi):
            continue
        root, result = brentq(
            _npv, lo, hi, args=(amounts, periods),
            xtol=TOLERANCE, maxiter=MAX_ITERATIONS, full_output=True, disp=False,
        )
        if not result.converged:
            raise ConvergenceError(
                f"IRR did not converge in [{lo:.4f}, {hi:.4f}] after {result.iterations} iterations",
                {"flag": result.flag, "iterations": result.iterations},
            )
        roots.append(root)
    if values[-1] == 0.0:
        roots.append(RATE_GRID[-1])

    if not roots:
        raise ConvergenceError(
            f"No IRR found between {RATE_GRID[0]:.0%} and {RATE_GRID[-1]:.0%} per period",
            {"periods_per_year": periods_per_year},
        )

    non_negative = [r for r in roots if r >= 0]
    periodic_rate = min(non_negative) if non_negative else max(roots)
    if len(roots) > 1:
        logger.info(f"Cash flows have {len(roots)} IRR candidates; using {periodic_rate:.6f} per period")

    return periodic_decimal_to_effective_annual(float(periodic_rate), periods_per_year)
