"""
Test suite for rate utilities in REDCF.
"""

import pytest

from redcf.utils.rate_utils import (
    annual_pct_to_decimal,
    periods_per_year,
    annual_pct_to_periodic_decimal,
    annual_pct_to_monthly_decimal,
    periodic_decimal_to_effective_annual,
    convert_duration_years_to_periods,
    validate_rate_range,
    normalize_rate_input,
)
from redcf.utils.error_utils import InputValidationError


def test_annual_pct_to_decimal():
    """Test percentage to decimal conversion."""
    assert annual_pct_to_decimal(5.0) == 0.05
    assert annual_pct_to_decimal("7.5") == 0.075
    assert annual_pct_to_decimal(0) == 0.0
    assert annual_pct_to_decimal(100) == 1.0


def test_periods_per_year():
    """Test period counts per frequency."""
    assert periods_per_year("daily") == 365
    assert periods_per_year("weekly") == 52
    assert periods_per_year("monthly") == 12
    assert periods_per_year("quarterly") == 4
    assert periods_per_year("semi_annual") == 2
    assert periods_per_year("annual") == 1

    with pytest.raises(InputValidationError):
        periods_per_year("biweekly")


def test_annual_pct_to_periodic_decimal():
    """Test nominal annual to periodic decimal conversion."""
    assert round(annual_pct_to_periodic_decimal(6.0, "monthly"), 6) == 0.005
    assert annual_pct_to_periodic_decimal(4.0, "semi_annual") == 0.02
    assert annual_pct_to_periodic_decimal(3.0, "annual") == 0.03
    assert round(annual_pct_to_monthly_decimal(3.0), 6) == 0.0025


def test_periodic_decimal_to_effective_annual():
    """Test compounding a periodic rate over a year."""
    assert periodic_decimal_to_effective_annual(0.1, 1) == pytest.approx(0.1)
    assert periodic_decimal_to_effective_annual(0.01, 12) == pytest.approx(1.01 ** 12 - 1)
    assert periodic_decimal_to_effective_annual(0.0, 12) == 0.0


def test_convert_duration_years_to_periods():
    """Test duration conversion to whole payment periods."""
    assert convert_duration_years_to_periods(30, "monthly") == 360
    assert convert_duration_years_to_periods(2.5, "semi_annual") == 5
    assert convert_duration_years_to_periods(15, "annual") == 15


def test_convert_duration_not_whole_periods():
    """Test durations that do not split into whole periods are rejected."""
    with pytest.raises(InputValidationError):
        convert_duration_years_to_periods(2.5, "annual")

    with pytest.raises(InputValidationError):
        convert_duration_years_to_periods(30, "fortnightly")


def test_validate_rate_range():
    """Test rate range validation."""
    assert validate_rate_range(5.0) is True
    assert validate_rate_range(-50.0) is True
    assert validate_rate_range(100.0) is True
    assert validate_rate_range(150.0) is False
    assert validate_rate_range(-60.0) is False
    assert validate_rate_range(150.0, max_pct=200.0) is True


def test_normalize_rate_input():
    """Test rate input normalization."""
    assert normalize_rate_input(5.5) == 5.5
    assert normalize_rate_input("5.5") == 5.5
    assert normalize_rate_input("5.5%") == 5.5
    assert normalize_rate_input(" 7.25% ") == 7.25
    assert normalize_rate_input(3) == 3.0


def test_normalize_rate_input_invalid():
    """Test invalid rate inputs raise input validation errors."""
    with pytest.raises(InputValidationError):
        normalize_rate_input("abc")

    with pytest.raises(InputValidationError):
        normalize_rate_input(150.0)



def test_utils_exports_resolve():
    """Test every exported utility name is defined."""
    import redcf.utils as utils

    missing = [name for name in utils.__all__ if not hasattr(utils, name)]
    assert missing == []
    assert "annual_pct_to_decimal" in utils.__all__

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
