"""
Test suite for the error taxonomy and error_handler decorator.
"""

import pytest

from redcf.utils.error_utils import (
    error_handler,
    DCFAnalysisError,
    InputValidationError,
    DegenerateCashFlowError,
    ConvergenceError,
)


def test_taxonomy():
    """Test every analysis error derives from the base class."""
    for cls in (InputValidationError, DegenerateCashFlowError, ConvergenceError):
        assert issubclass(cls, DCFAnalysisError)

    assert not issubclass(ConvergenceError, DegenerateCashFlowError)
    assert not issubclass(DegenerateCashFlowError, ConvergenceError)


def test_error_carries_message_and_details():
    err = ConvergenceError("no root", {"iterations": 200})
    assert err.message == "no root"
    assert err.details == {"iterations": 200}
    assert str(err) == "no root"


class TestErrorHandler:
    """Test how the decorator maps exceptions."""

    def test_passes_return_value(self):
        @error_handler
        def add(a, b):
            return a + b

        assert add(1, 2) == 3

    def test_value_error_becomes_input_validation_error(self):
        @error_handler
        def fail():
            raise ValueError("bad input")

        with pytest.raises(InputValidationError) as exc_info:
            fail()
        assert "bad input" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.details["error_type"] == "ValueError"

    def test_type_error_becomes_input_validation_error(self):
        @error_handler
        def fail():
            raise TypeError("wrong type")

        with pytest.raises(InputValidationError):
            fail()

    def test_other_errors_become_base_error(self):
        @error_handler
        def fail():
            raise KeyError("missing")

        with pytest.raises(DCFAnalysisError) as exc_info:
            fail()
        assert type(exc_info.value) is DCFAnalysisError

    def test_domain_errors_pass_through_unchanged(self):
        original = DegenerateCashFlowError("no sign change")

        @error_handler
        def fail():
            raise original

        with pytest.raises(DegenerateCashFlowError) as exc_info:
            fail()
        assert exc_info.value is original

    def test_nested_handlers_do_not_rewrap(self):
        @error_handler
        def inner():
            raise ValueError("inner failure")

        @error_handler
        def outer():
            return inner()

        with pytest.raises(InputValidationError) as exc_info:
            outer()
        assert "inner" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, ValueError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
