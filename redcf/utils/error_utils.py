"""
Error handling utilities for REDCF.

This module provides centralized error handling and logging for the cash flow
analysis. It includes the exception taxonomy used across the package and a
decorator for consistent error reporting.

Exceptions:
    DCFAnalysisError: Base class for all analysis errors
    InputValidationError: Invalid assumptions, counts, rates or dates
    DegenerateCashFlowError: IRR requested on a series with no sign change
    ConvergenceError: Root finder did not find a rate within its budget
"""

import os
import traceback
import logging
from functools import wraps
import sys
from datetime import datetime

# Configure logging; the file handler is only added when a path is configured
_handlers = [logging.StreamHandler(sys.stdout)]
if os.getenv("REDCF_LOG_FILE"):
    _handlers.append(logging.FileHandler(os.getenv("REDCF_LOG_FILE")))

logging.basicConfig(
    level=os.getenv("REDCF_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger(__name__)


class DCFAnalysisError(Exception):
    """Base exception class for cash flow analysis errors"""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        self.timestamp = datetime.now()
        super().__init__(self.message)


class InputValidationError(DCFAnalysisError):
    """Raised when assumptions or arguments are invalid"""


class DegenerateCashFlowError(DCFAnalysisError):
    """Raised when a cash flow series has no sign change"""


class ConvergenceError(DCFAnalysisError):
    """Raised when the IRR root finder fails to converge"""


def error_handler(func):
    """Decorator for handling errors and providing detailed information

    Analysis errors are logged and re-raised unchanged so callers can tell the
    categories apart. ``ValueError`` and ``TypeError`` are reported as
    :class:`InputValidationError`; anything else as :class:`DCFAnalysisError`.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DCFAnalysisError as e:
            logger.error(f"{type(e).__name__} in {func.__name__}: {e.message}")
            raise
        except Exception as e:
            exc_type, exc_value, exc_tb = sys.exc_info()
            tb = traceback.extract_tb(exc_tb)

            # Get the most relevant parts of the traceback
            error_location = f"{tb[-1].filename}:{tb[-1].lineno}"
            error_function = tb[-1].name

            error_details = {
                "error_type": exc_type.__name__,
                "location": error_location,
                "function": error_function,
                "arguments": {"args": str(args), "kwargs": str(kwargs)},
                "traceback": traceback.format_exc(),
            }

            logger.error(f"Error in {error_location} - {error_function}: {str(e)}")
            logger.debug(f"Detailed error information: {error_details}")

            error_cls = InputValidationError if isinstance(e, (ValueError, TypeError)) else DCFAnalysisError
            raise error_cls(
                f"Error in {func.__name__}: {str(e)}",
                error_details,
            ) from e

    return wrapper
