"""Error types and degenerate-math guards for the calculation engine.

Strategy models fail only at construction time. Once an instance exists,
every query is total: divisions that could hit zero go through
safe_divide and resolve to a documented sentinel instead of raising.
"""

import logging

logger = logging.getLogger("options_calc.error_handling")


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Safely divide two numbers, returning default on division by zero.

    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Value to return if denominator is zero

    Returns:
        Result of division, or default if denominator is zero

    Example:
        >>> safe_divide(10, 4)
        2.5
        >>> safe_divide(10, 0)
        0.0
    """
    if denominator == 0:
        logger.debug(f"Division by zero: {numerator}/{denominator}, returning {default}")
        return default
    return numerator / denominator


class CalculationError(Exception):
    """Base exception for calculation engine errors."""
    pass


class ValidationError(ValueError, CalculationError):
    """Raised when strategy inputs violate an invariant at construction.

    Inherits from ValueError so callers can treat it as bad input.
    """
    pass


class ConfigurationError(CalculationError):
    """Raised when risk threshold configuration is invalid."""
    pass
