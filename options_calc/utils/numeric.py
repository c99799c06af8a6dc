"""Numeric helpers shared by every strategy model.

Rounding, day counting, return annualization and payoff-chart price grids.
"""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List

import numpy as np

# Standard equity option contract size
CONTRACT_SHARE_MULTIPLIER = 100

MILLISECONDS_PER_DAY = 86_400_000

DAYS_PER_YEAR = 365


def round_to(value: float, decimals: int = 2) -> float:
    """Round half away from zero to a fixed number of decimals.

    Works on the shortest decimal representation of the float, so 2.005
    rounds to 2.01 and -2.005 rounds to -2.01.

    Args:
        value: Number to round
        decimals: Decimal places to keep

    Returns:
        Rounded value. NaN and infinities are returned unchanged.

    Example:
        >>> round_to(92.5065, 2)
        92.51
        >>> round_to(-2.005, 2)
        -2.01
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return float(exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP))


def to_datetime(value: date | datetime) -> datetime:
    """Normalize a date or datetime to a datetime (dates become midnight)."""
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole days between two instants.

    Elapsed milliseconds divided by 86,400,000, truncated toward zero. A
    23.9 hour gap counts as 0 days.

    Args:
        start: Earlier instant (date or datetime)
        end: Later instant (date or datetime)

    Returns:
        Signed whole-day count
    """
    elapsed = to_datetime(end) - to_datetime(start)
    elapsed_ms = elapsed // timedelta(milliseconds=1)
    return int(elapsed_ms / MILLISECONDS_PER_DAY)


def annualize_return(return_percent: float, days: int) -> float:
    """Scale a holding-period return to a 365-day year.

    Holding periods shorter than one day are annualized as one day, so a
    position expiring today never produces an infinite rate.

    Args:
        return_percent: Return over the holding period (7.5 = 7.5%)
        days: Holding period in days

    Returns:
        Annualized return percentage
    """
    return return_percent * (DAYS_PER_YEAR / max(days, 1))


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to the closed interval [lower, upper]."""
    return min(max(value, lower), upper)


def step_percent_for_range(range_percent: float, point_count: int) -> float:
    """Per-step spacing that spreads point_count prices over ±range_percent."""
    if point_count < 2:
        return 0.0
    return 2 * range_percent / (point_count - 1)


def generate_price_range(
    center_price: float,
    point_count: int = 21,
    step_percent: float = 5.0,
) -> List[float]:
    """Build an increasing grid of underlying prices for payoff charts.

    Points are symmetric around center_price and spaced by step_percent of
    the center per step. Odd counts include the center itself.

    Args:
        center_price: Price the grid is centered on
        point_count: Number of prices to return
        step_percent: Spacing between neighbours as % of center_price

    Returns:
        List of prices rounded to cents

    Example:
        >>> generate_price_range(100.0, point_count=5, step_percent=10.0)
        [80.0, 90.0, 100.0, 110.0, 120.0]
    """
    if point_count <= 0:
        return []
    if point_count == 1:
        return [center_price]

    offsets = np.arange(point_count, dtype=float) - (point_count - 1) / 2.0
    prices = center_price * (1.0 + offsets * step_percent / 100.0)

    return [round_to(float(price), 2) for price in prices]
