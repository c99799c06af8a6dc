"""Approximate Greeks from moneyness and time alone.

These are illustrative estimates for a trading journal, not pricing-grade
values. There is no volatility input: a fixed reference volatility sets
how wide the transition between out-of-the-money and in-the-money is,
and that width shrinks as expiration approaches.
"""

import logging
import math

from ..utils.numeric import DAYS_PER_YEAR, clamp

logger = logging.getLogger("options_calc.greeks")

REFERENCE_VOLATILITY = 0.20

MIN_DELTA = 0.01
MAX_DELTA = 0.99

# Theta acceleration applies inside this many days
THETA_ACCELERATION_WINDOW = 30


def _transition_width(days_to_expiry: int) -> float:
    """Width of the moneyness transition, floored at one day."""
    return REFERENCE_VOLATILITY * math.sqrt(max(days_to_expiry, 1) / DAYS_PER_YEAR)


def approximate_delta(
    spot_price: float,
    strike: float,
    days_to_expiry: int,
    option_type: str,
) -> float:
    """Estimate delta with a clamped linear function of log-moneyness.

    Args:
        spot_price: Current underlying price
        strike: Strike price
        days_to_expiry: Days until expiration (floored at 1)
        option_type: 'call' or 'put'

    Returns:
        Call delta in (0, 1) or put delta in (-1, 0)

    Example:
        >>> approximate_delta(100.0, 100.0, 30, 'call')
        0.5
        >>> approximate_delta(100.0, 100.0, 30, 'put')
        -0.5
    """
    if option_type not in ('call', 'put'):
        raise ValueError(f"Invalid option_type: {option_type}")

    moneyness = math.log(spot_price / strike)
    delta = clamp(0.5 + moneyness / (2 * _transition_width(days_to_expiry)), MIN_DELTA, MAX_DELTA)

    if option_type == 'call':
        return delta
    return delta - 1


def approximate_theta(
    premium: float,
    days_to_expiry: int,
    acceleration_factor: float = 1.0,
) -> float:
    """Estimate daily time decay as premium spread evenly over remaining days.

    Args:
        premium: Option premium in dollars
        days_to_expiry: Days until expiration (floored at 1)
        acceleration_factor: Multiplier applied inside the final 30 days

    Returns:
        Non-positive daily decay. Magnitude tends to the premium as expiry
        approaches and to zero far from expiry.
    """
    days = max(days_to_expiry, 1)
    decay_rate = abs(premium) / days

    if days <= THETA_ACCELERATION_WINDOW:
        decay_rate *= acceleration_factor

    return -decay_rate


def approximate_gamma(spot_price: float, strike: float, days_to_expiry: int) -> float:
    """Estimate gamma: highest at the money, falling off with distance from strike.

    Args:
        spot_price: Current underlying price
        strike: Strike price
        days_to_expiry: Days until expiration (floored at 1)

    Returns:
        Positive gamma estimate
    """
    distance = abs(math.log(spot_price / strike))
    at_the_money_gamma = 1 / (_transition_width(days_to_expiry) * spot_price)
    return at_the_money_gamma * math.exp(-distance * 2)
