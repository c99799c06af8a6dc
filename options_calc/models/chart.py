"""Payoff chart data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChartDataPoint:
    """One point on an expiration payoff curve."""

    underlying_price: float
    profit_loss: float
    is_near_breakeven: bool = False
