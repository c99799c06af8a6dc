"""Shared pieces for strategy metric models.

Each strategy supplies its own breakeven, max profit/loss and expiration
P&L formulas; input validation and payoff chart construction are the
small composable functions below.
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Optional, Protocol

from ..analytics.risk import RiskThresholds
from ..models.chart import ChartDataPoint
from ..models.risk_flag import RiskFlag
from ..utils.error_handling import ValidationError
from ..utils.numeric import to_datetime

logger = logging.getLogger("options_calc.strategies")


class StrategyMetrics(Protocol):
    """Query surface shared by every strategy model."""

    def breakeven(self) -> float: ...

    def max_profit(self) -> float: ...

    def max_loss(self) -> float: ...

    def expiration_pnl(self, share_price: float) -> float: ...

    def days_to_expiration(self) -> int: ...

    def is_in_the_money(self) -> bool: ...

    def payoff_chart(self, price_range: Optional[Iterable[float]] = None) -> List[ChartDataPoint]: ...

    def analyze_risks(self, thresholds: Optional[RiskThresholds] = None) -> List[RiskFlag]: ...

    def get_all_metrics(self) -> Any: ...

    def summary(self) -> str: ...


def _require_finite(label: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number, got {value!r}")


def require_positive(label: str, value: float) -> None:
    """Raise ValidationError unless value is a finite number > 0."""
    _require_finite(label, value)
    if value <= 0:
        raise ValidationError(f"{label} must be positive")


def require_non_negative(label: str, value: float) -> None:
    """Raise ValidationError unless value is a finite number >= 0."""
    _require_finite(label, value)
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")


def require_future_expiration(expiration: date | datetime, as_of: date | datetime) -> None:
    """Raise ValidationError unless expiration is strictly after as_of."""
    if not isinstance(expiration, (date, datetime)):
        raise ValidationError(f"Expiration must be a date, got {expiration!r}")
    if to_datetime(expiration) <= to_datetime(as_of):
        raise ValidationError("Expiration must be in the future")


def _coerce_price(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def build_payoff_chart(
    prices: Iterable[Any],
    pnl_func: Callable[[float], float],
    breakeven: float,
    tolerance: float,
) -> List[ChartDataPoint]:
    """Map prices through an expiration P&L function.

    Entries that are not numbers come out as NaN points instead of raising.

    Args:
        prices: Underlying prices to evaluate
        pnl_func: Expiration P&L for one price
        breakeven: Breakeven used for the near-breakeven marker
        tolerance: Distance from breakeven (in dollars) that counts as near

    Returns:
        One ChartDataPoint per input price, in input order
    """
    points = []
    for raw_price in prices:
        price = _coerce_price(raw_price)
        points.append(ChartDataPoint(
            underlying_price=price,
            profit_loss=pnl_func(price),
            is_near_breakeven=abs(price - breakeven) < tolerance,
        ))
    return points
