"""Metric snapshot data models.

Each snapshot is rebuilt from scratch by get_all_metrics(); nothing here is
cached on the strategy model.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class AnnualizedReturns:
    """Return on outlay and return on risk scaled to a 365-day year."""

    roo: float
    ror: float


@dataclass(frozen=True)
class CoveredCallMetrics:
    breakeven: float
    max_profit: float
    max_loss: float
    return_on_outlay: float
    return_on_risk: float
    annualized_roo: float
    annualized_ror: float
    assignment_pnl: float
    current_delta: float
    current_theta: float
    days_to_expiration: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CashSecuredPutMetrics:
    breakeven: float
    max_profit: float
    max_loss: float
    return_on_outlay: float
    return_on_risk: float
    annualized_roo: float
    annualized_ror: float
    assignment_pnl: float
    current_delta: float
    current_theta: float
    days_to_expiration: int
    effective_basis: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LongCallMetrics:
    """Long call snapshot.

    max_profit is float('inf'): upside is unbounded.
    """

    breakeven: float
    max_profit: float
    max_loss: float
    intrinsic_value: float
    time_value: float
    unrealized_pnl: float
    current_delta: float
    current_theta: float
    days_to_expiration: int
    percentage_gain: float
    leverage_ratio: float
    moneyness: float
    classification: str
    probability_itm: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
