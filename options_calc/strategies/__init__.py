"""Per-strategy metric models."""

from .base import StrategyMetrics
from .cash_secured_put import CashSecuredPut
from .covered_call import CoveredCall
from .factory import create_cash_secured_put, create_covered_call, create_long_call
from .long_call import LONG_CALL_RISK_THRESHOLDS, LongCall

__all__ = [
    "StrategyMetrics",
    "CoveredCall",
    "CashSecuredPut",
    "LongCall",
    "LONG_CALL_RISK_THRESHOLDS",
    "create_covered_call",
    "create_cash_secured_put",
    "create_long_call",
]
