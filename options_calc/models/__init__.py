"""Core data models for options strategy calculations."""

from .chart import ChartDataPoint
from .inputs import CashSecuredPutInputs, CoveredCallInputs, LongCallInputs
from .metrics import AnnualizedReturns, CashSecuredPutMetrics, CoveredCallMetrics, LongCallMetrics
from .risk_flag import RiskFlag

__all__ = [
    "ChartDataPoint",
    "RiskFlag",
    "CoveredCallInputs",
    "CashSecuredPutInputs",
    "LongCallInputs",
    "AnnualizedReturns",
    "CoveredCallMetrics",
    "CashSecuredPutMetrics",
    "LongCallMetrics",
]
