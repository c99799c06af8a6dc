"""Options strategy calculation engine.

Breakeven, profit/loss, annualized returns, approximate Greeks and risk
flags for covered calls, cash-secured puts and long calls.
"""

from .analytics.greeks import approximate_delta, approximate_gamma, approximate_theta
from .analytics.portfolio import (
    BatchRiskSummary,
    PortfolioMetrics,
    analyze_batch_risks,
    calculate_portfolio_metrics,
)
from .analytics.risk import (
    DEFAULT_RISK_THRESHOLDS,
    RiskContext,
    RiskThresholds,
    analyze_risks,
    check_assignment_risk,
    check_price_risk,
    check_return_risk,
    check_time_risk,
)
from .models import (
    CashSecuredPutInputs,
    ChartDataPoint,
    CoveredCallInputs,
    LongCallInputs,
    RiskFlag,
)
from .strategies import (
    CashSecuredPut,
    CoveredCall,
    LongCall,
    create_cash_secured_put,
    create_covered_call,
    create_long_call,
)
from .utils.error_handling import CalculationError, ConfigurationError, ValidationError
from .utils.numeric import (
    CONTRACT_SHARE_MULTIPLIER,
    annualize_return,
    clamp,
    days_between,
    generate_price_range,
    round_to,
)

__version__ = "0.1.0"

__all__ = [
    # Numeric utilities
    "CONTRACT_SHARE_MULTIPLIER",
    "round_to",
    "days_between",
    "annualize_return",
    "generate_price_range",
    "clamp",
    # Greeks
    "approximate_delta",
    "approximate_theta",
    "approximate_gamma",
    # Risk
    "RiskThresholds",
    "RiskContext",
    "DEFAULT_RISK_THRESHOLDS",
    "analyze_risks",
    "check_time_risk",
    "check_return_risk",
    "check_price_risk",
    "check_assignment_risk",
    # Models
    "RiskFlag",
    "ChartDataPoint",
    "CoveredCallInputs",
    "CashSecuredPutInputs",
    "LongCallInputs",
    # Strategies
    "CoveredCall",
    "CashSecuredPut",
    "LongCall",
    "create_covered_call",
    "create_cash_secured_put",
    "create_long_call",
    # Portfolio
    "BatchRiskSummary",
    "PortfolioMetrics",
    "analyze_batch_risks",
    "calculate_portfolio_metrics",
    # Errors
    "CalculationError",
    "ValidationError",
    "ConfigurationError",
]
