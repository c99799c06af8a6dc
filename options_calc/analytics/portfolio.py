"""Portfolio-level aggregation across strategy positions.

Rolls up risk flags and headline metrics for a batch of positions.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from ..models.risk_flag import RISK_CATEGORIES, SEVERITY_ORDER, RiskCategory, Severity
from ..strategies.base import StrategyMetrics
from ..utils.error_handling import safe_divide
from ..utils.numeric import round_to
from .risk import highest_severity

logger = logging.getLogger("options_calc.portfolio")


@dataclass(frozen=True)
class BatchRiskSummary:
    """Risk flag counts across a batch of positions."""

    total_positions: int
    total_risks: int
    risks_by_category: Dict[RiskCategory, int]
    risks_by_severity: Dict[Severity, int]
    highest_severity: Optional[Severity]


@dataclass(frozen=True)
class PortfolioMetrics:
    """Headline totals across a batch of positions.

    total_max_profit is inf when any position has unbounded upside.
    """

    total_max_profit: float
    total_max_loss: float
    average_days_to_expiration: float
    portfolio_roo: float


def analyze_batch_risks(positions: Sequence[StrategyMetrics]) -> BatchRiskSummary:
    """Run risk analysis on every position and count the flags.

    Args:
        positions: Strategy models (default thresholds are used per model)

    Returns:
        BatchRiskSummary with counts by category and severity
    """
    all_risks = [flag for position in positions for flag in position.analyze_risks()]

    by_category: Dict[RiskCategory, int] = {category: 0 for category in RISK_CATEGORIES}
    by_severity: Dict[Severity, int] = {severity: 0 for severity in SEVERITY_ORDER}
    for flag in all_risks:
        by_category[flag.category] += 1
        by_severity[flag.severity] += 1

    logger.debug("Batch risk analysis: %d flag(s) across %d position(s)", len(all_risks), len(positions))

    return BatchRiskSummary(
        total_positions=len(positions),
        total_risks=len(all_risks),
        risks_by_category=by_category,
        risks_by_severity=by_severity,
        highest_severity=highest_severity(all_risks),
    )


def calculate_portfolio_metrics(positions: Sequence[StrategyMetrics]) -> PortfolioMetrics:
    """Sum max profit and max loss and average days to expiration.

    Portfolio ROO is total max profit over total max loss, assuming equal
    capital allocation; 0 when total max loss is 0.

    Args:
        positions: Strategy models

    Returns:
        PortfolioMetrics (all zeros for an empty batch)
    """
    if not positions:
        return PortfolioMetrics(
            total_max_profit=0.0,
            total_max_loss=0.0,
            average_days_to_expiration=0.0,
            portfolio_roo=0.0,
        )

    total_max_profit = sum(position.max_profit() for position in positions)
    total_max_loss = sum(position.max_loss() for position in positions)
    average_dte = sum(position.days_to_expiration() for position in positions) / len(positions)
    portfolio_roo = safe_divide(total_max_profit, total_max_loss) * 100

    return PortfolioMetrics(
        total_max_profit=round_to(total_max_profit, 2),
        total_max_loss=round_to(total_max_loss, 2),
        average_days_to_expiration=round_to(average_dte, 1),
        portfolio_roo=round_to(portfolio_roo, 2),
    )
