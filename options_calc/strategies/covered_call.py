"""Covered call metrics: long shares with a short call written against them."""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from ..analytics.greeks import approximate_delta, approximate_theta
from ..analytics.risk import (
    ASSIGNMENT_INTRINSIC_RATIO,
    ASSIGNMENT_WINDOW_DAYS,
    DEFAULT_RISK_THRESHOLDS,
    RiskContext,
    RiskThresholds,
    analyze_risks,
)
from ..models.chart import ChartDataPoint
from ..models.inputs import CoveredCallInputs
from ..models.metrics import AnnualizedReturns, CoveredCallMetrics
from ..models.risk_flag import RiskFlag
from ..utils.error_handling import safe_divide
from ..utils.numeric import (
    annualize_return,
    days_between,
    generate_price_range,
    round_to,
    step_percent_for_range,
)
from .base import (
    build_payoff_chart,
    require_future_expiration,
    require_non_negative,
    require_positive,
)

logger = logging.getLogger("options_calc.covered_call")

CHART_RANGE_PERCENT = 30
CHART_POINTS = 15
# Coarser grid than the other strategies, so a wider band counts as breakeven
BREAKEVEN_TOLERANCE = 0.5


class CoveredCall:
    """Covered call position.

    Validates its inputs once at construction and is read-only afterwards;
    every query is a pure function of the inputs and the as-of date.

    Example:
        >>> cc = CoveredCall(CoveredCallInputs(
        ...     share_price=98.0, share_basis=95.0, share_qty=100, strike=100.0,
        ...     premium=250.0, fees=0.65, expiration=date(2024, 2, 16)),
        ...     as_of=date(2024, 1, 15))
        >>> cc.breakeven()
        92.51
    """

    def __init__(self, inputs: CoveredCallInputs, as_of: date | datetime | None = None):
        """Validate inputs and build the model.

        Args:
            inputs: Covered call position data
            as_of: Evaluation date for day counts (default: now)

        Raises:
            ValidationError: If any input violates an invariant
        """
        self._inputs = inputs
        self._as_of = as_of if as_of is not None else datetime.now()
        self._validate()

        logger.debug("Created %r as of %s", inputs, self._as_of)

    def _validate(self) -> None:
        inputs = self._inputs
        require_positive("Share price", inputs.share_price)
        require_positive("Share basis", inputs.share_basis)
        require_positive("Share quantity", inputs.share_qty)
        require_positive("Strike price", inputs.strike)
        require_non_negative("Premium", inputs.premium)
        require_non_negative("Fees", inputs.fees)
        require_future_expiration(inputs.expiration, self._as_of)

    @property
    def inputs(self) -> CoveredCallInputs:
        return self._inputs

    @property
    def as_of(self) -> date | datetime:
        return self._as_of

    # ------------------------------------------------------------------
    # Core formulas
    # ------------------------------------------------------------------

    def net_premium(self) -> float:
        """Premium received less fees."""
        return self._inputs.premium - self._inputs.fees

    def outlay(self) -> float:
        """Capital tied up in the shares."""
        return self._inputs.share_basis * self._inputs.share_qty

    def breakeven(self) -> float:
        """Share basis reduced by net premium per share, rounded to cents."""
        return round_to(self._inputs.share_basis - self.net_premium() / self._inputs.share_qty, 2)

    def max_profit(self) -> float:
        """Capital gain up to the strike plus net premium (shares called away)."""
        return self._called_away_pnl()

    def max_loss(self) -> float:
        """Loss if the shares go to zero, cushioned by net premium."""
        return self.outlay() - self.net_premium()

    def return_on_outlay(self) -> float:
        """Max profit as a percentage of share capital."""
        return self.max_profit() / self.outlay() * 100

    def return_on_risk(self) -> float:
        """Max profit as a percentage of max loss, 0 when max loss is 0."""
        return safe_divide(self.max_profit(), self.max_loss()) * 100

    def annualized_returns(self) -> AnnualizedReturns:
        days = self.days_to_expiration()
        return AnnualizedReturns(
            roo=annualize_return(self.return_on_outlay(), days),
            ror=annualize_return(self.return_on_risk(), days),
        )

    def assignment_pnl(self) -> float:
        """P&L if the call is assigned at expiration."""
        return self.max_profit()

    def _called_away_pnl(self) -> float:
        inputs = self._inputs
        return (inputs.strike - inputs.share_basis) * inputs.share_qty + self.net_premium()

    def expiration_pnl(self, share_price: float) -> float:
        """Position P&L at expiration for a given share price.

        At or above the strike the shares are called away and the gain is
        capped; below it the call expires worthless and the shares are kept.
        """
        inputs = self._inputs
        if share_price >= inputs.strike:
            return self._called_away_pnl()
        return (share_price - inputs.share_basis) * inputs.share_qty + self.net_premium()

    def days_to_expiration(self) -> int:
        return days_between(self._as_of, self._inputs.expiration)

    # ------------------------------------------------------------------
    # Greeks
    # ------------------------------------------------------------------

    def current_delta(self) -> float:
        """Approximate delta of the short call at the current share price."""
        return approximate_delta(
            self._inputs.share_price, self._inputs.strike, self.days_to_expiration(), 'call'
        )

    def current_theta(self) -> float:
        return approximate_theta(self._inputs.premium, self.days_to_expiration())

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def is_in_the_money(self) -> bool:
        return self._inputs.share_price >= self._inputs.strike

    def intrinsic_value(self) -> float:
        """Intrinsic value of the short call across all covered shares, in dollars."""
        return max(0.0, self._inputs.share_price - self._inputs.strike) * self._inputs.share_qty

    def is_likely_assignment(self) -> bool:
        """Deep ITM with a week or less left and little time value remaining."""
        return (
            self.is_in_the_money()
            and self.days_to_expiration() <= ASSIGNMENT_WINDOW_DAYS
            and self.intrinsic_value() >= self._inputs.premium * ASSIGNMENT_INTRINSIC_RATIO
        )

    def payoff_chart(self, price_range: Optional[Iterable[float]] = None) -> List[ChartDataPoint]:
        """Expiration payoff curve.

        Args:
            price_range: Prices to evaluate (default: ±30% around the share price)

        Returns:
            List of ChartDataPoint in price order
        """
        if price_range is None:
            price_range = generate_price_range(
                self._inputs.share_price,
                CHART_POINTS,
                step_percent_for_range(CHART_RANGE_PERCENT, CHART_POINTS),
            )
        return build_payoff_chart(price_range, self.expiration_pnl, self.breakeven(), BREAKEVEN_TOLERANCE)

    def analyze_risks(self, thresholds: Optional[RiskThresholds] = None) -> List[RiskFlag]:
        """Risk flags for this position (return measured as return on outlay)."""
        return analyze_risks(RiskContext(
            return_percent=self.return_on_outlay(),
            days=self.days_to_expiration(),
            current_price=self._inputs.share_price,
            breakeven=self.breakeven(),
            expiration=self._inputs.expiration,
            thresholds=thresholds or DEFAULT_RISK_THRESHOLDS,
            in_the_money=self.is_in_the_money(),
            intrinsic_value=self.intrinsic_value(),
            premium_collected=self._inputs.premium,
        ))

    def get_all_metrics(self) -> CoveredCallMetrics:
        """Snapshot of every metric, recomputed on each call."""
        annualized = self.annualized_returns()
        return CoveredCallMetrics(
            breakeven=self.breakeven(),
            max_profit=self.max_profit(),
            max_loss=self.max_loss(),
            return_on_outlay=self.return_on_outlay(),
            return_on_risk=self.return_on_risk(),
            annualized_roo=annualized.roo,
            annualized_ror=annualized.ror,
            assignment_pnl=self.assignment_pnl(),
            current_delta=self.current_delta(),
            current_theta=self.current_theta(),
            days_to_expiration=self.days_to_expiration(),
        )

    def summary(self) -> str:
        """Multi-line plain-text description of the position."""
        inputs = self._inputs
        metrics = self.get_all_metrics()
        risks = self.analyze_risks()

        return "\n".join([
            f"Covered Call: {inputs.share_qty:g} shares @ ${inputs.share_basis:.2f}",
            f"Call Sold: ${inputs.strike:.2f} strike, expires {inputs.expiration:%Y-%m-%d}",
            f"Premium Received: ${inputs.premium:.2f} (net: ${self.net_premium():.2f})",
            f"Breakeven: ${metrics.breakeven:.2f}",
            f"Max Profit: ${metrics.max_profit:.2f} ({metrics.annualized_roo:.2f}% annualized ROO)",
            f"Days to Expiration: {metrics.days_to_expiration}",
            f"Status: {'In-The-Money' if self.is_in_the_money() else 'Out-Of-The-Money'}",
            f"Risks: {len(risks)} flag(s)" if risks else "No risk flags",
        ])

    def __repr__(self) -> str:
        return (f"CoveredCall({self._inputs.share_qty:g} sh C{self._inputs.strike:g} "
                f"BE={self.breakeven():.2f} DTE={self.days_to_expiration()})")
