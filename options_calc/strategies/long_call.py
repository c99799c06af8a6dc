"""Long call metrics: a purchased call with unbounded upside."""

import logging
import math
from datetime import date, datetime
from typing import Iterable, List, Literal, Optional

from ..analytics.greeks import approximate_delta, approximate_theta
from ..analytics.risk import RiskContext, RiskThresholds, analyze_risks
from ..models.chart import ChartDataPoint
from ..models.inputs import LongCallInputs
from ..models.metrics import LongCallMetrics
from ..models.risk_flag import RiskFlag
from ..utils.error_handling import safe_divide
from ..utils.numeric import (
    CONTRACT_SHARE_MULTIPLIER,
    clamp,
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

logger = logging.getLogger("options_calc.long_call")

Classification = Literal["Deep ITM", "ITM", "ATM", "OTM", "Deep OTM"]

CHART_RANGE_PERCENT = 50
CHART_POINTS = 15
BREAKEVEN_TOLERANCE = 0.01

# Moneyness (%) boundaries for classification
ATM_BAND_PERCENT = 2
DEEP_MONEYNESS_PERCENT = 10

# probability_itm heuristic
BASE_PROBABILITY = 50.0
PROBABILITY_PER_MONEYNESS_POINT = 2.0
TIME_PENALTY_WINDOW_DAYS = 30
MAX_TIME_PENALTY = 20.0

# Out of the money with this many days or fewer gets an extra price flag
OTM_SHORT_TIME_DAYS = 14

# Default limits for long calls; the return limit is unused
LONG_CALL_RISK_THRESHOLDS = RiskThresholds(
    low_return_percent=0.0,
    critical_days=7,
    high_days=14,
    price_distance_percent=10.0,
)


class LongCall:
    """Long call position.

    max_profit() is float('inf'); every other query is finite for a
    validated instance.
    """

    def __init__(self, inputs: LongCallInputs, as_of: date | datetime | None = None):
        """Validate inputs and build the model.

        Args:
            inputs: Long call position data
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
        require_positive("Strike price", inputs.strike)
        require_positive("Premium", inputs.premium)
        require_non_negative("Fees", inputs.fees)
        require_positive("Current price", inputs.current_price)
        require_positive("Contracts", inputs.contracts)
        if inputs.current_premium is not None:
            require_non_negative("Current premium", inputs.current_premium)
        require_future_expiration(inputs.expiration, self._as_of)

    @property
    def inputs(self) -> LongCallInputs:
        return self._inputs

    @property
    def as_of(self) -> date | datetime:
        return self._as_of

    @property
    def shares(self) -> int:
        """Shares controlled by the position."""
        return self._inputs.contracts * CONTRACT_SHARE_MULTIPLIER

    # ------------------------------------------------------------------
    # Core formulas
    # ------------------------------------------------------------------

    def total_cost(self) -> float:
        """Premium paid plus fees."""
        return self._inputs.premium + self._inputs.fees

    def breakeven(self) -> float:
        """Strike plus cost per share, rounded to cents."""
        return round_to(self._inputs.strike + self.total_cost() / self.shares, 2)

    def max_profit(self) -> float:
        return math.inf

    def max_loss(self) -> float:
        """Everything paid for the position."""
        return round_to(self.total_cost(), 2)

    def intrinsic_value(self, share_price: Optional[float] = None) -> float:
        """Per-share intrinsic value at share_price (default: current price)."""
        price = self._inputs.current_price if share_price is None else share_price
        return round_to(max(0.0, price - self._inputs.strike), 2)

    def _premium_now(self, current_premium: Optional[float]) -> Optional[float]:
        if current_premium is not None:
            return current_premium
        return self._inputs.current_premium

    def time_value(
        self,
        share_price: Optional[float] = None,
        current_premium: Optional[float] = None,
    ) -> float:
        """Current premium in excess of intrinsic value, in dollars."""
        premium = self._premium_now(current_premium) or 0.0
        intrinsic_dollars = self.intrinsic_value(share_price) * self.shares
        return round_to(max(0.0, premium - intrinsic_dollars), 2)

    def profit_loss(
        self,
        share_price: Optional[float] = None,
        current_premium: Optional[float] = None,
    ) -> float:
        """Mark-to-market P&L.

        Uses the current premium when known, otherwise intrinsic value.
        """
        current_value = self._premium_now(current_premium)
        if current_value is None:
            current_value = self.intrinsic_value(share_price) * self.shares
        return round_to(current_value - self.total_cost(), 2)

    def unrealized_pnl(self) -> float:
        return self.profit_loss()

    def expiration_pnl(self, share_price: float) -> float:
        """Position P&L at expiration for a given share price."""
        intrinsic = share_price - self._inputs.strike
        if intrinsic < 0:
            intrinsic = 0.0
        return round_to(intrinsic * self.shares - self.total_cost(), 2)

    def percentage_gain(self) -> float:
        """Unrealized P&L as a percentage of total cost."""
        return round_to(safe_divide(self.unrealized_pnl(), self.total_cost()) * 100, 2)

    def leverage_ratio(self) -> float:
        """Dollars of stock controlled per dollar paid."""
        notional = self._inputs.current_price * self.shares
        return round_to(safe_divide(notional, self.total_cost()), 2)

    def days_to_expiration(self) -> int:
        return days_between(self._as_of, self._inputs.expiration)

    # ------------------------------------------------------------------
    # Greeks
    # ------------------------------------------------------------------

    def current_delta(self) -> float:
        return approximate_delta(
            self._inputs.current_price, self._inputs.strike, self.days_to_expiration(), 'call'
        )

    def current_theta(self) -> float:
        premium = self._inputs.current_premium
        if premium is None:
            premium = self._inputs.premium
        return approximate_theta(premium, self.days_to_expiration())

    # ------------------------------------------------------------------
    # Moneyness
    # ------------------------------------------------------------------

    def is_in_the_money(self) -> bool:
        return self._inputs.current_price > self._inputs.strike

    def is_profitable(self) -> bool:
        return self._inputs.current_price > self.breakeven()

    def moneyness(self) -> float:
        """Percent by which the current price exceeds the strike."""
        return round_to((self._inputs.current_price - self._inputs.strike) / self._inputs.strike * 100, 2)

    def get_classification(self) -> Classification:
        moneyness = self.moneyness()

        if moneyness > DEEP_MONEYNESS_PERCENT:
            return "Deep ITM"
        if moneyness > ATM_BAND_PERCENT:
            return "ITM"
        if abs(moneyness) <= ATM_BAND_PERCENT:
            return "ATM"
        if moneyness > -DEEP_MONEYNESS_PERCENT:
            return "OTM"
        return "Deep OTM"

    def probability_itm(self) -> float:
        """Rough chance (%) of finishing in the money.

        Starts at 50, moves 2 points per 1% of moneyness, and an
        out-of-the-money call loses up to 20 more points as the last 30
        days run out.
        """
        moneyness = self.moneyness()
        days = self.days_to_expiration()

        probability = BASE_PROBABILITY + moneyness * PROBABILITY_PER_MONEYNESS_POINT

        if moneyness < 0:
            time_fraction = max(0, TIME_PENALTY_WINDOW_DAYS - days) / TIME_PENALTY_WINDOW_DAYS
            probability -= time_fraction * MAX_TIME_PENALTY

        return clamp(round_to(probability, 1), 0.0, 100.0)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def payoff_chart(self, price_range: Optional[Iterable[float]] = None) -> List[ChartDataPoint]:
        """Expiration payoff curve (default: ±50% around the current price)."""
        if price_range is None:
            price_range = generate_price_range(
                self._inputs.current_price,
                CHART_POINTS,
                step_percent_for_range(CHART_RANGE_PERCENT, CHART_POINTS),
            )
        return build_payoff_chart(price_range, self.expiration_pnl, self.breakeven(), BREAKEVEN_TOLERANCE)

    def analyze_risks(self, thresholds: Optional[RiskThresholds] = None) -> List[RiskFlag]:
        """Time decay and breakeven-distance flags.

        No return or assignment rule applies to a long option. An
        out-of-the-money call with two weeks or less left gets an extra
        high price flag.
        """
        days = self.days_to_expiration()
        risks = analyze_risks(RiskContext(
            return_percent=None,
            days=days,
            current_price=self._inputs.current_price,
            breakeven=self.breakeven(),
            expiration=self._inputs.expiration,
            thresholds=thresholds or LONG_CALL_RISK_THRESHOLDS,
        ))

        if not self.is_in_the_money() and days <= OTM_SHORT_TIME_DAYS:
            risks.append(RiskFlag(
                severity='high',
                category='price',
                message="Out-of-the-money with limited time remaining",
            ))

        return risks

    def get_all_metrics(self) -> LongCallMetrics:
        """Snapshot of every metric, recomputed on each call."""
        return LongCallMetrics(
            breakeven=self.breakeven(),
            max_profit=self.max_profit(),
            max_loss=self.max_loss(),
            intrinsic_value=self.intrinsic_value(),
            time_value=self.time_value(),
            unrealized_pnl=self.unrealized_pnl(),
            current_delta=self.current_delta(),
            current_theta=self.current_theta(),
            days_to_expiration=self.days_to_expiration(),
            percentage_gain=self.percentage_gain(),
            leverage_ratio=self.leverage_ratio(),
            moneyness=self.moneyness(),
            classification=self.get_classification(),
            probability_itm=self.probability_itm(),
        )

    def summary(self) -> str:
        inputs = self._inputs
        metrics = self.get_all_metrics()
        risks = self.analyze_risks()

        return "\n".join([
            f"Long Call: ${inputs.strike:.2f} strike, expires {inputs.expiration:%Y-%m-%d}",
            f"Premium Paid: ${inputs.premium:.2f} (total cost: ${self.max_loss():.2f})",
            f"Current Price: ${inputs.current_price:.2f}",
            f"Breakeven: ${metrics.breakeven:.2f}",
            f"Intrinsic Value: ${metrics.intrinsic_value:.2f}",
            f"Unrealized P&L: ${metrics.unrealized_pnl:.2f} ({metrics.percentage_gain:.2f}%)",
            f"Classification: {metrics.classification}",
            f"Days to Expiration: {metrics.days_to_expiration}",
            f"Probability ITM: {metrics.probability_itm:.1f}%",
            f"Risks: {len(risks)} flag(s)" if risks else "No risk flags",
        ])

    def __repr__(self) -> str:
        return (f"LongCall({self._inputs.contracts}x C{self._inputs.strike:g} "
                f"{self.get_classification()} DTE={self.days_to_expiration()})")
