"""Cash-secured put metrics: a short put backed by cash for assignment."""

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
from ..models.inputs import CashSecuredPutInputs
from ..models.metrics import AnnualizedReturns, CashSecuredPutMetrics
from ..models.risk_flag import RiskFlag
from ..utils.error_handling import safe_divide
from ..utils.numeric import (
    CONTRACT_SHARE_MULTIPLIER,
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

logger = logging.getLogger("options_calc.cash_secured_put")

CHART_RANGE_PERCENT = 40
CHART_POINTS = 15
BREAKEVEN_TOLERANCE = 0.01

# Cash below this share of strike * shares is logged as under-secured
MIN_SECURED_RATIO = 0.9


class CashSecuredPut:
    """Cash-secured put position.

    Missing cash_secured defaults to the full assignment cost
    (strike * shares); missing current_price falls back to the strike.
    """

    def __init__(self, inputs: CashSecuredPutInputs, as_of: date | datetime | None = None):
        """Validate inputs and build the model.

        Args:
            inputs: Cash-secured put position data
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
        require_non_negative("Premium", inputs.premium)
        require_non_negative("Fees", inputs.fees)
        require_positive("Contracts", inputs.contracts)
        if inputs.cash_secured is not None:
            require_positive("Cash secured", inputs.cash_secured)
        if inputs.current_price is not None:
            require_positive("Current price", inputs.current_price)
        require_future_expiration(inputs.expiration, self._as_of)

        required_cash = inputs.strike * self.shares
        if self.cash_secured < required_cash * MIN_SECURED_RATIO:
            logger.warning(
                "Cash secured ($%.2f) may be insufficient for strike $%.2f (requires ~$%.2f)",
                self.cash_secured, inputs.strike, required_cash,
            )

    @property
    def inputs(self) -> CashSecuredPutInputs:
        return self._inputs

    @property
    def as_of(self) -> date | datetime:
        return self._as_of

    @property
    def shares(self) -> int:
        """Shares bought on assignment."""
        return self._inputs.contracts * CONTRACT_SHARE_MULTIPLIER

    @property
    def cash_secured(self) -> float:
        if self._inputs.cash_secured is None:
            return self._inputs.strike * self.shares
        return self._inputs.cash_secured

    @property
    def current_price(self) -> float:
        if self._inputs.current_price is None:
            return self._inputs.strike
        return self._inputs.current_price

    # ------------------------------------------------------------------
    # Core formulas
    # ------------------------------------------------------------------

    def net_premium(self) -> float:
        return self._inputs.premium - self._inputs.fees

    def breakeven(self) -> float:
        """Strike reduced by net premium per share, rounded to cents."""
        return round_to(self._inputs.strike - self.net_premium() / self.shares, 2)

    def effective_basis(self) -> float:
        """Per-share cost of the stock if assigned."""
        return self.breakeven()

    def would_be_stock_basis(self) -> float:
        return self.effective_basis()

    def max_profit(self) -> float:
        """Net premium, kept in full when the put expires worthless."""
        return self.net_premium()

    def max_loss(self) -> float:
        """Loss if assigned and the stock goes to zero."""
        return self._inputs.strike * self.shares - self.net_premium()

    def return_on_outlay(self) -> float:
        """Max profit as a percentage of cash secured."""
        return self.max_profit() / self.cash_secured * 100

    def return_on_risk(self) -> float:
        return safe_divide(self.max_profit(), self.max_loss()) * 100

    def annualized_returns(self) -> AnnualizedReturns:
        days = self.days_to_expiration()
        return AnnualizedReturns(
            roo=annualize_return(self.return_on_outlay(), days),
            ror=annualize_return(self.return_on_risk(), days),
        )

    def assignment_pnl(self) -> float:
        """Assignment at the strike is P&L neutral, so only the premium counts."""
        return self.max_profit()

    def expiration_pnl(self, share_price: float) -> float:
        """Position P&L at expiration for a given share price."""
        if share_price >= self._inputs.strike:
            return self.net_premium()
        assignment_loss = (self._inputs.strike - share_price) * self.shares
        return self.net_premium() - assignment_loss

    def days_to_expiration(self) -> int:
        return days_between(self._as_of, self._inputs.expiration)

    # ------------------------------------------------------------------
    # Greeks
    # ------------------------------------------------------------------

    def current_delta(self) -> float:
        return approximate_delta(self.current_price, self._inputs.strike, self.days_to_expiration(), 'put')

    def current_theta(self) -> float:
        return approximate_theta(self._inputs.premium, self.days_to_expiration())

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def is_in_the_money(self) -> bool:
        """A put is in the money with the stock below the strike."""
        return self.current_price < self._inputs.strike

    def intrinsic_value(self) -> float:
        """Intrinsic value of the short puts in dollars."""
        return max(0.0, self._inputs.strike - self.current_price) * self.shares

    def is_likely_assignment(self) -> bool:
        return (
            self.is_in_the_money()
            and self.days_to_expiration() <= ASSIGNMENT_WINDOW_DAYS
            and self.intrinsic_value() >= self._inputs.premium * ASSIGNMENT_INTRINSIC_RATIO
        )

    def payoff_chart(self, price_range: Optional[Iterable[float]] = None) -> List[ChartDataPoint]:
        """Expiration payoff curve (default: ±40% around the current price)."""
        if price_range is None:
            price_range = generate_price_range(
                self.current_price,
                CHART_POINTS,
                step_percent_for_range(CHART_RANGE_PERCENT, CHART_POINTS),
            )
        return build_payoff_chart(price_range, self.expiration_pnl, self.breakeven(), BREAKEVEN_TOLERANCE)

    def analyze_risks(self, thresholds: Optional[RiskThresholds] = None) -> List[RiskFlag]:
        return analyze_risks(RiskContext(
            return_percent=self.return_on_outlay(),
            days=self.days_to_expiration(),
            current_price=self.current_price,
            breakeven=self.breakeven(),
            expiration=self._inputs.expiration,
            thresholds=thresholds or DEFAULT_RISK_THRESHOLDS,
            in_the_money=self.is_in_the_money(),
            intrinsic_value=self.intrinsic_value(),
            premium_collected=self._inputs.premium,
        ))

    def get_all_metrics(self) -> CashSecuredPutMetrics:
        """Snapshot of every metric, recomputed on each call."""
        annualized = self.annualized_returns()
        return CashSecuredPutMetrics(
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
            effective_basis=self.effective_basis(),
        )

    def summary(self) -> str:
        inputs = self._inputs
        metrics = self.get_all_metrics()
        risks = self.analyze_risks()

        return "\n".join([
            f"Cash-Secured Put: ${inputs.strike:.2f} strike, expires {inputs.expiration:%Y-%m-%d}",
            f"Premium Received: ${inputs.premium:.2f} (net: ${self.net_premium():.2f})",
            f"Cash Secured: ${self.cash_secured:.2f}",
            f"Current Price: ${self.current_price:.2f}",
            f"Breakeven: ${metrics.breakeven:.2f}",
            f"Max Profit: ${metrics.max_profit:.2f} ({metrics.annualized_roo:.2f}% annualized ROO)",
            f"If Assigned: Effective basis ${metrics.effective_basis:.2f}",
            f"Days to Expiration: {metrics.days_to_expiration}",
            f"Status: {'In-The-Money' if self.is_in_the_money() else 'Out-Of-The-Money'}",
            f"Risks: {len(risks)} flag(s)" if risks else "No risk flags",
        ])

    def __repr__(self) -> str:
        return (f"CashSecuredPut({self._inputs.contracts}x P{self._inputs.strike:g} "
                f"BE={self.breakeven():.2f} DTE={self.days_to_expiration()})")
