"""Risk flag analysis for option positions.

Turns computed position metrics into categorized RiskFlags. Each rule is
evaluated independently and flags are additive; the output order is
time, return, price, assignment.
"""

import logging
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Literal, Optional

from ..models.risk_flag import SEVERITY_ORDER, RiskFlag, Severity
from ..utils.error_handling import ConfigurationError
from ..utils.numeric import annualize_return

logger = logging.getLogger("options_calc.risk")

# Intrinsic value must reach this share of premium collected to flag assignment
ASSIGNMENT_INTRINSIC_RATIO = 0.8

# is_likely_assignment() looks this many days ahead
ASSIGNMENT_WINDOW_DAYS = 7

# No time flag beyond this many days to expiration
TIME_RISK_HORIZON_DAYS = 30


@dataclass(frozen=True)
class RiskThresholds:
    """Tunable limits for risk analysis.

    Attributes:
        low_return_percent: Minimum acceptable annualized return (%)
        critical_days: Days to expiration at or below which time risk is critical
        high_days: Days to expiration at or below which time risk is high
        price_distance_percent: Adverse distance from breakeven (%) that triggers a price flag
    """

    low_return_percent: float = 15.0
    critical_days: int = 3
    high_days: int = 7
    price_distance_percent: float = 5.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{f.name} must be a number, got {value!r}")

        if self.low_return_percent < 0:
            raise ConfigurationError(f"low_return_percent cannot be negative: {self.low_return_percent}")
        if self.critical_days < 0:
            raise ConfigurationError(f"critical_days cannot be negative: {self.critical_days}")
        if self.high_days < self.critical_days:
            raise ConfigurationError(
                f"high_days ({self.high_days}) must be >= critical_days ({self.critical_days})"
            )
        if self.price_distance_percent < 0:
            raise ConfigurationError(
                f"price_distance_percent cannot be negative: {self.price_distance_percent}"
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RiskThresholds":
        """Create RiskThresholds from a partial mapping (e.g., from YAML).

        Args:
            config: Any subset of the four threshold fields

        Returns:
            RiskThresholds with unspecified fields at their defaults

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ConfigurationError(f"Unknown risk threshold option(s): {', '.join(sorted(unknown))}")

        return cls(**config)

    def with_overrides(self, **overrides: Any) -> "RiskThresholds":
        """Copy with some fields replaced; self is left untouched."""
        return self.from_dict({**self.to_dict(), **overrides})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_RISK_THRESHOLDS = RiskThresholds()


@dataclass(frozen=True)
class RiskContext:
    """Everything the analyzer needs to know about one position.

    return_percent=None skips the return rule; intrinsic_value=None skips
    the assignment rule (it only applies to short options).
    """

    return_percent: Optional[float]
    days: int
    current_price: float
    breakeven: float
    expiration: date | datetime
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS
    adverse_direction: Literal["below", "above"] = "below"
    in_the_money: bool = False
    intrinsic_value: Optional[float] = None
    premium_collected: float = 0.0


def check_time_risk(
    days: int,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> Optional[RiskFlag]:
    """Flag positions approaching expiration."""
    if days <= thresholds.critical_days:
        severity: Severity = 'critical'
    elif days <= thresholds.high_days:
        severity = 'high'
    elif days <= TIME_RISK_HORIZON_DAYS:
        severity = 'medium'
    else:
        return None

    return RiskFlag(
        severity=severity,
        category='time',
        message=f"Expiration approaching: {days} day(s) remaining",
    )


def check_return_risk(
    return_percent: float,
    days: int,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> Optional[RiskFlag]:
    """Flag positions whose annualized return falls short of the target.

    Severity grows with the shortfall: below target is medium, below half
    the target is high, a negative return is critical.
    """
    annualized = annualize_return(return_percent, days)
    target = thresholds.low_return_percent

    if annualized >= target:
        return None

    if annualized < 0:
        severity: Severity = 'critical'
    elif annualized < target / 2:
        severity = 'high'
    else:
        severity = 'medium'

    return RiskFlag(
        severity=severity,
        category='return',
        message=f"Low annualized return: {annualized:.2f}% (target: {target:.2f}%)",
    )


def check_price_risk(
    current_price: float,
    breakeven: float,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
    adverse_direction: Literal["below", "above"] = "below",
) -> Optional[RiskFlag]:
    """Flag a price that has moved too far past breakeven on the losing side.

    Args:
        current_price: Current underlying price
        breakeven: Position breakeven price
        thresholds: Risk thresholds
        adverse_direction: Side of breakeven where the position loses money

    Returns:
        RiskFlag or None. A non-positive breakeven never flags.
    """
    if breakeven <= 0:
        return None

    adverse = current_price < breakeven if adverse_direction == "below" else current_price > breakeven
    if not adverse:
        return None

    distance_pct = abs(current_price - breakeven) / breakeven * 100
    limit = thresholds.price_distance_percent
    if distance_pct <= limit:
        return None

    severity: Severity = 'high' if distance_pct > limit * 2 else 'medium'
    return RiskFlag(
        severity=severity,
        category='price',
        message=f"Price {distance_pct:.1f}% {adverse_direction} breakeven of ${breakeven:.2f}",
    )


def check_assignment_risk(
    in_the_money: bool,
    days: int,
    intrinsic_value: float,
    premium_collected: float,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> Optional[RiskFlag]:
    """Flag a short option that is likely to be assigned.

    In the money, inside the critical window, and intrinsic value of at
    least 80% of the premium collected.
    """
    if not in_the_money or days > thresholds.critical_days:
        return None
    if intrinsic_value < premium_collected * ASSIGNMENT_INTRINSIC_RATIO:
        return None

    return RiskFlag(
        severity='high',
        category='assignment',
        message=(f"Likely assignment: intrinsic value ${intrinsic_value:.2f} "
                 f"vs premium ${premium_collected:.2f} with {days} day(s) left"),
    )


def analyze_risks(context: RiskContext) -> List[RiskFlag]:
    """Run every risk rule against a position.

    Args:
        context: RiskContext describing the position

    Returns:
        Flags in rule order (time, return, price, assignment). An empty
        list means no risks were found.
    """
    thresholds = context.thresholds
    candidates = [
        check_time_risk(context.days, thresholds),
        None if context.return_percent is None
        else check_return_risk(context.return_percent, context.days, thresholds),
        check_price_risk(context.current_price, context.breakeven, thresholds, context.adverse_direction),
        None if context.intrinsic_value is None
        else check_assignment_risk(
            context.in_the_money, context.days, context.intrinsic_value,
            context.premium_collected, thresholds,
        ),
    ]
    risks = [flag for flag in candidates if flag is not None]

    logger.debug(
        "Risk analysis: %d flag(s), %d day(s) to %s",
        len(risks), context.days, f"{context.expiration:%Y-%m-%d}",
    )
    return risks


def highest_severity(flags: Iterable[RiskFlag]) -> Optional[Severity]:
    """Most severe level among flags, or None if there are none."""
    ranked = [flag.rank for flag in flags]
    if not ranked:
        return None
    return SEVERITY_ORDER[max(ranked)]
