"""Tests for the long call model."""

import math
from datetime import date

import pytest

from options_calc.models.inputs import LongCallInputs
from options_calc.models.metrics import LongCallMetrics
from options_calc.strategies.long_call import LONG_CALL_RISK_THRESHOLDS, LongCall
from options_calc.utils.error_handling import ValidationError

AS_OF = date(2024, 1, 15)
EXPIRATION = date(2024, 3, 15)


def make_inputs(**overrides) -> LongCallInputs:
    """One $100 call bought for $450 + $0.65, stock at $103, now worth $520."""
    fields = dict(
        strike=100.0,
        premium=450.0,
        fees=0.65,
        current_price=103.0,
        current_premium=520.0,
        expiration=EXPIRATION,
    )
    fields.update(overrides)
    return LongCallInputs(**fields)


@pytest.fixture
def long_call():
    return LongCall(make_inputs(), as_of=AS_OF)


class TestLongCallFormulas:
    """Test suite for long call core formulas."""

    def test_breakeven(self, long_call):
        assert long_call.breakeven() == 104.51

    def test_max_profit_unbounded(self, long_call):
        assert long_call.max_profit() == math.inf

    def test_max_loss_is_total_cost(self, long_call):
        assert long_call.max_loss() == 450.65

    def test_intrinsic_value_per_share(self, long_call):
        assert long_call.intrinsic_value() == 3.0
        assert long_call.intrinsic_value(95.0) == 0.0
        assert long_call.intrinsic_value(110.0) == 10.0

    def test_time_value(self, long_call):
        assert long_call.time_value() == 220.0

    def test_time_value_without_premium(self):
        lc = LongCall(make_inputs(current_premium=None), as_of=AS_OF)
        assert lc.time_value() == 0.0

    def test_unrealized_pnl(self, long_call):
        assert long_call.unrealized_pnl() == 69.35

    def test_profit_loss_falls_back_to_intrinsic(self):
        lc = LongCall(make_inputs(current_premium=None), as_of=AS_OF)
        assert lc.profit_loss() == -150.65

    def test_profit_loss_overrides(self, long_call):
        assert long_call.profit_loss(current_premium=600.0) == 149.35

    def test_percentage_gain(self, long_call):
        assert long_call.percentage_gain() == 15.39

    def test_leverage_ratio(self, long_call):
        assert long_call.leverage_ratio() == 22.86

    def test_days_to_expiration(self, long_call):
        assert long_call.days_to_expiration() == 60

    def test_multiple_contracts(self):
        lc = LongCall(make_inputs(contracts=2, premium=900.0, fees=1.30), as_of=AS_OF)

        assert lc.shares == 200
        assert lc.breakeven() == 104.51
        assert lc.expiration_pnl(110.0) == 1098.7


class TestLongCallExpirationPnL:
    """Test suite for expiration P&L."""

    def test_above_strike(self, long_call):
        assert long_call.expiration_pnl(110.0) == 549.35

    def test_below_strike_loses_cost(self, long_call):
        assert long_call.expiration_pnl(80.0) == -450.65
        assert long_call.expiration_pnl(100.0) == -450.65

    def test_near_zero_at_breakeven(self, long_call):
        assert long_call.expiration_pnl(long_call.breakeven()) == pytest.approx(0.0, abs=0.5)

    def test_nan_propagates(self, long_call):
        assert math.isnan(long_call.expiration_pnl(float('nan')))


class TestLongCallMoneyness:
    """Test suite for moneyness, classification and probability."""

    def test_in_the_money(self, long_call):
        assert long_call.is_in_the_money()
        assert not long_call.is_profitable()

    def test_at_strike_not_in_the_money(self):
        assert not LongCall(make_inputs(current_price=100.0), as_of=AS_OF).is_in_the_money()

    def test_profitable_above_breakeven(self):
        assert LongCall(make_inputs(current_price=106.0), as_of=AS_OF).is_profitable()

    def test_moneyness(self, long_call):
        assert long_call.moneyness() == 3.0

    @pytest.mark.parametrize("current_price,classification", [
        (112.0, "Deep ITM"),
        (110.0, "ITM"),
        (103.0, "ITM"),
        (102.0, "ATM"),
        (100.0, "ATM"),
        (98.0, "ATM"),
        (95.0, "OTM"),
        (90.0, "Deep OTM"),
        (85.0, "Deep OTM"),
    ])
    def test_classification(self, current_price, classification):
        lc = LongCall(make_inputs(current_price=current_price), as_of=AS_OF)
        assert lc.get_classification() == classification

    def test_probability_itm(self, long_call):
        assert long_call.probability_itm() == 56.0

    def test_probability_otm_with_time(self):
        lc = LongCall(make_inputs(current_price=95.0), as_of=AS_OF)
        assert lc.probability_itm() == 40.0

    def test_probability_otm_time_penalty(self):
        # 15 days left: half of the 20 point penalty
        lc = LongCall(make_inputs(current_price=95.0), as_of=date(2024, 2, 29))

        assert lc.days_to_expiration() == 15
        assert lc.probability_itm() == 30.0

    @pytest.mark.parametrize("current_price", [10.0, 500.0])
    def test_probability_clamped(self, current_price):
        lc = LongCall(make_inputs(current_price=current_price), as_of=AS_OF)
        assert 0.0 <= lc.probability_itm() <= 100.0

    def test_greeks(self, long_call):
        assert 0.5 < long_call.current_delta() < 1.0
        assert long_call.current_theta() == pytest.approx(-520.0 / 60)

    def test_theta_with_worthless_current_premium(self):
        lc = LongCall(make_inputs(current_premium=0.0), as_of=AS_OF)
        assert lc.current_theta() == 0.0

    def test_theta_falls_back_to_premium_paid(self):
        lc = LongCall(make_inputs(current_premium=None), as_of=AS_OF)
        assert lc.current_theta() == pytest.approx(-450.0 / 60)


class TestLongCallValidation:
    """Test suite for construction-time validation."""

    @pytest.mark.parametrize("field_name,value,message", [
        ('strike', 0.0, "Strike price must be positive"),
        ('premium', 0.0, "Premium must be positive"),
        ('fees', -1.0, "Fees cannot be negative"),
        ('current_price', 0.0, "Current price must be positive"),
        ('contracts', 0, "Contracts must be positive"),
        ('current_premium', -1.0, "Current premium cannot be negative"),
    ])
    def test_invalid_inputs(self, field_name, value, message):
        with pytest.raises(ValidationError, match=message):
            LongCall(make_inputs(**{field_name: value}), as_of=AS_OF)

    def test_expiration_must_be_future(self):
        with pytest.raises(ValidationError, match="Expiration must be in the future"):
            LongCall(make_inputs(expiration=date(2024, 1, 10)), as_of=AS_OF)

    def test_infinite_price_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            LongCall(make_inputs(current_price=float('inf')), as_of=AS_OF)


class TestLongCallAnalysis:
    """Test suite for risk analysis, charts and snapshots."""

    def test_healthy_position_no_risks(self, long_call):
        assert long_call.analyze_risks() == []

    def test_otm_near_expiry(self):
        lc = LongCall(make_inputs(current_price=80.0), as_of=date(2024, 3, 5))
        risks = lc.analyze_risks()

        assert lc.days_to_expiration() == 10
        assert [(flag.category, flag.severity) for flag in risks] == [
            ('time', 'high'),
            ('price', 'high'),
            ('price', 'high'),
        ]
        assert risks[-1].message == "Out-of-the-money with limited time remaining"

    def test_never_flags_return_or_assignment(self):
        lc = LongCall(make_inputs(current_price=130.0, current_premium=3000.0), as_of=date(2024, 3, 14))
        categories = {flag.category for flag in lc.analyze_risks()}

        assert 'return' not in categories
        assert 'assignment' not in categories

    def test_default_thresholds(self):
        assert LONG_CALL_RISK_THRESHOLDS.critical_days == 7
        assert LONG_CALL_RISK_THRESHOLDS.high_days == 14
        assert LONG_CALL_RISK_THRESHOLDS.price_distance_percent == 10.0

    def test_default_chart(self, long_call):
        chart = long_call.payoff_chart()
        prices = [point.underlying_price for point in chart]

        assert len(chart) == 15
        assert prices[0] == pytest.approx(51.5)
        assert prices[-1] == pytest.approx(154.5)
        assert chart[0].profit_loss == -450.65

    def test_chart_huge_price(self, long_call):
        point = long_call.payoff_chart([1e30])[0]

        assert point.underlying_price == 1e30
        assert point.profit_loss == pytest.approx(1e32)

    def test_chart_breakeven_marker(self, long_call):
        chart = long_call.payoff_chart([104.51, 104.6])
        assert [point.is_near_breakeven for point in chart] == [True, False]

    def test_get_all_metrics(self, long_call):
        metrics = long_call.get_all_metrics()

        assert isinstance(metrics, LongCallMetrics)
        assert metrics.classification == "ITM"
        assert metrics.max_profit == math.inf
        assert metrics.probability_itm == 56.0
        assert long_call.get_all_metrics() == metrics

    def test_summary(self, long_call):
        text = long_call.summary()

        assert text.startswith("Long Call: $100.00 strike, expires 2024-03-15")
        assert "Classification: ITM" in text
        assert "Unrealized P&L: $69.35 (15.39%)" in text
        assert text.endswith("No risk flags")
