"""Tests for numeric utilities (rounding, day counts, annualization, price grids)."""

import math
from datetime import date, datetime, timedelta

import pytest

from options_calc.utils.numeric import (
    CONTRACT_SHARE_MULTIPLIER,
    annualize_return,
    clamp,
    days_between,
    generate_price_range,
    round_to,
    step_percent_for_range,
    to_datetime,
)


class TestRoundTo:
    """Test suite for half-away-from-zero rounding."""

    def test_positive_half_rounds_up(self):
        assert round_to(2.005, 2) == 2.01
        assert round_to(2.345, 2) == 2.35

    def test_negative_half_rounds_away_from_zero(self):
        """P&L can be negative, so ties must round away from zero."""
        assert round_to(-2.005, 2) == -2.01
        assert round_to(-1.5, 0) == -2.0

    def test_whole_number_ties(self):
        # Python's round() would give 2 and 4 here (banker's rounding)
        assert round_to(2.5, 0) == 3.0
        assert round_to(3.5, 0) == 4.0

    def test_breakeven_example(self):
        assert round_to(92.5065, 2) == 92.51

    def test_default_two_decimals(self):
        assert round_to(1.23456) == 1.23

    @pytest.mark.parametrize("value", [1e26, 1e30, -1.5e300, 1.7e308])
    def test_huge_magnitudes_unchanged(self, value):
        assert round_to(value, 2) == value

    def test_large_value_still_rounds(self):
        assert round_to(123456789012.345, 2) == 123456789012.35

    def test_non_finite_values_pass_through(self):
        assert math.isnan(round_to(float('nan'), 2))
        assert round_to(float('inf'), 2) == float('inf')
        assert round_to(float('-inf'), 2) == float('-inf')


class TestDaysBetween:
    """Test suite for elapsed-time day counts."""

    def test_same_day_is_zero(self):
        d = date(2024, 1, 15)
        assert days_between(d, d) == 0

    def test_next_day_is_one(self):
        d = date(2024, 1, 15)
        assert days_between(d, d + timedelta(days=1)) == 1

    @pytest.mark.parametrize("start", [
        date(2024, 1, 31),   # month boundary
        date(2024, 2, 28),   # leap day follows
        date(2024, 2, 29),   # leap day
        date(2023, 12, 31),  # year boundary
    ])
    def test_one_day_across_boundaries(self, start):
        assert days_between(start, start + timedelta(days=1)) == 1

    def test_expiration_example(self):
        assert days_between(date(2024, 1, 15), date(2024, 2, 16)) == 32

    def test_partial_day_truncates(self):
        start = datetime(2024, 3, 9, 12, 0)
        assert days_between(start, start + timedelta(hours=23, minutes=54)) == 0
        assert days_between(start, start + timedelta(hours=47, minutes=54)) == 1

    def test_mixed_date_and_datetime(self):
        assert days_between(datetime(2024, 1, 15, 0, 0), date(2024, 1, 20)) == 5

    def test_negative_span(self):
        assert days_between(date(2024, 1, 2), date(2024, 1, 1)) == -1

    def test_negative_partial_day_truncates_toward_zero(self):
        start = datetime(2024, 1, 2, 12, 0)
        assert days_between(start, start - timedelta(hours=12)) == 0

    def test_to_datetime_midnight(self):
        assert to_datetime(date(2024, 1, 15)) == datetime(2024, 1, 15, 0, 0)
        stamp = datetime(2024, 1, 15, 9, 30)
        assert to_datetime(stamp) is stamp


class TestAnnualizeReturn:
    """Test suite for return annualization."""

    def test_zero_days_floored_to_one(self):
        assert annualize_return(10.0, 0) == annualize_return(10.0, 1)
        assert annualize_return(10.0, 0) == pytest.approx(3650.0)

    def test_negative_days_floored_to_one(self):
        assert annualize_return(2.0, -5) == annualize_return(2.0, 1)

    def test_full_year_unchanged(self):
        assert annualize_return(7.5, 365) == pytest.approx(7.5)

    def test_scaling(self):
        assert annualize_return(10.0, 73) == pytest.approx(50.0)

    def test_negative_return(self):
        assert annualize_return(-1.0, 73) == pytest.approx(-5.0)


class TestGeneratePriceRange:
    """Test suite for payoff chart price grids."""

    def test_odd_count_centered(self):
        assert generate_price_range(100.0, point_count=5, step_percent=10.0) == [80.0, 90.0, 100.0, 110.0, 120.0]

    def test_even_count_straddles_center(self):
        prices = generate_price_range(100.0, point_count=4, step_percent=10.0)

        assert prices == pytest.approx([85.0, 95.0, 105.0, 115.0])
        assert any(p < 100.0 for p in prices)
        assert any(p > 100.0 for p in prices)

    def test_strictly_increasing(self):
        prices = generate_price_range(98.0, point_count=15, step_percent=step_percent_for_range(30, 15))

        assert len(prices) == 15
        assert all(b > a for a, b in zip(prices, prices[1:]))
        assert prices[0] == pytest.approx(68.6)
        assert prices[-1] == pytest.approx(127.4)

    def test_deterministic(self):
        assert generate_price_range(123.45, 21, 2.5) == generate_price_range(123.45, 21, 2.5)

    def test_rounded_to_cents(self):
        for price in generate_price_range(33.33, 11, 3.3):
            assert price == round_to(price, 2)

    def test_degenerate_counts(self):
        assert generate_price_range(100.0, point_count=0) == []
        assert generate_price_range(100.0, point_count=1) == [100.0]

    def test_returns_plain_floats(self):
        assert all(type(p) is float for p in generate_price_range(100.0, 5, 1.0))


class TestHelpers:
    """Test suite for small numeric helpers."""

    def test_contract_multiplier(self):
        assert CONTRACT_SHARE_MULTIPLIER == 100

    def test_step_percent_for_range(self):
        assert step_percent_for_range(30, 15) == pytest.approx(60 / 14)
        assert step_percent_for_range(50, 1) == 0.0

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.5, 0.0, 1.0) == 0.5
