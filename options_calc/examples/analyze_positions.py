#!/usr/bin/env python3
"""Example: Analyze a small book of option positions.

This script demonstrates the calculation pipeline:
1. Load risk thresholds from YAML
2. Build one position per strategy
3. Print per-position metrics and risk flags
4. Roll up portfolio risk and totals
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path to import options_calc modules
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from options_calc.analytics.portfolio import analyze_batch_risks, calculate_portfolio_metrics
from options_calc.models.inputs import CashSecuredPutInputs, CoveredCallInputs, LongCallInputs
from options_calc.strategies import CashSecuredPut, CoveredCall, LongCall
from options_calc.utils.config import load_risk_thresholds
from options_calc.utils.error_handling import ValidationError
from options_calc.utils.logging_config import LOG_LEVELS, setup_logging

DEFAULT_CONFIG = Path(__file__).parent.parent.parent / "config" / "risk_thresholds.yaml"


def build_positions(as_of: date):
    """Sample book: one covered call, one cash-secured put, one long call."""
    return [
        CoveredCall(CoveredCallInputs(
            share_price=98.0,
            share_basis=95.0,
            share_qty=100,
            strike=100.0,
            premium=250.0,
            fees=0.65,
            expiration=date(2024, 2, 16),
        ), as_of=as_of),
        CashSecuredPut(CashSecuredPutInputs(
            strike=50.0,
            premium=120.0,
            fees=0.65,
            current_price=52.5,
            expiration=date(2024, 2, 16),
        ), as_of=as_of),
        LongCall(LongCallInputs(
            strike=100.0,
            premium=450.0,
            fees=0.65,
            current_price=103.0,
            current_premium=520.0,
            expiration=date(2024, 3, 15),
        ), as_of=as_of),
    ]


def main():
    """Run the example analysis."""
    parser = argparse.ArgumentParser(description="Analyze sample option positions")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG), help="Risk thresholds YAML file")
    parser.add_argument("--as-of", default="2024-01-15", help="Evaluation date (YYYY-MM-DD)")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS, help="Logging level")
    args = parser.parse_args()

    logger = setup_logging(log_level=args.log_level)

    # -------------------------------------------------------------------------
    # 1. Configuration
    # -------------------------------------------------------------------------
    print("Loading risk thresholds...")
    thresholds = load_risk_thresholds(args.config)
    print(f"  {thresholds}")

    # -------------------------------------------------------------------------
    # 2. Build positions
    # -------------------------------------------------------------------------
    as_of = date.fromisoformat(args.as_of)
    try:
        positions = build_positions(as_of)
    except ValidationError as e:
        logger.error("Invalid position: %s", e)
        sys.exit(1)

    # -------------------------------------------------------------------------
    # 3. Per-position detail
    # -------------------------------------------------------------------------
    for position in positions:
        print("\n" + "=" * 80)
        print(position.summary())
        print("-" * 80)

        # Long calls keep their own time/price limits
        custom = None if isinstance(position, LongCall) else thresholds
        for flag in position.analyze_risks(custom):
            print(f"  [{flag.severity.upper():>8}] {flag.category:<10} {flag.message}")

    # -------------------------------------------------------------------------
    # 4. Portfolio rollup
    # -------------------------------------------------------------------------
    batch = analyze_batch_risks(positions)
    totals = calculate_portfolio_metrics(positions)

    print("\n" + "=" * 80)
    print("Portfolio Summary:")
    print(f"  Positions:          {batch.total_positions}")
    print(f"  Risk flags:         {batch.total_risks}")
    print(f"  Highest severity:   {batch.highest_severity or 'none'}")
    print(f"  Total max profit:   {totals.total_max_profit:,.2f}")
    print(f"  Total max loss:     {totals.total_max_loss:,.2f}")
    print(f"  Average DTE:        {totals.average_days_to_expiration:.1f}")
    print()


if __name__ == "__main__":
    main()
