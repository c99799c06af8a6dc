"""Strategy input records.

Plain immutable records; invariants are checked by the strategy model that
owns them, because the expiration check needs the model's as-of date.
All monetary values in dollars. Premiums and fees are position totals
(contract-level dollars), prices are per share.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class CoveredCallInputs:
    """Shares held plus one short call written against them."""

    share_price: float       # Current share price
    share_basis: float       # Purchase price per share
    share_qty: float         # Shares owned (100 per contract covered)
    strike: float
    premium: float           # Premium received for the call
    expiration: date | datetime
    fees: float = 0.0        # Commissions and other costs

    def __repr__(self) -> str:
        return (f"CoveredCallInputs({self.share_qty:g} sh @ {self.share_basis:.2f} "
                f"C{self.strike:g} {self.expiration:%Y-%m-%d} prem=${self.premium:.2f})")


@dataclass(frozen=True)
class CashSecuredPutInputs:
    """A short put backed by cash set aside for assignment."""

    strike: float
    premium: float                      # Premium received for the put
    expiration: date | datetime
    fees: float = 0.0
    cash_secured: float | None = None   # Defaults to strike * shares
    current_price: float | None = None  # Defaults to strike where needed
    contracts: int = 1

    def __repr__(self) -> str:
        return (f"CashSecuredPutInputs({self.contracts}x P{self.strike:g} "
                f"{self.expiration:%Y-%m-%d} prem=${self.premium:.2f})")


@dataclass(frozen=True)
class LongCallInputs:
    """A purchased call."""

    strike: float
    premium: float                        # Premium paid
    expiration: date | datetime
    current_price: float                  # Current share price
    fees: float = 0.0
    current_premium: float | None = None  # Current option value, for unrealized P&L
    contracts: int = 1

    def __repr__(self) -> str:
        return (f"LongCallInputs({self.contracts}x C{self.strike:g} "
                f"{self.expiration:%Y-%m-%d} paid=${self.premium:.2f})")
