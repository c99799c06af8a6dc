"""Convenience constructors for strategy models."""

from datetime import date, datetime

from ..models.inputs import CashSecuredPutInputs, CoveredCallInputs, LongCallInputs
from .cash_secured_put import CashSecuredPut
from .covered_call import CoveredCall
from .long_call import LongCall

AsOf = date | datetime | None


def create_covered_call(inputs: CoveredCallInputs, as_of: AsOf = None) -> CoveredCall:
    """Create a validated CoveredCall (raises ValidationError on bad input)."""
    return CoveredCall(inputs, as_of=as_of)


def create_cash_secured_put(inputs: CashSecuredPutInputs, as_of: AsOf = None) -> CashSecuredPut:
    """Create a validated CashSecuredPut (raises ValidationError on bad input)."""
    return CashSecuredPut(inputs, as_of=as_of)


def create_long_call(inputs: LongCallInputs, as_of: AsOf = None) -> LongCall:
    """Create a validated LongCall (raises ValidationError on bad input)."""
    return LongCall(inputs, as_of=as_of)
