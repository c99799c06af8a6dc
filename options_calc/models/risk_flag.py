"""Risk flag data model."""

from dataclasses import dataclass
from typing import Literal

Severity = Literal["low", "medium", "high", "critical"]
RiskCategory = Literal["time", "price", "return", "assignment"]

# Ordered from least to most severe
SEVERITY_ORDER: tuple[Severity, ...] = ("low", "medium", "high", "critical")
RISK_CATEGORIES: tuple[RiskCategory, ...] = ("time", "price", "return", "assignment")


@dataclass(frozen=True)
class RiskFlag:
    """A single risk detected for a position.

    Recomputed on every analysis call, never cached.
    """

    severity: Severity
    category: RiskCategory
    message: str

    @property
    def rank(self) -> int:
        """Position of this flag's severity in SEVERITY_ORDER (0 = low)."""
        return SEVERITY_ORDER.index(self.severity)

    def __repr__(self) -> str:
        return f"RiskFlag({self.severity.upper()} {self.category}: {self.message})"
