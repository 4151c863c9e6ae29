"""Per-report memoization state for the valuation engine."""

from dataclasses import dataclass, field
from decimal import Decimal

from dre_engine.domain.entities import (
    CalculationContext,
    IndicatorComponent,
    LedgerEntry,
    ValuationStrategy,
)


@dataclass
class ValuationCache:
    """Caches owned by a single report computation.

    Every key includes the immutable calculation context (or is
    period-independent configuration), and each key is written at most once,
    so a cache must never be shared between reports for different data.
    """

    entries: dict[CalculationContext, tuple[LedgerEntry, ...]] = field(default_factory=dict)
    account_values: dict[tuple[int, CalculationContext], Decimal] = field(default_factory=dict)
    indicator_values: dict[tuple[int, CalculationContext], Decimal] = field(default_factory=dict)
    strategies: dict[int, ValuationStrategy] = field(default_factory=dict)
    compositions: dict[int, tuple[IndicatorComponent, ...]] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        """Record a configuration warning once."""
        if message not in self.warnings:
            self.warnings.append(message)
