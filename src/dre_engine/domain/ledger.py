"""Ledger aggregation for category and indicator references."""

import logging
from decimal import Decimal
from typing import Optional

from dre_engine.database.base import Database
from dre_engine.domain.cache import ValuationCache
from dre_engine.domain.entities import CalculationContext, LedgerEntry, SourceKind
from dre_engine.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class LedgerAggregator:
    """Sums signed ledger entries per category or indicator.

    The full entry set of a (company, month, year) context is fetched once
    and then filtered in memory for every lookup in that period.
    """

    def __init__(self, db: Database, cache: Optional[ValuationCache] = None):
        """Initialize ledger aggregator.

        Args:
            db: Database instance
            cache: Report-scoped cache; a fresh one is created if omitted
        """
        self.db = db
        self.cache = cache if cache is not None else ValuationCache()

    def entries_for(self, context: CalculationContext) -> tuple[LedgerEntry, ...]:
        """Return all ledger entries of the context, fetching them at most once."""
        entries = self.cache.entries.get(context)
        if entries is None:
            logger.debug(
                "ledger_entries_fetched",
                extra={
                    "company_id": context.company_id,
                    "month": context.month,
                    "year": context.year,
                },
            )
            entries = tuple(
                self.db.list_ledger_entries(context.company_id, context.month, context.year)
            )
            self.cache.entries[context] = entries
        return entries

    def sum_entries(
        self, reference_id: int, reference_kind: SourceKind, context: CalculationContext
    ) -> Decimal:
        """Sum the signed entries tagged with a category or indicator.

        Args:
            reference_id: Category or indicator ID
            reference_kind: SourceKind.CATEGORY or SourceKind.INDICATOR
            context: Company and period to aggregate

        Returns:
            Inflows minus outflows for the reference

        Raises:
            ValidationError: If reference_kind is not a ledger reference
        """
        if reference_kind == SourceKind.CATEGORY:
            matches = (e for e in self.entries_for(context) if e.category_id == reference_id)
        elif reference_kind == SourceKind.INDICATOR:
            matches = (e for e in self.entries_for(context) if e.indicator_id == reference_id)
        else:
            raise ValidationError(f"Ledger entries cannot be aggregated by '{reference_kind}'")
        return sum((e.signed_amount for e in matches), Decimal("0"))
