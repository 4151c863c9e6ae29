"""Recursive valuation of DRE accounts."""

import logging
from decimal import Decimal
from typing import Optional

from dre_engine.database.base import Database
from dre_engine.domain.cache import ValuationCache
from dre_engine.domain.entities import (
    CalculationContext,
    ChildRollup,
    ComponentSum,
    FormulaValuation,
    IndicatorComponent,
    NoValuation,
    SourceKind,
    ValuationStrategy,
)
from dre_engine.domain.errors import cyclic_account, cyclic_indicator
from dre_engine.domain.formula import FormulaEvaluator
from dre_engine.domain.ledger import LedgerAggregator

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _signed(sign: str, value: Decimal) -> Decimal:
    return value if sign == "+" else -value


class AccountResolver:
    """Computes account values from children, components or formulas.

    All lookups go through a report-scoped ValuationCache: values are
    memoized per (account, context), and accounts already on the current call
    stack resolve to zero so cyclic configuration terminates.
    """

    def __init__(self, db: Database, cache: Optional[ValuationCache] = None):
        """Initialize account resolver.

        Args:
            db: Database instance
            cache: Report-scoped cache; a fresh one is created if omitted
        """
        self.db = db
        self.cache = cache if cache is not None else ValuationCache()
        self.ledger = LedgerAggregator(db, self.cache)
        self.formulas = FormulaEvaluator(self)

    def strategy_for(self, account_id: int) -> ValuationStrategy:
        """Determine how an account is valued.

        Precedence: active children, then components, then formula. An
        account with none of these is worth zero.
        """
        strategy = self.cache.strategies.get(account_id)
        if strategy is not None:
            return strategy

        children = self.db.list_child_accounts(account_id)
        if children:
            strategy = ChildRollup(children=tuple(children))
        else:
            components = self.db.list_account_components(account_id)
            if components:
                strategy = ComponentSum(components=tuple(components))
            else:
                formula = self.db.get_account_formula(account_id)
                if formula is not None:
                    strategy = FormulaValuation(formula=formula)
                else:
                    strategy = NoValuation()

        self.cache.strategies[account_id] = strategy
        return strategy

    def resolve_account_value(
        self,
        account_id: int,
        context: CalculationContext,
        in_progress: frozenset[int] = frozenset(),
    ) -> Decimal:
        """Compute the value of an account for a context.

        Args:
            account_id: DRE account ID
            context: Company and period to evaluate for
            in_progress: Account IDs currently being resolved on the call stack

        Returns:
            Account value; zero for missing accounts and revisited cycle nodes
        """
        key = (account_id, context)
        cached = self.cache.account_values.get(key)
        if cached is not None:
            return cached

        if account_id in in_progress:
            message = cyclic_account(account_id)
            if message not in self.cache.warnings:
                logger.warning("dre_account_cycle", extra={"account_id": account_id})
            self.cache.warn(message)
            return ZERO

        account = self.db.get_dre_account(account_id)
        if account is None:
            logger.warning("dre_account_missing", extra={"account_id": account_id})
            self.cache.warn(f"Account {account_id} not found; valued at zero")
            self.cache.account_values[key] = ZERO
            return ZERO

        strategy = self.strategy_for(account_id)
        value = self._evaluate(strategy, context, in_progress | {account_id})
        self.cache.account_values[key] = value
        return value

    def _evaluate(
        self,
        strategy: ValuationStrategy,
        context: CalculationContext,
        in_progress: frozenset[int],
    ) -> Decimal:
        if isinstance(strategy, ChildRollup):
            return sum(
                (
                    self.resolve_account_value(child.id, context, in_progress)
                    for child in strategy.children
                ),
                ZERO,
            )
        if isinstance(strategy, ComponentSum):
            total = ZERO
            for component in strategy.components:
                value = self.resolve_source(
                    component.source_kind, component.source_id, context, in_progress
                )
                total += _signed(component.sign, value)
            return total
        if isinstance(strategy, FormulaValuation):
            return self.formulas.evaluate_formula(strategy.formula, context, in_progress)
        return ZERO

    def resolve_source(
        self,
        kind: SourceKind,
        source_id: int,
        context: CalculationContext,
        in_progress: frozenset[int] = frozenset(),
    ) -> Decimal:
        """Resolve a typed reference (account, category or indicator) to a value."""
        if kind == SourceKind.ACCOUNT:
            return self.resolve_account_value(source_id, context, in_progress)
        if kind == SourceKind.CATEGORY:
            return self.ledger.sum_entries(source_id, SourceKind.CATEGORY, context)
        if kind == SourceKind.INDICATOR:
            return self.resolve_indicator_value(source_id, context)
        return ZERO

    def composition_for(self, indicator_id: int) -> tuple[IndicatorComponent, ...]:
        """Return the configured composition of an indicator (possibly empty)."""
        composition = self.cache.compositions.get(indicator_id)
        if composition is None:
            composition = tuple(self.db.list_indicator_components(indicator_id))
            self.cache.compositions[indicator_id] = composition
        return composition

    def resolve_indicator_value(
        self,
        indicator_id: int,
        context: CalculationContext,
        in_progress: frozenset[int] = frozenset(),
    ) -> Decimal:
        """Compute an indicator value for a context.

        Indicators without a composition are read directly from the ledger.
        Composite indicators sum their signed components, recursing into
        nested indicators with the same cycle guard as accounts.
        """
        key = (indicator_id, context)
        cached = self.cache.indicator_values.get(key)
        if cached is not None:
            return cached

        if indicator_id in in_progress:
            message = cyclic_indicator(indicator_id)
            if message not in self.cache.warnings:
                logger.warning("indicator_cycle", extra={"indicator_id": indicator_id})
            self.cache.warn(message)
            return ZERO

        composition = self.composition_for(indicator_id)
        if not composition:
            value = self.ledger.sum_entries(indicator_id, SourceKind.INDICATOR, context)
        else:
            nested = in_progress | {indicator_id}
            value = ZERO
            for component in composition:
                if component.source_kind == SourceKind.INDICATOR:
                    part = self.resolve_indicator_value(component.source_id, context, nested)
                else:
                    part = self.ledger.sum_entries(component.source_id, SourceKind.CATEGORY, context)
                value += _signed(component.sign, part)

        self.cache.indicator_values[key] = value
        return value
