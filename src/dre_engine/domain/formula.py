"""Formula evaluation for DRE accounts."""

from decimal import Decimal
from typing import TYPE_CHECKING

from dre_engine.domain.entities import CalculationContext, Formula, Operator

if TYPE_CHECKING:
    from dre_engine.domain.resolver import AccountResolver

ZERO = Decimal("0")


def apply_operator(operator: Operator, left: Decimal, right: Decimal) -> Decimal:
    """Apply a binary formula operator.

    Division by zero yields zero so a degenerate formula never puts an
    infinite or undefined value into the report.
    """
    if operator == Operator.ADD:
        return left + right
    if operator == Operator.SUBTRACT:
        return left - right
    if operator == Operator.MULTIPLY:
        return left * right
    if operator == Operator.DIVIDE:
        if right == 0:
            return ZERO
        return left / right
    raise ValueError(f"Unsupported operator: {operator}")


class FormulaEvaluator:
    """Evaluates two-operand formulas through the account resolver."""

    def __init__(self, resolver: "AccountResolver"):
        """Initialize formula evaluator.

        Args:
            resolver: Resolver used for account, category and indicator operands
        """
        self.resolver = resolver

    def evaluate_formula(
        self,
        formula: Formula,
        context: CalculationContext,
        in_progress: frozenset[int] = frozenset(),
    ) -> Decimal:
        """Evaluate a formula for a context.

        Args:
            formula: Formula to evaluate
            context: Company and period to evaluate for
            in_progress: Account IDs currently being resolved on the call stack

        Returns:
            Formula result
        """
        left = self.resolver.resolve_source(
            formula.operand1.kind, formula.operand1.id, context, in_progress
        )
        right = self.resolver.resolve_source(
            formula.operand2.kind, formula.operand2.id, context, in_progress
        )
        return apply_operator(formula.operator, left, right)
