"""Chart-of-accounts domain service."""

from typing import Optional

from dre_engine.database.base import Database
from dre_engine.domain.entities import (
    Account,
    ChartNode,
    ChildRollup,
    ComponentSum,
    FormulaValuation,
    Operand,
    Operator,
    SourceKind,
    ValuationStrategy,
)
from dre_engine.domain.errors import ConflictError, NotFoundError, ValidationError, invalid_operator
from dre_engine.domain.resolver import AccountResolver
from dre_engine.domain.tree import index_accounts


def describe_strategy(strategy: ValuationStrategy) -> str:
    """Return a short human-readable description of a valuation strategy."""
    if isinstance(strategy, ChildRollup):
        return f"sum of {len(strategy.children)} children"
    if isinstance(strategy, ComponentSum):
        parts = [
            f"{c.sign}{c.source_kind.value}:{c.source_id}" for c in strategy.components
        ]
        return "components " + " ".join(parts)
    if isinstance(strategy, FormulaValuation):
        formula = strategy.formula
        return (
            f"formula {formula.operand1.kind.value}:{formula.operand1.id} "
            f"{formula.operator.value} {formula.operand2.kind.value}:{formula.operand2.id}"
        )
    return "no valuation (zero)"


class ChartService:
    """Service for inspecting and seeding the DRE chart of accounts."""

    def __init__(self, db: Database):
        """Initialize chart service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_accounts(self, company_id: Optional[int] = None) -> list[Account]:
        """List active accounts, optionally restricted to a company."""
        return self.db.list_dre_accounts(company_id=company_id)

    def find_account_by_name(self, name: str) -> Optional[Account]:
        """Find an account (active or not) by exact name."""
        for account in self.db.list_dre_accounts(active_only=False):
            if account.name == name:
                return account
        return None

    def get_chart_tree(self, company_id: Optional[int] = None) -> list[ChartNode]:
        """Build the configured account tree with each account's valuation strategy.

        Args:
            company_id: Optional company ID to restrict the chart to

        Returns:
            Root nodes in display order
        """
        accounts = self.list_accounts(company_id)
        resolver = AccountResolver(self.db)
        roots, children_map = index_accounts(accounts)

        visited: set[int] = set()

        def build(siblings: list[Account]) -> tuple[ChartNode, ...]:
            nodes = []
            for account in siblings:
                if account.id in visited:
                    continue
                visited.add(account.id)
                nodes.append(
                    ChartNode(
                        account=account,
                        strategy=resolver.strategy_for(account.id),
                        children=build(children_map.get(account.id, [])),
                    )
                )
            return tuple(nodes)

        return list(build(roots))

    def create_category(self, code: str, name: str) -> int:
        """Create a ledger category.

        Raises:
            ConflictError: If a category with the same code exists
        """
        if self.db.get_category_by_code(code) is not None:
            raise ConflictError(f"Category with code '{code}' already exists")
        return self.db.create_category(code=code, name=name)

    def create_account(
        self,
        name: str,
        order: int,
        sign: str,
        parent_name: Optional[str] = None,
        visible: bool = True,
    ) -> int:
        """Create a DRE account, resolving its parent by name.

        Raises:
            ConflictError: If an account with the same name exists
            NotFoundError: If the parent account doesn't exist
        """
        if self.find_account_by_name(name) is not None:
            raise ConflictError(f"Account '{name}' already exists")

        parent_id = None
        if parent_name is not None:
            parent = self.find_account_by_name(parent_name)
            if parent is None:
                raise NotFoundError(f"Parent account '{parent_name}' not found")
            parent_id = parent.id

        return self.db.create_dre_account(
            name=name, order=order, sign=sign, parent_id=parent_id, visible=visible
        )

    def add_category_component(self, account_id: int, category_code: str, sign: str = "+") -> int:
        """Link a category to an account.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.db.get_category_by_code(category_code)
        if category is None:
            raise NotFoundError(f"Category '{category_code}' not found")
        return self.db.add_account_component(account_id, category_id=category.id, sign=sign)

    def set_account_formula(self, account_id: int, left: str, operator: str, right: str) -> int:
        """Define an account as a formula over two other accounts, given by name.

        Raises:
            NotFoundError: If an operand account doesn't exist
            ValidationError: If the operator is not supported
        """
        try:
            op = Operator(operator)
        except ValueError:
            raise ValidationError(invalid_operator(operator))

        operands = []
        for name in (left, right):
            account = self.find_account_by_name(name)
            if account is None:
                raise NotFoundError(f"Operand account '{name}' not found")
            operands.append(Operand(kind=SourceKind.ACCOUNT, id=account.id))

        return self.db.set_account_formula(account_id, operands[0], op, operands[1])
