"""Domain model entities for the DRE engine.

These are pure data classes representing business concepts, independent of
database schema. The valuation engine only ever sees these types, never the
SQLAlchemy models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class SourceKind(str, Enum):
    """What a component or formula operand points at."""

    ACCOUNT = "conta"
    CATEGORY = "categoria"
    INDICATOR = "indicador"


class EntryKind(str, Enum):
    """Ledger entry direction."""

    INFLOW = "receita"
    OUTFLOW = "despesa"


class AccountSign(str, Enum):
    """Display marker of a DRE line. Never used in arithmetic."""

    PLUS = "+"
    MINUS = "-"
    RESULT = "="


class Operator(str, Enum):
    """Binary formula operator."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class IndicatorType(str, Enum):
    """Indicator type: single ledger tag or composition of other sources."""

    SINGLE = "unico"
    COMPOSITE = "composto"


@dataclass(frozen=True)
class Company:
    """Company domain entity."""

    id: int
    name: str
    active: bool = True


@dataclass(frozen=True)
class Category:
    """Ledger category domain entity."""

    id: int
    code: str
    name: str
    active: bool = True


@dataclass(frozen=True)
class Indicator:
    """Indicator domain entity."""

    id: int
    code: str
    name: str
    indicator_type: IndicatorType = IndicatorType.SINGLE
    active: bool = True


@dataclass(frozen=True)
class IndicatorComponent:
    """Link from a composite indicator to a category or another indicator."""

    id: int
    indicator_id: int
    source_kind: SourceKind
    source_id: int
    sign: str = "+"


@dataclass(frozen=True)
class Account:
    """DRE account (one line of the report hierarchy)."""

    id: int
    name: str
    order: int
    sign: AccountSign
    parent_id: Optional[int]
    active: bool = True
    visible: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AccountComponent:
    """Link from an account to the source contributing to its value."""

    id: int
    account_id: int
    source_kind: SourceKind
    source_id: int
    sign: str = "+"


@dataclass(frozen=True)
class Operand:
    """Typed formula operand."""

    kind: SourceKind
    id: int


@dataclass(frozen=True)
class Formula:
    """Arithmetic rule combining two operands into an account value."""

    id: int
    account_id: int
    operand1: Operand
    operator: Operator
    operand2: Operand


@dataclass(frozen=True)
class LedgerEntry:
    """Recorded financial transaction for a company and period."""

    id: int
    company_id: int
    month: int
    year: int
    kind: EntryKind
    amount: Decimal
    category_id: Optional[int] = None
    indicator_id: Optional[int] = None
    description: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        """Contribution to any aggregate: inflows add, outflows subtract."""
        if self.kind == EntryKind.INFLOW:
            return self.amount
        return -self.amount


@dataclass(frozen=True, order=True)
class Period:
    """Calendar month of a given year."""

    year: int
    month: int

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        return f"{self.month:02d}/{self.year:04d}"


@dataclass(frozen=True)
class CalculationContext:
    """Scope of every ledger lookup and cache key."""

    company_id: int
    month: int
    year: int

    @property
    def period(self) -> Period:
        return Period(year=self.year, month=self.month)

    def for_period(self, period: Period) -> "CalculationContext":
        """Return the same company scoped to another period."""
        return CalculationContext(
            company_id=self.company_id, month=period.month, year=period.year
        )


# Valuation strategies, resolved once per account by precedence:
# children, then components, then formula.


@dataclass(frozen=True)
class ChildRollup:
    """Account value is the sum of its active children."""

    children: tuple[Account, ...]


@dataclass(frozen=True)
class ComponentSum:
    """Account value is the signed sum of its components."""

    components: tuple[AccountComponent, ...]


@dataclass(frozen=True)
class FormulaValuation:
    """Account value is the result of its formula."""

    formula: Formula


@dataclass(frozen=True)
class NoValuation:
    """Account has nothing configured and is worth zero."""


ValuationStrategy = Union[ChildRollup, ComponentSum, FormulaValuation, NoValuation]


@dataclass(frozen=True)
class ReportLine:
    """Computed DRE line with its visible children."""

    account_id: int
    name: str
    order: int
    sign: AccountSign
    visible: bool
    values_by_period: dict[str, Decimal]
    trailing_12_month_total: Decimal
    children: tuple["ReportLine", ...] = ()

    def value_for(self, period: Period) -> Decimal:
        """Return the value computed for a period (zero when absent)."""
        return self.values_by_period.get(period.key, Decimal("0"))

    def matches(self, term: str) -> bool:
        """Check whether this line or any descendant name contains term."""
        if term.lower() in self.name.lower():
            return True
        return any(child.matches(term) for child in self.children)


@dataclass(frozen=True)
class DreReport:
    """Computed DRE for one company over a rolling window."""

    company_id: int
    month: int
    year: int
    periods: tuple[Period, ...]
    lines: tuple[ReportLine, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def find(self, name: str) -> Optional[ReportLine]:
        """Find a line anywhere in the tree by exact name."""

        def search(lines: tuple[ReportLine, ...]) -> Optional[ReportLine]:
            for line in lines:
                if line.name == name:
                    return line
                match = search(line.children)
                if match is not None:
                    return match
            return None

        return search(self.lines)

    def filter_by_name(self, term: str) -> tuple[ReportLine, ...]:
        """Return root lines whose subtree contains a name matching term."""
        if not term:
            return self.lines
        return tuple(line for line in self.lines if line.matches(term))


@dataclass(frozen=True)
class ChartNode:
    """Configured DRE account with its valuation strategy and children."""

    account: Account
    strategy: ValuationStrategy
    children: tuple["ChartNode", ...] = ()
