"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from dre_engine.domain.entities import (
    Account,
    AccountComponent,
    Category,
    Company,
    EntryKind,
    Formula,
    Indicator,
    IndicatorComponent,
    IndicatorType,
    LedgerEntry,
    Operand,
    Operator,
)


class Database(ABC):
    """Abstract database interface for the DRE engine.

    The valuation engine only uses the read operations. The write operations
    exist to seed configuration and ledger data.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Company operations
    @abstractmethod
    def create_company(self, name: str, active: bool = True) -> int:
        """Create a company. Returns company ID."""
        pass

    @abstractmethod
    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID."""
        pass

    @abstractmethod
    def get_company_by_name(self, name: str) -> Optional[Company]:
        """Get company by exact name."""
        pass

    @abstractmethod
    def list_companies(self) -> list[Company]:
        """List all companies ordered by name."""
        pass

    # Category and indicator operations
    @abstractmethod
    def create_category(self, code: str, name: str) -> int:
        """Create a ledger category. Returns category ID."""
        pass

    @abstractmethod
    def get_category_by_code(self, code: str) -> Optional[Category]:
        """Get category by code."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by code."""
        pass

    @abstractmethod
    def create_indicator(
        self, code: str, name: str, indicator_type: IndicatorType = IndicatorType.SINGLE
    ) -> int:
        """Create an indicator. Returns indicator ID."""
        pass

    @abstractmethod
    def get_indicator(self, indicator_id: int) -> Optional[Indicator]:
        """Get indicator by ID."""
        pass

    @abstractmethod
    def get_indicator_by_code(self, code: str) -> Optional[Indicator]:
        """Get indicator by code."""
        pass

    @abstractmethod
    def add_indicator_component(
        self,
        indicator_id: int,
        category_id: Optional[int] = None,
        source_indicator_id: Optional[int] = None,
        sign: str = "+",
    ) -> int:
        """Add a category or indicator to a composite indicator. Returns component ID."""
        pass

    @abstractmethod
    def list_indicator_components(self, indicator_id: int) -> list[IndicatorComponent]:
        """List the composition of an indicator."""
        pass

    # DRE account operations
    @abstractmethod
    def create_dre_account(
        self,
        name: str,
        order: int = 0,
        sign: str = "+",
        parent_id: Optional[int] = None,
        active: bool = True,
        visible: bool = True,
    ) -> int:
        """Create a DRE account. Returns account ID."""
        pass

    @abstractmethod
    def get_dre_account(self, account_id: int) -> Optional[Account]:
        """Get DRE account by ID."""
        pass

    @abstractmethod
    def list_child_accounts(self, parent_id: int, active_only: bool = True) -> list[Account]:
        """List direct children of an account in display order."""
        pass

    @abstractmethod
    def list_dre_accounts(
        self, company_id: Optional[int] = None, active_only: bool = True
    ) -> list[Account]:
        """List DRE accounts in display order.

        Args:
            company_id: If given, only accounts applicable to the company are
                returned: accounts with an active link to it plus accounts
                with no active company links at all.
            active_only: If True, skip inactive accounts
        """
        pass

    @abstractmethod
    def link_account_to_company(self, account_id: int, company_id: int, active: bool = True) -> int:
        """Restrict an account to a company. Inactive links are ignored. Returns link ID."""
        pass

    @abstractmethod
    def add_account_component(
        self,
        account_id: int,
        category_id: Optional[int] = None,
        indicator_id: Optional[int] = None,
        source_account_id: Optional[int] = None,
        sign: str = "+",
    ) -> int:
        """Add a component to an account. Exactly one source must be set. Returns component ID."""
        pass

    @abstractmethod
    def list_account_components(self, account_id: int) -> list[AccountComponent]:
        """List the components of an account."""
        pass

    @abstractmethod
    def set_account_formula(
        self, account_id: int, operand1: Operand, operator: Operator, operand2: Operand
    ) -> int:
        """Create or replace the formula of an account. Returns formula ID."""
        pass

    @abstractmethod
    def get_account_formula(self, account_id: int) -> Optional[Formula]:
        """Get the formula of an account, if any."""
        pass

    # Ledger operations
    @abstractmethod
    def create_ledger_entry(
        self,
        company_id: int,
        month: int,
        year: int,
        kind: EntryKind,
        amount: Decimal,
        category_id: Optional[int] = None,
        indicator_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a ledger entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_ledger_entries(self, company_id: int, month: int, year: int) -> list[LedgerEntry]:
        """List all ledger entries of a company for one period."""
        pass
