"""DRE report domain service."""

import logging
from decimal import Decimal
from typing import Optional

from dre_engine.database.base import Database
from dre_engine.domain.cache import ValuationCache
from dre_engine.domain.entities import (
    Account,
    CalculationContext,
    DreReport,
    Period,
    ReportLine,
)
from dre_engine.domain.errors import NotFoundError, company_not_found
from dre_engine.domain.periods import DEFAULT_WINDOW_LENGTH, build_window, trailing_total
from dre_engine.domain.resolver import AccountResolver
from dre_engine.domain.tree import index_accounts

logger = logging.getLogger(__name__)


class DreReportService:
    """Service for computing DRE reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def compute_report(
        self,
        company_id: int,
        month: int,
        year: int,
        months: int = DEFAULT_WINDOW_LENGTH,
        include_hidden: bool = False,
    ) -> DreReport:
        """Compute the DRE of a company over the window ending at (month, year).

        Every active account applicable to the company is valued for every
        period of the window, including invisible accounts, whose values may
        feed other accounts. Invisible accounts and their subtrees are left
        out of the returned tree unless include_hidden is set.

        Args:
            company_id: Company ID
            month: Report month (1-12)
            year: Report year
            months: Window length (default 13: report month plus the previous 12)
            include_hidden: If True, keep invisible accounts in the tree

        Returns:
            DreReport with root lines in display order

        Raises:
            NotFoundError: If the company doesn't exist
            ValidationError: If the period or window length is invalid
            DataAccessError: If the database fails during the computation
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

        periods = build_window(month, year, months)
        base_context = CalculationContext(company_id=company_id, month=month, year=year)

        # One cache per report; never shared between computations.
        cache = ValuationCache()
        resolver = AccountResolver(self.db, cache)

        accounts = self.db.list_dre_accounts(company_id=company_id)
        values = {
            account.id: self._values_for(resolver, account.id, base_context, periods)
            for account in accounts
        }

        roots, children_map = index_accounts(accounts)

        visited: set[int] = set()

        def build_line(account: Account) -> Optional[ReportLine]:
            if account.id in visited:
                return None
            visited.add(account.id)
            if not account.visible and not include_hidden:
                return None
            children = tuple(
                line
                for line in (build_line(child) for child in children_map.get(account.id, []))
                if line is not None
            )
            account_values = values[account.id]
            return ReportLine(
                account_id=account.id,
                name=account.name,
                order=account.order,
                sign=account.sign,
                visible=account.visible,
                values_by_period=account_values,
                trailing_12_month_total=trailing_total(account_values, periods),
                children=children,
            )

        lines = tuple(
            line for line in (build_line(root) for root in roots) if line is not None
        )

        logger.info(
            "dre_report_computed",
            extra={
                "company_id": company_id,
                "month": month,
                "year": year,
                "accounts": len(accounts),
                "warnings": len(cache.warnings),
            },
        )
        return DreReport(
            company_id=company_id,
            month=month,
            year=year,
            periods=periods,
            lines=lines,
            warnings=tuple(cache.warnings),
        )

    def _values_for(
        self,
        resolver: AccountResolver,
        account_id: int,
        base_context: CalculationContext,
        periods: tuple[Period, ...],
    ) -> dict[str, Decimal]:
        return {
            period.key: resolver.resolve_account_value(account_id, base_context.for_period(period))
            for period in periods
        }
