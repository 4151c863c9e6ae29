"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the translation of the
nullable foreign-key columns used in storage into the typed source references
the valuation engine works with.
"""

from typing import Optional

from dre_engine.domain import entities as domain
from dre_engine.domain.errors import ValidationError, invalid_operator
from dre_engine.database.models import (
    Company as ORMCompany,
    Category as ORMCategory,
    Indicator as ORMIndicator,
    IndicatorComponent as ORMIndicatorComponent,
    DreAccount as ORMDreAccount,
    DreAccountComponent as ORMDreAccountComponent,
    DreAccountFormula as ORMDreAccountFormula,
    LedgerEntry as ORMLedgerEntry,
)


def company_to_domain(orm_company: ORMCompany) -> domain.Company:
    """Convert SQLAlchemy Company model to domain Company entity."""
    return domain.Company(
        id=orm_company.id,
        name=orm_company.name,
        active=orm_company.active,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        code=orm_category.code,
        name=orm_category.name,
        active=orm_category.active,
    )


def indicator_to_domain(orm_indicator: ORMIndicator) -> domain.Indicator:
    """Convert SQLAlchemy Indicator model to domain Indicator entity."""
    return domain.Indicator(
        id=orm_indicator.id,
        code=orm_indicator.code,
        name=orm_indicator.name,
        indicator_type=domain.IndicatorType(orm_indicator.indicator_type),
        active=orm_indicator.active,
    )


def indicator_component_to_domain(
    orm_component: ORMIndicatorComponent,
) -> Optional[domain.IndicatorComponent]:
    """Convert SQLAlchemy IndicatorComponent to domain entity.

    Returns None when the row references neither a category nor an indicator.
    """
    if orm_component.category_id is not None:
        source_kind, source_id = domain.SourceKind.CATEGORY, orm_component.category_id
    elif orm_component.source_indicator_id is not None:
        source_kind, source_id = domain.SourceKind.INDICATOR, orm_component.source_indicator_id
    else:
        return None
    return domain.IndicatorComponent(
        id=orm_component.id,
        indicator_id=orm_component.indicator_id,
        source_kind=source_kind,
        source_id=source_id,
        sign=orm_component.sign,
    )


def dre_account_to_domain(orm_account: ORMDreAccount) -> domain.Account:
    """Convert SQLAlchemy DreAccount model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        order=orm_account.display_order,
        sign=domain.AccountSign(orm_account.sign),
        parent_id=orm_account.parent_id,
        active=orm_account.active,
        visible=orm_account.visible,
        created_at=orm_account.created_at,
    )


def account_component_to_domain(
    orm_component: ORMDreAccountComponent,
) -> Optional[domain.AccountComponent]:
    """Convert SQLAlchemy DreAccountComponent to domain AccountComponent.

    Category takes precedence over indicator, then over account, when more
    than one reference is set. Returns None when none is set.
    """
    if orm_component.category_id is not None:
        source_kind, source_id = domain.SourceKind.CATEGORY, orm_component.category_id
    elif orm_component.indicator_id is not None:
        source_kind, source_id = domain.SourceKind.INDICATOR, orm_component.indicator_id
    elif orm_component.source_account_id is not None:
        source_kind, source_id = domain.SourceKind.ACCOUNT, orm_component.source_account_id
    else:
        return None
    return domain.AccountComponent(
        id=orm_component.id,
        account_id=orm_component.account_id,
        source_kind=source_kind,
        source_id=source_id,
        sign=orm_component.sign,
    )


def formula_to_domain(orm_formula: ORMDreAccountFormula) -> domain.Formula:
    """Convert SQLAlchemy DreAccountFormula to domain Formula.

    Raises:
        ValidationError: If the stored operator or operand kinds are unknown
    """
    try:
        operator = domain.Operator(orm_formula.operator)
    except ValueError:
        raise ValidationError(invalid_operator(orm_formula.operator))
    try:
        operand1 = domain.Operand(
            kind=domain.SourceKind(orm_formula.operand1_kind), id=orm_formula.operand1_id
        )
        operand2 = domain.Operand(
            kind=domain.SourceKind(orm_formula.operand2_kind), id=orm_formula.operand2_id
        )
    except ValueError as e:
        raise ValidationError(f"Formula {orm_formula.id} has an invalid operand: {e}")
    return domain.Formula(
        id=orm_formula.id,
        account_id=orm_formula.account_id,
        operand1=operand1,
        operator=operator,
        operand2=operand2,
    )


def ledger_entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        company_id=orm_entry.company_id,
        month=orm_entry.month,
        year=orm_entry.year,
        kind=domain.EntryKind(orm_entry.kind),
        amount=orm_entry.amount,
        category_id=orm_entry.category_id,
        indicator_id=orm_entry.indicator_id,
        description=orm_entry.description,
    )
