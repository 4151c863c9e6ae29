"""Tests for formula operators and evaluation."""

from decimal import Decimal

import pytest

from dre_engine.domain.entities import Operand, Operator, SourceKind
from dre_engine.domain.formula import apply_operator


@pytest.mark.parametrize(
    "operator, expected",
    [
        (Operator.ADD, Decimal("12")),
        (Operator.SUBTRACT, Decimal("8")),
        (Operator.MULTIPLY, Decimal("20")),
        (Operator.DIVIDE, Decimal("5")),
    ],
)
def test_apply_operator(operator, expected):
    assert apply_operator(operator, Decimal("10"), Decimal("2")) == expected


def test_division_by_zero_yields_zero():
    assert apply_operator(Operator.DIVIDE, Decimal("500"), Decimal("0")) == Decimal("0")


def test_zero_divided_by_value():
    assert apply_operator(Operator.DIVIDE, Decimal("0"), Decimal("4")) == Decimal("0")


def test_operator_accepts_symbol_values():
    assert Operator("/") is Operator.DIVIDE
    assert apply_operator(Operator("-"), Decimal("1"), Decimal("3")) == Decimal("-2")


def test_formula_over_categories(temp_db, resolver, context, add_entry):
    """Formula operands may reference categories directly."""
    sales = temp_db.create_category(code="VENDAS", name="Vendas")
    taxes = temp_db.create_category(code="IMPOSTOS", name="Impostos")
    add_entry("1000.00", category_id=sales)
    add_entry("150.00", category_id=taxes)

    account_id = temp_db.create_dre_account(name="Margem", sign="=")
    temp_db.set_account_formula(
        account_id,
        Operand(kind=SourceKind.CATEGORY, id=sales),
        Operator.MULTIPLY,
        Operand(kind=SourceKind.CATEGORY, id=taxes),
    )

    formula = temp_db.get_account_formula(account_id)
    value = resolver.formulas.evaluate_formula(formula, context)

    assert value == Decimal("150000")


def test_formula_mixing_account_and_indicator(temp_db, resolver, context, add_entry):
    sales = temp_db.create_category(code="VENDAS", name="Vendas")
    headcount = temp_db.create_indicator(code="HC", name="Headcount")
    add_entry("1000.00", category_id=sales)
    add_entry("4", indicator_id=headcount)

    revenue = temp_db.create_dre_account(name="Receita")
    temp_db.add_account_component(revenue, category_id=sales)
    per_head = temp_db.create_dre_account(name="Receita por pessoa", sign="=")
    temp_db.set_account_formula(
        per_head,
        Operand(kind=SourceKind.ACCOUNT, id=revenue),
        Operator.DIVIDE,
        Operand(kind=SourceKind.INDICATOR, id=headcount),
    )

    assert resolver.resolve_account_value(per_head, context) == Decimal("250")


def test_set_account_formula_replaces_existing(temp_db):
    account_id = temp_db.create_dre_account(name="Resultado", sign="=")
    left = Operand(kind=SourceKind.ACCOUNT, id=1)
    right = Operand(kind=SourceKind.ACCOUNT, id=2)

    first_id = temp_db.set_account_formula(account_id, left, Operator.ADD, right)
    second_id = temp_db.set_account_formula(account_id, left, Operator.SUBTRACT, right)

    assert first_id == second_id
    assert temp_db.get_account_formula(account_id).operator == Operator.SUBTRACT
