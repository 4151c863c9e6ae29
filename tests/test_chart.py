"""Tests for chart-of-accounts service."""

import pytest

from dre_engine.domain.chart import describe_strategy
from dre_engine.domain.entities import (
    ChildRollup,
    ComponentSum,
    FormulaValuation,
    NoValuation,
    Operator,
    SourceKind,
)
from dre_engine.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_account_with_parent(chart_service):
    parent_id = chart_service.create_account(name="Despesas", order=1, sign="-")
    child_id = chart_service.create_account(
        name="Aluguel", order=1, sign="-", parent_name="Despesas", visible=False
    )

    child = chart_service.find_account_by_name("Aluguel")
    assert child.id == child_id
    assert child.parent_id == parent_id
    assert child.visible is False


def test_create_account_duplicate_name(chart_service):
    chart_service.create_account(name="Receita", order=1, sign="+")

    with pytest.raises(ConflictError):
        chart_service.create_account(name="Receita", order=2, sign="+")


def test_create_account_unknown_parent(chart_service):
    with pytest.raises(NotFoundError):
        chart_service.create_account(name="Filha", order=1, sign="+", parent_name="Inexistente")


def test_create_category_duplicate_code(chart_service):
    chart_service.create_category(code="VENDAS", name="Vendas")

    with pytest.raises(ConflictError):
        chart_service.create_category(code="VENDAS", name="Vendas 2")


def test_add_category_component(temp_db, chart_service):
    category_id = chart_service.create_category(code="VENDAS", name="Vendas")
    account_id = chart_service.create_account(name="Receita", order=1, sign="+")

    chart_service.add_category_component(account_id, "VENDAS", sign="-")

    components = temp_db.list_account_components(account_id)
    assert [(c.source_kind, c.source_id, c.sign) for c in components] == [
        (SourceKind.CATEGORY, category_id, "-")
    ]


def test_add_unknown_category_component(chart_service):
    account_id = chart_service.create_account(name="Receita", order=1, sign="+")

    with pytest.raises(NotFoundError):
        chart_service.add_category_component(account_id, "NAO_EXISTE")


def test_set_account_formula_by_name(temp_db, chart_service):
    left = chart_service.create_account(name="Receita", order=1, sign="+")
    right = chart_service.create_account(name="Custos", order=2, sign="-")
    result = chart_service.create_account(name="Lucro", order=3, sign="=")

    chart_service.set_account_formula(result, "Receita", "-", "Custos")

    formula = temp_db.get_account_formula(result)
    assert formula.operator == Operator.SUBTRACT
    assert formula.operand1.id == left
    assert formula.operand2.id == right


def test_set_account_formula_invalid_operator(chart_service):
    chart_service.create_account(name="Receita", order=1, sign="+")
    result = chart_service.create_account(name="Lucro", order=2, sign="=")

    with pytest.raises(ValidationError, match="operator"):
        chart_service.set_account_formula(result, "Receita", "%", "Receita")


def test_set_account_formula_unknown_operand(chart_service):
    result = chart_service.create_account(name="Lucro", order=1, sign="=")

    with pytest.raises(NotFoundError):
        chart_service.set_account_formula(result, "Receita", "+", "Custos")


def test_chart_tree_with_strategies(chart_service):
    chart_service.create_category(code="VENDAS", name="Vendas")
    revenue = chart_service.create_account(name="Receita", order=1, sign="+")
    chart_service.add_category_component(revenue, "VENDAS")
    chart_service.create_account(name="Despesas", order=2, sign="-")
    chart_service.create_account(name="Aluguel", order=1, sign="-", parent_name="Despesas")
    result = chart_service.create_account(name="Lucro", order=3, sign="=")
    chart_service.set_account_formula(result, "Receita", "+", "Despesas")

    tree = chart_service.get_chart_tree()

    assert [node.account.name for node in tree] == ["Receita", "Despesas", "Lucro"]
    assert isinstance(tree[0].strategy, ComponentSum)
    assert isinstance(tree[1].strategy, ChildRollup)
    assert isinstance(tree[2].strategy, FormulaValuation)
    assert [child.account.name for child in tree[1].children] == ["Aluguel"]
    assert isinstance(tree[1].children[0].strategy, NoValuation)


def test_describe_strategy(chart_service):
    chart_service.create_category(code="VENDAS", name="Vendas")
    revenue = chart_service.create_account(name="Receita", order=1, sign="+")
    chart_service.add_category_component(revenue, "VENDAS", sign="-")

    node = chart_service.get_chart_tree()[0]

    assert describe_strategy(node.strategy).startswith("components -categoria:")
    assert describe_strategy(NoValuation()) == "no valuation (zero)"


def test_chart_tree_keeps_parent_cycle(temp_db, chart_service):
    from dre_engine.database.models import DreAccount

    first = chart_service.create_account(name="A", order=1, sign="+")
    chart_service.create_account(name="B", order=2, sign="+", parent_name="A")
    session = temp_db._get_session()
    session.get(DreAccount, first).parent_id = chart_service.find_account_by_name("B").id
    session.commit()

    tree = chart_service.get_chart_tree()

    assert [node.account.name for node in tree] == ["A"]
    assert [child.account.name for child in tree[0].children] == ["B"]
