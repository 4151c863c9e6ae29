"""Initialize the default DRE chart of accounts."""

import click
from dre_engine.domain.chart import ChartService
from dre_engine.domain.errors import DomainError


# Ledger categories referenced by the default chart: (code, name)
INITIAL_CATEGORIES = [
    ("VENDAS", "Vendas de mercadorias"),
    ("SERVICOS", "Prestação de serviços"),
    ("IMPOSTOS", "Impostos sobre vendas"),
    ("DEVOLUCOES", "Devoluções e abatimentos"),
    ("CMV", "Custo das mercadorias vendidas"),
    ("DESP_ADM", "Despesas administrativas"),
    ("DESP_COM", "Despesas comerciais"),
    ("REC_FIN", "Receitas financeiras"),
    ("DESP_FIN", "Despesas financeiras"),
]

# Default chart: (name, order, sign, parent, category codes, formula).
# Outflows are already negative in the ledger, so every component adds and
# result lines are sums of the lines above them.
INITIAL_ACCOUNTS = [
    ("Receita Bruta", 1, "+", None, ["VENDAS", "SERVICOS"], None),
    ("Deduções", 2, "-", None, ["IMPOSTOS", "DEVOLUCOES"], None),
    ("Receita Líquida", 3, "=", None, [], ("Receita Bruta", "+", "Deduções")),
    ("Custos", 4, "-", None, ["CMV"], None),
    ("Lucro Bruto", 5, "=", None, [], ("Receita Líquida", "+", "Custos")),
    ("Despesas Operacionais", 6, "-", None, [], None),
    ("Despesas Administrativas", 1, "-", "Despesas Operacionais", ["DESP_ADM"], None),
    ("Despesas Comerciais", 2, "-", "Despesas Operacionais", ["DESP_COM"], None),
    ("Resultado Operacional", 7, "=", None, [], ("Lucro Bruto", "+", "Despesas Operacionais")),
    ("Resultado Financeiro", 8, "+", None, ["REC_FIN", "DESP_FIN"], None),
    ("Resultado Líquido", 9, "=", None, [], ("Resultado Operacional", "+", "Resultado Financeiro")),
]


@click.command("init-chart")
@click.option("--company", "companies", multiple=True, help="Also register a company with this name (repeatable)")
@click.option("--force", is_flag=True, help="Add missing chart entries even if accounts already exist")
@click.pass_context
def init_chart(ctx, companies: tuple[str, ...], force: bool):
    """Initialize database with the default DRE chart of accounts."""
    db = ctx.obj["db"]
    service = ChartService(db)

    for name in companies:
        if db.get_company_by_name(name) is None:
            company_id = db.create_company(name=name)
            click.echo(f"Created company '{name}' (ID: {company_id})")

    # Check if accounts already exist
    existing = service.list_accounts()
    if existing and not force:
        click.echo("DRE accounts already exist. Use --force to add missing entries.")
        return

    click.echo("Creating default DRE chart...")

    created = 0
    errors = 0

    # Categories first: account components reference them
    for code, name in INITIAL_CATEGORIES:
        if db.get_category_by_code(code) is not None:
            continue
        try:
            service.create_category(code=code, name=name)
        except DomainError as e:
            click.echo(f"Warning: Could not create category '{code}': {e}", err=True)
            errors += 1

    # Accounts in list order, so parents and formula operands exist before use
    for name, order, sign, parent, category_codes, formula in INITIAL_ACCOUNTS:
        if service.find_account_by_name(name) is not None:
            continue
        try:
            account_id = service.create_account(name=name, order=order, sign=sign, parent_name=parent)
            for code in category_codes:
                service.add_category_component(account_id, code)
            if formula is not None:
                left, operator, right = formula
                service.set_account_formula(account_id, left, operator, right)
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create account '{name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} accounts.")
    else:
        click.echo(f"Created {created} accounts with {errors} errors.")


def register_commands(cli):
    """Register init-chart command with main CLI."""
    cli.add_command(init_chart)
