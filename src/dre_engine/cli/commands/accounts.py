"""Chart-of-accounts inspection commands."""

from typing import Sequence

import click
from dre_engine.cli.error_handling import handle_domain_error
from dre_engine.domain.chart import ChartService, describe_strategy
from dre_engine.domain.entities import ChartNode
from dre_engine.domain.errors import DomainError
from dre_engine.utils.company_resolver import resolve_company


def print_chart_tree(nodes: Sequence[ChartNode], indent: int = 0) -> None:
    """Recursively print the chart of accounts."""
    for node in nodes:
        prefix = "  " * indent
        account = node.account
        hidden = "" if account.visible else " [hidden]"
        click.echo(
            f"{prefix}{account.sign.value} {account.name} (ID: {account.id}){hidden}"
            f" - {describe_strategy(node.strategy)}"
        )
        if node.children:
            print_chart_tree(node.children, indent + 1)


@click.command("accounts")
@click.option("--company", help="Only show accounts applicable to this company (name or ID)")
@click.pass_context
def list_accounts(ctx, company: str | None):
    """List the DRE chart of accounts and how each account is valued."""
    db = ctx.obj["db"]
    service = ChartService(db)

    try:
        company_id = resolve_company(db, company) if company is not None else None
        tree = service.get_chart_tree(company_id=company_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not tree:
        click.echo("No accounts found. Run 'init-chart' to create the default chart.")
        return

    click.echo("\nDRE accounts:")
    print_chart_tree(tree)


def register_commands(cli):
    """Register accounts command with main CLI."""
    cli.add_command(list_accounts)
