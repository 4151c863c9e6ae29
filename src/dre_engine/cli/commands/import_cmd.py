"""Ledger entry CSV import command."""

import click
from dre_engine.cli.error_handling import handle_domain_error
from dre_engine.domain.errors import DomainError
from dre_engine.domain.ledger_import import LedgerImportService
from dre_engine.utils.company_resolver import resolve_company


@click.command("import-entries")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--company", required=True, help="Company name or ID the entries belong to")
@click.pass_context
def import_entries(ctx, csv_file: str, company: str):
    """Import ledger entries from a CSV file.

    The file needs the columns mes, ano, tipo (receita/despesa) and valor,
    and may have categoria and indicador (codes) and descricao.
    """
    db = ctx.obj["db"]
    service = LedgerImportService(db)

    try:
        company_id = resolve_company(db, company)
        result = service.import_csv(csv_file_path=csv_file, company_id=company_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {result['imported']} entries")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import-entries command with main CLI."""
    cli.add_command(import_entries)
